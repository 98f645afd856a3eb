"""Combatants: stats, buffs, items, abilities and the attack sequence."""

from __future__ import annotations

import random
import sys
from typing import TYPE_CHECKING, TextIO

from .buffs import Buff
from .types import AttackContext, CombatLog, Stat, calc_resist

if TYPE_CHECKING:
    from .abilities import Ability
    from .items import Item

MAX_ITEMS = 6

_SHOWN_STATS = (
    (Stat.ARM_PEN_PCT, "ArmorPen"),
    (Stat.ARM_PEN_FLAT, "Lethality"),
    (Stat.MAG_PEN_PCT, "MagPen"),
    (Stat.MAG_PEN_FLAT, "MagPenFlat"),
    (Stat.LIFESTEAL, "LS"),
    (Stat.OMNIVAMP, "OV"),
    (Stat.HEAL_AMP, "HealAmp"),
)


class Entity:
    """A fighter with base stats, bonuses from items and temporary buffs."""

    stats_label = "ENTITY"

    def __init__(
        self,
        hp: float,
        atk: float,
        ap: float,
        armor: float,
        mr: float,
        rng: random.Random | None = None,
    ) -> None:
        self._hp = float(hp)
        self._base = dict.fromkeys(Stat, 0.0)
        self._base.update(
            {
                Stat.MAX_HP: float(hp),
                Stat.ATK: float(atk),
                Stat.AP: float(ap),
                Stat.ARMOR: float(armor),
                Stat.MAGIC_RESIST: float(mr),
            }
        )
        self._bonus = dict.fromkeys(Stat, 0.0)
        self._items: list[Item] = []
        self._abilities: list[Ability] = []
        self._buffs: list[Buff] = []
        self._cooldowns: dict[str, int] = {}
        self._cooldown_started: set[str] = set()
        self.turn_blocked = 0
        self.rng = rng if rng is not None else random.Random()

    # --- stats -----------------------------------------------------------

    def add_stat(self, stat: Stat, value: float) -> None:
        self._bonus[stat] += value

    def set_stat_max(self, stat: Stat, value: float) -> None:
        self._bonus[stat] = max(self._bonus[stat], value)

    def get(self, stat: Stat) -> float:
        value = self._base[stat] + self._bonus[stat]
        value += sum(buff.stat_mod(stat, self) for buff in self._buffs)
        if stat is Stat.ARMOR:
            shred = max([0.0, *(buff.armor_shred() for buff in self._buffs)])
            value *= 1.0 - shred
        return max(0.0, value)

    @property
    def atk(self) -> float:
        return self.get(Stat.ATK)

    @property
    def ap(self) -> float:
        return self.get(Stat.AP)

    @property
    def max_hp(self) -> float:
        return self.get(Stat.MAX_HP)

    @property
    def armor(self) -> float:
        return self.get(Stat.ARMOR)

    @property
    def mr(self) -> float:
        return self.get(Stat.MAGIC_RESIST)

    @property
    def heal_reduction(self) -> float:
        return max([0.0, *(buff.heal_reduction() for buff in self._buffs)])

    @property
    def hp(self) -> float:
        return self._hp

    @hp.setter
    def hp(self, value: float) -> None:
        self._hp = max(0.0, min(self.max_hp, value))

    def is_alive(self) -> bool:
        return self._hp > 0.1

    def apply_heal(self, amount: float) -> None:
        self.hp = self._hp + amount * (1.0 + self.get(Stat.HEAL_AMP)) * (
            1.0 - self.heal_reduction
        )

    @staticmethod
    def calc_pen(defense: float, pct_pen: float, flat_pen: float) -> float:
        return max(0.0, defense * (1.0 - pct_pen) - flat_pen)

    def pen_mr(self, target: Entity) -> float:
        return self.calc_pen(
            target.mr, self.get(Stat.MAG_PEN_PCT), self.get(Stat.MAG_PEN_FLAT)
        )

    def pen_armor(self, target: Entity) -> float:
        return self.calc_pen(
            target.armor, self.get(Stat.ARM_PEN_PCT), self.get(Stat.ARM_PEN_FLAT)
        )

    # --- collections -----------------------------------------------------

    @property
    def items(self) -> tuple[Item, ...]:
        return tuple(self._items)

    @property
    def buffs(self) -> tuple[Buff, ...]:
        return tuple(self._buffs)

    @property
    def abilities(self) -> tuple[Ability, ...]:
        return tuple(self._abilities)

    def add_buff(self, buff: Buff, log: CombatLog) -> None:
        """Attach a buff, merging it into an existing one with the same id."""
        existing = self.get_buff(buff.buff_id)
        if existing is not None:
            existing.merge(buff, self, log)
            return
        buff.on_added(self, log)
        self._buffs.append(buff)

    def add_buff_silent(self, buff: Buff) -> None:
        """Attach a buff unless one with the same id is already present."""
        if self.get_buff(buff.buff_id) is None:
            self._buffs.append(buff)

    def remove_buff(self, buff_id: str) -> None:
        self._buffs = [b for b in self._buffs if b.buff_id != buff_id]

    def get_buff(self, buff_id: str) -> Buff | None:
        return next((b for b in self._buffs if b.buff_id == buff_id), None)

    def add_ability(self, ability: Ability) -> None:
        ability.on_equip(self)
        self._abilities.append(ability)

    def active_abilities(self) -> list[Ability]:
        return [a for a in self._abilities if a.can_activate]

    def passive_abilities(self) -> list[Ability]:
        return [a for a in self._abilities if not a.can_activate]

    def cooldown(self, name: str) -> int:
        return self._cooldowns.get(name, 0)

    # --- combat ----------------------------------------------------------

    def deal_damage(
        self, target: Entity, raw_damage: float, magic: bool, log: CombatLog
    ) -> None:
        """Hit ``target`` for mitigated damage, honouring delayed-damage buffs."""
        defense = self.pen_mr(target) if magic else self.pen_armor(target)
        effective = raw_damage * calc_resist(defense)

        delay_fraction = 0.0
        delay_source: Buff | None = None
        for buff in target._buffs:
            fraction = buff.delayed_damage_fraction(magic)
            if fraction > delay_fraction:
                delay_fraction, delay_source = fraction, buff

        target._hp = max(0.0, target._hp - effective * (1.0 - delay_fraction))

        if delay_source is not None and delay_fraction > 0:
            dot = delay_source.create_delayed_dot(effective * delay_fraction / 3.0)
            if dot is not None:
                target.add_buff(dot, log)

        omnivamp = self.get(Stat.OMNIVAMP)
        if omnivamp > 0:
            before = self._hp
            self.apply_heal(effective * omnivamp)
            if self._hp > before + 0.5:
                log.add(
                    f"  [Omnivamp] +{int(self._hp - before)} "
                    f"({int(omnivamp * 100)}% of {int(effective)})"
                )

    def perform_attack(
        self, target: Entity, log: CombatLog, self_label: str, target_label: str
    ) -> None:
        """Run a full basic attack against ``target``."""
        ctx = AttackContext(self_label=self_label, target_label=target_label)
        ctx.atk = self.atk
        ctx.final_phys_raw = ctx.atk

        for ability in self._abilities:
            mod = ability.on_pre_attack(self)
            if mod.is_crit:
                ctx.final_phys_raw *= mod.atk_mul
                ctx.is_crit = True
                ctx.crit_chance = mod.crit_chance

        for item in self._items:
            item.on_hit(self, target, ctx, log)

        phys_effective = ctx.final_phys_raw * calc_resist(self.pen_armor(target))
        self.deal_damage(target, ctx.final_phys_raw, False, log)

        log.add(f"[{self_label} attacks {target_label}]")
        if ctx.is_crit:
            log.add(f"  CRITICAL! (x2, {int(ctx.crit_chance)}%)")
        line = f"  {int(ctx.final_phys_raw)} raw -> {int(phys_effective)} eff"
        if ctx.is_crit:
            line += " (CRIT)"
        log.add(line)
        log.add(f"  {target_label} HP: {int(target.hp)}/{int(target.max_hp)}")

        for ability in self._abilities:
            ability.on_post_hit(self, target, ctx, log)

        lifesteal = self.get(Stat.LIFESTEAL)
        if lifesteal > 0:
            before = self._hp
            self.apply_heal(ctx.final_phys_raw * lifesteal)
            log.add(
                f"  [Lifesteal] +{int(self._hp - before)} "
                f"({int(lifesteal * 100)}% of {int(ctx.final_phys_raw)})"
            )

        for item in target._items:
            item.on_defend(target, self, ctx, log)

        for buff in self._buffs:
            if buff.attacks_remaining > 0:
                buff.attacks_remaining -= 1
        self._buffs = [b for b in self._buffs if not b.is_expired()]

        for ability in self._abilities:
            ability.on_attack_done(self, log)

    def take_damage_simple(self, raw_damage: float, defense: float) -> float:
        """Take damage against a fixed defense; returns the deferred per-tick part."""
        delayed = max(
            [0.0, *(b.delayed_damage_fraction(True) for b in self._buffs)]
        )
        effective = raw_damage * calc_resist(defense)
        self._hp = max(0.0, self._hp - effective * (1.0 - delayed))
        return effective * delayed / 3.0 if delayed > 0 else 0.0

    def buy_item(self, item: Item, gold: int, log: CombatLog, tag: str) -> int:
        """Buy ``item`` if affordable and a slot is free; returns the gold left."""
        if gold < item.price or len(self._items) >= MAX_ITEMS:
            return gold
        gold -= item.price
        item.on_purchase(self)
        self._items.append(item)
        log.add(f"{tag} {item.name} (gold: {gold})")
        return gold

    def use_ability(
        self, ability: Ability | None, target: Entity, label: str, log: CombatLog
    ) -> bool:
        """Activate an ability if it is off cooldown; returns whether it fired."""
        if ability is None:
            return False
        remaining = self.cooldown(ability.name)
        if remaining > 0:
            log.add(f"[{label}] {ability.name} CD:{remaining}")
            return False
        if not ability.activate(self, target, label, log):
            return False
        if ability.cooldown > 0:
            self._cooldowns[ability.name] = ability.cooldown
            self._cooldown_started.add(ability.name)
        return True

    def end_turn(self, opponent: Entity, log: CombatLog) -> None:
        """Tick buffs and cooldowns at the end of a turn."""
        for buff in tuple(self._buffs):
            buff.on_turn_end(self, opponent, log)
        for name, turns in self._cooldowns.items():
            if turns > 0 and name not in self._cooldown_started:
                self._cooldowns[name] = turns - 1
        self._cooldown_started.clear()
        for buff in self._buffs:
            if buff.duration_turns > 0:
                buff.duration_turns -= 1
        self._buffs = [b for b in self._buffs if not b.is_expired()]
        self.hp = self._hp

    # --- display ---------------------------------------------------------

    def format_stats(self) -> str:
        """Multi-line description of the entity's current state."""
        max_hp = self.max_hp
        pct = min(100.0, self._hp / max_hp * 100) if max_hp > 0 else 0.0
        parts = [
            f"{self.stats_label} STATS\n",
            f"HP: {int(self._hp)}/{int(max_hp)} ({int(pct)}%)\n",
            f"ATK:{int(self.atk)} AP:{int(self.ap)}",
        ]
        for stat, name in _SHOWN_STATS:
            value = self.get(stat)
            if value > 0.001:
                if value < 1:
                    parts.append(f" {name}:{int(value * 100)}%")
                else:
                    parts.append(f" {name}:{int(value)}")

        armor, mr = self.armor, self.mr
        parts.append(
            f"\nArmor:{int(armor)}({int((1 - calc_resist(armor)) * 100)}% red)"
            f" MR:{int(mr)}({int((1 - calc_resist(mr)) * 100)}% red)\n"
        )

        actives = self.active_abilities()
        shown = [
            a.name
            + (f"[CD:{self.cooldown(a.name)}]" if self.cooldown(a.name) > 0 else "[RDY]")
            for a in actives
        ]
        parts.append("Actives: " + (", ".join(shown) if shown else "-"))
        passives = [a.name for a in self.passive_abilities()]
        parts.append("\nPassives: " + (", ".join(passives) if passives else "-"))
        parts.append("\n")

        if self.turn_blocked > 0:
            parts.append(f"STUNNED {self.turn_blocked}t\n")

        buff_parts = []
        for buff in self._buffs:
            text = buff.stats_text()
            if not text:
                continue
            entry = "[" + text
            if buff.duration_turns > 0:
                entry += f" {buff.duration_turns}t"
            if buff.attacks_remaining > 0:
                entry += f" {buff.attacks_remaining}atk"
            buff_parts.append(entry + "] ")
        if buff_parts:
            parts.append("Buffs: " + "".join(buff_parts) + "\n")
        return "".join(parts)

    def show_stats(self, out: TextIO | None = None) -> None:
        (sys.stdout if out is None else out).write(self.format_stats())


class Player(Entity):
    """The human-controlled fighter."""

    stats_label = "PLAYER"

    def __init__(self, rng: random.Random | None = None) -> None:
        super().__init__(1200, 80, 120, 40, 35, rng)

    def attack(self, target: Entity, log: CombatLog) -> None:
        self.perform_attack(target, log, "Player", "Enemy")


class Mob(Entity):
    """A computer-controlled enemy; bosses are far stronger."""

    stats_label = "ENEMY"

    def __init__(self, boss: bool, rng: random.Random | None = None) -> None:
        if boss:
            super().__init__(250000, 100, 50, 60, 50, rng)
        else:
            super().__init__(1000, 50, 20, 30, 20, rng)

    def attack(self, target: Entity, log: CombatLog) -> None:
        self.perform_attack(target, log, "Enemy", "Player")