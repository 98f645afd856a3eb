"""Shop items and their on-purchase, on-hit and on-defend effects."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING

from .buffs import BCShredBuff, DDPassiveBuff, GWBuff, TitanicBuff
from .types import AttackContext, CombatLog, Stat, calc_resist

if TYPE_CHECKING:
    from .entity import Entity


class ItemEffect(Enum):
    """Special behaviour attached to an item beyond its stats."""

    NONE = auto()
    BLACK_CLEAVER = auto()
    BOTRK = auto()
    TITANIC_HYDRA = auto()
    DIVINE_SUNDERER = auto()
    DEATHS_DANCE = auto()
    THORNMAIL = auto()


@dataclass(frozen=True)
class ItemStat:
    """A stat granted by an item; ``max_only`` stats do not stack."""

    stat: Stat
    value: float
    max_only: bool = False


@dataclass(frozen=True)
class ItemDef:
    """Static description of a shop item."""

    name: str
    shop_text: str
    stats: tuple[ItemStat, ...]
    effect: ItemEffect = ItemEffect.NONE
    price: int = 300


_ITEM_DEFS = (
    ItemDef("Black Cleaver", "(+400 HP, +40 ATK  | -5% armor/hit, max -30%)",
            (ItemStat(Stat.MAX_HP, 400), ItemStat(Stat.ATK, 40)), ItemEffect.BLACK_CLEAVER),
    ItemDef("BOTRK", "(+40 ATK, 10% LS   | +8% target HP on-hit)",
            (ItemStat(Stat.ATK, 40), ItemStat(Stat.LIFESTEAL, 0.10)), ItemEffect.BOTRK),
    ItemDef("Titanic Hydra", "(+500 HP           | +2% max HP as ATK)",
            (ItemStat(Stat.MAX_HP, 500),), ItemEffect.TITANIC_HYDRA),
    ItemDef("Divine Sunderer", "(+400 HP, +40 ATK  | 12% target HP magic + 50% heal)",
            (ItemStat(Stat.MAX_HP, 400), ItemStat(Stat.ATK, 40)), ItemEffect.DIVINE_SUNDERER),
    ItemDef("Ravenous Hydra", "(+40 ATK, +150 HP  | 10% omnivamp)",
            (ItemStat(Stat.ATK, 40), ItemStat(Stat.MAX_HP, 150), ItemStat(Stat.OMNIVAMP, 0.10))),
    ItemDef("Death's Dance", "(+45 ATK           | 30% phys -> 3t bleed)",
            (ItemStat(Stat.ATK, 45),), ItemEffect.DEATHS_DANCE),
    ItemDef("Thornmail", "(+60 Armor         | reflect 25% + GW)",
            (ItemStat(Stat.ARMOR, 60),), ItemEffect.THORNMAIL),
    ItemDef("Spirit Visage", "(+400 HP, +50 MR   | +25% healing)",
            (ItemStat(Stat.MAX_HP, 400), ItemStat(Stat.MAGIC_RESIST, 50),
             ItemStat(Stat.HEAL_AMP, 0.25))),
    ItemDef("Void Staff", "(+70 AP            | 40% magic pen)",
            (ItemStat(Stat.AP, 70), ItemStat(Stat.MAG_PEN_PCT, 0.40, True))),
    ItemDef("Serylda's Grudge", "(+45 ATK           | 30% armor pen)",
            (ItemStat(Stat.ATK, 45), ItemStat(Stat.ARM_PEN_PCT, 0.30, True))),
    ItemDef("Youmuu's Ghostblade", "(+55 ATK           | 18 lethality)",
            (ItemStat(Stat.ATK, 55), ItemStat(Stat.ARM_PEN_FLAT, 18))),
    ItemDef("Shadowflame", "(+100 AP           | 12 flat magic pen)",
            (ItemStat(Stat.AP, 100), ItemStat(Stat.MAG_PEN_FLAT, 12))),
    ItemDef("Riftmaker", "(+70 AP, +300 HP   | 8% omnivamp)",
            (ItemStat(Stat.AP, 70), ItemStat(Stat.MAX_HP, 300), ItemStat(Stat.OMNIVAMP, 0.08))),
)


class Item:
    """Base item with no stats and no effects."""

    name = ""
    price = 300

    def on_purchase(self, owner: Entity) -> None:
        """Apply the item's permanent bonuses to ``owner``."""

    def on_hit(
        self, owner: Entity, target: Entity, ctx: AttackContext, log: CombatLog
    ) -> None:
        """Called when ``owner`` lands a basic attack."""

    def on_defend(
        self, owner: Entity, attacker: Entity, ctx: AttackContext, log: CombatLog
    ) -> None:
        """Called when ``owner`` is hit by a basic attack."""


class DefinedItem(Item):
    """An item driven by an :class:`ItemDef`."""

    def __init__(self, definition: ItemDef) -> None:
        self.definition = definition
        self.name = definition.name
        self.price = definition.price

    @property
    def effect(self) -> ItemEffect:
        return self.definition.effect

    def on_purchase(self, owner: Entity) -> None:
        for item_stat in self.definition.stats:
            if item_stat.max_only:
                owner.set_stat_max(item_stat.stat, item_stat.value)
            else:
                owner.add_stat(item_stat.stat, item_stat.value)
                if item_stat.stat is Stat.MAX_HP:
                    owner.hp = owner.hp + item_stat.value

        if self.effect is ItemEffect.TITANIC_HYDRA:
            owner.add_buff_silent(TitanicBuff())
        elif self.effect is ItemEffect.DEATHS_DANCE:
            owner.add_buff_silent(DDPassiveBuff())

    def on_hit(
        self, owner: Entity, target: Entity, ctx: AttackContext, log: CombatLog
    ) -> None:
        if self.effect is ItemEffect.BLACK_CLEAVER:
            target.add_buff(BCShredBuff(), log)
        elif self.effect is ItemEffect.BOTRK:
            bonus = target.hp * 0.08
            ctx.final_phys_raw += bonus
            log.add(f"  [BOTRK] +{int(bonus)} (8% HP)")
        elif self.effect is ItemEffect.DIVINE_SUNDERER:
            if not target.is_alive():
                return
            raw = target.max_hp * 0.12
            effective = raw * calc_resist(owner.pen_mr(target))
            owner.deal_damage(target, raw, True, log)
            before = owner.hp
            owner.apply_heal(raw * 0.50)
            log.add(
                f"  [Divine] {int(raw)} -> {int(effective)}"
                f" magic, heal +{int(owner.hp - before)}"
            )

    def on_defend(
        self, owner: Entity, attacker: Entity, ctx: AttackContext, log: CombatLog
    ) -> None:
        if self.effect is not ItemEffect.THORNMAIL:
            return
        raw = ctx.final_phys_raw * 0.25
        attacker.take_damage_simple(raw, attacker.mr)
        log.add(
            f"  [Thornmail] {int(raw)} reflected "
            f"({ctx.self_label} {int(attacker.hp)} HP)"
        )
        wounds = attacker.get_buff(GWBuff.buff_id)
        if wounds is not None:
            wounds.duration_turns = 2
        else:
            attacker.add_buff(GWBuff(), log)
        log.add(f"  [GW] on {ctx.self_label}")


def item_defs() -> tuple[ItemDef, ...]:
    return _ITEM_DEFS


def create_item(choice: int) -> Item | None:
    """Build the item with the given 1-based shop number, if any."""
    if not 1 <= choice <= len(_ITEM_DEFS):
        return None
    return DefinedItem(_ITEM_DEFS[choice - 1])


def shop_menu() -> str:
    """The numbered shop listing, one item per line."""
    return "".join(
        f"{number:>2}. {definition.name:<20}{definition.shop_text}\n"
        for number, definition in enumerate(_ITEM_DEFS, start=1)
    )