"""Active and passive abilities a fighter can equip."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING

from .buffs import DominusBuff, FOBFBuff, SAECounterBuff
from .types import AttackContext, CombatLog, Stat, calc_resist

if TYPE_CHECKING:
    from .entity import Entity


class AbilityEffect(Enum):
    """What an ability does when it triggers."""

    CORROSION = auto()
    REAPER = auto()
    SOUL_EATER = auto()
    STRENGTH_ABOVE_ALL_ELSE = auto()
    BATTLE_FURY = auto()
    FIGHT_OR_BE_FORGOTTEN = auto()
    BLOOD_DRAIN = auto()
    OBLITERATE = auto()
    JUDGEMENT = auto()
    DOMINUS = auto()


@dataclass(frozen=True)
class AbilityDef:
    """Static description of an ability."""

    name: str
    effect: AbilityEffect
    cooldown: int = 0
    active: bool = False
    toggle: bool = False


@dataclass(frozen=True)
class PreAttackMod:
    """Modification an ability applies to an upcoming basic attack."""

    atk_mul: float = 1.0
    is_crit: bool = False
    crit_chance: float = 0.0


_ACTIVE_DEFS = (
    AbilityDef("FIGHT_OR_BE_FORGOTTEN", AbilityEffect.FIGHT_OR_BE_FORGOTTEN, 5, True, True),
    AbilityDef("BLOOD_DRAIN", AbilityEffect.BLOOD_DRAIN, 4, True),
    AbilityDef("OBLITERATE", AbilityEffect.OBLITERATE, 1, True),
    AbilityDef("JUDGEMENT", AbilityEffect.JUDGEMENT, 4, True),
    AbilityDef("DOMINUS", AbilityEffect.DOMINUS, 8, True),
)

_PASSIVE_DEFS = (
    AbilityDef("CORROSION", AbilityEffect.CORROSION),
    AbilityDef("REAPER", AbilityEffect.REAPER),
    AbilityDef("SOUL_EATER", AbilityEffect.SOUL_EATER),
    AbilityDef("STRENGTH_ABOVE_ALL_ELSE", AbilityEffect.STRENGTH_ABOVE_ALL_ELSE),
    AbilityDef("BATTLE_FURY", AbilityEffect.BATTLE_FURY),
)


class Ability:
    """Base ability: does nothing unless a subclass overrides a hook."""

    name = ""
    cooldown = 0
    is_toggle = False
    can_activate = False

    def on_equip(self, owner: Entity) -> None:
        """Called once when the ability is given to ``owner``."""

    def on_pre_attack(self, owner: Entity) -> PreAttackMod:
        return PreAttackMod()

    def on_post_hit(
        self, owner: Entity, target: Entity, ctx: AttackContext, log: CombatLog
    ) -> None:
        """Called after a basic attack has landed."""

    def on_attack_done(self, owner: Entity, log: CombatLog) -> None:
        """Called once a basic attack has fully resolved."""

    def activate(
        self, owner: Entity, target: Entity, label: str, log: CombatLog
    ) -> bool:
        return False


class DefinedAbility(Ability):
    """An ability driven by an :class:`AbilityDef`."""

    def __init__(self, definition: AbilityDef) -> None:
        self.definition = definition
        self.name = definition.name
        self.cooldown = definition.cooldown
        self.is_toggle = definition.toggle
        self.can_activate = definition.active

    @property
    def effect(self) -> AbilityEffect:
        return self.definition.effect

    def on_equip(self, owner: Entity) -> None:
        if self.effect is AbilityEffect.SOUL_EATER:
            owner.add_stat(Stat.OMNIVAMP, 0.10)

    def on_pre_attack(self, owner: Entity) -> PreAttackMod:
        if self.effect is not AbilityEffect.BATTLE_FURY:
            return PreAttackMod()
        chance = min(owner.atk * 0.15, 100.0)
        if owner.rng.randrange(100) < int(chance):
            return PreAttackMod(2.0, True, chance)
        return PreAttackMod(1.0, False, chance)

    def on_post_hit(
        self, owner: Entity, target: Entity, ctx: AttackContext, log: CombatLog
    ) -> None:
        if self.effect is AbilityEffect.CORROSION:
            if target.hp <= 0:
                return
            raw = target.hp * 0.05
            effective = raw * calc_resist(owner.pen_mr(target))
            owner.deal_damage(target, raw, True, log)
            log.add(f"  [Corrosion] {int(raw)} -> {int(effective)} magic")
        elif (
            self.effect is AbilityEffect.REAPER
            and 0 < target.hp <= target.max_hp * 0.05
        ):
            target.hp = 0
            log.add("  [Reaper] *** EXECUTE ***")

    def on_attack_done(self, owner: Entity, log: CombatLog) -> None:
        if self.effect is AbilityEffect.STRENGTH_ABOVE_ALL_ELSE:
            owner.add_buff(SAECounterBuff(), log)

    def activate(
        self, owner: Entity, target: Entity, label: str, log: CombatLog
    ) -> bool:
        match self.effect:
            case AbilityEffect.FIGHT_OR_BE_FORGOTTEN:
                return self._fight_or_be_forgotten(owner, label, log)
            case AbilityEffect.BLOOD_DRAIN:
                return self._blood_drain(owner, target, label, log)
            case AbilityEffect.OBLITERATE:
                return self._obliterate(owner, target, label, log)
            case AbilityEffect.JUDGEMENT:
                return self._judgement(owner, target, label, log)
            case AbilityEffect.DOMINUS:
                return self._dominus(owner, label, log)
            case _:
                return False

    @staticmethod
    def _fight_or_be_forgotten(owner: Entity, label: str, log: CombatLog) -> bool:
        cost = owner.max_hp * 0.50
        if owner.hp <= cost:
            log.add(f"[{label}] FOBF: not enough HP!")
            return False
        owner.hp = owner.hp - cost
        bonus = owner.atk
        owner.add_buff(FOBFBuff(bonus), log)
        log.add(f"[{label} FOBF] -{int(cost)} HP, +{int(bonus)} ATK, 100% LS x3")
        return True

    @staticmethod
    def _blood_drain(
        owner: Entity, target: Entity, label: str, log: CombatLog
    ) -> bool:
        self_damage = owner.hp * 0.10 + owner.ap * 0.10
        owner.hp = max(0.0, owner.hp - self_damage)
        raw = target.max_hp * (0.10 + owner.ap * 0.0025)
        effective = raw * calc_resist(owner.pen_mr(target))
        owner.deal_damage(target, raw, True, log)
        before = owner.hp
        owner.apply_heal(effective * 1.50)
        log.add(
            f"[{label} BLOOD_DRAIN] self:-{int(self_damage)}"
            f" | {int(raw)} -> {int(effective)}"
            f" magic | heal:+{int(owner.hp - before)}"
        )
        return True

    @staticmethod
    def _obliterate(owner: Entity, target: Entity, label: str, log: CombatLog) -> bool:
        raw = 300.0 + owner.ap * 1.5
        effective = raw * calc_resist(owner.pen_mr(target))
        owner.deal_damage(target, raw, True, log)
        log.add(f"[{label} OBLITERATE] {int(raw)} -> {int(effective)} magic")
        return True

    @staticmethod
    def _judgement(owner: Entity, target: Entity, label: str, log: CombatLog) -> bool:
        raw = owner.atk + owner.hp * 0.20
        effective = raw * calc_resist(owner.pen_armor(target))
        owner.deal_damage(target, raw, False, log)
        target.turn_blocked = 1
        log.add(f"[{label} JUDGEMENT] {int(raw)} -> {int(effective)} phys (STUN 1t)")
        return True

    @staticmethod
    def _dominus(owner: Entity, label: str, log: CombatLog) -> bool:
        if owner.get_buff(DominusBuff.buff_id) is not None:
            log.add(f"[{label}] Dominus active!")
            return False
        dot = 80.0 + owner.ap * 0.30
        owner.add_buff(DominusBuff(dot), log)
        owner.hp = owner.hp + 1000.0
        log.add(f"[{label} DOMINUS] +1000 HP (5t), DoT:{int(dot)}/t")
        return True


def active_ability_defs() -> tuple[AbilityDef, ...]:
    return _ACTIVE_DEFS


def passive_ability_defs() -> tuple[AbilityDef, ...]:
    return _PASSIVE_DEFS


def _create(defs: tuple[AbilityDef, ...], choice: int) -> Ability | None:
    if not 1 <= choice <= len(defs):
        return None
    return DefinedAbility(defs[choice - 1])


def create_active_ability(choice: int) -> Ability | None:
    """Build the active ability with the given 1-based menu number, if any."""
    return _create(_ACTIVE_DEFS, choice)


def create_passive_ability(choice: int) -> Ability | None:
    """Build the passive ability with the given 1-based menu number, if any."""
    return _create(_PASSIVE_DEFS, choice)