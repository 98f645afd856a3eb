"""Timed and permanent effects attached to entities."""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from .types import CombatLog, Stat, calc_resist

if TYPE_CHECKING:
    from .entity import Entity


class Buff:
    """Base effect. A negative duration or attack count means unlimited."""

    buff_id: ClassVar[str] = ""

    def __init__(self) -> None:
        self.duration_turns = -1
        self.attacks_remaining = -1

    def on_added(self, owner: Entity, log: CombatLog) -> None:
        """Called when the buff is first attached to ``owner``."""

    def merge(self, other: Buff, owner: Entity, log: CombatLog) -> None:
        """Combine a newly applied buff with the same id into this one."""

    def on_turn_end(self, owner: Entity, opponent: Entity, log: CombatLog) -> None:
        """Called at the end of the owner's turn."""

    def stat_mod(self, stat: Stat, owner: Entity) -> float:
        return 0.0

    def armor_shred(self) -> float:
        return 0.0

    def heal_reduction(self) -> float:
        return 0.0

    def delayed_damage_fraction(self, magic: bool) -> float:
        return 0.0

    def create_delayed_dot(self, dot_per_tick: float) -> Buff | None:
        return None

    def stats_text(self) -> str:
        return ""

    def is_expired(self) -> bool:
        return self.duration_turns == 0 or self.attacks_remaining == 0


class DDBleedBuff(Buff):
    """Delayed damage paid out as true damage over three turns per portion."""

    buff_id = "DD_BLEED"

    def __init__(self, dot: float) -> None:
        super().__init__()
        self.portions: list[list[float]] = [[dot, 3]]

    def merge(self, other: Buff, owner: Entity, log: CombatLog) -> None:
        if isinstance(other, DDBleedBuff):
            self.portions.extend([list(p) for p in other.portions])

    def on_turn_end(self, owner: Entity, opponent: Entity, log: CombatLog) -> None:
        total = sum(damage for damage, _ in self.portions)
        for portion in self.portions:
            portion[1] -= 1
        owner.hp = owner.hp - total
        self.portions = [p for p in self.portions if p[1] > 0]
        longest = max((int(turns) for _, turns in self.portions), default=0)
        log.add(f"  [DD Bleed] {int(total)} true dmg ({longest}t)")

    def is_expired(self) -> bool:
        return not self.portions

    def stats_text(self) -> str:
        total = sum(damage for damage, _ in self.portions)
        return f"DD {int(total)}/t"


class DDPassiveBuff(Buff):
    """Defers part of incoming physical damage into a bleed."""

    buff_id = "DD_PASSIVE"

    def delayed_damage_fraction(self, magic: bool) -> float:
        return 0.0 if magic else 0.30

    def create_delayed_dot(self, dot_per_tick: float) -> Buff | None:
        return DDBleedBuff(dot_per_tick)


class TitanicBuff(Buff):
    """Grants attack equal to 2% of maximum health."""

    buff_id = "TITANIC"

    def stat_mod(self, stat: Stat, owner: Entity) -> float:
        return owner.max_hp * 0.02 if stat is Stat.ATK else 0.0


class BCShredBuff(Buff):
    """Stacking armor shred, 5% per stack up to six stacks."""

    buff_id = "BC_SHRED"

    def __init__(self) -> None:
        super().__init__()
        self.stacks = 1
        self.duration_turns = 4

    def on_added(self, owner: Entity, log: CombatLog) -> None:
        log.add(f"  [BC] -5% (1/6) armor={int(owner.armor)}")

    def merge(self, other: Buff, owner: Entity, log: CombatLog) -> None:
        if self.stacks < 6:
            self.stacks += 1
        self.duration_turns = other.duration_turns
        log.add(
            f"  [BC] -{self.stacks * 5}% ({self.stacks}/6) armor={int(owner.armor)}"
        )

    def armor_shred(self) -> float:
        return self.stacks * 0.05

    def stats_text(self) -> str:
        return f"BC -{self.stacks * 5}%"


class GWBuff(Buff):
    """Grievous wounds: reduces healing received."""

    buff_id = "GW"

    def __init__(self) -> None:
        super().__init__()
        self.duration_turns = 2

    def merge(self, other: Buff, owner: Entity, log: CombatLog) -> None:
        self.duration_turns = 2

    def heal_reduction(self) -> float:
        return 0.60

    def stats_text(self) -> str:
        return "GW -60%heal"


class SAERageBuff(Buff):
    """Flat attack bonus for the next three attacks."""

    buff_id = "SAE_RAGE"

    def __init__(self) -> None:
        super().__init__()
        self.attacks_remaining = 3

    def stat_mod(self, stat: Stat, owner: Entity) -> float:
        return 170.0 if stat is Stat.ATK else 0.0

    def stats_text(self) -> str:
        return "RAGE +170ATK"


class SAECounterBuff(Buff):
    """Counts attacks; the third one triggers rage."""

    buff_id = "SAE_COUNTER"

    def __init__(self) -> None:
        super().__init__()
        self.stacks = 1

    def on_added(self, owner: Entity, log: CombatLog) -> None:
        log.add("[SAE] 1/3")

    def merge(self, other: Buff, owner: Entity, log: CombatLog) -> None:
        self.stacks += 1
        if self.stacks >= 3:
            owner.remove_buff(SAERageBuff.buff_id)
            owner.add_buff_silent(SAERageBuff())
            log.add("[SAE] RAGE! +170 ATK x3")
            self.attacks_remaining = 0
        else:
            log.add(f"[SAE] {self.stacks}/3")

    def stats_text(self) -> str:
        return f"SAE {self.stacks}/3"


class FOBFBuff(Buff):
    """Attack bonus with full lifesteal for three attacks."""

    buff_id = "FOBF"

    def __init__(self, atk_bonus: float) -> None:
        super().__init__()
        self.atk_bonus = atk_bonus
        self.attacks_remaining = 3

    def stat_mod(self, stat: Stat, owner: Entity) -> float:
        if stat is Stat.ATK:
            return self.atk_bonus
        if stat is Stat.LIFESTEAL:
            return 1.0
        return 0.0

    def stats_text(self) -> str:
        return f"FOBF +{int(self.atk_bonus)}ATK"


class DominusBuff(Buff):
    """Extra maximum health and a magic damage aura for five turns."""

    buff_id = "DOMINUS"

    def __init__(self, dot: float) -> None:
        super().__init__()
        self.dot = dot
        self.duration_turns = 5

    def stat_mod(self, stat: Stat, owner: Entity) -> float:
        return 1000.0 if stat is Stat.MAX_HP else 0.0

    def on_turn_end(self, owner: Entity, opponent: Entity, log: CombatLog) -> None:
        if self.duration_turns == 0:
            return
        effective = self.dot * calc_resist(owner.pen_mr(opponent))
        owner.deal_damage(opponent, self.dot, True, log)
        log.add(
            f"  [DOMINUS] {int(self.dot)} -> {int(effective)} magic "
            f"({self.duration_turns}t)"
        )

    def stats_text(self) -> str:
        return "DOMINUS"