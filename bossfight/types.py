"""Core value types shared by the combat engine."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import Enum, auto
from typing import TextIO


class Stat(Enum):
    """Attributes an entity can have bonuses or modifiers for."""

    ATK = auto()
    AP = auto()
    MAX_HP = auto()
    ARMOR = auto()
    MAGIC_RESIST = auto()
    LIFESTEAL = auto()
    OMNIVAMP = auto()
    HEAL_AMP = auto()
    MAG_PEN_PCT = auto()
    MAG_PEN_FLAT = auto()
    ARM_PEN_PCT = auto()
    ARM_PEN_FLAT = auto()


class CombatLog:
    """Buffered lines of combat narration."""

    def __init__(self) -> None:
        self._lines: list[str] = []

    def add(self, line: str) -> None:
        self._lines.append(line)

    @property
    def lines(self) -> tuple[str, ...]:
        return tuple(self._lines)

    def __len__(self) -> int:
        return len(self._lines)

    def flush(self, out: TextIO | None = None) -> None:
        """Write the buffered lines to ``out`` (stdout by default) and clear them."""
        stream = sys.stdout if out is None else out
        for line in self._lines:
            stream.write(line + "\n")
        self._lines.clear()


def calc_resist(defense: float) -> float:
    """Fraction of damage that gets through a given resistance value."""
    return 100.0 / (100.0 + max(0.0, defense))


@dataclass
class AttackContext:
    """State of a single basic attack as it passes through items and abilities."""

    self_label: str = ""
    target_label: str = ""
    atk: float = 0.0
    is_crit: bool = False
    crit_chance: float = 0.0
    final_phys_raw: float = 0.0