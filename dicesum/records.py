"""Structured query and result records for the dice odds engine.

A DiceQuery describes one question ("what are the odds 3d6 makes 10?"),
and the table records capture a whole grid of answers so that renderers
can print them as text or hand them to the Streamlit UI.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from dicesum.types import DifficultyName, Percent


@dataclass(frozen=True)
class DiceQuery:
    """One probability query: roll num_dice dice of the given sides and
    ask how often the sum is at least target."""

    num_dice: int
    """How many dice are rolled (at least 1)."""

    sides: int
    """Faces on each die, numbered 1 to sides (at least 2)."""

    target: int
    """The sum to meet or beat (never negative)."""

    def __post_init__(self) -> None:
        if self.num_dice < 1:
            raise ValueError(f"num_dice must be at least 1, got {self.num_dice}")
        if self.sides < 2:
            raise ValueError(f"sides must be at least 2, got {self.sides}")
        if self.target < 0:
            raise ValueError(f"target must not be negative, got {self.target}")

    @property
    def min_sum(self) -> int:
        return self.num_dice

    @property
    def max_sum(self) -> int:
        return self.num_dice * self.sides


@dataclass(frozen=True)
class Difficulty:
    """A named target number, e.g. Moderate (15)."""

    name: DifficultyName
    target: int

    @property
    def label(self) -> str:
        return f"{self.name} ({self.target})"


@dataclass
class TableCell:
    """The chance of one dice pool beating one difficulty."""

    difficulty: Difficulty

    target: int
    """The sum actually rolled against: difficulty target minus pips."""

    chance: Percent


@dataclass
class TableRow:
    """One dice pool (e.g. 3D+2) evaluated against every difficulty."""

    num_dice: int
    pips: int
    cells: list[TableCell] = field(default_factory=list)

    @property
    def label(self) -> str:
        """'3D' for a plain pool, '3D+2' when pips are added."""
        if self.pips:
            return f"{self.num_dice}D+{self.pips}"
        return f"{self.num_dice}D"


@dataclass
class DifficultyTable:
    """A full grid of dice pools against difficulties."""

    sides: int
    difficulties: list[Difficulty]
    rows: list[TableRow] = field(default_factory=list)
