"""
Module-level odds functions backed by one shared OddsEngine.

Most callers just want ``chance_at_least(3, 6, 10)`` and don't care about
engines or caches, so these wrap a default engine that uses the
process-wide factorial cache and the 64-bit result width. Build an
OddsEngine directly to change either.
"""

from __future__ import annotations

from dicesum.engine import OddsEngine
from dicesum.factorials import factorial
from dicesum.records import DiceQuery
from dicesum.types import Count, Percent

__all__ = [
    "chance",
    "chance_at_least",
    "choose",
    "count_outcomes",
    "count_rolls_at_least",
    "count_rolls_with_sum",
    "factorial",
    "multichoose",
    "sum_distribution",
]

engine = OddsEngine()


def choose(n: int, k: int) -> Count:
    return engine.choose(n, k)


def multichoose(n: int, k: int) -> Count:
    return engine.multichoose(n, k)


def count_outcomes(sides: int, num_dice: int) -> Count:
    return engine.count_outcomes(sides, num_dice)


def count_rolls_with_sum(n: int, s: int, p: int) -> Count:
    return engine.count_rolls_with_sum(n, s, p)


def count_rolls_at_least(n: int, s: int, target: int) -> Count:
    return engine.count_rolls_at_least(n, s, target)


def sum_distribution(n: int, s: int) -> dict[int, Count]:
    return engine.sum_distribution(n, s)


def chance(query: DiceQuery) -> Percent:
    return engine.chance(query)


def chance_at_least(n: int, s: int, target: int) -> Percent:
    """Percent chance that n dice with s sides total at least target,
    rounded to two decimal places. 100.0 whenever target <= n."""
    return engine.chance_at_least(n, s, target)
