"""
Exact odds engine for sums of dice.

The question we answer is "if I roll n dice with s sides each, how often is
the total at least some target?"  Rather than simulating, we count outcomes
exactly. The number of ways n dice can sum to p is

    sum over i in [0, (p - n) // s] of
        (-1)**i * C(n, i) * C(p - s*i - 1, p - s*i - n)

which is stars-and-bars with an inclusion-exclusion correction for dice
that would have to show more than s. (See
https://www.lucamoroni.it/the-dice-roll-sum-problem/ for a derivation.)
Summing that over every achievable total from the target up to n*s, and
dividing by the s**n possible outcomes, gives the chance of success.

Everything internal is done with Python's arbitrary precision ints. Results
handed back to callers are checked against a fixed result width (64-bit
unsigned by default), so a count that wouldn't fit in a uint64 raises
CountOverflowError instead of being silently truncated somewhere downstream.
"""

from __future__ import annotations

import logging

from dicesum.factorials import FactorialCache, default_cache
from dicesum.records import DiceQuery
from dicesum.types import Count, Percent

log = logging.getLogger(__name__)

DEFAULT_RESULT_BITS = 64


class CountOverflowError(OverflowError):
    """An exact count is too large for the engine's result width."""

    def __init__(self, what: str, value: int, bits: int) -> None:
        super().__init__(f"value of {what} is too large for a {bits}-bit unsigned result")
        self.what = what
        self.value = value
        self.bits = bits


def to_percent(matching: Count, total: Count) -> Percent:
    """Scale matching/total to a percentage rounded to the nearest hundredth.

    Ties round half up. The rounding is done on exact integers before
    converting to float, so a true .xx5 always goes up.
    """
    hundredths, remainder = divmod(matching * 10000, total)
    if 2 * remainder >= total:
        hundredths += 1
    return hundredths / 100


class OddsEngine:
    """Counts dice outcomes exactly and turns them into percentages.

    Args:
        cache: The factorial cache to draw from. Engines share the
            process-wide cache unless given their own.
        result_bits: Width of the unsigned integer every public count must
            fit in. None disables the check entirely.
    """

    def __init__(
        self,
        cache: FactorialCache | None = None,
        result_bits: int | None = DEFAULT_RESULT_BITS,
    ) -> None:
        self.cache = default_cache() if cache is None else cache
        self.result_bits = result_bits

    def _narrow(self, value: int, what: str) -> Count:
        if self.result_bits is not None and value.bit_length() > self.result_bits:
            log.warning("%s overflows %d bits", what, self.result_bits)
            raise CountOverflowError(what, value, self.result_bits)
        return value

    def factorial(self, n: int) -> Count:
        """n! exactly. Never narrowed: factorials are an internal building
        block and are expected to be huge."""
        return self.cache(n)

    def _choose(self, n: int, k: int) -> int:
        if n < 0 or k < 0:
            raise ValueError(f"choose needs non-negative arguments, got {n} choose {k}")
        # n choose 1 is n for every n >= 0, including the degenerate 0.
        if k == 1:
            return n
        if k == 0 or k == n:
            return 1
        if k > n:
            raise ValueError(f"cannot choose {k} from {n}")
        return self.cache(n) // (self.cache(k) * self.cache(n - k))

    def choose(self, n: int, k: int) -> Count:
        """Combinations without repetition, commonly "n choose k".

        Checks run in this order: negative n or k raises ValueError; k == 1
        gives n (so 0 choose 1 is 0); k == 0 or k == n gives 1; k > n
        raises ValueError; anything else is n! / (k! * (n - k)!).
        """
        return self._narrow(self._choose(n, k), f'"{n} choose {k}"')

    def multichoose(self, n: int, k: int) -> Count:
        """Combinations with repetition: choose(n + k - 1, k)."""
        return self.choose(n + k - 1, k)

    def count_outcomes(self, sides: int, num_dice: int) -> Count:
        """Every ordered outcome of rolling num_dice dice: sides**num_dice."""
        return self._narrow(sides**num_dice, f"{sides}**{num_dice}")

    def _rolls_with_sum(self, n: int, s: int, p: int) -> int:
        if p < n or p > s * n:
            return 0

        # Partial sums can go negative; only the final total is a count.
        total = 0
        for i in range((p - n) // s + 1):
            term = self._choose(n, i) * self._choose(p - s * i - 1, p - s * i - n)
            if i % 2 == 0:
                total += term
            else:
                total -= term
        return total

    def count_rolls_with_sum(self, n: int, s: int, p: int) -> Count:
        """Number of ways n dice with s sides can total exactly p.

        Totals outside [n, n*s] can't be rolled and count as 0.
        """
        _check_dice(n, s)
        return self._narrow(self._rolls_with_sum(n, s, p), f"rolls of {n}d{s} summing to {p}")

    def _rolls_at_least(self, n: int, s: int, target: int) -> int:
        return sum(self._rolls_with_sum(n, s, p) for p in range(max(target, n), s * n + 1))

    def count_rolls_at_least(self, n: int, s: int, target: int) -> Count:
        """Number of ways n dice with s sides can total target or more."""
        _check_dice(n, s)
        return self._narrow(
            self._rolls_at_least(n, s, target),
            f"rolls of {n}d{s} totalling at least {target}",
        )

    def sum_distribution(self, n: int, s: int) -> dict[int, Count]:
        """Exact count for every achievable total of n dice with s sides,
        keyed by total in ascending order."""
        _check_dice(n, s)
        return {
            p: self._narrow(self._rolls_with_sum(n, s, p), f"rolls of {n}d{s} summing to {p}")
            for p in range(n, s * n + 1)
        }

    def chance(self, query: DiceQuery) -> Percent:
        """Percent chance that the query's dice total at least its target."""
        n, s, target = query.num_dice, query.sides, query.target
        if target <= n:
            log.debug("%dd%d always makes %d", n, s, target)
            return 100.0

        total = self.count_outcomes(s, n)
        return to_percent(self._rolls_at_least(n, s, target), total)

    def chance_at_least(self, n: int, s: int, target: int) -> Percent:
        """Percent chance that n dice with s sides total at least target."""
        return self.chance(DiceQuery(n, s, target))


def _check_dice(n: int, s: int) -> None:
    if n < 1:
        raise ValueError(f"need at least one die, got {n}")
    if s < 2:
        raise ValueError(f"dice need at least two sides, got {s}")
