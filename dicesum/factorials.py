"""
Memoized exact factorials.

Every binomial coefficient the engine computes is built from factorials, and
the same handful of arguments come up over and over while summing an
inclusion-exclusion series. We keep them in a list indexed by argument so
that each n! is multiplied out exactly once per cache.

Python ints are arbitrary precision, so there's no ceiling on n beyond memory.
"""

from __future__ import annotations

import logging
import threading

log = logging.getLogger(__name__)


class FactorialCache:
    """A grow-on-demand table where ``values[i] == i!``.

    The table only ever grows: entries are appended once fully computed and
    are never replaced, so a reader that sees index i sees the final value.
    Growth is serialized with a lock so that two threads asking for a large
    n at the same time don't both extend the list.
    """

    def __init__(self) -> None:
        self._values: list[int] = [1, 1]
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._values)

    def __call__(self, n: int) -> int:
        if n < 0:
            raise ValueError(f"factorial of negative number: {n}")
        if n < len(self._values):
            return self._values[n]

        with self._lock:
            values = self._values
            start = len(values)
            for i in range(start, n + 1):
                values.append(values[i - 1] * i)
            if start <= n:
                log.debug("grew factorial cache from %d to %d entries", start, len(values))
            return values[n]


_default_cache = FactorialCache()


def default_cache() -> FactorialCache:
    """The process-wide cache shared by engines that aren't given their own."""
    return _default_cache


def factorial(n: int) -> int:
    """Return n! exactly, using the process-wide cache."""
    return _default_cache(n)
