"""
Domain-specific type aliases for the dice odds engine.

These exist to make signatures self-documenting rather than for runtime
checks. A parameter typed as Count is an exact number of ordered roll
outcomes, never a probability; a Percent is already scaled to [0, 100].
"""

from typing import Literal, TypeAlias

# An exact number of ordered roll outcomes. Always a Python int, so it can
# grow past any machine word (6**65 outcomes is perfectly representable).
Count: TypeAlias = int

# A probability scaled to [0, 100] and rounded to two decimal places.
Percent: TypeAlias = float

# The difficulty labels used by the standard table. They're printed
# verbatim in the header row, followed by their target number.
DifficultyName: TypeAlias = Literal[
    "V. Easy",
    "Easy",
    "Moderate",
    "Difficult",
    "V Difficult",
    "Heroic",
]
