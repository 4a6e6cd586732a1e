"""
The standard difficulty table: dice pools against named target numbers.

Each row is a pool like 3D+1 (roll three six-sided dice, add one pip) and
each column a difficulty. A pip is just a flat bonus, so 3D+1 against
Moderate (15) is the same as plain 3D against 14.
"""

from __future__ import annotations

from collections.abc import Iterable

from dicesum.engine import OddsEngine
from dicesum.records import Difficulty, DifficultyTable, TableCell, TableRow

DICE_COUNTS = range(2, 9)
PIPS = range(0, 3)
SIDES = 6
DIFFICULTIES = (
    Difficulty("V. Easy", 5),
    Difficulty("Easy", 10),
    Difficulty("Moderate", 15),
    Difficulty("Difficult", 20),
    Difficulty("V Difficult", 25),
    Difficulty("Heroic", 30),
)


def build_row(
    engine: OddsEngine,
    num_dice: int,
    pips: int,
    difficulties: Iterable[Difficulty] = DIFFICULTIES,
    sides: int = SIDES,
) -> TableRow:
    row = TableRow(num_dice=num_dice, pips=pips)
    for difficulty in difficulties:
        target = max(0, difficulty.target - pips)
        chance = engine.chance_at_least(num_dice, sides, target)
        row.cells.append(TableCell(difficulty=difficulty, target=target, chance=chance))
    return row


def build_table(
    engine: OddsEngine | None = None,
    dice_counts: Iterable[int] = DICE_COUNTS,
    pips: Iterable[int] = PIPS,
    difficulties: Iterable[Difficulty] = DIFFICULTIES,
    sides: int = SIDES,
) -> DifficultyTable:
    """Evaluate every (dice, pips) pool against every difficulty.

    Engine errors (e.g. CountOverflowError for huge pools) are not caught
    here; one bad cell spoils the whole table.
    """
    engine = engine or OddsEngine()
    difficulties = list(difficulties)
    pips = list(pips)
    table = DifficultyTable(sides=sides, difficulties=difficulties)
    for num_dice in dice_counts:
        for pip in pips:
            table.rows.append(build_row(engine, num_dice, pip, difficulties, sides))
    return table
