"""Tests for building and rendering the difficulty table."""

import threading
from unittest.mock import MagicMock

import pytest

from dicesum.engine import CountOverflowError, OddsEngine
from dicesum.factorials import FactorialCache
from dicesum.records import Difficulty
from dicesum.renderers import TextRenderer
from dicesum.table import DIFFICULTIES, build_row, build_table

HEADER = "Dice,V. Easy (5),Easy (10),Moderate (15),Difficult (20),V Difficult (25),Heroic (30)"


@pytest.fixture
def engine() -> OddsEngine:
    return OddsEngine(cache=FactorialCache())


class TestBuildRow:
    def test_two_dice(self, engine: OddsEngine) -> None:
        row = build_row(engine, 2, 0)
        assert row.label == "2D"
        assert [c.chance for c in row.cells] == [83.33, 16.67, 0.0, 0.0, 0.0, 0.0]

    def test_pips_lower_the_target(self, engine: OddsEngine) -> None:
        row = build_row(engine, 2, 1)
        assert [c.target for c in row.cells] == [4, 9, 14, 19, 24, 29]
        assert row.cells[0].chance == 91.67
        assert row.cells[1].chance == 27.78

    def test_cells_carry_their_difficulty(self, engine: OddsEngine) -> None:
        row = build_row(engine, 3, 0)
        assert [c.difficulty for c in row.cells] == list(DIFFICULTIES)
        assert row.cells[1].chance == 62.5
        assert row.cells[2].chance == 9.26

    def test_target_never_negative(self, engine: OddsEngine) -> None:
        row = build_row(engine, 2, 5, [Difficulty("V. Easy", 3)])
        assert row.cells[0].target == 0
        assert row.cells[0].chance == 100.0

    def test_calls_engine_with_adjusted_target(self) -> None:
        engine = MagicMock()
        engine.chance_at_least.return_value = 50.0
        build_row(engine, 4, 2, [Difficulty("Moderate", 15)], sides=6)
        engine.chance_at_least.assert_called_once_with(4, 6, 13)


class TestBuildTable:
    def test_default_shape(self, engine: OddsEngine) -> None:
        table = build_table(engine)
        assert table.sides == 6
        assert len(table.difficulties) == 6
        assert len(table.rows) == 21
        assert [r.label for r in table.rows[:4]] == ["2D", "2D+1", "2D+2", "3D"]
        assert table.rows[-1].label == "8D+2"

    def test_every_cell_in_range(self, engine: OddsEngine) -> None:
        for row in build_table(engine).rows:
            assert len(row.cells) == 6
            for cell in row.cells:
                assert 0.0 <= cell.chance <= 100.0

    def test_more_dice_never_worse(self, engine: OddsEngine) -> None:
        table = build_table(engine, pips=[0])
        for col in range(6):
            column = [row.cells[col].chance for row in table.rows]
            assert column == sorted(column)

    def test_custom_grid(self, engine: OddsEngine) -> None:
        table = build_table(
            engine, dice_counts=[1], pips=[0], difficulties=[Difficulty("Easy", 4)], sides=4,
        )
        assert len(table.rows) == 1
        assert table.rows[0].cells[0].chance == 25.0

    def test_default_engine(self) -> None:
        assert len(build_table(dice_counts=[2], pips=[0]).rows) == 1

    def test_errors_propagate(self) -> None:
        engine = MagicMock()
        engine.chance_at_least.side_effect = CountOverflowError("6**65", 6**65, 64)
        with pytest.raises(CountOverflowError):
            build_table(engine)

    def test_overflowing_pool(self, engine: OddsEngine) -> None:
        with pytest.raises(OverflowError):
            build_table(engine, dice_counts=[65], pips=[0], difficulties=[Difficulty("Heroic", 100)])

    def test_huge_pool_on_easy_targets(self, engine: OddsEngine) -> None:
        """Targets at or below the dice count never touch 6**65."""
        table = build_table(engine, dice_counts=[65], pips=[0])
        assert all(c.chance == 100.0 for c in table.rows[0].cells)

    def test_concurrent_tables_agree(self) -> None:
        """Several threads sharing one engine and cache get identical tables."""
        engine = OddsEngine(cache=FactorialCache())
        expected = [[c.chance for c in r.cells] for r in build_table(OddsEngine(cache=FactorialCache())).rows]
        results: list[list[list[float]]] = []
        lock = threading.Lock()

        def worker() -> None:
            table = build_table(engine)
            with lock:
                results.append([[c.chance for c in r.cells] for r in table.rows])

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(results) == 8
        assert all(r == expected for r in results)


class TestTextRenderer:
    def test_header(self, engine: OddsEngine) -> None:
        table = build_table(engine)
        assert TextRenderer().render_header(table) == HEADER

    def test_table_lines(self, engine: OddsEngine) -> None:
        lines = TextRenderer().render_table(build_table(engine))
        assert len(lines) == 22
        assert lines[0] == HEADER
        assert lines[1] == "2D,83.33%,16.67%,0.00%,0.00%,0.00%,0.00%"
        assert lines[2] == "2D+1,91.67%,27.78%,0.00%,0.00%,0.00%,0.00%"
        assert lines[4].startswith("3D,98.15%,62.50%,9.26%,")

    def test_guaranteed_cells(self, engine: OddsEngine) -> None:
        lines = TextRenderer().render_table(build_table(engine))
        assert lines[-1].startswith("8D+2,100.00%,")

    def test_custom_separator(self, engine: OddsEngine) -> None:
        table = build_table(engine, dice_counts=[2], pips=[0])
        lines = TextRenderer(separator="\t").render_table(table)
        assert lines[1].split("\t")[:3] == ["2D", "83.33%", "16.67%"]
