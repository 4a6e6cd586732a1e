"""Renderers that convert difficulty tables into text output.

The TextRenderer produces the comma-separated layout the table tool has
always printed, e.g.::

    Dice,V. Easy (5),Easy (10),...
    2D,83.33%,16.67%,...

The Streamlit UI consumes the same DifficultyTable records directly.
"""

from __future__ import annotations

from dicesum.records import DifficultyTable, TableCell, TableRow


class TextRenderer:
    """Renders a DifficultyTable to lines of CSV text.

    Each render_* method returns either a single line or a list of lines,
    without trailing newlines.
    """

    def __init__(self, separator: str = ",") -> None:
        self.separator = separator

    def render_table(self, table: DifficultyTable) -> list[str]:
        lines = [self.render_header(table)]
        for row in table.rows:
            lines.append(self.render_row(row))
        return lines

    def render_header(self, table: DifficultyTable) -> str:
        return self.separator.join(["Dice"] + [d.label for d in table.difficulties])

    def render_row(self, row: TableRow) -> str:
        return self.separator.join([row.label] + [self.render_cell(c) for c in row.cells])

    def render_cell(self, cell: TableCell) -> str:
        return f"{cell.chance:.2f}%"
