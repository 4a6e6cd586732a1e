#!/usr/bin/env python3
"""Print the difficulty table for 2D through 8D with up to +2 pips.

Every cell is an exact chance (not a simulation) of the pool making the
column's target number on six-sided dice.

Usage:
    python tools/generate_difficulty_table.py [-v] [output_file]

If no output file is given, writes to stdout. Any engine error aborts the
whole run with a non-zero exit status.
"""

import logging
import sys

from dicesum.renderers import TextRenderer
from dicesum.table import build_table

log = logging.getLogger("dicesum.tools")


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    verbose = "-v" in args
    args = [a for a in args if a != "-v"]
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        table = build_table()
    except (OverflowError, ValueError) as e:
        log.error("could not build table: %s", e)
        print(e, file=sys.stderr)
        return 1

    lines = TextRenderer().render_table(table)
    lines.append("What are the odds?")
    text = "\n".join(lines) + "\n"

    [fname] = args[:1] or [None]
    if fname is None:
        sys.stdout.write(text)
    else:
        with open(fname, "w") as f:
            f.write(text)
        log.info("wrote %d rows to %s", len(table.rows), fname)
    return 0


if __name__ == "__main__":
    sys.exit(main())
