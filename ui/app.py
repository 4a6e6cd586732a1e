"""Streamlit dice odds explorer.

Run with: PYTHONPATH=. streamlit run ui/app.py
"""

from __future__ import annotations

import logging

import streamlit as st

from dicesum.engine import CountOverflowError, OddsEngine
from dicesum.records import DiceQuery, DifficultyTable
from dicesum.table import DICE_COUNTS, PIPS, build_table

log = logging.getLogger(__name__)

MAX_DICE = 30
MAX_SIDES = 20

# The page only displays values, so counts are never narrowed.
engine = OddsEngine(result_bits=None)


def query_config(label: str = "Roll") -> dict:
    """Render sidebar controls for one query and return a config dict."""
    st.sidebar.subheader(label)
    num_dice = st.sidebar.slider("Dice", 1, MAX_DICE, 3, key=f"{label}_dice")
    sides = st.sidebar.number_input(
        "Sides", min_value=2, max_value=MAX_SIDES, value=6, key=f"{label}_sides",
    )
    target = st.sidebar.number_input(
        "Target", min_value=0, max_value=num_dice * sides, value=min(10, num_dice * sides),
        key=f"{label}_target",
    )
    return {"num_dice": num_dice, "sides": int(sides), "target": int(target)}


def build_query(config: dict) -> DiceQuery:
    """Build a DiceQuery from a config dict, validating its ranges."""
    return DiceQuery(
        num_dice=config["num_dice"],
        sides=config["sides"],
        target=config["target"],
    )


def distribution_rows(query: DiceQuery) -> list[dict]:
    """Per-total rows for the distribution chart.

    Each row has the total, the exact number of ways to roll it, and the
    percent chance of rolling at least that total.
    """
    counts = engine.sum_distribution(query.num_dice, query.sides)
    outcomes = engine.count_outcomes(query.sides, query.num_dice)
    rows = []
    at_least = outcomes
    for total, ways in counts.items():
        rows.append({
            "total": total,
            "ways": ways,
            "percent": 100 * ways / outcomes,
            "at_least": 100 * at_least / outcomes,
        })
        at_least -= ways
    return rows


def table_frame(table: DifficultyTable) -> list[dict]:
    """Flatten a DifficultyTable into one dict per row for st.dataframe."""
    frame = []
    for row in table.rows:
        record: dict[str, object] = {"Dice": row.label}
        for cell in row.cells:
            record[cell.difficulty.label] = cell.chance
        frame.append(record)
    return frame


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    st.set_page_config(page_title="What Are the Odds?", layout="wide")
    st.title("What Are the Odds?")

    st.sidebar.header("Dice Configuration")
    config = query_config()

    try:
        query = build_query(config)
        chance = engine.chance(query)
        rows = distribution_rows(query)
    except CountOverflowError as e:
        log.warning("query %s overflowed", config)
        st.error(str(e))
        return

    st.metric(f"{query.num_dice}d{query.sides} makes {query.target}+", f"{chance:.2f}%")

    st.subheader("Distribution of Totals")
    st.bar_chart(rows, x="total", y="percent")

    st.divider()
    st.subheader("Difficulty Table")
    st.caption(f"{DICE_COUNTS[0]}D to {DICE_COUNTS[-1]}D with up to +{PIPS[-1]} pips, on d6")
    st.dataframe(table_frame(build_table(engine)), hide_index=True)


if __name__ == "__main__":
    main()
