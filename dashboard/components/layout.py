"""
Shared layout helpers for dashboard components.

Provides common UI utilities for colors, table styling and the sticky
pinned-student panel.
"""

import html
from typing import Any, List, Mapping, Optional

import pandas as pd
import streamlit as st

from dashboard.state import display_value, section_of

PINNED_ROW_COLOR = "#fef9c3"
DIFFICULTY_COLORS = {
    "Easy": "#4ade80",
    "Medium": "#facc15",
    "Hard": "#f87171",
}


def row_highlight(row: pd.Series, pinned_roll: Optional[str]) -> List[str]:
    """
    Styler callback highlighting the pinned student's row.

    Args:
        row: DataFrame row with a "Roll Number" column
        pinned_roll: Roll number of the pinned student, if any

    Returns:
        One CSS string per cell
    """
    if pinned_roll is not None and str(row.get("Roll Number")) == str(pinned_roll):
        return [f"background-color: {PINNED_ROW_COLOR}; color: #111827"] * len(row)
    return [""] * len(row)


def difficulty_color(column: pd.Series) -> List[str]:
    """Styler callback coloring the difficulty columns."""
    color = DIFFICULTY_COLORS.get(column.name)
    return [f"color: {color}" if color else "" for _ in column]


def render_pinned_card(record: Mapping[str, Any]) -> None:
    """
    Render the always-visible summary for the pinned student.

    Args:
        record: Snapshot record of the pinned student
    """
    st.markdown(
        f"""
        <div class="pinned-student">
            <h3>📌 Pinned Student Info</h3>
            <p><strong>Name:</strong> {html.escape(str(record.get('name')))}</p>
            <p><strong>Roll Number:</strong> {record.get('roll')}</p>
            <p><strong>Section:</strong> {section_of(record)}</p>
            <p><strong>Total Solved:</strong> {display_value(record.get('totalSolved'))}</p>
            <p><strong>Easy Solved:</strong> {display_value(record.get('easySolved'))}</p>
            <p><strong>Medium Solved:</strong> {display_value(record.get('mediumSolved'))}</p>
            <p><strong>Hard Solved:</strong> {display_value(record.get('hardSolved'))}</p>
        </div>
        """,
        unsafe_allow_html=True,
    )


def apply_custom_css() -> None:
    """Apply custom CSS styling; keeps the pinned panel stuck to the top."""
    st.markdown("""
    <style>
    .pinned-student {
        position: sticky;
        top: 0;
        z-index: 1000;
        background-color: #bfdbfe;
        color: #111827;
        padding: 1rem;
        border-radius: 0.25rem;
        margin-bottom: 1rem;
    }

    .pinned-student p {
        margin: 0.1rem 0;
    }
    </style>
    """, unsafe_allow_html=True)
