"""
Leaderboard panel component.

Fetches the snapshot once per session (``GET /data``), keeps a
:class:`~dashboard.state.DashboardState` in ``st.session_state`` and maps
widget events onto the filter / sort / pin transitions.
Use `render_panel()` to draw the whole leaderboard.
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional

import pandas as pd
import requests
import streamlit as st

from config.config import ALL_SECTIONS, DASHBOARD_API_URL, EXPORT_FILENAME, REQUEST_TIMEOUT_SEC
from dashboard import state as board
from dashboard.components.layout import (
    apply_custom_css,
    difficulty_color,
    render_pinned_card,
    row_highlight,
)

STATE_KEY = "leaderboard_state"

TABLE_COLUMNS = ["Rank", "Roll Number", "Name", "Section", "Total Solved", "Easy", "Medium", "Hard"]

SORT_BUTTONS = [
    ("section", "Section"),
    ("totalSolved", "Total"),
    ("easySolved", "Easy"),
    ("mediumSolved", "Medium"),
    ("hardSolved", "Hard"),
]


def _load_snapshot(api_url: str, timeout: float = REQUEST_TIMEOUT_SEC) -> Optional[List[Dict[str, Any]]]:
    """Fetch the leaderboard snapshot from the API."""
    try:
        response = requests.get(f"{api_url.rstrip('/')}/data", timeout=timeout)
        response.raise_for_status()
        data = response.json()
    except (requests.RequestException, ValueError) as e:
        st.error(f"Error fetching data: {e}")
        return None

    if not isinstance(data, list):
        st.error("Unexpected response from the leaderboard API.")
        return None
    return data


def to_dataframe(records: Iterable[Mapping[str, Any]]) -> pd.DataFrame:
    """Table rows for the working view, ranked by position."""
    rows = [
        {
            "Rank": rank,
            "Roll Number": str(r.get("roll")),
            "Name": r.get("name"),
            "Section": board.section_of(r),
            "Total Solved": board.display_value(r.get("totalSolved")),
            "Easy": board.display_value(r.get("easySolved")),
            "Medium": board.display_value(r.get("mediumSolved")),
            "Hard": board.display_value(r.get("hardSolved")),
        }
        for rank, r in enumerate(records, 1)
    ]
    # Mixed int / "N/A" columns are kept as text for a consistent display
    return pd.DataFrame(rows, columns=TABLE_COLUMNS).astype(str)


def _get_state() -> Optional[board.DashboardState]:
    return st.session_state.get(STATE_KEY)


def _set_state(new_state: board.DashboardState) -> None:
    st.session_state[STATE_KEY] = new_state


def _on_filter_change() -> None:
    _set_state(board.apply_filter(_get_state(), st.session_state["section_filter"]))


def _on_sort(field_name: str) -> None:
    _set_state(board.apply_sort(_get_state(), field_name))


def _on_pin() -> None:
    roll = st.session_state.get("pin_choice")
    if roll is not None:
        _set_state(board.pin(_get_state(), roll))


def _render_controls(current: board.DashboardState) -> None:
    col_filter, col_export = st.columns([3, 1])
    with col_filter:
        st.selectbox(
            "Section",
            options=[ALL_SECTIONS, *current.sections],
            format_func=lambda s: "All Sections" if s == ALL_SECTIONS else s,
            key="section_filter",
            on_change=_on_filter_change,
        )
    with col_export:
        st.download_button(
            "⬇️ Export CSV",
            data=board.export_csv(current.working),
            file_name=EXPORT_FILENAME,
            mime="text/csv",
        )

    st.caption("Sort by (click again to reverse):")
    for col, (field_name, label) in zip(st.columns(len(SORT_BUTTONS)), SORT_BUTTONS):
        with col:
            arrow = "▲" if current.directions[field_name] == board.ASC else "▼"
            st.button(f"{label} {arrow}", key=f"sort_{field_name}", on_click=_on_sort, args=(field_name,))

    names = {str(r.get("roll")): f"{r.get('name')} ({r.get('roll')})" for r in current.working}
    if names:
        col_pick, col_pin = st.columns([3, 1])
        with col_pick:
            st.selectbox("Pin a student", options=list(names), format_func=names.get, key="pin_choice")
        with col_pin:
            st.button("📌 Pin", key="pin_button", on_click=_on_pin)


def render_panel(api_url: str = DASHBOARD_API_URL) -> Dict[str, Any]:
    """
    Render the leaderboard panel.

    Returns:
        Dict containing panel state for the sidebar status.
    """
    st.header("📋 Standings")
    apply_custom_css()

    current = _get_state()
    if current is None:
        records = _load_snapshot(api_url)
        if records is None:
            return {"status": "no_data", "students": 0}
        current = board.load(records)
        _set_state(current)

    pinned = board.pinned_record(current)
    if pinned is not None:
        render_pinned_card(pinned)

    _render_controls(current)

    if not current.working:
        st.warning("📭 No students match the current filter.")
        return {"status": "empty", "students": 0}

    table = to_dataframe(current.working)
    styled = (
        table.style
        .apply(row_highlight, axis=1, pinned_roll=current.pinned)
        .apply(difficulty_color, subset=["Easy", "Medium", "Hard"])
    )
    st.dataframe(styled, hide_index=True, width="stretch")

    return {"status": "success", "students": len(current.working), "pinned": current.pinned}
