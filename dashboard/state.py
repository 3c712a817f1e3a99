"""
Leaderboard dashboard state and transitions.

The dashboard holds one immutable :class:`DashboardState`. Every user action
(filter, sort, pin) is a pure function taking the current state and returning
the next one, so the table logic is testable without Streamlit.
"""

import csv
import io
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from config.config import ALL_SECTIONS, MISSING_SECTION
from utils.validation import as_count

ASC = "asc"
DESC = "desc"

# Sortable columns: field -> is numeric
SORT_FIELDS: Dict[str, bool] = {
    "totalSolved": True,
    "easySolved": True,
    "mediumSolved": True,
    "hardSolved": True,
    "section": False,
}

DEFAULT_DIRECTIONS: Dict[str, str] = {
    "totalSolved": DESC,
    "easySolved": DESC,
    "mediumSolved": DESC,
    "hardSolved": DESC,
    "section": ASC,
}

# Absent text values sort after every real value
TEXT_SENTINEL = "\uffff"

EXPORT_HEADER = (
    "Rank", "Roll Number", "Name", "Section",
    "Total Solved", "Easy", "Medium", "Hard", "LeetCode URL",
)

Record = Mapping[str, Any]


@dataclass(frozen=True)
class DashboardState:
    original: Tuple[Record, ...] = ()
    working: Tuple[Record, ...] = ()
    directions: Mapping[str, str] = field(default_factory=lambda: dict(DEFAULT_DIRECTIONS))
    pinned: Optional[str] = None
    section_filter: str = ALL_SECTIONS
    sections: Tuple[str, ...] = ()


def section_of(record: Record) -> str:
    return record.get("section") or MISSING_SECTION


def load(records: Iterable[Record]) -> DashboardState:
    """Initial state for a freshly fetched snapshot."""
    original = tuple(records)
    return DashboardState(
        original=original,
        working=original,
        sections=tuple(sorted({section_of(r) for r in original})),
    )


def apply_filter(state: DashboardState, section: str) -> DashboardState:
    """Rebuild the working view from the original for one section, or all.

    The stored pin is kept but the pinned row is not moved back to the top.
    """
    if section == ALL_SECTIONS:
        working = state.original
    else:
        working = tuple(r for r in state.original if section_of(r) == section)
    return replace(state, working=working, section_filter=section)


def _sort_key(field_name: str, numeric: bool):
    if numeric:
        return lambda r: as_count(r.get(field_name))
    return lambda r: str(r.get(field_name) or TEXT_SENTINEL)


def apply_sort(state: DashboardState, field_name: str) -> DashboardState:
    """Flip the remembered direction of ``field_name`` and reorder the working view."""
    if field_name not in SORT_FIELDS:
        raise ValueError(f"Unknown sort field: {field_name}")

    direction = ASC if state.directions[field_name] == DESC else DESC
    working = tuple(sorted(
        state.working,
        key=_sort_key(field_name, SORT_FIELDS[field_name]),
        reverse=(direction == DESC),
    ))
    directions = {**state.directions, field_name: direction}
    return replace(state, working=working, directions=directions)


def pin(state: DashboardState, roll: str) -> DashboardState:
    """Move the student with ``roll`` to the top of the working view and pin it.

    Raises:
        KeyError: if no record in the snapshot has that roll number.
    """
    record = next((r for r in state.working if r.get("roll") == roll), None)
    if record is None:
        record = next((r for r in state.original if r.get("roll") == roll), None)
    if record is None:
        raise KeyError(roll)

    rest = tuple(r for r in state.working if r.get("roll") != roll)
    return replace(state, working=(record,) + rest, pinned=roll)


def pinned_record(state: DashboardState) -> Optional[Record]:
    if state.pinned is None:
        return None
    return next((r for r in state.original if r.get("roll") == state.pinned), None)


def display_value(value: Any) -> Any:
    """Empty or zero counts render as "N/A", matching the table display."""
    return value if value else "N/A"


def export_rows(records: Iterable[Record]) -> list:
    """Rows for the CSV export, rank taken from position in the working view."""
    return [
        [
            rank,
            r.get("roll"),
            r.get("name"),
            section_of(r),
            display_value(r.get("totalSolved")),
            display_value(r.get("easySolved")),
            display_value(r.get("mediumSolved")),
            display_value(r.get("hardSolved")),
            r.get("url"),
        ]
        for rank, r in enumerate(records, 1)
    ]


def export_csv(records: Iterable[Record]) -> str:
    """CSV text of the given rows under the fixed export header, no trailing newline."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(EXPORT_HEADER)
    writer.writerows(export_rows(records))
    return buffer.getvalue()[:-1]
