"""Schema definitions for structured data used in the project."""

from typing import TypedDict, List


class RosterEntry(TypedDict):
    roll: str
    name: str
    url: str
    section: str  # "N/A" when absent


class _Counts(TypedDict):
    totalSolved: int
    easySolved: int
    mediumSolved: int
    hardSolved: int


class SolveStats(_Counts, total=False):
    info: str  # set only when no usable stats were fetched


class _RecordBase(RosterEntry, _Counts):
    pass


class StudentRecord(_RecordBase, total=False):
    info: str


Snapshot = List[StudentRecord]

COUNT_FIELDS: tuple[str, ...] = ("totalSolved", "easySolved", "mediumSolved", "hardSolved")
