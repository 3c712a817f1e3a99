"""Snapshot persistence."""

from .snapshot import write_snapshot, read_snapshot, find_student

__all__ = ["write_snapshot", "read_snapshot", "find_student"]
