"""Snapshot persistence: the single JSON file shared by the aggregator and the API."""

import json
from pathlib import Path
from typing import Iterable, Optional

from config.config import SNAPSHOT_PATH, SNAPSHOT_INDENT
from config.schemas import Snapshot, StudentRecord
from utils.errors import SnapshotReadError
from utils.io import atomic_write_json


def write_snapshot(records: Iterable[StudentRecord], path: str | Path = SNAPSHOT_PATH) -> Path:
    """Replace the snapshot at ``path`` with ``records`` in one atomic rename."""
    return atomic_write_json(path, list(records), indent=SNAPSHOT_INDENT)


def read_snapshot(path: str | Path = SNAPSHOT_PATH) -> Snapshot:
    """Load the snapshot.

    Raises:
        SnapshotReadError: if the file is missing, unreadable, not JSON, or
            not a JSON array.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise SnapshotReadError(f"Cannot read snapshot {path}: {e}") from e

    if not isinstance(data, list):
        raise SnapshotReadError(f"Snapshot {path} is not a JSON array")
    return data


def find_student(records: Iterable[StudentRecord], roll: str) -> Optional[StudentRecord]:
    """First record whose roll number equals ``roll``."""
    return next((record for record in records if record.get("roll") == roll), None)
