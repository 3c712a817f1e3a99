"""Fetch-and-merge pipeline producing the leaderboard snapshot.

One refresh run:
- reads the four roster files
- fetches LeetCode stats for every roster row, one at a time
- sorts by total solved (descending)
- atomically replaces the snapshot file
"""

import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from config.config import (
    ROLLS_PATH,
    NAMES_PATH,
    URLS_PATH,
    SECTIONS_PATH,
    SNAPSHOT_PATH,
    LEETCODE_API_BASE,
    REQUEST_TIMEOUT_SEC,
    REFRESH_INTERVAL_SEC,
    NO_DATA_NOTE,
)
from config.schemas import RosterEntry, StudentRecord
from data_pipeline.collectors.leetcode_collector import (
    LeetCodeCollector,
    extract_username,
    empty_stats,
)
from data_pipeline.processors.roster import load_roster
from data_pipeline.storage.snapshot import write_snapshot
from utils.decorators import timer
from utils.errors import RosterMismatchError
from utils.io import maybe_load_yaml
from utils.logging import get_logger
from utils.validation import as_count

logger = get_logger(__name__)


@dataclass
class AggregatorConfig:
    """Aggregator configuration with YAML override support."""
    rolls_path: Path = ROLLS_PATH
    names_path: Path = NAMES_PATH
    urls_path: Path = URLS_PATH
    sections_path: Path = SECTIONS_PATH
    snapshot_path: Path = SNAPSHOT_PATH
    api_base: str = LEETCODE_API_BASE
    request_timeout_sec: float = REQUEST_TIMEOUT_SEC
    refresh_interval_sec: int = REFRESH_INTERVAL_SEC

    @classmethod
    def from_yaml(cls, yaml_path: Optional[str] = None) -> 'AggregatorConfig':
        """Create config with optional YAML overrides from the ``aggregator`` section."""
        yaml_config = maybe_load_yaml(yaml_path)
        section = yaml_config.get('aggregator', {}) if isinstance(yaml_config, dict) else {}
        if not isinstance(section, dict):
            section = {}

        return cls(
            rolls_path=Path(section.get('rolls_path', ROLLS_PATH)),
            names_path=Path(section.get('names_path', NAMES_PATH)),
            urls_path=Path(section.get('urls_path', URLS_PATH)),
            sections_path=Path(section.get('sections_path', SECTIONS_PATH)),
            snapshot_path=Path(section.get('snapshot_path', SNAPSHOT_PATH)),
            api_base=section.get('api_base', LEETCODE_API_BASE),
            request_timeout_sec=float(section.get('request_timeout_sec', REQUEST_TIMEOUT_SEC)),
            refresh_interval_sec=int(section.get('refresh_interval_sec', REFRESH_INTERVAL_SEC)),
        )


@dataclass
class RefreshResult:
    """Outcome of a single refresh run."""
    status: str  # "ok" | "skipped" | "failed"
    records: int = 0
    duration_sec: float = 0.0
    error: Optional[str] = None
    finished_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    def to_dict(self) -> dict:
        return {
            "status": self.status,
            "records": self.records,
            "duration_sec": round(self.duration_sec, 3),
            "error": self.error,
            "finished_at": self.finished_at,
        }


def sort_by_total_solved(records: List[StudentRecord]) -> List[StudentRecord]:
    """Stable sort, highest ``totalSolved`` first; non-numeric counts as 0."""
    return sorted(records, key=lambda r: as_count(r.get("totalSolved")), reverse=True)


def build_record(entry: RosterEntry, collector: LeetCodeCollector) -> StudentRecord:
    """Merge one roster entry with its fetched stats."""
    record = StudentRecord(
        roll=entry["roll"],
        name=entry["name"],
        url=entry["url"],
        section=entry["section"],
    )
    username = extract_username(entry["url"])
    if username is None:
        logger.info(f"URL for {entry['name']} is not a LeetCode profile. Skipping API call.")
        record.update(empty_stats(NO_DATA_NOTE))
        return record

    logger.info(f"Fetching data for LeetCode username: {username}")
    record.update(collector.fetch_stats(username))
    return record


def collect_records(roster: List[RosterEntry], collector: LeetCodeCollector) -> List[StudentRecord]:
    """Build records sequentially, awaiting each fetch before the next."""
    records = []
    for entry in roster:
        logger.info(
            f"Processing data for roll number: {entry['roll']}, "
            f"name: {entry['name']}, section: {entry['section']}"
        )
        records.append(build_record(entry, collector))
    return records


@timer
def refresh(
    config: Optional[AggregatorConfig] = None,
    collector: Optional[LeetCodeCollector] = None,
) -> RefreshResult:
    """Run one aggregation and replace the snapshot.

    A roster count mismatch aborts the run before anything is written; the
    previous snapshot stays byte-identical.

    Args:
        config: Paths and API settings; defaults to the project configuration
        collector: Collector to reuse (a new one is created and closed otherwise)

    Returns:
        RefreshResult describing the run
    """
    config = config or AggregatorConfig()
    started = time.perf_counter()

    logger.info("Starting to read input files...")
    try:
        roster = load_roster(
            config.rolls_path,
            config.names_path,
            config.urls_path,
            config.sections_path,
        )
    except RosterMismatchError as e:
        logger.error(f"Error: {e}")
        return RefreshResult(status="skipped", error=str(e), duration_sec=time.perf_counter() - started)
    except OSError as e:
        logger.error(f"Error reading roster files: {e}")
        return RefreshResult(status="failed", error=str(e), duration_sec=time.perf_counter() - started)
    logger.info(f"Input files read successfully ({len(roster)} students).")

    own_collector = collector is None
    if own_collector:
        collector = LeetCodeCollector(base_url=config.api_base, timeout=config.request_timeout_sec)
    try:
        records = collect_records(roster, collector)
    finally:
        if own_collector:
            collector.close()

    records = sort_by_total_solved(records)
    write_snapshot(records, config.snapshot_path)
    logger.info(f"Data saved to {config.snapshot_path} successfully.")

    return RefreshResult(status="ok", records=len(records), duration_sec=time.perf_counter() - started)
