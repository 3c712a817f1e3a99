"""LeetCode statistics collector.

Resolves a roster profile URL to a LeetCode username and fetches the solved
counts from the public stats API. Every failure is turned into a zeroed
:class:`SolveStats` with an ``info`` note so one bad profile never stops a
refresh run.
"""

from typing import Any, Optional

import requests

from config.config import (
    LEETCODE_API_BASE,
    LEETCODE_PROFILE_PREFIX,
    REQUEST_TIMEOUT_SEC,
    USER_AGENT,
    NO_DATA_NOTE,
    FETCH_ERROR_NOTE,
)
from config.schemas import SolveStats
from utils.logging import get_logger

logger = get_logger(__name__)


def extract_username(url: str) -> Optional[str]:
    """Return the username embedded in a LeetCode profile URL, else ``None``."""
    if not url or not url.startswith(LEETCODE_PROFILE_PREFIX):
        return None
    username = url.split("/u/", 1)[1]
    if username.endswith("/"):
        username = username[:-1]
    return username or None


def empty_stats(info: Optional[str] = None) -> SolveStats:
    """Zeroed stats, optionally carrying a status note."""
    stats = SolveStats(totalSolved=0, easySolved=0, mediumSolved=0, hardSolved=0)
    if info:
        stats["info"] = info
    return stats


def parse_stats(payload: Any, username: str) -> SolveStats:
    """Map an API payload to solve counts.

    The payload is keyed by username and holds
    ``submitStatsGlobal.acSubmissionNum``: buckets in the order
    All, Easy, Medium, Hard. Anything else is treated as no data.
    """
    try:
        buckets = payload[username]["submitStatsGlobal"]["acSubmissionNum"]
        counts = [int(bucket.get("count") or 0) for bucket in buckets[:4]]
    except (KeyError, TypeError, IndexError, AttributeError, ValueError, OverflowError):
        return empty_stats(NO_DATA_NOTE)

    if len(counts) < 4:
        return empty_stats(NO_DATA_NOTE)

    total, easy, medium, hard = counts
    return SolveStats(totalSolved=total, easySolved=easy, mediumSolved=medium, hardSolved=hard)


class LeetCodeCollector:
    """Fetches solve counts for LeetCode usernames over one HTTP session."""

    def __init__(
        self,
        base_url: str = LEETCODE_API_BASE,
        timeout: float = REQUEST_TIMEOUT_SEC,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": USER_AGENT})
        self.logger = get_logger(f"{__name__}.LeetCodeCollector")

    def fetch_stats(self, username: str) -> SolveStats:
        """Fetch stats for ``username``. Never raises."""
        url = f"{self.base_url}/{username}"
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, ValueError) as e:
            self.logger.error(f"Error fetching data for {username}: {e}")
            return empty_stats(FETCH_ERROR_NOTE)

        stats = parse_stats(payload, username)
        if "info" in stats:
            self.logger.warning(f"No LeetCode data available for {username}")
        return stats

    def close(self) -> None:
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


def fetch_stats(username: str, session: Optional[requests.Session] = None, **kwargs) -> SolveStats:
    """Fetch stats for a single username with a throwaway collector."""
    collector = LeetCodeCollector(session=session, **kwargs)
    try:
        return collector.fetch_stats(username)
    finally:
        if session is None:
            collector.close()
