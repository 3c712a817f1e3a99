"""Data collectors for external statistics sources."""

from .leetcode_collector import LeetCodeCollector, extract_username, fetch_stats, parse_stats

__all__ = [
    "LeetCodeCollector",
    "extract_username",
    "fetch_stats",
    "parse_stats",
]
