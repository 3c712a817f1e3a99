"""Exception types shared across the aggregator and the query service."""


class LeaderboardError(Exception):
    """Base class for all leaderboard errors."""


class RosterMismatchError(LeaderboardError):
    """The four roster lists do not have the same number of entries."""

    def __init__(self, counts: dict[str, int]):
        self.counts = dict(counts)
        detail = ", ".join(f"{name}={count}" for name, count in self.counts.items())
        super().__init__(
            f"The number of rolls, names, URLs, and sections do not match ({detail})"
        )


class SnapshotReadError(LeaderboardError):
    """The snapshot file is missing, unreadable or not a JSON array."""
