"""Leaderboard data pipeline: roster loading, stats collection, snapshot storage and scheduling."""
