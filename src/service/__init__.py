"""Query service for the leaderboard snapshot."""
