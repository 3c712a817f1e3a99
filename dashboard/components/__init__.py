"""Streamlit components for the leaderboard dashboard."""
