"""Dashboard package namespace.

``state`` holds the framework-free leaderboard state machine (filter, sort,
pin, export); ``components`` renders it with Streamlit.
"""
