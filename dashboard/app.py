"""
LeetCode Leaderboard Dashboard - Streamlit Application

Main dashboard for browsing the aggregated leaderboard snapshot.
"""

import streamlit as st
import sys
from pathlib import Path

from dotenv import load_dotenv

# Add src and the repository root to the Python path so `config.*` and
# `dashboard.*` imports work under `streamlit run`
repo_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(repo_root / "src"))
sys.path.insert(0, str(repo_root))

# Environment overrides must be in place before the config constants are read
load_dotenv(repo_root / ".env")

from config.config import DASHBOARD_API_URL
from dashboard.components import leaderboard


def main():
    """Main dashboard application."""

    # Page configuration
    st.set_page_config(
        page_title="LeetCode Leaderboard",
        page_icon="🏆",
        layout="wide",
        initial_sidebar_state="expanded"
    )

    st.title("🏆 LeetCode Leaderboard")
    st.markdown("Solved-problem counts for every student, refreshed hourly.")

    st.sidebar.title("⚙️ Data Source")
    api_url = st.sidebar.text_input("API URL", value=DASHBOARD_API_URL)

    # The snapshot is fetched once per session; reloading starts over
    if st.sidebar.button("🔄 Reload Data"):
        for key in (leaderboard.STATE_KEY, "section_filter", "pin_choice"):
            st.session_state.pop(key, None)
        st.rerun()

    try:
        panel_result = leaderboard.render_panel(api_url)
    except Exception as e:
        st.error(f"❌ Error rendering leaderboard: {e}")
        st.sidebar.error("❌ Panel Error")
        return

    st.sidebar.subheader("📊 Panel Status")
    status = panel_result.get("status", "unknown")
    if status == "success":
        st.sidebar.success(f"✅ Showing {panel_result.get('students', 0)} students")
        if panel_result.get("pinned"):
            st.sidebar.info(f"📌 Pinned: {panel_result['pinned']}")
    elif status == "no_data":
        st.sidebar.error("❌ Could not load leaderboard data")
    elif status == "empty":
        st.sidebar.warning("⚠️ No students for this filter")
    else:
        st.sidebar.info(f"ℹ️ Status: {status}")


if __name__ == "__main__":
    main()
