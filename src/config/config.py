"""Project-wide single-source configuration constants for the leaderboard service."""

import os
from pathlib import Path
from utils.path_utils import find_repo_root

# ----- Base directory configuration -------
PROJECT_ROOT = find_repo_root()
DATA_DIR: Path = Path(os.getenv("LEADERBOARD_DATA_DIR", PROJECT_ROOT / "datasets"))

# ------ Roster inputs (one value per line, line-aligned) -------
ROLLS_PATH: Path = DATA_DIR / "roll.txt"
NAMES_PATH: Path = DATA_DIR / "name.txt"
URLS_PATH: Path = DATA_DIR / "urls.txt"
SECTIONS_PATH: Path = DATA_DIR / "sections.txt"

# ------ Snapshot -------
SNAPSHOT_PATH: Path = DATA_DIR / "data.json"
SNAPSHOT_INDENT: int = 2

# ------- External statistics API -------
LEETCODE_API_BASE: str = os.getenv("LEETCODE_API_BASE", "https://leetcodeapi-v1.vercel.app")
LEETCODE_PROFILE_PREFIX: str = "https://leetcode.com/u/"
REQUEST_TIMEOUT_SEC: float = float(os.getenv("LEETCODE_TIMEOUT_SEC", "10"))  # per call
USER_AGENT: str = "leetcode-leaderboard/1.0"

# Status notes attached to records without usable stats
NO_DATA_NOTE: str = "no data available"
FETCH_ERROR_NOTE: str = "error fetching data"

# ------ Scheduling -------
REFRESH_INTERVAL_SEC: int = 3600    # 1 hour in seconds
REFRESH_JOB_ID: str = "refresh_leaderboard"

# ------ API service -------
API_HOST: str = os.getenv("LEADERBOARD_HOST", "0.0.0.0")
API_PORT: int = int(os.getenv("LEADERBOARD_PORT", "3001"))
CORS_ORIGINS: tuple[str, ...] = ("*",)

# ------ Dashboard -------
DASHBOARD_API_URL: str = os.getenv("LEADERBOARD_API_URL", "http://localhost:3001")
EXPORT_FILENAME: str = "leaderboard.csv"
MISSING_SECTION: str = "N/A"
ALL_SECTIONS: str = "all"
