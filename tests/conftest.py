"""Test configuration and shared fixtures."""

from pathlib import Path
from types import SimpleNamespace
from unittest.mock import Mock

import pytest
import requests

from data_pipeline.aggregator import AggregatorConfig

DIFFICULTIES = ("All", "Easy", "Medium", "Hard")


def api_payload(username, counts):
    """Stats API body for ``username`` with bucket counts in All/Easy/Medium/Hard order."""
    return {
        username: {
            "submitStatsGlobal": {
                "acSubmissionNum": [
                    {"difficulty": d, "count": c, "submissions": c * 2}
                    for d, c in zip(DIFFICULTIES, counts)
                ]
            }
        }
    }


def make_response(payload=None, status=200, json_error=False):
    """Mock ``requests.Response``."""
    response = Mock()
    response.status_code = status
    if status >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status} Server Error")
    else:
        response.raise_for_status.return_value = None
    if json_error:
        response.json.side_effect = ValueError("Expecting value: line 1 column 1 (char 0)")
    else:
        response.json.return_value = payload
    return response


def fake_session(routes):
    """Mock session answering ``GET <base>/<username>`` from ``routes``.

    Values are either a response or an exception to raise; unknown
    usernames get an empty JSON object.
    """
    session = Mock()
    session.headers = {}

    def get(url, timeout=None):
        username = url.rsplit("/", 1)[-1]
        outcome = routes.get(username)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome if outcome is not None else make_response({})

    session.get.side_effect = get
    return session


@pytest.fixture
def http():
    """Builders for mocked stats API traffic."""
    return SimpleNamespace(payload=api_payload, response=make_response, session=fake_session)


@pytest.fixture
def temp_data_dir(tmp_path):
    """Temporary directory for roster and snapshot files."""
    return tmp_path


@pytest.fixture
def write_roster(temp_data_dir):
    """Write the four roster files and return a matching AggregatorConfig."""
    def _write(rolls, names, urls, sections):
        files = {
            "rolls_path": ("roll.txt", rolls),
            "names_path": ("name.txt", names),
            "urls_path": ("urls.txt", urls),
            "sections_path": ("sections.txt", sections),
        }
        paths = {}
        for key, (filename, lines) in files.items():
            path = Path(temp_data_dir) / filename
            path.write_text("\n".join(lines) + "\n", encoding="utf-8")
            paths[key] = path
        return AggregatorConfig(snapshot_path=Path(temp_data_dir) / "data.json", **paths)
    return _write


@pytest.fixture
def sample_roster(write_roster):
    """Two-student roster: one LeetCode profile, one other URL."""
    return write_roster(
        ["101", "102"],
        ["Alice", "Bob"],
        ["https://leetcode.com/u/alice/", "https://example.com/bob"],
        ["A", "B"],
    )


@pytest.fixture
def sample_records():
    """Snapshot records as written by a refresh run."""
    return [
        {"roll": "103", "name": "Cara", "url": "https://leetcode.com/u/cara/", "section": "B",
         "totalSolved": 42, "easySolved": 20, "mediumSolved": 18, "hardSolved": 4},
        {"roll": "101", "name": "Alice", "url": "https://leetcode.com/u/alice/", "section": "A",
         "totalSolved": 10, "easySolved": 5, "mediumSolved": 4, "hardSolved": 1},
        {"roll": "104", "name": "Dev", "url": "https://leetcode.com/u/dev/", "section": "A",
         "totalSolved": 7, "easySolved": 7, "mediumSolved": 0, "hardSolved": 0},
        {"roll": "102", "name": "Bob", "url": "https://example.com/bob", "section": "B",
         "totalSolved": 0, "easySolved": 0, "mediumSolved": 0, "hardSolved": 0,
         "info": "no data available"},
        {"roll": "105", "name": "Eve", "url": "https://leetcode.com/u/eve/", "section": "",
         "totalSolved": 0, "easySolved": 0, "mediumSolved": 0, "hardSolved": 0,
         "info": "error fetching data"},
    ]
