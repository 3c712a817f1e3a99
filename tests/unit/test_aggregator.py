"""Tests for the refresh pipeline."""

import json
import random

import pytest
import requests

from data_pipeline.aggregator import (
    AggregatorConfig,
    refresh,
    sort_by_total_solved,
)
from data_pipeline.collectors.leetcode_collector import LeetCodeCollector
from utils.validation import as_count


def test_refresh_example_roster(sample_roster, http):
    collector = LeetCodeCollector(session=http.session({"alice": http.response(http.payload("alice", [10, 5, 4, 1]))}))

    result = refresh(sample_roster, collector=collector)

    assert result.status == "ok"
    assert result.records == 2
    snapshot = json.loads(sample_roster.snapshot_path.read_text(encoding="utf-8"))
    assert snapshot == [
        {"roll": "101", "name": "Alice", "url": "https://leetcode.com/u/alice/", "section": "A",
         "totalSolved": 10, "easySolved": 5, "mediumSolved": 4, "hardSolved": 1},
        {"roll": "102", "name": "Bob", "url": "https://example.com/bob", "section": "B",
         "totalSolved": 0, "easySolved": 0, "mediumSolved": 0, "hardSolved": 0,
         "info": "no data available"},
    ]


def test_refresh_skips_api_for_non_leetcode_urls(sample_roster, http):
    session = http.session({"alice": http.response(http.payload("alice", [1, 1, 0, 0]))})

    refresh(sample_roster, collector=LeetCodeCollector(session=session))

    assert session.get.call_count == 1
    assert session.get.call_args.args[0].endswith("/alice")


def test_refresh_mismatch_leaves_snapshot_untouched(write_roster):
    config = write_roster(["101", "102"], ["Alice", "Bob"], ["https://leetcode.com/u/alice/"], ["A", "B"])
    config.snapshot_path.write_text('[\n  {"roll": "old"}\n]', encoding="utf-8")
    before = config.snapshot_path.read_bytes()

    result = refresh(config, collector=LeetCodeCollector(session=requests.Session()))

    assert result.status == "skipped"
    assert "do not match" in result.error
    assert config.snapshot_path.read_bytes() == before


def test_refresh_mismatch_creates_no_snapshot(write_roster):
    config = write_roster(["101"], ["Alice", "Bob"], ["u1", "u2"], ["A", "B"])

    result = refresh(config)

    assert result.status == "skipped"
    assert not config.snapshot_path.exists()


def test_refresh_missing_roster_file_fails_without_writing(temp_data_dir):
    config = AggregatorConfig(
        rolls_path=temp_data_dir / "roll.txt",
        names_path=temp_data_dir / "name.txt",
        urls_path=temp_data_dir / "urls.txt",
        sections_path=temp_data_dir / "sections.txt",
        snapshot_path=temp_data_dir / "data.json",
    )

    result = refresh(config)

    assert result.status == "failed"
    assert not config.snapshot_path.exists()


def test_refresh_continues_past_failed_fetches(write_roster, http):
    config = write_roster(
        ["1", "2", "3", "4"],
        ["Ann", "Ben", "Cat", "Dan"],
        [
            "https://leetcode.com/u/ann/",
            "https://leetcode.com/u/ben/",
            "https://leetcode.com/u/cat/",
            "https://leetcode.com/u/dan",
        ],
        ["A", "A", "B", "B"],
    )
    session = http.session({
        "ann": requests.Timeout("timed out"),
        "ben": http.response(http.payload("ben", [3, 3, 0, 0])),
        "cat": http.response({"cat": {}}),
        "dan": http.response(http.payload("dan", [8, 4, 3, 1])),
    })

    result = refresh(config, collector=LeetCodeCollector(session=session))

    assert result.status == "ok"
    snapshot = json.loads(config.snapshot_path.read_text(encoding="utf-8"))
    assert [r["roll"] for r in snapshot] == ["4", "2", "1", "3"]
    by_roll = {r["roll"]: r for r in snapshot}
    assert by_roll["1"]["info"] == "error fetching data"
    assert by_roll["3"]["info"] == "no data available"
    assert "info" not in by_roll["4"]


def test_refresh_survives_non_finite_counts(sample_roster, http):
    session = http.session({"alice": http.response(http.payload("alice", [float("inf"), 1, 1, 1]))})

    result = refresh(sample_roster, collector=LeetCodeCollector(session=session))

    assert result.status == "ok"
    snapshot = json.loads(sample_roster.snapshot_path.read_text(encoding="utf-8"))
    assert [r["roll"] for r in snapshot] == ["101", "102"]
    assert snapshot[0]["totalSolved"] == 0
    assert snapshot[0]["info"] == "no data available"


def test_snapshot_is_sorted_descending(write_roster, http):
    rng = random.Random(7)
    totals = [rng.randint(0, 50) for _ in range(25)]
    usernames = [f"user{i}" for i in range(len(totals))]
    config = write_roster(
        [str(i) for i in range(len(totals))],
        usernames,
        [f"https://leetcode.com/u/{u}/" for u in usernames],
        ["A"] * len(totals),
    )
    session = http.session({
        u: http.response(http.payload(u, [t, t, 0, 0])) for u, t in zip(usernames, totals)
    })

    refresh(config, collector=LeetCodeCollector(session=session))

    snapshot = json.loads(config.snapshot_path.read_text(encoding="utf-8"))
    solved = [r["totalSolved"] for r in snapshot]
    assert all(a >= b for a, b in zip(solved, solved[1:]))


def test_sort_by_total_solved_treats_invalid_as_zero_and_is_stable():
    records = [
        {"roll": "a", "totalSolved": "NA"},
        {"roll": "b", "totalSolved": 5},
        {"roll": "c"},
        {"roll": "d", "totalSolved": 5},
        {"roll": "e", "totalSolved": float("nan")},
        {"roll": "f", "totalSolved": 1},
    ]

    ordered = sort_by_total_solved(records)

    assert [r["roll"] for r in ordered] == ["b", "d", "f", "a", "c", "e"]


@pytest.mark.parametrize("value, expected", [
    (7, 7), ("12", 12), (None, 0), ("NA", 0), (float("nan"), 0), (True, 0), (2.5, 2.5),
])
def test_as_count(value, expected):
    assert as_count(value) == expected


def test_config_from_yaml_overrides(tmp_path):
    yaml_path = tmp_path / "config.yaml"
    yaml_path.write_text(
        "aggregator:\n"
        f"  snapshot_path: {tmp_path / 'snap.json'}\n"
        "  request_timeout_sec: 2.5\n"
        "  refresh_interval_sec: 60\n",
        encoding="utf-8",
    )

    config = AggregatorConfig.from_yaml(str(yaml_path))

    assert config.snapshot_path == tmp_path / "snap.json"
    assert config.request_timeout_sec == 2.5
    assert config.refresh_interval_sec == 60


def test_config_from_invalid_yaml_falls_back_to_defaults(tmp_path):
    yaml_path = tmp_path / "config.yaml"
    yaml_path.write_text("invalid: yaml: content: [", encoding="utf-8")

    config = AggregatorConfig.from_yaml(str(yaml_path))

    assert config == AggregatorConfig()
