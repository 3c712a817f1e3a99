"""Tests for snapshot persistence."""

import json
import os
import stat
from unittest.mock import patch

import pytest

from data_pipeline.storage.snapshot import find_student, read_snapshot, write_snapshot
from utils.errors import SnapshotReadError


def test_write_snapshot_is_pretty_printed_json(temp_data_dir, sample_records):
    path = temp_data_dir / "data.json"

    write_snapshot(sample_records, path)

    text = path.read_text(encoding="utf-8")
    assert json.loads(text) == sample_records
    assert text == json.dumps(sample_records, indent=2)


def test_write_snapshot_replaces_previous_content(temp_data_dir, sample_records):
    path = temp_data_dir / "data.json"
    write_snapshot(sample_records, path)

    write_snapshot(sample_records[:1], path)

    assert read_snapshot(path) == sample_records[:1]


def test_write_snapshot_leaves_no_temp_files(temp_data_dir, sample_records):
    write_snapshot(sample_records, temp_data_dir / "data.json")

    assert [p.name for p in temp_data_dir.iterdir()] == ["data.json"]


def test_failed_write_keeps_old_snapshot(temp_data_dir, sample_records):
    path = temp_data_dir / "data.json"
    write_snapshot(sample_records, path)
    before = path.read_bytes()

    with patch("utils.io.json.dump", side_effect=TypeError("not serializable")):
        with pytest.raises(TypeError):
            write_snapshot([{"roll": object()}], path)

    assert path.read_bytes() == before
    assert [p.name for p in temp_data_dir.iterdir()] == ["data.json"]


def test_write_snapshot_keeps_existing_file_mode(temp_data_dir, sample_records):
    path = temp_data_dir / "data.json"
    path.write_text("[]", encoding="utf-8")
    path.chmod(0o644)

    write_snapshot(sample_records, path)

    assert stat.S_IMODE(path.stat().st_mode) == 0o644


def test_new_snapshot_mode_follows_umask(temp_data_dir):
    path = temp_data_dir / "data.json"
    previous = os.umask(0o022)
    try:
        write_snapshot([], path)
    finally:
        os.umask(previous)

    assert stat.S_IMODE(path.stat().st_mode) == 0o644


def test_write_snapshot_creates_parent_directory(temp_data_dir):
    path = temp_data_dir / "nested" / "data.json"

    write_snapshot([], path)

    assert read_snapshot(path) == []


def test_read_snapshot_missing_file(temp_data_dir):
    with pytest.raises(SnapshotReadError):
        read_snapshot(temp_data_dir / "missing.json")


def test_read_snapshot_corrupt_file(temp_data_dir):
    path = temp_data_dir / "data.json"
    path.write_text('[{"roll": "101",', encoding="utf-8")

    with pytest.raises(SnapshotReadError):
        read_snapshot(path)


def test_read_snapshot_rejects_non_array(temp_data_dir):
    path = temp_data_dir / "data.json"
    path.write_text('{"roll": "101"}', encoding="utf-8")

    with pytest.raises(SnapshotReadError):
        read_snapshot(path)


def test_find_student_returns_first_match(sample_records):
    duplicate = dict(sample_records[0], name="Second Cara")
    records = sample_records + [duplicate]

    assert find_student(records, "103")["name"] == "Cara"
    assert find_student(records, "999") is None
