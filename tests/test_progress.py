"""Tests for reading progress persistence."""

import json
from unittest.mock import patch

from src.progress import ProgressTracker


def test_load_empty(state_dir):
    tracker = ProgressTracker(state_dir)
    assert tracker.load() == set()
    assert tracker.count() == 0


def test_save_and_load(state_dir):
    ProgressTracker(state_dir).save({"a", "b", "c"})
    loaded = ProgressTracker(state_dir).load()
    assert loaded == {"a", "b", "c"}


def test_toggle_marks_and_unmarks(state_dir):
    tracker = ProgressTracker(state_dir)
    tracker.load()
    assert tracker.toggle("2026-01-01:Genesis:1") is True
    assert tracker.is_complete("2026-01-01:Genesis:1")
    assert tracker.toggle("2026-01-01:Genesis:1") is False
    assert not tracker.is_complete("2026-01-01:Genesis:1")


def test_double_toggle_restores_membership(state_dir):
    tracker = ProgressTracker(state_dir)
    tracker.save({"kept"})
    for record_id in ("kept", "new"):
        before = tracker.is_complete(record_id)
        tracker.toggle(record_id)
        tracker.toggle(record_id)
        assert tracker.is_complete(record_id) == before


def test_toggle_persists_immediately(state_dir):
    tracker = ProgressTracker(state_dir)
    tracker.load()
    tracker.toggle("x")
    assert ProgressTracker(state_dir).load() == {"x"}
    tracker.toggle("x")
    assert ProgressTracker(state_dir).load() == set()


def test_file_format(state_dir):
    tracker = ProgressTracker(state_dir)
    tracker.save({"b", "a"})
    data = json.loads((state_dir / "progress.json").read_text())
    assert data == {"completed": ["a", "b"]}


def test_load_corrupt_file(state_dir):
    state_dir.mkdir(parents=True)
    (state_dir / "progress.json").write_text("{{{ nope")
    assert ProgressTracker(state_dir).load() == set()


def test_load_invalid_utf8(state_dir):
    state_dir.mkdir(parents=True)
    (state_dir / "progress.json").write_bytes(b'{"completed": ["\xff\xfe"]}')
    assert ProgressTracker(state_dir).load() == set()


def test_load_wrong_shape(state_dir):
    state_dir.mkdir(parents=True)
    (state_dir / "progress.json").write_text(json.dumps({"completed": "abc"}))
    assert ProgressTracker(state_dir).load() == set()

    (state_dir / "progress.json").write_text(json.dumps(["a", "b"]))
    assert ProgressTracker(state_dir).load() == set()


def test_load_ignores_non_string_records(state_dir):
    state_dir.mkdir(parents=True)
    (state_dir / "progress.json").write_text(json.dumps({"completed": ["a", 1, None]}))
    assert ProgressTracker(state_dir).load() == {"a"}


def test_failed_write_keeps_session_state(state_dir):
    tracker = ProgressTracker(state_dir)
    tracker.load()
    with patch("pathlib.Path.write_text", side_effect=OSError("disk full")):
        assert tracker.toggle("x") is True
    assert tracker.is_complete("x")


def test_default_state_dir(tmp_path):
    with patch("src.progress.get_state_dir", return_value=tmp_path):
        tracker = ProgressTracker()
    assert tracker.path == tmp_path / "progress.json"
