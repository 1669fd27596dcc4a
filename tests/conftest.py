"""Pytest fixtures for reading plan tests."""

import json
from datetime import date
from pathlib import Path

import pytest

from src.models import Assignment, DailyReading
from src.plan import ReadingPlanStore
from src.preferences import PreferenceStore
from src.progress import ProgressTracker
from src.session import ReadingSession


def make_reading(
    reading_id: str,
    ot: tuple[str, str] = ("Genesis", "1-2"),
    wisdom: tuple[str, str] = ("Psalms", "1"),
    nt: tuple[str, str] = ("Matthew", "1"),
    is_rest_day: bool = False,
) -> DailyReading:
    """Build a DailyReading with sensible labels."""
    d = date.fromisoformat(reading_id)
    return DailyReading(
        id=reading_id,
        calendar_date=d,
        month=d.strftime("%B"),
        day=d.day,
        display_label=d.strftime("%a, %b %d"),
        long_label=d.strftime("%A, %B %d, %Y"),
        ot=Assignment(*ot),
        wisdom=Assignment(*wisdom),
        nt=Assignment(*nt),
        is_rest_day=is_rest_day,
    )


@pytest.fixture
def reading_day1() -> DailyReading:
    """New Year's Day reading."""
    return make_reading("2026-01-01")


@pytest.fixture
def reading_day2() -> DailyReading:
    """Second day of the plan."""
    return make_reading(
        "2026-01-02", ot=("Genesis", "3-4"), wisdom=("Psalms", "2"), nt=("Matthew", "2")
    )


@pytest.fixture
def rest_day() -> DailyReading:
    """A Sunday with notes instead of chapters."""
    return make_reading(
        "2026-01-04",
        ot=("Rest & Worship", ""),
        wisdom=("Sunday School at 9am", ""),
        nt=("Worship Service at 10am", ""),
        is_rest_day=True,
    )


@pytest.fixture
def store(reading_day1, reading_day2, rest_day) -> ReadingPlanStore:
    """A three-day plan: Jan 1, Jan 2, Jan 4."""
    return ReadingPlanStore([[reading_day1, reading_day2], [rest_day]])


@pytest.fixture
def state_dir(tmp_path: Path) -> Path:
    return tmp_path / "state"


@pytest.fixture
def session(store, state_dir) -> ReadingSession:
    """Session started on Jan 1 with empty state and no ambient theme."""
    return ReadingSession(
        store=store,
        progress=ProgressTracker(state_dir),
        preferences=PreferenceStore(state_dir, environ={}),
        today=date(2026, 1, 1),
    )


@pytest.fixture
def plan_dir(tmp_path: Path) -> Path:
    """Plan directory with January and February files."""
    directory = tmp_path / "plan"
    directory.mkdir()
    january = [
        {
            "id": "2026-01-01",
            "month": "January",
            "day": 1,
            "dateDisplay": "Thu, Jan 1",
            "fullDate": "Thursday, January 1, 2026",
            "ot": {"book": "Genesis", "chapters": "1-2"},
            "wisdom": {"book": "Psalms", "chapters": "1"},
            "nt": {"book": "Matthew", "chapters": "1"},
        },
        {
            "id": "2026-01-04",
            "month": "January",
            "day": 4,
            "dateDisplay": "Sun, Jan 4",
            "fullDate": "Sunday, January 4, 2026",
            "ot": {"book": "Rest & Worship", "chapters": ""},
            "wisdom": {"book": "Sunday School at 9am", "chapters": ""},
            "nt": {"book": "Worship Service at 10am", "chapters": ""},
            "isSunday": True,
        },
    ]
    february = [
        {
            "id": "2026-02-02",
            "month": "February",
            "day": 2,
            "dateDisplay": "Mon, Feb 2",
            "fullDate": "Monday, February 2, 2026",
            "ot": {"book": "Exodus", "chapters": "5-6"},
            "wisdom": {"book": "Psalms", "chapters": "27"},
            "nt": {"book": "Matthew", "chapters": "27"},
        }
    ]
    (directory / "january.json").write_text(json.dumps(january), encoding="utf-8")
    (directory / "february.json").write_text(json.dumps(february), encoding="utf-8")
    return directory
