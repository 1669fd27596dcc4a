"""Reading plan catalog and the loader for the monthly plan files."""

import json
import logging
from collections.abc import Iterable, Sequence
from datetime import date
from pathlib import Path
from typing import Any

from .config import get_plan_dir
from .models import Assignment, DailyReading

logger = logging.getLogger(__name__)

MONTH_FILES = [
    "january",
    "february",
    "march",
    "april",
    "may",
    "june",
    "july",
    "august",
    "september",
    "october",
    "november",
    "december",
]


class ReadingPlanStore:
    """Immutable, date-ordered catalog of daily readings.

    Month datasets are concatenated in the order given; the store does not
    sort, so callers must supply them in calendar order.
    """

    def __init__(self, months: Iterable[Sequence[DailyReading]]):
        readings: list[DailyReading] = []
        for month in months:
            readings.extend(month)
        self._readings = tuple(readings)

        self._index_by_id: dict[str, int] = {}
        for i, reading in enumerate(self._readings):
            if reading.id in self._index_by_id:
                logger.warning(
                    f"Duplicate plan entry {reading.id} at index {i}, "
                    f"keeping index {self._index_by_id[reading.id]}"
                )
                continue
            self._index_by_id[reading.id] = i

    def __len__(self) -> int:
        return len(self._readings)

    def __iter__(self):
        return iter(self._readings)

    def count(self) -> int:
        """Number of days in the plan."""
        return len(self._readings)

    def at(self, index: int) -> DailyReading:
        """Get the reading at a plan index."""
        if not 0 <= index < len(self._readings):
            raise IndexError(f"Plan index out of range: {index}")
        return self._readings[index]

    def find_index_by_date(self, iso_date: str) -> int | None:
        """Find the index whose id exactly matches an ISO date string.

        Returns None when no entry matches; callers fall back to index 0.
        """
        return self._index_by_id.get(iso_date)


def _parse_assignment(data: Any) -> Assignment | None:
    if not isinstance(data, dict):
        return None
    book = data.get("book") or ""
    chapters = data.get("chapters") or ""
    return Assignment(book=str(book).strip(), chapters=str(chapters).strip())


def reading_from_dict(data: dict[str, Any]) -> DailyReading:
    """Build a DailyReading from one plan record.

    Raises KeyError, TypeError or ValueError for a record without a usable id.
    """
    reading_id = data["id"]
    if not isinstance(reading_id, str):
        raise TypeError(f"Plan entry id must be a string, got {reading_id!r}")
    calendar_date = date.fromisoformat(reading_id)

    display = data.get("dateDisplay") or reading_id
    return DailyReading(
        id=reading_id,
        calendar_date=calendar_date,
        month=str(data.get("month") or calendar_date.strftime("%B")),
        day=int(data.get("day") or calendar_date.day),
        display_label=str(display),
        long_label=str(data.get("fullDate") or display),
        ot=_parse_assignment(data.get("ot")),
        wisdom=_parse_assignment(data.get("wisdom")),
        nt=_parse_assignment(data.get("nt")),
        is_rest_day=bool(data.get("isSunday", False)),
    )


def load_month(path: Path) -> list[DailyReading]:
    """Load one month dataset, skipping records that cannot be read."""
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.warning(f"Failed to load plan file {path.name}: {e}")
        return []

    if not isinstance(data, list):
        logger.warning(f"Plan file {path.name} is not a list of days, skipping")
        return []

    readings = []
    for item in data:
        try:
            readings.append(reading_from_dict(item))
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Skipping malformed entry in {path.name}: {e}")
    return readings


def load_plan(plan_dir: Path | None = None) -> ReadingPlanStore:
    """Build the plan store from the month files present, in calendar order."""
    if plan_dir is None:
        plan_dir = get_plan_dir()

    months = []
    for name in MONTH_FILES:
        path = plan_dir / f"{name}.json"
        if path.exists():
            months.append(load_month(path))

    store = ReadingPlanStore(months)
    logger.info(f"Loaded reading plan: {store.count()} days from {len(months)} months")
    return store
