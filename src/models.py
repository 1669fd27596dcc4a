"""Data models for the Daily Bible Reading Plan."""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from urllib.parse import quote

from .chapters import parse_chapters

SLOTS = ("ot", "wisdom", "nt")

SLOT_TITLES = {
    "ot": "Old Testament",
    "wisdom": "Wisdom",
    "nt": "New Testament",
}


class ViewMode(str, Enum):
    """Which view the reader is looking at."""

    SINGLE_DAY = "single-day"
    FULL_SCHEDULE = "full-schedule"


class Theme(str, Enum):
    """Display theme preference."""

    LIGHT = "light"
    DARK = "dark"

    def toggled(self) -> "Theme":
        return Theme.LIGHT if self is Theme.DARK else Theme.DARK


def make_record_id(day_id: str, book: str, chapter: int) -> str:
    """Build the completion record identifier for one chapter on one day.

    Day and book are percent-escaped with no safe characters, so the ":"
    separator can only come from the join and distinct triples never collide.
    """
    return f"{quote(day_id, safe='')}:{quote(book, safe='')}:{int(chapter)}"


@dataclass(frozen=True)
class Assignment:
    """One subject area's (book, chapter range) pair within a day."""

    book: str
    chapters: str = ""  # Range notation, e.g. "1-2" or "1-2,4"

    @property
    def is_present(self) -> bool:
        return bool(self.book and self.book.strip())

    @property
    def summary(self) -> str:
        """Short label, e.g. "Genesis 1-2"."""
        if self.chapters:
            return f"{self.book} {self.chapters}"
        return self.book


@dataclass(frozen=True)
class DailyReading:
    """One calendar day's set of reading assignments."""

    id: str  # ISO date, the stable key for the entry
    calendar_date: date
    month: str
    day: int
    display_label: str
    long_label: str
    ot: Assignment | None = None
    wisdom: Assignment | None = None
    nt: Assignment | None = None
    is_rest_day: bool = False

    def assignment(self, slot: str) -> Assignment | None:
        """Get the assignment for a slot ("ot", "wisdom" or "nt")."""
        if slot not in SLOTS:
            raise KeyError(slot)
        return getattr(self, slot)

    def chapter_units(self, slot: str) -> list[int]:
        """Chapter numbers to read for a slot; none on rest days."""
        assignment = self.assignment(slot)
        if self.is_rest_day or assignment is None or not assignment.is_present:
            return []
        return parse_chapters(assignment.chapters)

    def present_assignments(self) -> list[tuple[str, Assignment]]:
        """Slots that have something assigned, in display order."""
        result = []
        for slot in SLOTS:
            assignment = getattr(self, slot)
            if assignment is not None and assignment.is_present:
                result.append((slot, assignment))
        return result

    def record_id(self, book: str, chapter: int) -> str:
        """Completion record identifier for a chapter of this day."""
        return make_record_id(self.id, book, chapter)


@dataclass(frozen=True)
class ActiveSelection:
    """The chapter currently queued for external reading."""

    book: str
    chapter: int
