"""Startup wiring and user actions over the independent state slices."""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path

from .config import Config
from .models import ActiveSelection, DailyReading, Theme, make_record_id
from .navigation import NavigationState
from .plan import ReadingPlanStore, load_plan
from .preferences import PreferenceStore
from .progress import ProgressTracker
from .reader import resolve_reader_url

logger = logging.getLogger(__name__)


class ReadingSession:
    """One user's session: the plan plus navigation, progress and theme."""

    def __init__(
        self,
        store: ReadingPlanStore,
        progress: ProgressTracker,
        preferences: PreferenceStore,
        today: date,
        reader_url_template: str | None = None,
    ):
        self.store = store
        self.progress = progress
        self.preferences = preferences
        self.reader_url_template = reader_url_template
        self.navigation = NavigationState.initial(store, today)
        self.progress.load()
        self.preferences.load()

    @classmethod
    def from_config(
        cls,
        config: Config,
        plan_dir: Path | None = None,
        today: date | None = None,
    ) -> ReadingSession:
        """Load the plan and rehydrate persisted state."""
        state_dir = config.resolved_state_dir()
        return cls(
            store=load_plan(plan_dir),
            progress=ProgressTracker(state_dir),
            preferences=PreferenceStore(state_dir),
            today=today or config.today(),
            reader_url_template=config.reader_url_template,
        )

    @property
    def has_plan(self) -> bool:
        return self.store.count() > 0

    @property
    def current_reading(self) -> DailyReading:
        return self.store.at(self.navigation.current_index)

    @property
    def theme(self) -> Theme:
        return self.preferences.theme

    def chapters_for(self, reading: DailyReading, slot: str) -> list[int]:
        """Chapter numbers to show for a slot; empty on rest days."""
        return reading.chapter_units(slot)

    def is_chapter_read(self, reading: DailyReading, book: str, chapter: int) -> bool:
        return self.progress.is_complete(reading.record_id(book, chapter))

    def _assigned_book(self, slot: str, chapter: int) -> str:
        """Book of the current day's slot, if the chapter is assigned there."""
        reading = self.current_reading
        assignment = reading.assignment(slot)
        if assignment is None or chapter not in self.chapters_for(reading, slot):
            raise ValueError(
                f"{slot} chapter {chapter} is not assigned on {reading.id}"
            )
        return assignment.book

    def toggle_chapter(self, slot: str, chapter: int) -> bool:
        """Toggle a chapter of the current day's slot. Returns the new state."""
        book = self._assigned_book(slot, chapter)
        return self.progress.toggle(self.current_reading.record_id(book, chapter))

    def mark_chapter(self, day_id: str, book: str, chapter: int) -> bool:
        """Toggle a chapter by day id and book, without touching navigation."""
        return self.progress.toggle(make_record_id(day_id, book, chapter))

    def select_day(self, index: int) -> DailyReading:
        self.navigation.select_day(index)
        return self.current_reading

    def select_date(self, for_date: date) -> DailyReading | None:
        """Jump to a calendar date. Returns None if it is not in the plan."""
        index = self.store.find_index_by_date(for_date.isoformat())
        if index is None:
            return None
        return self.select_day(index)

    def open_chapter(self, slot: str, chapter: int) -> ActiveSelection:
        """Select one of the current day's chapters for reading."""
        book = self._assigned_book(slot, chapter)
        return self.navigation.select_chapter(book, chapter)

    def reader_url(self, selection: ActiveSelection | None = None) -> str | None:
        """URL for the selected chapter, or None if nothing is selected."""
        selection = selection or self.navigation.active_selection
        if selection is None:
            return None
        if self.reader_url_template:
            return resolve_reader_url(
                selection.book, selection.chapter, self.reader_url_template
            )
        return resolve_reader_url(selection.book, selection.chapter)

    def toggle_theme(self) -> Theme:
        return self.preferences.toggle()
