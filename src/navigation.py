"""Navigation state: current day, view mode and the chapter being read."""

import logging
from dataclasses import dataclass
from datetime import date

from .models import ActiveSelection, ViewMode
from .plan import ReadingPlanStore

logger = logging.getLogger(__name__)


@dataclass
class NavigationState:
    """Session-only navigation state. Never persisted."""

    plan_size: int
    current_index: int = 0
    view_mode: ViewMode = ViewMode.SINGLE_DAY
    active_selection: ActiveSelection | None = None

    @classmethod
    def initial(cls, store: ReadingPlanStore, today: date) -> "NavigationState":
        """Start on today's entry, or the first entry if today is not planned."""
        index = store.find_index_by_date(today.isoformat())
        if index is None:
            logger.info(f"No plan entry for {today}, starting at the first day")
            index = 0
        return cls(plan_size=store.count(), current_index=index)

    def select_day(self, index: int) -> None:
        """Jump to a day and show it in the single-day view."""
        if not 0 <= index < self.plan_size:
            raise IndexError(f"Plan index out of range: {index}")
        self.current_index = index
        self.view_mode = ViewMode.SINGLE_DAY
        self.active_selection = None

    def toggle_view(self) -> ViewMode:
        """Switch between the single-day view and the full schedule."""
        if self.view_mode is ViewMode.SINGLE_DAY:
            self.view_mode = ViewMode.FULL_SCHEDULE
        else:
            self.view_mode = ViewMode.SINGLE_DAY
        return self.view_mode

    def select_chapter(self, book: str, chapter: int) -> ActiveSelection:
        """Queue a chapter for reading, replacing any previous selection."""
        self.active_selection = ActiveSelection(book=book, chapter=chapter)
        return self.active_selection

    def dismiss_selection(self) -> None:
        """Close the reader."""
        self.active_selection = None
