"""Command logic for the Telegram bot and the terminal.

Builds message text and inline keyboards from a ReadingSession. Callback
data strings:

- ``day:<index>``             jump to a plan day (single-day view)
- ``page:<index>``            show the schedule month containing a day
- ``read:<slot>:<chapter>``   toggle a chapter's read state
- ``open:<slot>:<chapter>``   select a chapter for reading
- ``close``                   dismiss the reader
- ``view``                    switch between day view and schedule
- ``theme``                   switch light/dark
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date

from telegram import InlineKeyboardButton, InlineKeyboardMarkup

from .formatter import (
    format_day_message,
    format_empty_plan_message,
    format_error_message,
    format_info_message,
    format_schedule_messages,
)
from .models import Theme, ViewMode
from .session import ReadingSession

logger = logging.getLogger(__name__)

DAYS_PER_ROW = 7


@dataclass(frozen=True)
class Reply:
    """Text plus an optional inline keyboard."""

    text: str
    keyboard: InlineKeyboardMarkup | None = None


def _theme_button(theme: Theme) -> InlineKeyboardButton:
    label = "🌙 Dark mode" if theme is Theme.LIGHT else "☀️ Light mode"
    return InlineKeyboardButton(label, callback_data="theme")


def _day_keyboard(session: ReadingSession) -> InlineKeyboardMarkup:
    reading = session.current_reading
    rows: list[list[InlineKeyboardButton]] = []

    for slot, assignment in reading.present_assignments():
        for chapter in session.chapters_for(reading, slot):
            done = session.is_chapter_read(reading, assignment.book, chapter)
            mark = "✅" if done else "⬜"
            rows.append(
                [
                    InlineKeyboardButton(
                        f"{mark} {assignment.book} {chapter}",
                        callback_data=f"read:{slot}:{chapter}",
                    ),
                    InlineKeyboardButton(
                        "📖 Read", callback_data=f"open:{slot}:{chapter}"
                    ),
                ]
            )

    selection = session.navigation.active_selection
    url = session.reader_url()
    if selection is not None and url:
        rows.append(
            [
                InlineKeyboardButton(
                    f"🔗 Open {selection.book} {selection.chapter}", url=url
                ),
                InlineKeyboardButton("« Go Back", callback_data="close"),
            ]
        )

    index = session.navigation.current_index
    nav = []
    if index > 0:
        nav.append(InlineKeyboardButton("« Prev", callback_data=f"day:{index - 1}"))
    nav.append(InlineKeyboardButton("📅 Change Date", callback_data="view"))
    if index < session.store.count() - 1:
        nav.append(InlineKeyboardButton("Next »", callback_data=f"day:{index + 1}"))
    rows.append(nav)
    rows.append([_theme_button(session.theme)])
    return InlineKeyboardMarkup(rows)


def get_day_view(session: ReadingSession) -> Reply:
    """Single-day view of the current plan entry."""
    if not session.has_plan:
        return Reply(format_empty_plan_message())

    reading = session.current_reading
    text = format_day_message(
        reading,
        session.theme,
        lambda book, chapter: session.is_chapter_read(reading, book, chapter),
        selection=session.navigation.active_selection,
        reader_url=session.reader_url(),
    )
    return Reply(text, _day_keyboard(session))


def month_bounds(session: ReadingSession, index: int) -> tuple[int, int]:
    """Index range [start, end) of the calendar month containing a day."""
    store = session.store
    target = store.at(index).calendar_date
    key = (target.year, target.month)

    start = index
    while start > 0 and _month_key(store.at(start - 1).calendar_date) == key:
        start -= 1
    end = index + 1
    while end < store.count() and _month_key(store.at(end).calendar_date) == key:
        end += 1
    return start, end


def _month_key(d: date) -> tuple[int, int]:
    return d.year, d.month


def get_schedule_view(session: ReadingSession, page_index: int | None = None) -> Reply:
    """Schedule for one month, with a button per day."""
    if not session.has_plan:
        return Reply(format_empty_plan_message())

    if page_index is None:
        page_index = session.navigation.current_index
    start, end = month_bounds(session, page_index)
    readings = [session.store.at(i) for i in range(start, end)]
    current_id = session.current_reading.id

    # A month of one-line summaries stays well under the message limit
    text = format_schedule_messages(readings, session.theme, current_id)[0]

    rows: list[list[InlineKeyboardButton]] = []
    row: list[InlineKeyboardButton] = []
    for i, reading in zip(range(start, end), readings):
        label = f"▶{reading.day}" if reading.id == current_id else str(reading.day)
        row.append(InlineKeyboardButton(label, callback_data=f"day:{i}"))
        if len(row) == DAYS_PER_ROW:
            rows.append(row)
            row = []
    if row:
        rows.append(row)

    nav = []
    if start > 0:
        prev_month = session.store.at(start - 1).month
        nav.append(
            InlineKeyboardButton(f"« {prev_month}", callback_data=f"page:{start - 1}")
        )
    nav.append(InlineKeyboardButton("Back to Daily View", callback_data="view"))
    if end < session.store.count():
        next_month = session.store.at(end).month
        nav.append(
            InlineKeyboardButton(f"{next_month} »", callback_data=f"page:{end}")
        )
    rows.append(nav)
    rows.append([_theme_button(session.theme)])
    return Reply(text, InlineKeyboardMarkup(rows))


def get_current_view(session: ReadingSession) -> Reply:
    """Render whichever view the session is in."""
    if session.navigation.view_mode is ViewMode.FULL_SCHEDULE:
        return get_schedule_view(session)
    return get_day_view(session)


def get_today_view(session: ReadingSession, for_date: date) -> Reply:
    """Jump to a date (the first plan day if it is not planned) and show it."""
    try:
        if not session.has_plan:
            return Reply(format_empty_plan_message())
        if session.select_date(for_date) is None:
            logger.info(f"No plan entry for {for_date}, showing the first day")
            session.select_day(0)
        return get_day_view(session)
    except Exception as e:
        logger.exception(f"Error building day view: {e}")
        return Reply(format_error_message())


def _apply_callback(session: ReadingSession, data: str) -> Reply:
    action, _, arg = data.partition(":")

    if action == "day":
        session.select_day(int(arg))
        return get_day_view(session)
    if action == "page":
        return get_schedule_view(session, int(arg))
    if action in ("read", "open"):
        slot, _, chapter = arg.partition(":")
        if action == "read":
            session.toggle_chapter(slot, int(chapter))
        else:
            session.open_chapter(slot, int(chapter))
        return get_day_view(session)
    if action == "close":
        session.navigation.dismiss_selection()
        return get_day_view(session)
    if action == "view":
        session.navigation.toggle_view()
        return get_current_view(session)
    if action == "theme":
        session.toggle_theme()
        return get_current_view(session)

    raise ValueError(f"Unknown callback action: {action!r}")


def handle_callback(session: ReadingSession, data: str) -> Reply:
    """Apply a button press and return the view to show."""
    try:
        return _apply_callback(session, data)
    except (KeyError, ValueError, IndexError) as e:
        logger.warning(f"Ignoring invalid callback {data!r}: {e}")
    except Exception as e:
        logger.exception(f"Error handling callback {data!r}: {e}")
        return Reply(format_error_message())

    try:
        return get_current_view(session)
    except Exception as e:
        logger.exception(f"Error rendering view after {data!r}: {e}")
        return Reply(format_error_message())


def get_info_message() -> str:
    """Get message for /info command."""
    return format_info_message()


def get_error_message() -> str:
    """Get generic error message."""
    return format_error_message()
