"""Message formatting for Telegram (HTML) and the terminal."""

import html
import re
from collections.abc import Callable, Sequence

from .models import SLOT_TITLES, ActiveSelection, DailyReading, Theme

MAX_MESSAGE_LENGTH = 4000

PLAN_TITLE = "2026 Spiritual Growth Guide"
TRANSLATION = "Legacy Standard Bible"

THEME_ICONS = {Theme.LIGHT: "☀️", Theme.DARK: "🌙"}

REST_DAY_SUMMARY = "Sunday - Rest & Worship"

_STATIC_MESSAGES: dict[str, str] = {}

ChapterReadCheck = Callable[[str, int], bool]


def _get_static_message(key: str, generator: Callable[[], str]) -> str:
    """Get a static message from cache or generate it."""
    if key not in _STATIC_MESSAGES:
        _STATIC_MESSAGES[key] = generator()
    return _STATIC_MESSAGES[key]


def split_text(text: str, max_len: int) -> list[str]:
    """Split text into chunks at word boundaries."""
    if len(text) <= max_len:
        return [text]
    chunks = []
    while text:
        if len(text) <= max_len:
            chunks.append(text)
            break
        split_at = text.rfind(" ", 0, max_len)
        if split_at == -1:
            split_at = max_len
        chunks.append(text[:split_at])
        text = text[split_at:].lstrip()
    return chunks


def split_lines(lines: Sequence[str], max_len: int = MAX_MESSAGE_LENGTH) -> list[str]:
    """Join lines into as few messages as fit; only overlong lines are broken."""
    messages: list[str] = []
    current = ""
    for line in lines:
        if len(line) > max_len:
            if current:
                messages.append(current)
            *full, current = split_text(line, max_len)
            messages.extend(full)
            continue
        candidate = f"{current}\n{line}" if current else line
        if len(candidate) > max_len and current:
            messages.append(current)
            current = line
        else:
            current = candidate
    if current:
        messages.append(current)
    return messages


def to_plain_text(message: str) -> str:
    """Strip HTML markup for terminal output."""
    return html.unescape(re.sub(r"<[^>]+>", "", message))


def format_header(theme: Theme) -> str:
    """Plan title line with the theme indicator."""
    return f"<b>📖 {PLAN_TITLE}</b> {THEME_ICONS[theme]}\n<i>{TRANSLATION}</i>"


def format_verse() -> str:
    return (
        '<i>"Your word is a lamp to my feet\nAnd a light to my path."</i>\n'
        "<b>PSALM 119:105</b>"
    )


def format_assignment_card(
    reading: DailyReading,
    slot: str,
    is_read: ChapterReadCheck,
    selection: ActiveSelection | None = None,
) -> str:
    """Format one slot of a day. Empty string if nothing is assigned."""
    assignment = reading.assignment(slot)
    if assignment is None or not assignment.is_present:
        return ""

    title = f"<b>{SLOT_TITLES[slot].upper()}</b>"
    book = html.escape(assignment.book)

    if reading.is_rest_day:
        return f"{title}\n<i>{book}</i>"

    lines = [f"{title}\n{book} <i>Ch {html.escape(assignment.chapters)}</i>"]
    for chapter in reading.chapter_units(slot):
        label = f"Chapter {chapter}"
        if is_read(assignment.book, chapter):
            line = f"✅ <s>{label}</s>"
        else:
            line = f"⬜ {label}"
        if selection == ActiveSelection(book=assignment.book, chapter=chapter):
            line += " 👈"
        lines.append(line)
    return "\n".join(lines)


def format_reader_panel(selection: ActiveSelection, url: str) -> str:
    """Panel for the chapter queued for reading."""
    name = html.escape(f"{selection.book} {selection.chapter}")
    link = f'<a href="{html.escape(url)}">Open in the reader →</a>'
    return f"📖 <b>Reading: {name}</b>\n{link}"


def format_day_message(
    reading: DailyReading,
    theme: Theme,
    is_read: ChapterReadCheck,
    selection: ActiveSelection | None = None,
    reader_url: str | None = None,
) -> str:
    """Format the single-day view."""
    parts = [
        format_header(theme),
        format_verse(),
        f"<b>{html.escape(reading.long_label or reading.display_label)}</b>",
    ]
    for slot, _ in reading.present_assignments():
        parts.append(format_assignment_card(reading, slot, is_read, selection))
    if selection is not None and reader_url:
        parts.append(format_reader_panel(selection, reader_url))
    return "\n\n".join(parts)


def format_schedule_line(reading: DailyReading, is_current: bool = False) -> str:
    """One line of the full schedule."""
    if reading.is_rest_day:
        summary = REST_DAY_SUMMARY
    else:
        summary = " • ".join(a.summary for _, a in reading.present_assignments())
    marker = "▶️ " if is_current else ""
    return (
        f"{marker}<b>{html.escape(reading.display_label)}</b>  {html.escape(summary)}"
    )


def format_schedule_messages(
    readings: Sequence[DailyReading],
    theme: Theme,
    current_id: str | None = None,
) -> list[str]:
    """Format the full-schedule view, split to the message limit."""
    lines = [format_header(theme), "<b>Reading Schedule</b>", ""]
    lines.extend(
        format_schedule_line(reading, reading.id == current_id) for reading in readings
    )
    return split_lines(lines)


def format_info_message() -> str:
    """Get the about message."""

    def _generate() -> str:
        return f"""<b>📖 Unity Bible Church</b>

<i>"Desire to see God glorified through our worship of Him, building up believers and sharing the Good News of Christ."</i>

📍 541 College St. Lewiston, ME 04240
⏰ Sunday School 9am • Worship 10am

<b>{PLAN_TITLE}</b>
Follow along with Unity Bible Church's spiritual growth guide using the {TRANSLATION} (LSB). Read daily from the Old Testament, Wisdom Literature, and New Testament.

<b>Commands:</b>
/today - today's reading
/schedule - the full reading schedule
/theme - switch light/dark mode
/info - about this plan

✅ Track your reading progress with checkmarks
📖 Open each chapter in the LSB reader
📅 Browse the schedule to jump to any date"""

    return _get_static_message("info", _generate)


def format_error_message() -> str:
    """Get error message."""

    def _generate() -> str:
        return "Could not load the reading plan. Please try again in a few minutes."

    return _get_static_message("error", _generate)


def format_empty_plan_message() -> str:
    """Get the message shown when no plan data is available."""

    def _generate() -> str:
        return "The reading plan is empty. Add month files to data/plan/."

    return _get_static_message("empty", _generate)
