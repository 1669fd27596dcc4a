#!/usr/bin/env python3
"""
Daily Bible Reading Plan - browse the plan and track chapters read.

Usage:
    python main.py                          # Show today's reading
    python main.py --date 2026-01-05        # Show another day
    python main.py --schedule               # Show the full schedule
    python main.py --mark Genesis 1         # Toggle a chapter as read
    python main.py --open Genesis 1         # Print the reader link
    python main.py --theme                  # Switch light/dark mode
    python main.py --serve                  # Run the Telegram bot
"""

import argparse
import logging
import sys
import webbrowser
from datetime import datetime

from dotenv import load_dotenv

from src.bot import ReadingPlanBot
from src.config import Config
from src.formatter import (
    format_day_message,
    format_empty_plan_message,
    format_schedule_messages,
    to_plain_text,
)
from src.session import ReadingSession

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Daily Bible Reading Plan",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python main.py                      Show today's reading
    python main.py --mark Psalms 1      Mark Psalm 1 of today as read
    python main.py --serve              Run interactive bot with polling
        """,
    )
    parser.add_argument(
        "--serve",
        action="store_true",
        help="Run bot in interactive polling mode",
    )
    parser.add_argument(
        "--preview",
        action="store_true",
        help="Show the day's reading (the default)",
    )
    parser.add_argument(
        "--date",
        type=str,
        help="Day to show or mark (YYYY-MM-DD format)",
    )
    parser.add_argument(
        "--schedule",
        action="store_true",
        help="Show the full reading schedule",
    )
    parser.add_argument(
        "--mark",
        nargs=2,
        metavar=("BOOK", "CHAPTER"),
        help="Toggle a chapter of the day as read/unread",
    )
    parser.add_argument(
        "--open",
        nargs=2,
        metavar=("BOOK", "CHAPTER"),
        help="Print the reader link for a chapter",
    )
    parser.add_argument(
        "--browser",
        action="store_true",
        help="With --open, also open the link in the web browser",
    )
    parser.add_argument(
        "--theme",
        action="store_true",
        help="Switch between light and dark mode",
    )
    return parser.parse_args(argv)


def print_day(session: ReadingSession) -> None:
    """Print the current day's reading."""
    if not session.has_plan:
        print(format_empty_plan_message())
        return
    reading = session.current_reading
    message = format_day_message(
        reading,
        session.theme,
        lambda book, chapter: session.is_chapter_read(reading, book, chapter),
        selection=session.navigation.active_selection,
        reader_url=session.reader_url(),
    )
    print(to_plain_text(message))


def print_schedule(session: ReadingSession) -> None:
    """Print every day of the plan."""
    current_id = session.current_reading.id if session.has_plan else None
    messages = format_schedule_messages(list(session.store), session.theme, current_id)
    for message in messages:
        print(to_plain_text(message))


def mark_chapter(session: ReadingSession, book: str, chapter: int) -> bool:
    """Toggle a chapter of the current day. Returns False if not assigned."""
    reading = session.current_reading
    for slot, assignment in reading.present_assignments():
        if assignment.book.lower() != book.lower():
            continue
        if chapter in session.chapters_for(reading, slot):
            done = session.toggle_chapter(slot, chapter)
            state = "read" if done else "unread"
            print(
                f"{assignment.book} {chapter} ({reading.display_label}): marked {state}"
            )
            return True
    print(
        f"{book} {chapter} is not part of the reading for {reading.display_label}",
        file=sys.stderr,
    )
    return False


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    load_dotenv()

    args = parse_args(argv)

    try:
        config = Config.from_env()
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    config.setup_logging()

    if args.serve:
        try:
            bot = ReadingPlanBot(config)
        except ValueError as e:
            print(f"Configuration error: {e}", file=sys.stderr)
            return 1
        logger.info("Reading plan bot starting...")
        bot.run_polling()
        return 0

    session = ReadingSession.from_config(config)

    if args.date:
        try:
            target_date = datetime.strptime(args.date, "%Y-%m-%d").date()
        except ValueError:
            print(f"Invalid date: {args.date} (expected YYYY-MM-DD)", file=sys.stderr)
            return 1
        if session.select_date(target_date) is None:
            print(f"No reading planned for {target_date}", file=sys.stderr)
            return 1

    if args.theme:
        theme = session.toggle_theme()
        print(f"Theme: {theme.value}")
        return 0

    if args.schedule:
        print_schedule(session)
        return 0

    if args.mark or args.open:
        if not session.has_plan:
            print(format_empty_plan_message(), file=sys.stderr)
            return 1
        book, chapter_str = args.mark or args.open
        try:
            chapter = int(chapter_str)
        except ValueError:
            print(f"Invalid chapter: {chapter_str}", file=sys.stderr)
            return 1

        if args.mark:
            return 0 if mark_chapter(session, book, chapter) else 1

        session.navigation.select_chapter(book, chapter)
        url = session.reader_url()
        print(url)
        if args.browser and url:
            webbrowser.open(url)
        return 0

    print_day(session)
    return 0


if __name__ == "__main__":
    sys.exit(main())
