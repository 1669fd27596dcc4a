#!/usr/bin/env python3
"""Run the reading plan bot locally in interactive polling mode.

Reads TELEGRAM_BOT_TOKEN (and optionally TELEGRAM_CHAT_ID, STATE_DIR,
PLAN_TIMEZONE) from the environment or a .env file.
"""

import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

from src.bot import ReadingPlanBot
from src.config import Config
from src.session import ReadingSession

logger = logging.getLogger("run_polling")


def main() -> int:
    """Load the plan and poll until interrupted."""
    load_dotenv()
    try:
        config = Config.from_env()
        config.require_telegram()
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1
    config.setup_logging()

    session = ReadingSession.from_config(config)
    if not session.has_plan:
        logger.error("No reading plan found in data/plan/, not starting")
        return 1

    reading = session.current_reading
    logger.info(
        f"Serving {session.store.count()} days, starting at {reading.display_label} "
        f"(state in {config.resolved_state_dir()})"
    )
    ReadingPlanBot(config, session=session).run_polling()
    return 0


if __name__ == "__main__":
    sys.exit(main())
