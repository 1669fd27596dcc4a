"""Configuration management for the Daily Bible Reading Plan."""

import logging
import os
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .reader import DEFAULT_READER_URL_TEMPLATE, resolve_reader_url

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Config:
    """Immutable application configuration."""

    log_level: str = "INFO"
    reader_url_template: str = DEFAULT_READER_URL_TEMPLATE
    timezone: str | None = None  # IANA zone used to decide "today"
    state_dir: Path | None = None
    # Telegram config (optional, only needed for --serve)
    telegram_bot_token: str | None = None
    telegram_chat_id: str | None = None

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        timezone = os.getenv("PLAN_TIMEZONE") or None
        if timezone:
            try:
                ZoneInfo(timezone)
            except (ZoneInfoNotFoundError, ValueError) as e:
                raise ValueError(
                    f"PLAN_TIMEZONE is not a known time zone: {timezone}"
                ) from e

        template = os.getenv("READER_URL_TEMPLATE", DEFAULT_READER_URL_TEMPLATE)
        try:
            resolve_reader_url("Genesis", 1, template)
        except (KeyError, IndexError, AttributeError, ValueError) as e:
            raise ValueError(
                f"READER_URL_TEMPLATE has an unknown placeholder: {template}"
            ) from e

        state_dir = os.getenv("STATE_DIR")

        config = cls(
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            reader_url_template=template,
            timezone=timezone,
            state_dir=Path(state_dir).expanduser() if state_dir else None,
            telegram_bot_token=os.getenv("TELEGRAM_BOT_TOKEN") or None,
            telegram_chat_id=os.getenv("TELEGRAM_CHAT_ID") or None,
        )

        if "{book}" not in config.reader_url_template:
            logger.warning(
                "READER_URL_TEMPLATE has no {book} placeholder "
                "-- every chapter will open the same page"
            )

        return config

    def require_telegram(self) -> None:
        """Raise ValueError unless the bot token is configured."""
        if not self.telegram_bot_token:
            raise ValueError("TELEGRAM_BOT_TOKEN environment variable is required")

    def today(self) -> date:
        """Today's calendar date in the configured time zone."""
        if self.timezone:
            return datetime.now(ZoneInfo(self.timezone)).date()
        return date.today()

    def resolved_state_dir(self) -> Path:
        """State directory, honoring the STATE_DIR override."""
        return self.state_dir or get_state_dir()

    def setup_logging(self) -> None:
        """Configure application logging."""
        logging.basicConfig(
            level=getattr(logging, self.log_level.upper(), logging.INFO),
            format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )


def get_project_root() -> Path:
    """Get the project root directory."""
    return Path(__file__).parent.parent


def get_data_dir() -> Path:
    """Get the data directory."""
    return get_project_root() / "data"


def get_plan_dir() -> Path:
    """Get the directory holding the monthly plan files."""
    return get_data_dir() / "plan"


def get_state_dir() -> Path:
    """Get the default directory for persisted progress and preferences."""
    return get_project_root() / ".state"
