"""Display theme preference."""

import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path

from .config import get_state_dir
from .models import Theme

logger = logging.getLogger(__name__)

THEME_FILENAME = "theme.json"

# xterm-style palette indices that are dark backgrounds
_DARK_BACKGROUNDS = {0, 1, 2, 3, 4, 5, 6, 8}


def detect_ambient_theme(environ: Mapping[str, str] | None = None) -> Theme | None:
    """Read the terminal's color scheme hint from COLORFGBG, if any.

    COLORFGBG looks like "15;0" (foreground;background) and is set by
    rxvt, Konsole, iTerm2 and others.
    """
    if environ is None:
        environ = os.environ
    value = environ.get("COLORFGBG", "")
    if not value:
        return None
    try:
        background = int(value.split(";")[-1])
    except ValueError:
        return None
    return Theme.DARK if background in _DARK_BACKGROUNDS else Theme.LIGHT


class PreferenceStore:
    """Persisted light/dark theme."""

    def __init__(
        self,
        state_dir: Path | None = None,
        environ: Mapping[str, str] | None = None,
    ):
        self.state_dir = state_dir or get_state_dir()
        self.path = self.state_dir / THEME_FILENAME
        self.environ = environ
        self.theme = Theme.LIGHT

    def _default(self) -> Theme:
        return detect_ambient_theme(self.environ) or Theme.LIGHT

    def load(self) -> Theme:
        """Load the stored theme, falling back to the ambient scheme."""
        self.theme = self._read() or self._default()
        return self.theme

    def _read(self) -> Theme | None:
        if not self.path.exists():
            return None
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            return Theme(data["theme"])
        except (OSError, json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            logger.warning(f"Failed to load theme preference: {e}")
            return None

    def save(self, theme: Theme) -> None:
        """Persist the theme."""
        self.theme = Theme(theme)
        try:
            self.state_dir.mkdir(parents=True, exist_ok=True)
            self.path.write_text(
                json.dumps({"theme": self.theme.value}), encoding="utf-8"
            )
        except OSError as e:
            logger.error(f"Failed to save theme to {self.path}: {e}")
            return
        logger.info(f"Saved theme preference: {self.theme.value}")

    def toggle(self) -> Theme:
        """Switch between light and dark and persist the result."""
        self.save(self.theme.toggled())
        return self.theme
