"""Reading progress: which chapters have been marked as read."""

import json
import logging
from collections.abc import Iterable
from pathlib import Path

from .config import get_state_dir

logger = logging.getLogger(__name__)

PROGRESS_FILENAME = "progress.json"


class ProgressTracker:
    """Set of completed chapter record ids, persisted on every change.

    Record ids are opaque here; see models.make_record_id for how they are
    derived.
    """

    def __init__(self, state_dir: Path | None = None):
        self.state_dir = state_dir or get_state_dir()
        self.path = self.state_dir / PROGRESS_FILENAME
        self._completed: set[str] = set()

    def load(self) -> set[str]:
        """Load completed record ids from the state file."""
        self._completed = self._read()
        return set(self._completed)

    def _read(self) -> set[str]:
        if not self.path.exists():
            return set()
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            records = data["completed"]
            if not isinstance(records, list):
                raise TypeError("completed must be a list")
            return {r for r in records if isinstance(r, str)}
        except (
            OSError,
            UnicodeDecodeError,
            json.JSONDecodeError,
            KeyError,
            TypeError,
        ) as e:
            logger.warning(f"Failed to load progress, starting fresh: {e}")
            return set()

    def save(self, records: Iterable[str]) -> None:
        """Persist the full set of completed record ids."""
        self._completed = set(records)
        try:
            self.state_dir.mkdir(parents=True, exist_ok=True)
            self.path.write_text(
                json.dumps({"completed": sorted(self._completed)}, indent=2),
                encoding="utf-8",
            )
        except OSError as e:
            logger.error(f"Failed to save progress to {self.path}: {e}")
            return
        logger.debug(f"Saved {len(self._completed)} completed chapters")

    def is_complete(self, record_id: str) -> bool:
        """Check whether a chapter record is marked as read."""
        return record_id in self._completed

    def toggle(self, record_id: str) -> bool:
        """Flip a record's read state and persist. Returns the new state."""
        completed = set(self._completed)
        if record_id in completed:
            completed.discard(record_id)
            now_complete = False
        else:
            completed.add(record_id)
            now_complete = True
        self.save(completed)
        logger.info(f"Marked {record_id} as {'read' if now_complete else 'unread'}")
        return now_complete

    def count(self) -> int:
        """Number of chapters marked as read."""
        return len(self._completed)
