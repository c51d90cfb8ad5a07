"""Unlocked-level persistence."""

from __future__ import annotations

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class ProgressStore:
    """Loads, saves, and queries unlocked levels from a JSON file.

    Level 0 is always playable.  Solving level ``i`` unlocks ``i + 1``.
    """

    def __init__(self, filepath: Path) -> None:
        self.filepath = filepath
        self._unlocked: set[int] = {0}
        self._load()

    # -- persistence ----------------------------------------------------------

    def _load(self) -> None:
        if not self.filepath.exists():
            return
        try:
            data = json.loads(self.filepath.read_text())
            self._unlocked.update(int(i) for i in data.get("unlocked", []))
        except (json.JSONDecodeError, TypeError, ValueError, AttributeError):
            logger.warning("Ignoring unreadable progress file %s", self.filepath)

    def save(self) -> None:
        self.filepath.parent.mkdir(parents=True, exist_ok=True)
        data = {"unlocked": sorted(self._unlocked)}
        self.filepath.write_text(json.dumps(data, indent=2) + "\n")

    # -- updates --------------------------------------------------------------

    def unlock(self, index: int) -> None:
        if index < 0 or index in self._unlocked:
            return
        self._unlocked.add(index)
        logger.info("Unlocked level %d", index)
        self.save()

    def record_solved(self, level_index: int) -> None:
        self.unlock(level_index + 1)

    def reset(self) -> None:
        self._unlocked = {0}
        self.save()

    # -- queries --------------------------------------------------------------

    def is_unlocked(self, index: int) -> bool:
        return index in self._unlocked

    @property
    def highest_unlocked(self) -> int:
        return max(self._unlocked)

    @property
    def unlocked(self) -> list[int]:
        return sorted(self._unlocked)
