"""Level catalogue loaded from ``levels.json``."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

logger = logging.getLogger(__name__)


class LevelConfigError(ValueError):
    """Raised when the level catalogue is missing or malformed."""


@dataclass(frozen=True)
class LevelData:
    size: int
    material: str
    icon: str = ""


class LevelCatalog:
    """Ordered list of playable levels."""

    def __init__(self, levels: list[LevelData]) -> None:
        if not levels:
            raise LevelConfigError("Level catalogue is empty.")
        self._levels = list(levels)

    # -- loading --------------------------------------------------------------

    @classmethod
    def load(cls, filepath: Path) -> LevelCatalog:
        """Read ``{"levels": [{"size": 3, "material": ..., "icon": ...}]}``."""
        if not filepath.exists():
            raise LevelConfigError(f"Level file not found at: {filepath}")
        try:
            data = json.loads(filepath.read_text())
        except json.JSONDecodeError as exc:
            raise LevelConfigError(f"Level file {filepath} is not valid JSON: {exc}") from exc

        entries = data.get("levels") if isinstance(data, dict) else None
        if not isinstance(entries, list):
            raise LevelConfigError(f"Level file {filepath} has no 'levels' list.")

        levels = [cls._parse_entry(i, e) for i, e in enumerate(entries)]
        catalog = cls(levels)
        logger.info("Loaded %d levels from %s", len(catalog), filepath)
        return catalog

    @staticmethod
    def _parse_entry(index: int, entry: object) -> LevelData:
        if not isinstance(entry, dict):
            raise LevelConfigError(f"Level {index} must be an object, got {entry!r}.")
        size = entry.get("size")
        if isinstance(size, bool) or not isinstance(size, int) or size < 2:
            raise LevelConfigError(f"Level {index} has an invalid size: {size!r}.")
        material = entry.get("material")
        if not isinstance(material, str) or not material:
            raise LevelConfigError(f"Level {index} has no material name.")
        return LevelData(size=size, material=material, icon=str(entry.get("icon", "")))

    # -- queries --------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._levels)

    def __getitem__(self, index: int) -> LevelData:
        return self._levels[index]

    def __iter__(self) -> Iterator[LevelData]:
        return iter(self._levels)

    def get(self, index: int) -> LevelData | None:
        if 0 <= index < len(self._levels):
            return self._levels[index]
        logger.error("No level at index %d (catalogue has %d)", index, len(self._levels))
        return None
