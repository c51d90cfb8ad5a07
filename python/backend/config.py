"""Runtime configuration read from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent  # sliding-game/
DEFAULT_DATA_DIR = PROJECT_ROOT / "data"
DEFAULT_ASSETS_DIR = PROJECT_ROOT / "assets"


def env_flag(name: str, *, default: bool = False) -> bool:
    """Return a boolean flag from environment variables.

    ``1``, ``true``, ``yes`` and ``on`` are ``True``; ``0``, ``false``, ``no``
    and ``off`` are ``False``.  Unset or unrecognised values give *default*.
    """
    value = os.getenv(name)
    if value is None:
        return default

    normalised = value.strip().lower()
    if normalised in {"1", "true", "yes", "on"}:
        return True
    if normalised in {"0", "false", "no", "off"}:
        return False
    return default


def env_float(name: str, *, default: float) -> float:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    data_dir: Path = DEFAULT_DATA_DIR
    assets_dir: Path = DEFAULT_ASSETS_DIR
    levels_file: Path = DEFAULT_DATA_DIR / "levels.json"
    shuffle_delay: float = 0.5
    log_level: str = "WARNING"
    feedback_bell: bool = True

    @property
    def progress_file(self) -> Path:
        return self.data_dir / "progress.json"

    @property
    def images_dir(self) -> Path:
        return self.assets_dir / "images"

    @classmethod
    def from_env(cls) -> Settings:
        data_dir = Path(os.getenv("SLIDE_DATA_DIR") or DEFAULT_DATA_DIR)
        levels_file = os.getenv("SLIDE_LEVELS_FILE")
        return cls(
            data_dir=data_dir,
            assets_dir=Path(os.getenv("SLIDE_ASSETS_DIR") or DEFAULT_ASSETS_DIR),
            levels_file=Path(levels_file) if levels_file else data_dir / "levels.json",
            shuffle_delay=max(0.0, env_float("SLIDE_SHUFFLE_DELAY", default=0.5)),
            log_level=(os.getenv("SLIDE_LOG_LEVEL") or "WARNING").upper(),
            feedback_bell=env_flag("SLIDE_FEEDBACK_BELL", default=True),
        )

    def with_overrides(self, **changes: object) -> Settings:
        """Return a copy with every non-``None`` keyword applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})
