from backend.models.board import (
    Board,
    Direction,
    InvalidSizeError,
    MoveResult,
)
from backend.models.level import LevelCatalog, LevelConfigError, LevelData
from backend.models.progress import ProgressStore

__all__ = [
    "Board",
    "Direction",
    "InvalidSizeError",
    "LevelCatalog",
    "LevelConfigError",
    "LevelData",
    "MoveResult",
    "ProgressStore",
]
