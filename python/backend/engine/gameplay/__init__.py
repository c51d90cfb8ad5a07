from backend.engine.gameplay.game import GamePlay, ProgressRecorder

__all__ = ["GamePlay", "ProgressRecorder"]
