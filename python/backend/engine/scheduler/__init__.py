from backend.engine.scheduler.timer import ShuffleTimer

__all__ = ["ShuffleTimer"]
