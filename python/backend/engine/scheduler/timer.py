"""Cooperative one-shot timer polled from a frontend's own loop."""

from __future__ import annotations

import time
from typing import Callable


class ShuffleTimer:
    """Calls *callback* once, the first time it is polled after *delay*.

    Nothing runs in the background: the owner must call :meth:`poll`
    regularly (every frame, or on every input timeout).
    """

    def __init__(
        self,
        delay: float,
        callback: Callable[[], None],
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._callback = callback
        self._clock = clock
        self.deadline = clock() + max(0.0, delay)
        self.fired = False
        self.cancelled = False

    @property
    def pending(self) -> bool:
        return not (self.fired or self.cancelled)

    @property
    def remaining(self) -> float:
        if not self.pending:
            return 0.0
        return max(0.0, self.deadline - self._clock())

    def cancel(self) -> None:
        self.cancelled = True

    def poll(self, now: float | None = None) -> bool:
        """Fire if due.  Returns True only on the call that fired."""
        if not self.pending:
            return False
        if now is None:
            now = self._clock()
        if now < self.deadline:
            return False
        self.fired = True
        self._callback()
        return True
