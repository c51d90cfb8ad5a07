"""Feedback sinks notified of board events (haptics, sound, UI cues)."""

from __future__ import annotations

from typing import Protocol, Sequence


class FeedbackSink(Protocol):
    def on_move_applied(self, index: int) -> None: ...

    def on_move_rejected(self, index: int | None) -> None: ...

    def on_solved(self) -> None: ...


class NullFeedback:
    """Sink that ignores every event."""

    def on_move_applied(self, index: int) -> None:
        pass

    def on_move_rejected(self, index: int | None) -> None:
        pass

    def on_solved(self) -> None:
        pass


class FanOutFeedback:
    """Forwards each event to several sinks, in order."""

    def __init__(self, sinks: Sequence[FeedbackSink]) -> None:
        self.sinks = list(sinks)

    def on_move_applied(self, index: int) -> None:
        for sink in self.sinks:
            sink.on_move_applied(index)

    def on_move_rejected(self, index: int | None) -> None:
        for sink in self.sinks:
            sink.on_move_rejected(index)

    def on_solved(self) -> None:
        for sink in self.sinks:
            sink.on_solved()
