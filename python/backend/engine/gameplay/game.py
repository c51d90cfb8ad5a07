"""Core gameplay logic — routes taps to the board and reports the outcome."""

from __future__ import annotations

import logging
from typing import Protocol

from backend.engine.feedback import FeedbackSink, NullFeedback
from backend.engine.gamestate import GameState
from backend.engine.scheduler import ShuffleTimer
from backend.models.board import Board, Direction, MoveResult, RandomSource
from backend.models.level import LevelData

logger = logging.getLogger(__name__)


class ProgressRecorder(Protocol):
    def record_solved(self, level_index: int) -> None: ...


class GamePlay:
    """Orchestrates a single level.

    Owns the board for as long as the level is on screen.  Feedback sinks and
    the progress store are handed in by the caller; nothing is looked up
    globally.
    """

    def __init__(
        self,
        level: LevelData,
        *,
        level_index: int = 0,
        feedback: FeedbackSink | None = None,
        progress: ProgressRecorder | None = None,
        rng: RandomSource | None = None,
    ) -> None:
        self.level = level
        self.level_index = level_index
        self.feedback: FeedbackSink = feedback or NullFeedback()
        self.progress = progress
        self._rng = rng
        self._timer: ShuffleTimer | None = None
        self.state = GameState(Board.create(level.size))

    @property
    def size(self) -> int:
        return self.state.board.size

    @property
    def board(self) -> Board:
        return self.state.board

    # -- shuffling ------------------------------------------------------------

    def schedule_shuffle(self, delay: float) -> ShuffleTimer | None:
        """Show the ordered board for *delay* seconds, then scramble it.

        The shuffle happens inside :meth:`tick`; a non-positive delay
        shuffles right away and returns ``None``.
        """
        self.cancel_shuffle()
        if delay <= 0:
            self.shuffle()
            return None
        self._timer = ShuffleTimer(delay, self.shuffle)
        return self._timer

    def cancel_shuffle(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    @property
    def is_shuffling_pending(self) -> bool:
        return self._timer is not None and self._timer.pending

    def tick(self, now: float | None = None) -> bool:
        """Run the pending shuffle if its delay has elapsed."""
        if self._timer is None:
            return False
        return self._timer.poll(now)

    def shuffle(self) -> None:
        if self._timer is not None and self._timer.pending:
            self._timer.cancel()
        self._timer = None
        self.state.board.shuffle(rng=self._rng)
        self.state.resume()

    # -- movement -------------------------------------------------------------

    def tap(self, index: int | None) -> MoveResult:
        """Try to slide the tile at slot *index* into the blank."""
        board = self.state.board
        result = MoveResult.REJECTED if index is None else board.try_move(index)

        if not result.applied:
            self.state.increment_rejected()
            self.feedback.on_move_rejected(index)
            return result

        self.state.increment_moves()
        self.feedback.on_move_applied(index)
        if result.solved:
            self._complete_level()
        return result

    def move(self, direction: Direction) -> MoveResult:
        """Slide the tile next to the blank in *direction*.

        E.g. ``Direction.UP`` moves the tile **below** the blank upward.
        """
        return self.tap(self.state.board.index_for(direction))

    # -- queries --------------------------------------------------------------

    @property
    def is_won(self) -> bool:
        return self.state.is_solved

    # -- helpers --------------------------------------------------------------

    def _complete_level(self) -> None:
        self.state.pause()
        logger.info(
            "Level %d solved in %d moves (%.1fs)",
            self.level_index, self.state.moves, self.state.elapsed_time,
        )
        self.feedback.on_solved()
        if self.progress is not None:
            self.progress.record_solved(self.level_index)
