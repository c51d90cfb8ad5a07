"""Board model for the sliding puzzle game."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol

logger = logging.getLogger(__name__)

MIN_SIZE = 2


class InvalidSizeError(ValueError):
    """Raised when a board is requested with fewer than two rows."""


class Direction(StrEnum):
    """Direction the *tile* travels when it slides into the blank."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


class MoveResult(StrEnum):
    REJECTED = "rejected"
    APPLIED = "applied"
    SOLVED = "solved"

    @property
    def applied(self) -> bool:
        """True for every result that changed the board (``SOLVED`` included)."""
        return self is not MoveResult.REJECTED

    @property
    def solved(self) -> bool:
        return self is MoveResult.SOLVED


class RandomSource(Protocol):
    def randrange(self, stop: int) -> int: ...


def _check_size(size: int) -> None:
    if isinstance(size, bool) or not isinstance(size, int):
        raise InvalidSizeError(f"Board size must be an integer, got {size!r}.")
    if size < MIN_SIZE:
        raise InvalidSizeError(
            f"Board size must be at least {MIN_SIZE}, got {size}."
        )


@dataclass
class Board:
    """Represents the sliding puzzle board.

    ``cells`` is a flat row-major list: ``cells[i]`` is the home index of the
    tile sitting in slot ``i``.  The tile whose home is the last slot
    (``size * size - 1``) is the blank.

    A fresh board is locked and not started: it shows the ordered
    arrangement but refuses moves and never reports itself solved until
    :meth:`shuffle` has run.
    """

    size: int
    cells: list[int]
    empty_index: int
    started: bool = False
    locked: bool = True

    # -- construction helpers -------------------------------------------------

    @classmethod
    def create(cls, size: int) -> Board:
        """Return the ordered, unshuffled board for a ``size``×``size`` grid."""
        _check_size(size)
        count = size * size
        return cls(size=size, cells=list(range(count)), empty_index=count - 1)

    @classmethod
    def from_cells(
        cls, size: int, cells: list[int], *, started: bool = True
    ) -> Board:
        """Create an unlocked board from an explicit arrangement.

        Example::

            Board.from_cells(3, [0, 1, 2, 3, 4, 8, 6, 7, 5])
        """
        _check_size(size)
        count = size * size
        if sorted(cells) != list(range(count)):
            raise ValueError(
                f"Expected a permutation of 0..{count - 1} for a "
                f"{size}×{size} board, got {cells}."
            )
        return cls(
            size=size,
            cells=list(cells),
            empty_index=cells.index(count - 1),
            started=started,
            locked=False,
        )

    def initialize(self, size: int) -> None:
        """Reset to the ordered arrangement for a new level.

        On ``InvalidSizeError`` the current state is left untouched.
        """
        fresh = Board.create(size)
        self.size = fresh.size
        self.cells = fresh.cells
        self.empty_index = fresh.empty_index
        self.started = fresh.started
        self.locked = fresh.locked

    # -- queries --------------------------------------------------------------

    @property
    def empty_tile(self) -> int:
        return self.size * self.size - 1

    def is_solved(self) -> bool:
        """Check if every tile is home.  Always ``False`` before the shuffle."""
        if not self.started:
            return False
        return all(tile == i for i, tile in enumerate(self.cells))

    def is_tile_correct(self, index: int) -> bool:
        return self.cells[index] == index

    def rows(self) -> list[list[int]]:
        n = self.size
        return [self.cells[r * n : (r + 1) * n] for r in range(n)]

    def index_for(self, direction: Direction) -> int | None:
        """Slot of the tile that would slide in *direction*, if there is one.

        E.g. ``Direction.UP`` names the tile **below** the blank.
        """
        row, col = divmod(self.empty_index, self.size)
        offsets = {
            Direction.UP: (1, 0),
            Direction.DOWN: (-1, 0),
            Direction.LEFT: (0, 1),
            Direction.RIGHT: (0, -1),
        }
        dr, dc = offsets[direction]
        tr, tc = row + dr, col + dc
        if not (0 <= tr < self.size and 0 <= tc < self.size):
            return None
        return tr * self.size + tc

    def direction_of(self, index: int) -> Direction | None:
        """Return the way the tile at *index* would slide, or ``None``."""
        if not 0 <= index < self.size * self.size:
            return None
        n = self.size
        if index - n == self.empty_index:
            return Direction.UP
        if index + n == self.empty_index:
            return Direction.DOWN
        if index % n != 0 and index - 1 == self.empty_index:
            return Direction.LEFT
        if index % n != n - 1 and index + 1 == self.empty_index:
            return Direction.RIGHT
        return None

    def copy(self) -> Board:
        return Board(
            size=self.size,
            cells=self.cells[:],
            empty_index=self.empty_index,
            started=self.started,
            locked=self.locked,
        )

    # -- moves ----------------------------------------------------------------

    def try_move(self, index: int) -> MoveResult:
        """Slide the tile at *index* into the blank if it is adjacent.

        Out-of-range indices and taps on a locked board are rejected the same
        way as non-adjacent ones.
        """
        if self.locked:
            logger.debug("Board locked, ignoring slot %s", index)
            return MoveResult.REJECTED
        result = self._slide(index)
        if result.solved:
            self.locked = True
            logger.info("Puzzle solved on a %dx%d board", self.size, self.size)
        return result

    def shuffle(
        self,
        iterations: int | None = None,
        rng: RandomSource | None = None,
    ) -> None:
        """Scramble the board with random legal moves.

        Draws random slots and slides whichever are next to the blank until
        *iterations* moves (default ``size ** 3``) have been made.  A draw equal
        to the slot the blank occupied before the previous move is skipped, so
        the walk never undoes its last step.
        """
        if iterations is None:
            iterations = self.size**3
        if iterations < 0:
            raise ValueError(f"iterations must be >= 0, got {iterations}.")
        if rng is None:
            rng = random

        self.started = False
        self.locked = True
        count = self.size * self.size
        moves = 0
        draws = 0
        last: int | None = None

        while moves < iterations or self._is_identity():
            r = rng.randrange(count)
            draws += 1
            if r == last:
                continue
            before = self.empty_index
            if self._slide(r).applied:
                last = before
                moves += 1

        self.started = True
        self.locked = False
        logger.debug(
            "Shuffled %dx%d board with %d moves (%d draws)",
            self.size, self.size, moves, draws,
        )

    # -- helpers --------------------------------------------------------------

    def _is_identity(self) -> bool:
        return all(tile == i for i, tile in enumerate(self.cells))

    def _slide(self, index: int) -> MoveResult:
        direction = self.direction_of(index)
        if direction is None:
            logger.debug("Invalid move for slot %s", index)
            return MoveResult.REJECTED

        empty = self.empty_index
        self.cells[index], self.cells[empty] = self.cells[empty], self.cells[index]
        self.empty_index = index
        logger.debug("Moved slot %d %s into %d", index, direction.value, empty)

        if self.is_solved():
            return MoveResult.SOLVED
        return MoveResult.APPLIED
