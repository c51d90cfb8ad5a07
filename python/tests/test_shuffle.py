"""Shuffle tests.

Shuffles are made deterministic either with a seeded ``random.Random`` or a
scripted RNG, and instrumented by recording every slide the board applies.
"""

from __future__ import annotations

import random

import pytest

from backend.models.board import Board, MoveResult


# -- helpers ------------------------------------------------------------------


class _RecordingBoard(Board):
    """Board that logs ``(slot, blank_before, result)`` for every applied slide."""

    def _slide(self, index: int) -> MoveResult:
        before = self.empty_index
        result = super()._slide(index)
        if result.applied:
            self.log.append((index, before, result))
        return result


def _recording(size: int) -> _RecordingBoard:
    count = size * size
    board = _RecordingBoard(size=size, cells=list(range(count)), empty_index=count - 1)
    board.log = []
    return board


class _ScriptedRng:
    def __init__(self, draws: list[int]) -> None:
        self.draws = list(draws)
        self.stops: list[int] = []

    def randrange(self, stop: int) -> int:
        self.stops.append(stop)
        return self.draws.pop(0)


# -- tests --------------------------------------------------------------------


@pytest.mark.parametrize("size", [2, 3, 4, 5, 6])
def test_shuffle_starts_game(size: int) -> None:
    board = Board.create(size)
    board.shuffle(rng=random.Random(size))

    count = size * size
    assert board.started
    assert not board.locked
    assert sorted(board.cells) == list(range(count))
    assert board.cells[board.empty_index] == count - 1
    assert board.cells.count(count - 1) == 1
    assert board.cells != list(range(count))
    assert not board.is_solved()


@pytest.mark.parametrize("size", [3, 4])
def test_default_iteration_count_is_size_cubed(size: int) -> None:
    board = _recording(size)
    board.shuffle(rng=random.Random(7))
    assert len(board.log) >= size**3
    if len(board.log) > size**3:
        # Only happens when the walk landed back on the ordered board.
        assert board.cells != list(range(size * size))


def test_explicit_iteration_count() -> None:
    board = _recording(4)
    board.shuffle(iterations=10, rng=random.Random(3))
    assert len(board.log) == 10


@pytest.mark.parametrize("seed", range(5))
def test_shuffle_never_undoes_previous_move(seed: int) -> None:
    board = _recording(4)
    board.shuffle(rng=random.Random(seed))
    for (_, blank_before, _), (slot, _, _) in zip(board.log, board.log[1:]):
        assert slot != blank_before


@pytest.mark.parametrize("seed", range(3))
def test_shuffle_is_a_sequence_of_legal_moves(seed: int) -> None:
    board = _recording(3)
    board.shuffle(rng=random.Random(seed))

    replay = Board.from_cells(3, list(range(9)), started=False)
    for slot, _, _ in board.log:
        assert replay.try_move(slot).applied
    assert replay.cells == board.cells
    assert replay.empty_index == board.empty_index


def test_scripted_shuffle() -> None:
    # 2×2, blank in slot 3.  Slot 0 is not adjacent; 2 slides right; 3 was the
    # blank before that move so it is skipped; 0 then slides down.
    rng = _ScriptedRng([0, 2, 3, 0])
    board = _recording(2)
    board.shuffle(iterations=2, rng=rng)

    assert board.cells == [3, 1, 0, 2]
    assert board.empty_index == 0
    assert rng.draws == []
    assert set(rng.stops) == {4}
    assert [slot for slot, _, _ in board.log] == [2, 0]


def test_passing_through_solved_does_not_stop_shuffle() -> None:
    # On a 2×2 board the walk is forced around a 12-state cycle, so the
    # twelfth move lands on the ordered arrangement.
    board = _recording(2)
    board.shuffle(iterations=12, rng=random.Random(1))

    assert all(result is MoveResult.APPLIED for _, _, result in board.log)
    assert len(board.log) == 13
    assert board.cells != [0, 1, 2, 3]
    assert board.started and not board.locked


def test_zero_iterations_still_scrambles() -> None:
    board = Board.create(3)
    board.shuffle(iterations=0, rng=random.Random(0))
    assert board.cells != list(range(9))
    assert board.started


def test_negative_iterations_rejected() -> None:
    board = Board.create(3)
    with pytest.raises(ValueError):
        board.shuffle(iterations=-1)
    assert board.locked and not board.started


def test_shuffle_after_solve_restarts_play() -> None:
    board = Board.from_cells(3, [0, 1, 2, 3, 4, 5, 6, 8, 7])
    assert board.try_move(8).solved
    board.shuffle(rng=random.Random(11))
    assert board.started and not board.locked
    assert not board.is_solved()


def test_moves_after_shuffle_are_accepted() -> None:
    board = Board.create(3)
    board.shuffle(rng=random.Random(5))
    neighbour = next(i for i in range(9) if board.direction_of(i) is not None)
    assert board.try_move(neighbour).applied
