"""Board tests — construction, move rules, and win detection."""

from __future__ import annotations

import pytest

from backend.models.board import Board, Direction, InvalidSizeError, MoveResult


# -- helpers ------------------------------------------------------------------


def _board_with_empty_at(size: int, empty: int) -> Board:
    """Identity board with the blank swapped into slot *empty* (not started)."""
    cells = list(range(size * size))
    last = size * size - 1
    cells[empty], cells[last] = cells[last], cells[empty]
    return Board.from_cells(size, cells, started=False)


def _adjacent(size: int, a: int, b: int) -> bool:
    ar, ac = divmod(a, size)
    br, bc = divmod(b, size)
    return abs(ar - br) + abs(ac - bc) == 1


def _assert_invariants(board: Board) -> None:
    count = board.size * board.size
    assert sorted(board.cells) == list(range(count))
    assert [i for i, t in enumerate(board.cells) if t == count - 1] == [board.empty_index]


# -- construction -------------------------------------------------------------


@pytest.mark.parametrize("size", [-1, 0, 1])
def test_create_rejects_degenerate_sizes(size: int) -> None:
    with pytest.raises(InvalidSizeError):
        Board.create(size)


def test_create_rejects_non_integer_size() -> None:
    with pytest.raises(InvalidSizeError):
        Board.create(3.0)  # type: ignore[arg-type]


def test_invalid_size_is_a_value_error() -> None:
    assert issubclass(InvalidSizeError, ValueError)


def test_create_three_by_three() -> None:
    board = Board.create(3)
    assert board.size == 3
    assert board.cells == [0, 1, 2, 3, 4, 5, 6, 7, 8]
    assert board.empty_index == 8
    assert board.started is False
    assert board.locked is True


def test_fresh_board_is_not_solved() -> None:
    board = Board.create(4)
    assert board.cells == list(range(16))
    assert not board.is_solved()


def test_failed_initialize_keeps_previous_state() -> None:
    board = Board.from_cells(3, [0, 1, 2, 3, 4, 8, 6, 7, 5])
    with pytest.raises(InvalidSizeError):
        board.initialize(1)
    assert board.size == 3
    assert board.cells == [0, 1, 2, 3, 4, 8, 6, 7, 5]
    assert board.empty_index == 5
    assert board.started is True
    assert board.locked is False


def test_initialize_replaces_everything() -> None:
    board = Board.from_cells(3, [0, 1, 2, 3, 4, 8, 6, 7, 5])
    board.initialize(2)
    assert board.size == 2
    assert board.cells == [0, 1, 2, 3]
    assert board.empty_index == 3
    assert board.started is False
    assert board.locked is True


def test_from_cells_rejects_non_permutation() -> None:
    with pytest.raises(ValueError):
        Board.from_cells(2, [0, 1, 1, 3])
    with pytest.raises(ValueError):
        Board.from_cells(2, [0, 1, 2])


# -- moves --------------------------------------------------------------------


def test_move_down_into_blank() -> None:
    board = Board.from_cells(3, list(range(9)), started=False)
    assert board.try_move(5) is MoveResult.APPLIED
    assert board.cells == [0, 1, 2, 3, 4, 8, 6, 7, 5]
    assert board.empty_index == 5


def test_move_right_into_blank() -> None:
    board = Board.from_cells(3, list(range(9)), started=False)
    assert board.try_move(7) is MoveResult.APPLIED
    assert board.cells == [0, 1, 2, 3, 4, 5, 6, 8, 7]
    assert board.empty_index == 7
    # The blank itself is never movable.
    assert board.try_move(7) is MoveResult.REJECTED


def test_locked_board_rejects_adjacent_tile() -> None:
    board = Board.create(3)
    assert board.try_move(5) is MoveResult.REJECTED
    assert board.cells == list(range(9))


@pytest.mark.parametrize("size", [2, 3, 4, 5])
def test_only_neighbours_of_blank_can_move(size: int) -> None:
    count = size * size
    for empty in range(count):
        for index in range(count):
            board = _board_with_empty_at(size, empty)
            before = board.cells[:]
            result = board.try_move(index)

            assert result.applied == _adjacent(size, index, empty), (
                f"size={size} empty={empty} index={index}"
            )
            if result.applied:
                assert board.empty_index == index
                assert board.cells[empty] == before[index]
            else:
                assert board.cells == before
                assert board.empty_index == empty
            _assert_invariants(board)


def test_no_wrap_across_rows() -> None:
    # Blank at the start of row 1; slot 2 ends row 0 and must not slide right.
    board = _board_with_empty_at(3, 3)
    assert board.try_move(2) is MoveResult.REJECTED
    # Blank at the end of row 0; slot 3 starts row 1 and must not slide left.
    board = _board_with_empty_at(3, 2)
    assert board.try_move(3) is MoveResult.REJECTED


@pytest.mark.parametrize("index", [-3, -1, 9, 12, 100])
def test_out_of_range_index_is_rejected(index: int) -> None:
    board = _board_with_empty_at(3, 2)
    assert board.try_move(index) is MoveResult.REJECTED
    assert board.empty_index == 2


def test_direction_of_neighbours() -> None:
    board = _board_with_empty_at(3, 4)
    assert board.direction_of(1) is Direction.DOWN
    assert board.direction_of(7) is Direction.UP
    assert board.direction_of(3) is Direction.RIGHT
    assert board.direction_of(5) is Direction.LEFT
    assert board.direction_of(0) is None


def test_index_for_directions() -> None:
    board = _board_with_empty_at(3, 4)
    assert board.index_for(Direction.UP) == 7
    assert board.index_for(Direction.DOWN) == 1
    assert board.index_for(Direction.LEFT) == 5
    assert board.index_for(Direction.RIGHT) == 3

    corner = Board.from_cells(3, list(range(9)), started=False)
    assert corner.index_for(Direction.UP) is None
    assert corner.index_for(Direction.LEFT) is None
    assert corner.index_for(Direction.DOWN) == 5
    assert corner.index_for(Direction.RIGHT) == 7


# -- win detection ------------------------------------------------------------


def test_started_identity_is_solved() -> None:
    board = Board.from_cells(3, list(range(9)))
    assert board.is_solved()


@pytest.mark.parametrize("a,b", [(0, 1), (3, 4), (4, 7), (7, 8), (2, 5)])
def test_one_swapped_pair_is_not_solved(a: int, b: int) -> None:
    cells = list(range(9))
    cells[a], cells[b] = cells[b], cells[a]
    board = Board.from_cells(3, cells)
    assert not board.is_solved()


def test_solving_move_locks_board() -> None:
    board = Board.from_cells(3, [0, 1, 2, 3, 4, 5, 6, 8, 7])
    result = board.try_move(8)
    assert result is MoveResult.SOLVED
    assert result.applied and result.solved
    assert board.locked
    assert board.is_solved()
    assert board.try_move(7) is MoveResult.REJECTED


def test_identity_before_start_is_only_applied() -> None:
    board = Board.from_cells(3, [0, 1, 2, 3, 4, 5, 6, 8, 7], started=False)
    assert board.try_move(8) is MoveResult.APPLIED
    assert not board.locked
    assert not board.is_solved()


def test_move_result_flags() -> None:
    assert not MoveResult.REJECTED.applied
    assert MoveResult.APPLIED.applied and not MoveResult.APPLIED.solved
    assert MoveResult.SOLVED.applied and MoveResult.SOLVED.solved


def test_copy_is_independent() -> None:
    board = Board.from_cells(2, [0, 1, 3, 2])
    clone = board.copy()
    clone.try_move(3)
    assert board.cells == [0, 1, 3, 2]
    assert clone.cells != board.cells


def test_rows_split_cells() -> None:
    board = Board.create(3)
    assert board.rows() == [[0, 1, 2], [3, 4, 5], [6, 7, 8]]
