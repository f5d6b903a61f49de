import pytest

from tetris_board import Board
from tetris_config import EMPTY, GHOST
from tetris_piece import Piece, PieceType
from tetris_rules import (
    can_move, can_spawn, clear_ghost, erase, ghost_of, is_legal, merge, merge_safe,
    place_ghost, try_rotate,
)

from conftest import fill_row


@pytest.mark.parametrize("t", list(PieceType))
@pytest.mark.parametrize("width", [10, 15])
def test_spawn_is_legal_on_empty_board(t, width):
    board = Board(width, 20)
    assert can_spawn(board, Piece.spawn(t, width))


def test_blocks_above_the_field_are_allowed():
    board = Board(10, 20)
    assert is_legal(board, Piece(PieceType.I, 0, 3, -3))


def test_walls_and_floor_block():
    board = Board(10, 20)
    # I at rotation 0 occupies template column 1
    assert is_legal(board, Piece(PieceType.I, 0, -1, 0))
    assert not is_legal(board, Piece(PieceType.I, 0, -2, 0))
    assert not is_legal(board, Piece(PieceType.I, 0, 9, 0))
    assert is_legal(board, Piece(PieceType.I, 0, 0, 16))
    assert not is_legal(board, Piece(PieceType.I, 0, 0, 17))


def test_locked_cells_block_and_ghost_cells_do_not():
    board = Board(10, 20)
    piece = Piece(PieceType.O, 0, 0, 0)  # cells (1,1) (2,1) (1,2) (2,2)
    board[1, 2] = GHOST
    assert is_legal(board, piece)
    board[2, 2] = "T"
    assert not is_legal(board, piece)


def test_can_move_probes_offset_and_rotation():
    board = Board(10, 20)
    piece = Piece(PieceType.I, 0, 3, 5)
    assert can_move(board, piece, -1, 0, 0)
    assert can_move(board, piece, 0, 0, 1)
    board[6, 6] = "Z"
    assert not can_move(board, piece, 0, 0, 1)
    assert piece == Piece(PieceType.I, 0, 3, 5)


def test_rotation_prefers_smallest_left_kick():
    board = Board(10, 20)
    piece = Piece(PieceType.I, 0, 3, 5)
    board[6, 6] = "Z"  # blocks the unshifted horizontal I at row 6
    rotated = try_rotate(board, piece)
    assert (rotated.x, rotated.y, rotated.rotation) == (2, 5, 1)


def test_rotation_tries_right_after_left():
    board = Board(10, 20)
    piece = Piece(PieceType.I, 0, 3, 5)
    board[3, 6] = "Z"  # blocks offsets 0 and -1
    rotated = try_rotate(board, piece)
    assert (rotated.x, rotated.rotation) == (4, 1)


def test_rotation_kicks_two_off_the_right_wall():
    board = Board(4, 20)
    piece = Piece(PieceType.I, 0, 2, 5)  # column 3, against the right wall
    rotated = try_rotate(board, piece)
    assert (rotated.x, rotated.rotation) == (0, 1)


def test_rotation_reaches_offset_three():
    board = Board(10, 20)
    piece = Piece(PieceType.I, 2, 3, 5)  # vertical in column 5
    # Rotation 3 is horizontal on row 7; keep columns 0..3 and the piece's own column open
    fill_row(board, 7, skip={0, 1, 2, 3, 5})
    assert is_legal(board, piece)
    rotated = try_rotate(board, piece)
    assert (rotated.x, rotated.y, rotated.rotation) == (0, 5, 3)


def test_rotation_rejected_in_narrow_well():
    board = Board(1, 20)
    piece = Piece(PieceType.I, 0, -1, 5)
    assert is_legal(board, piece)
    assert try_rotate(board, piece) is None


def test_ghost_lands_on_floor():
    board = Board(10, 20)
    ghost = ghost_of(board, Piece(PieceType.I, 0, 3, -1))
    assert (ghost.x, ghost.y, ghost.rotation) == (3, 16, 0)
    assert is_legal(board, ghost)
    assert not is_legal(board, ghost.moved(dy=1))


def test_ghost_lands_on_stack_and_ignores_ghost_marks():
    board = Board(10, 20)
    fill_row(board, 19)
    for x in range(10):
        board[x, 18] = GHOST
    ghost = ghost_of(board, Piece(PieceType.O, 0, 3, 0))
    # O occupies template rows 1-2, so bottom row 2 lands on row 18
    assert ghost.y == 16


def test_ghost_of_resting_piece_is_the_piece():
    board = Board(10, 20)
    fill_row(board, 19)
    piece = Piece(PieceType.O, 0, 3, 16)
    assert ghost_of(board, piece) == piece


def test_merge_and_erase_touch_only_piece_cells():
    board = Board(10, 20)
    board[0, 0] = "J"
    piece = Piece(PieceType.T, 0, 4, 4)
    merge(board, piece)
    assert sorted(pos for pos in ((x, y) for y in range(20) for x in range(10)) if board[pos] == "T") == \
        sorted(piece.cells())
    erase(board, piece)
    assert board[0, 0] == "J"
    assert all(board[pos] == EMPTY for pos in piece.cells())


def test_merge_skips_cells_above_field():
    board = Board(10, 20)
    piece = Piece(PieceType.I, 0, 3, -2)  # rows -2..1
    merge(board, piece)
    assert board[4, 0] == "I" and board[4, 1] == "I"
    assert board[4, 2] == EMPTY


def test_merge_safe_keeps_existing_blocks():
    board = Board(10, 20)
    board[2, 2] = "Z"
    piece = Piece(PieceType.O, 0, 0, 0)
    merge_safe(board, piece)
    assert board[2, 2] == "Z"
    assert board[1, 1] == board[2, 1] == board[1, 2] == "O"


def test_place_and_clear_ghost():
    board = Board(10, 20)
    board[2, 2] = "Z"
    marked = place_ghost(board, Piece(PieceType.O, 0, 0, 0))
    assert sorted(marked) == [(1, 1), (1, 2), (2, 1)]
    assert board[2, 2] == "Z"
    board[1, 1] = "T"  # overwritten by a real block since
    clear_ghost(board, marked)
    assert board[1, 1] == "T"
    assert board[2, 1] == EMPTY and board[1, 2] == EMPTY
