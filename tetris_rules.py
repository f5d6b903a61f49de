"""Collision & placement: legality, wall kicks, ghost, merge/erase"""
from typing import Iterable, List, Optional, Tuple

from tetris_board import Board
from tetris_config import EMPTY, GHOST, WALL_KICKS
from tetris_piece import Piece


def is_legal(board: Board, piece: Piece) -> bool:
    """True if every block is between the walls, above the floor and on a
    free cell. Blocks above row 0 are allowed."""
    for x, y in piece.cells():
        if x < 0 or x >= board.width or y >= board.height:
            return False
        if y >= 0 and not board.is_free(x, y):
            return False
    return True


def can_spawn(board: Board, piece: Piece) -> bool:
    return is_legal(board, piece)


def can_move(board: Board, piece: Piece, dx: int, dy: int, rotation: int) -> bool:
    return is_legal(board, piece.moved(dx, dy, rotation))


def try_rotate(board: Board, piece: Piece) -> Optional[Piece]:
    """Rotate clockwise, trying each horizontal kick in order; None if all fail."""
    new = (piece.rotation + 1) % 4
    for dx in WALL_KICKS:
        if can_move(board, piece, dx, 0, new):
            return piece.moved(dx, 0, new)
    return None


def ghost_of(board: Board, piece: Piece) -> Piece:
    """Where the piece would land if hard-dropped."""
    ghost = piece
    while is_legal(board, ghost.moved(dy=1)):
        ghost = ghost.moved(dy=1)
    return ghost


def _visible(board: Board, piece: Piece) -> List[Tuple[int, int]]:
    return [(x, y) for x, y in piece.cells() if board.inside(x, y)]


def merge(board: Board, piece: Piece) -> None:
    """Write the piece's blocks into the board (no collision check)."""
    for pos in _visible(board, piece):
        board[pos] = piece.symbol


def erase(board: Board, piece: Piece) -> None:
    for pos in _visible(board, piece):
        board[pos] = EMPTY


def merge_safe(board: Board, piece: Piece) -> None:
    """Like merge, but only fills cells that are currently empty."""
    for pos in _visible(board, piece):
        if board[pos] == EMPTY:
            board[pos] = piece.symbol


def place_ghost(board: Board, ghost: Piece) -> List[Tuple[int, int]]:
    """Mark the ghost on empty cells; returns the marked positions."""
    marked = []
    for pos in _visible(board, ghost):
        if board[pos] == EMPTY:
            board[pos] = GHOST
            marked.append(pos)
    return marked


def clear_ghost(board: Board, positions: Iterable[Tuple[int, int]]) -> None:
    for pos in positions:
        if board.inside(*pos) and board[pos] == GHOST:
            board[pos] = EMPTY
