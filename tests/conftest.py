import itertools

import pytest

from tetris_board import Board
from tetris_game import TetrisGame
from tetris_piece import PieceType


class FixedRandom:
    """Hands out piece types from a fixed, repeating list."""

    def __init__(self, *types):
        self._it = itertools.cycle(types or [PieceType.O])

    def next_piece(self):
        return next(self._it)


class RecordingSound:
    def __init__(self):
        self.events = []

    def play(self, event):
        self.events.append(event)


def fill_row(board, y, symbol="Z", skip=()):
    for x in range(board.width):
        if x not in skip:
            board[x, y] = symbol


@pytest.fixture
def sound():
    return RecordingSound()


@pytest.fixture
def make_game(sound):
    def _make(width=10, height=20, types=(PieceType.O,), **kw):
        game = TetrisGame(board=Board(width, height), rng=FixedRandom(*types), sound=sound, **kw)
        game.start()
        return game
    return _make
