"""Piece model: 4x4 templates and rotation lookup"""
from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Dict, List, Optional, Tuple

from tetris_config import BOARD_WIDTH, BLOCK_SIZE, EMPTY


class PieceType(IntEnum):
    I = 0
    O = 1
    T = 2
    S = 3
    Z = 4
    J = 5
    L = 6

    @property
    def symbol(self) -> str:
        return self.name


# Canonical templates, 1s are blocks
SHAPES: Dict[PieceType, List[List[int]]] = {
    PieceType.I: [[0,1,0,0],[0,1,0,0],[0,1,0,0],[0,1,0,0]],
    PieceType.O: [[0,0,0,0],[0,1,1,0],[0,1,1,0],[0,0,0,0]],
    PieceType.T: [[0,0,0,0],[0,1,0,0],[1,1,1,0],[0,0,0,0]],
    PieceType.S: [[0,0,0,0],[0,1,1,0],[1,1,0,0],[0,0,0,0]],
    PieceType.Z: [[0,0,0,0],[1,1,0,0],[0,1,1,0],[0,0,0,0]],
    PieceType.J: [[0,0,0,0],[1,0,0,0],[1,1,1,0],[0,0,0,0]],
    PieceType.L: [[0,0,0,0],[0,0,1,0],[1,1,1,0],[0,0,0,0]],
}

Template = Tuple[Tuple[str, ...], ...]


def source_coord(rotation: int, row: int, col: int) -> Tuple[int, int]:
    """Map a cell of the rotated frame back onto the canonical template.

    Each 90 degree clockwise step reads the canonical cell at (3-col, row).
    """
    r, c = row, col
    for _ in range(rotation % 4):
        r, c = BLOCK_SIZE - 1 - c, r
    return r, c


def _build_template(t: PieceType, rotation: int) -> Template:
    shape = SHAPES[t]
    rows = []
    for row in range(BLOCK_SIZE):
        cells = []
        for col in range(BLOCK_SIZE):
            r, c = source_coord(rotation, row, col)
            cells.append(t.symbol if shape[r][c] else EMPTY)
        rows.append(tuple(cells))
    return tuple(rows)


# [type][rotation] -> 4x4 symbols, built once at import
TEMPLATES: Dict[PieceType, Tuple[Template, ...]] = {
    t: tuple(_build_template(t, rot) for rot in range(4)) for t in PieceType
}

_CELLS: Dict[Tuple[PieceType, int], Tuple[Tuple[int, int], ...]] = {
    (t, rot): tuple(
        (row, col)
        for row in range(BLOCK_SIZE)
        for col in range(BLOCK_SIZE)
        if TEMPLATES[t][rot][row][col] != EMPTY
    )
    for t in PieceType for rot in range(4)
}


def cell_occupied(t: PieceType, rotation: int, row: int, col: int) -> str:
    """Return the piece symbol at (row, col) of the rotated template, or EMPTY."""
    return TEMPLATES[PieceType(t)][rotation % 4][row][col]


def occupied_cells(t: PieceType, rotation: int) -> Tuple[Tuple[int, int], ...]:
    """(row, col) of every filled template cell for this rotation."""
    return _CELLS[(PieceType(t), rotation % 4)]


@dataclass
class Piece:
    t: PieceType
    rotation: int
    x: int
    y: int

    @property
    def symbol(self) -> str:
        return self.t.symbol

    def cells(self) -> List[Tuple[int, int]]:
        """Absolute (x, y) board coordinates, including any above row 0."""
        return [(self.x + col, self.y + row) for row, col in occupied_cells(self.t, self.rotation)]

    def moved(self, dx: int = 0, dy: int = 0, rotation: Optional[int] = None) -> "Piece":
        rot = self.rotation if rotation is None else rotation % 4
        return replace(self, rotation=rot, x=self.x + dx, y=self.y + dy)

    @staticmethod
    def spawn(t: PieceType, width: int = BOARD_WIDTH) -> "Piece":
        # Template top row sits one row above the visible field
        return Piece(PieceType(t), 0, width // 2 - BLOCK_SIZE // 2, -1)
