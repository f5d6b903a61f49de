"""Board grid: cells, full-row detection, line clears"""
from typing import List, Tuple

from tetris_config import BOARD_HEIGHT, BOARD_WIDTH, EMPTY, GHOST

Grid = List[List[str]]


class Board:
    """Playfield of width x height single-character cells.

    A cell is EMPTY, a locked piece symbol, the GHOST marker or the
    game-over animation marker.
    """

    def __init__(self, width: int = BOARD_WIDTH, height: int = BOARD_HEIGHT):
        self.width = width
        self.height = height
        self.grid: Grid = [[EMPTY] * width for _ in range(height)]

    def clear(self) -> None:
        for row in self.grid:
            row[:] = [EMPTY] * self.width

    def inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def __getitem__(self, pos: Tuple[int, int]) -> str:
        x, y = pos
        return self.grid[y][x]

    def __setitem__(self, pos: Tuple[int, int], value: str) -> None:
        x, y = pos
        self.grid[y][x] = value

    def is_free(self, x: int, y: int) -> bool:
        """Ghost markers never block."""
        return self.grid[y][x] in (EMPTY, GHOST)

    def is_row_full(self, row: int) -> bool:
        return all(cell != EMPTY for cell in self.grid[row])

    def clear_full_lines(self) -> int:
        """Remove full rows, drop the rest down and return how many went."""
        kept = [row for y, row in enumerate(self.grid) if not self.is_row_full(y)]
        cleared = self.height - len(kept)
        if cleared:
            self.grid[:] = [[EMPTY] * self.width for _ in range(cleared)] + kept
        return cleared
