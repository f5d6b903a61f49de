# tetris_layout.py
from dataclasses import dataclass

from tetris_config import BOARD_HEIGHT, BOARD_WIDTH

CELL_CHARS = 2
PANEL_W = 13
PREVIEW_ROWS = 4


@dataclass
class Dims:
    """Character geometry of the play screen."""
    cols: int
    rows: int
    board_w: int
    panel_w: int
    total_w: int
    total_h: int


def compute_dims(cols: int = BOARD_WIDTH, rows: int = BOARD_HEIGHT) -> Dims:
    board_w = cols * CELL_CHARS
    panel_w = PANEL_W

    # Borders: left, separator, right / top, title, divider, bottom; plus controls line
    total_w = 1 + board_w + 1 + panel_w + 1
    total_h = 3 + rows + 1 + 1

    return Dims(
        cols=cols, rows=rows,
        board_w=board_w, panel_w=panel_w,
        total_w=total_w, total_h=total_h,
    )
