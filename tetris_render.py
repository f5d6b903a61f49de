"""
Terminal rendering for the Tetris project.

Frames are built as rows of (text, style) spans so layout can be checked
without a terminal; TerminalRenderer paints them with curses colour pairs.

- Box-drawing frame: playfield on the left, next piece + stats on the right.
- The next-piece preview is cached and rebuilt only when the type changes.
- Start, pause and game-over screens share one boxed layout helper.
"""
from __future__ import annotations
import curses
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple, Union

from tetris_config import BLOCK_SIZE, EMPTY, GAME_OVER_MARK, GHOST
from tetris_game import GameState
from tetris_layout import CELL_CHARS, PREVIEW_ROWS, Dims, compute_dims
from tetris_piece import PieceType, cell_occupied

BLOCK = "█" * CELL_CHARS
GHOST_CELL = "[]"
BLANK_CELL = " " * CELL_CHARS
TITLE = "TETRIS GAME"
CONTROLS = ("Controls: A/D (Move)  W (Rotate)  S (Soft Drop)  SPACE (Hard Drop)"
            "  G (Ghost)  P (Pause)  Q (Quit)")

Span = Tuple[str, Optional[str]]
Row = List[Span]
# A screen line is centred text, or a (label, value) pair spread across the box
ScreenLine = Union[str, Tuple[str, str]]

# curses colour per cell symbol; L falls back to yellow without 256 colours
COLORS: Dict[str, int] = {
    "I": curses.COLOR_CYAN,
    "O": curses.COLOR_YELLOW,
    "T": curses.COLOR_MAGENTA,
    "S": curses.COLOR_GREEN,
    "Z": curses.COLOR_RED,
    "J": curses.COLOR_BLUE,
    "L": 208,
    GAME_OVER_MARK: curses.COLOR_WHITE,
}


def ordinal(n: int) -> str:
    suffix = {1: "st", 2: "nd", 3: "rd"}.get(n, "th")
    return f"{n}{suffix}"


@dataclass
class PreviewCache:
    next_type: Optional[PieceType] = None
    rows: List[Row] = field(default_factory=list)

    def get(self, t: PieceType) -> List[Row]:
        if t != self.next_type:
            self.next_type = t
            self.rows = preview_rows(t)
        return self.rows


def preview_rows(t: PieceType) -> List[Row]:
    """Rotation-0 template as 4 rows of 2-char cells."""
    rows = []
    for r in range(BLOCK_SIZE):
        row: Row = []
        for c in range(BLOCK_SIZE):
            sym = cell_occupied(t, 0, r, c)
            row.append((BLOCK, sym) if sym != EMPTY else (BLANK_CELL, None))
        rows.append(row)
    return rows


def _cell_span(cell: str) -> Span:
    if cell == GHOST:
        return GHOST_CELL, None
    if cell != EMPTY:
        return BLOCK, cell
    return BLANK_CELL, None


def _padded(text: str, width: int) -> str:
    return text[:width].ljust(width)


def _panel_span(y: int, state: GameState, preview: List[Row], width: int) -> Row:
    if 1 <= y <= PREVIEW_ROWS:
        return [("  ", None)] + preview[y - 1] + [(" " * (width - 2 - BLOCK_SIZE * CELL_CHARS), None)]
    text = {
        6: "─" * width,
        7: " SCORE:",
        8: f" {state.score}",
        9: " LEVEL:",
        10: f" {state.level}",
        11: " LINES:",
        12: f" {state.lines_cleared}",
    }.get(y, "")
    return [(_padded(text, width), None)]


def frame_rows(grid: Sequence[Sequence[str]], state: GameState, preview: List[Row],
               dims: Optional[Dims] = None) -> List[Row]:
    """Whole play screen: bordered board, side panel and controls line."""
    d = dims or compute_dims(len(grid[0]), len(grid))
    bw, pw = d.board_w, d.panel_w
    rows: List[Row] = [
        [("╔" + "═" * bw + "╦" + "═" * pw + "╗", None)],
        [("║" + TITLE.center(bw) + "║" + _padded("  NEXT PIECE", pw) + "║", None)],
        [("╠" + "═" * bw + "╬" + "═" * pw + "╣", None)],
    ]
    for y, line in enumerate(grid):
        row: Row = [("║", None)]
        row.extend(_cell_span(cell) for cell in line)
        row.append(("║", None))
        row.extend(_panel_span(y, state, preview, pw))
        row.append(("║", None))
        rows.append(row)
    rows.append([("╚" + "═" * bw + "╩" + "═" * pw + "╝", None)])
    rows.append([(CONTROLS, None)])
    return rows


def boxed(lines: Sequence[ScreenLine], width: int) -> List[str]:
    out = ["╔" + "═" * width + "╗"]
    for line in lines:
        if isinstance(line, tuple):
            label, value = line
            gap = max(1, width - len(label) - len(value) - 2)
            out.append("║ " + label + " " * gap + value + " ║")
        else:
            out.append("║" + line.center(width) + "║")
    out.append("╚" + "═" * width + "╝")
    return out


def start_screen(width: int) -> List[str]:
    return boxed(["", TITLE, "", "Press any key to start...", ""], width)


def pause_screen(state: GameState, width: int) -> List[str]:
    return boxed(
        ["", "", "", "GAME PAUSED", "",
         f"Score: {state.score}", f"Level: {state.level}", f"Lines: {state.lines_cleared}",
         "", "P - Resume", "Q - Quit", "", "", ""],
        width,
    )


def game_over_screen(state: GameState, rank: int, width: int) -> List[str]:
    lines: List[ScreenLine] = [
        "", "GAME OVER", "",
        ("Final Score:", str(state.score)),
        ("Level:", str(state.level)),
        ("Lines Cleared:", str(state.lines_cleared)),
        "", f"Your Rank: {ordinal(rank)}", "",
    ]
    for i, score in enumerate(state.high_scores, start=1):
        value = str(score)
        if state.score > 0 and score == state.score:
            value += " NEW!"
        lines.append((ordinal(i), value))
    lines += ["", "Press R to Restart or Q to Quit", ""]
    return boxed(lines, width)


class TerminalRenderer:
    """Paints frames and screens onto a curses window."""

    def __init__(self, stdscr, dims: Dims):
        self.stdscr = stdscr
        self.dims = dims
        self.preview = PreviewCache()
        self.pairs: Dict[str, int] = {}
        self._init_colors()

    @property
    def screen_width(self) -> int:
        return self.dims.board_w + self.dims.panel_w

    def _init_colors(self):
        if not curses.has_colors():
            return
        curses.start_color()
        curses.use_default_colors()
        for i, (sym, color) in enumerate(COLORS.items(), start=1):
            if color >= curses.COLORS:
                color = curses.COLOR_YELLOW
            curses.init_pair(i, color, -1)
            self.pairs[sym] = curses.color_pair(i)

    def _put(self, y: int, x: int, text: str, attr: int = 0):
        try:
            self.stdscr.addstr(y, x, text, attr)
        except curses.error:
            # Terminal too small; the clipped part is simply not shown
            pass

    def draw(self, grid, state: GameState, next_type: PieceType):
        self.stdscr.erase()
        for y, row in enumerate(frame_rows(grid, state, self.preview.get(next_type), self.dims)):
            x = 0
            for text, style in row:
                self._put(y, x, text, self.pairs.get(style, 0) if style else 0)
                x += len(text)
        self.stdscr.refresh()

    def draw_lines(self, lines: Sequence[str]):
        self.stdscr.erase()
        for y, line in enumerate(lines):
            self._put(y, 0, line)
        self.stdscr.refresh()

    def draw_start(self):
        self.draw_lines(start_screen(self.screen_width))

    def draw_pause(self, state: GameState):
        self.draw_lines(pause_screen(state, self.screen_width))

    def draw_game_over(self, state: GameState, rank: int):
        self.draw_lines(game_over_screen(state, rank, self.screen_width))
