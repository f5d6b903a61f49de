"""Game state machine: spawn, gravity, lock, line clears, scoring"""
import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

from tetris_board import Board, Grid
from tetris_config import (
    DROP_INTERVAL_TICKS, DROP_SPEED_FASTEST, DROP_SPEED_TIERS, EMPTY,
    GAME_OVER_MARK, LINES_PER_LEVEL, SCORE_TABLE,
)
from tetris_input import Action
from tetris_piece import Piece, PieceType
from tetris_rng import PieceRandom
from tetris_rules import (
    can_move, can_spawn, clear_ghost, erase, ghost_of, merge, merge_safe,
    place_ghost, try_rotate,
)
from tetris_scores import HighScoreStore

log = logging.getLogger(__name__)


@dataclass
class GameState:
    running: bool = True
    paused: bool = False
    quit_by_user: bool = False
    ghost_enabled: bool = True
    score: int = 0
    level: int = 1
    lines_cleared: int = 0
    high_scores: List[int] = field(default_factory=list)


class NullSound:
    def play(self, event: str) -> None:
        pass


def drop_interval(level: int) -> float:
    """Seconds per nominal one-row drop at this level."""
    for max_level, seconds in DROP_SPEED_TIERS:
        if level <= max_level:
            return seconds
    return DROP_SPEED_FASTEST


def level_for(lines: int) -> int:
    return 1 + lines // LINES_PER_LEVEL


class TetrisGame:
    """Owns the board, the falling piece and the counters.

    Every mutation goes through this object; the renderer only reads the
    grid handed to it by `showing_current`.
    """

    def __init__(self, board: Optional[Board] = None, rng: Optional[PieceRandom] = None,
                 sound=None, ghost: bool = True, score_table: Optional[Dict[int, int]] = None):
        self.board = board if board is not None else Board()
        self.rng = rng if rng is not None else PieceRandom()
        self.sound = sound if sound is not None else NullSound()
        self.score_table = score_table or SCORE_TABLE
        self.state = GameState(ghost_enabled=ghost)
        self.current: Optional[Piece] = None
        self.next_type: PieceType = self.rng.next_piece()
        self.drop_counter = 0
        self.ghost_cells: List[Tuple[int, int]] = []
        self.needs_redraw = True

    # ---------- lifecycle ----------
    def start(self) -> None:
        self.drop_counter = 0
        self.spawn()
        self.needs_redraw = True

    def reset(self) -> None:
        """Fresh board and counters; the ghost setting carries over."""
        self.state = GameState(ghost_enabled=self.state.ghost_enabled)
        self.board.clear()
        self.ghost_cells = []
        self.current = None
        self.next_type = self.rng.next_piece()
        self.drop_counter = 0
        self.needs_redraw = True

    @property
    def drop_interval(self) -> float:
        return drop_interval(self.state.level)

    @property
    def tick_delay(self) -> float:
        return self.drop_interval / DROP_INTERVAL_TICKS

    def spawn(self) -> bool:
        """Bring in the announced next piece; a blocked spawn ends the game."""
        piece = Piece.spawn(self.next_type, self.board.width)
        self.current = piece
        if not can_spawn(self.board, piece):
            self.state.running = False
            log.info("spawn blocked, game over at score %d", self.state.score)
            return False
        self.next_type = self.rng.next_piece()
        return True

    # ---------- movement ----------
    def move(self, dx: int) -> bool:
        if not can_move(self.board, self.current, dx, 0, self.current.rotation):
            return False
        self.current = self.current.moved(dx=dx)
        return True

    def rotate(self) -> bool:
        rotated = try_rotate(self.board, self.current)
        if rotated is None:
            return False
        self.current = rotated
        return True

    def _step_down(self) -> bool:
        if not can_move(self.board, self.current, 0, 1, self.current.rotation):
            return False
        self.current = self.current.moved(dy=1)
        return True

    def _land(self, mute: bool = False) -> None:
        # A piece that never fully entered the field can't lock
        if self.current.y < 0:
            self.state.running = False
            log.info("piece stuck above the field, game over at score %d", self.state.score)
            return
        self.lock(mute=mute)

    def soft_drop(self) -> None:
        if not self._step_down():
            self._land(mute=True)
            self.drop_counter = 0

    def hard_drop(self) -> None:
        while self._step_down():
            pass
        self._land(mute=True)
        self.drop_counter = 0

    def gravity_tick(self) -> bool:
        """One logic sub-step; returns True when a drop step was taken."""
        if not self.state.running or self.state.paused:
            return False
        self.drop_counter += 1
        if self.drop_counter < DROP_INTERVAL_TICKS:
            return False
        self.drop_counter = 0
        if not self._step_down():
            self._land()
        self.needs_redraw = True
        return True

    def lock(self, mute: bool = False) -> int:
        """Commit the piece, clear lines, score, then spawn the next piece."""
        self.clear_ghost()
        merge(self.board, self.current)
        lines = self.board.clear_full_lines()
        st = self.state
        if lines:
            self.sound.play("tetris-clear" if lines == 4 else "line-clear")
            st.lines_cleared += lines
            st.score += self.score_table[lines] * st.level
            old_level = st.level
            st.level = level_for(st.lines_cleared)
            if st.level > old_level:
                log.info("level up: %d", st.level)
                self.sound.play("level-up")
        elif not mute:
            self.sound.play("lock")
        self.spawn()
        return lines

    # ---------- input ----------
    def quit(self) -> None:
        self.state.running = False
        self.state.quit_by_user = True
        self.sound.play("background-stop")

    def handle(self, action: Action) -> None:
        if action is Action.NONE:
            return
        st = self.state
        if action is Action.PAUSE:
            st.paused = not st.paused
        elif action is Action.QUIT:
            self.quit()
        elif st.paused:
            return
        elif action is Action.GHOST:
            st.ghost_enabled = not st.ghost_enabled
        elif action is Action.LEFT:
            self.move(-1)
        elif action is Action.RIGHT:
            self.move(1)
        elif action is Action.ROTATE:
            self.rotate()
        elif action is Action.SOFT_DROP:
            self.sound.play("soft-drop")
            self.soft_drop()
        elif action is Action.HARD_DROP:
            self.sound.play("hard-drop")
            self.hard_drop()
        self.needs_redraw = True

    # ---------- overlays ----------
    def clear_ghost(self) -> None:
        clear_ghost(self.board, self.ghost_cells)
        self.ghost_cells = []

    def refresh_ghost(self) -> None:
        self.clear_ghost()
        if not self.state.ghost_enabled or not self.state.running:
            return
        ghost = ghost_of(self.board, self.current)
        if ghost.y != self.current.y:
            self.ghost_cells = place_ghost(self.board, ghost)

    @contextmanager
    def showing_current(self) -> Iterator[Grid]:
        """Board grid with the falling piece drawn in, removed on exit."""
        merge(self.board, self.current)
        try:
            yield self.board.grid
        finally:
            erase(self.board, self.current)

    # ---------- game over ----------
    def show_final_piece(self) -> None:
        """Draw the losing piece without covering the blocks it hit."""
        self.clear_ghost()
        if self.current is not None:
            merge_safe(self.board, self.current)

    def game_over_frames(self) -> Iterator[Grid]:
        """Mark filled cells bottom-up one at a time, yielding after each."""
        board = self.board
        for y in range(board.height - 1, -1, -1):
            for x in range(board.width):
                if board[x, y] != EMPTY:
                    board[x, y] = GAME_OVER_MARK
                    yield board.grid

    def load_high_scores(self, store: HighScoreStore) -> None:
        self.state.high_scores = store.load()

    def record_score(self, store: HighScoreStore) -> int:
        ledger, rank = store.record(self.state.score)
        self.state.high_scores = ledger
        log.info("game over: score %d, rank %d", self.state.score, rank)
        return rank
