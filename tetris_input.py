"""Keyboard input: non-blocking curses polling mapped to game actions"""
import curses
import time
from enum import Enum
from typing import Callable, Optional

ESC = 27
NO_KEY = -1


class Action(Enum):
    NONE = "none"
    LEFT = "left"
    RIGHT = "right"
    ROTATE = "rotate"
    SOFT_DROP = "soft-drop"
    HARD_DROP = "hard-drop"
    PAUSE = "pause"
    GHOST = "ghost"
    QUIT = "quit"


KEYMAP = {
    "a": Action.LEFT,
    "d": Action.RIGHT,
    "w": Action.ROTATE,
    "s": Action.SOFT_DROP,
    " ": Action.HARD_DROP,
    "p": Action.PAUSE,
    "g": Action.GHOST,
    "q": Action.QUIT,
}

# Arrow keys fold onto their letter equivalents
ESCAPE_ARROWS = {"A": "w", "B": "s", "C": "d", "D": "a"}
CURSES_ARROWS = {
    curses.KEY_UP: "w",
    curses.KEY_DOWN: "s",
    curses.KEY_RIGHT: "d",
    curses.KEY_LEFT: "a",
}


def decode_key(read: Callable[[], int]) -> Optional[str]:
    """Read one key via `read` (curses getch semantics, -1 = nothing).

    Returns a lower-case letter key, or None for no key / unknown keys.
    Raw ESC [ A..D sequences are decoded as arrows.
    """
    ch = read()
    if ch == NO_KEY:
        return None
    if ch in CURSES_ARROWS:
        return CURSES_ARROWS[ch]
    if ch == ESC:
        bracket, code = read(), read()
        if bracket == ord("[") and 0 <= code < 256:
            return ESCAPE_ARROWS.get(chr(code))
        return None
    if 0 <= ch < 256:
        return chr(ch).lower()
    return None


def to_action(key: Optional[str]) -> Action:
    if key is None:
        return Action.NONE
    return KEYMAP.get(key, Action.NONE)


class KeyboardInput:
    def __init__(self, stdscr):
        self.stdscr = stdscr
        stdscr.nodelay(True)
        stdscr.keypad(True)

    def read_key(self) -> Optional[str]:
        return decode_key(self.stdscr.getch)

    def poll(self) -> Action:
        return to_action(self.read_key())

    def flush(self) -> None:
        curses.flushinp()

    def wait_key(self, poll_s: float) -> str:
        key = self.read_key()
        while key is None:
            time.sleep(poll_s)
            key = self.read_key()
        self.flush()
        return key
