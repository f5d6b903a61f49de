BOARD_WIDTH, BOARD_HEIGHT = 15, 20
BLOCK_SIZE = 4

# Cell symbols
EMPTY = " "
GHOST = "."
GAME_OVER_MARK = "#"

# Timing: seconds per nominal drop, split into DROP_INTERVAL_TICKS logic steps
DROP_INTERVAL_TICKS = 5
DROP_SPEED_TIERS = (
    (3, 0.50),
    (6, 0.30),
    (9, 0.15),
)
DROP_SPEED_FASTEST = 0.08

# Scoring & level progression
LINES_PER_LEVEL = 10
SCORE_TABLE = {1: 100, 2: 300, 3: 500, 4: 800}
NES_SCORE_TABLE = {1: 40, 2: 100, 3: 300, 4: 1200}
SCORE_TABLES = {"classic": SCORE_TABLE, "nes": NES_SCORE_TABLE}

WALL_KICKS = (0, -1, 1, -2, 2, -3, 3)
MAX_HIGH_SCORES = 10

CONFIG = {
    "SEED": None,
    "GHOST": True,
    "SOUND": True,
    "SOUND_DIR": "sounds",
    "SCORING": "classic",
    "HIGH_SCORE_FILE": "highscores.txt",
    "ANIM_DELAY_S": 0.015,
    "GAME_OVER_PAUSE_S": 0.8,
    "LEVEL_UP_DELAY_S": 1.0,
    "PAUSE_POLL_S": 0.1,
    "KEY_WAIT_POLL_S": 0.05,
}


def score_table():
    return SCORE_TABLES.get(CONFIG["SCORING"], SCORE_TABLE)
