import argparse
import curses
import logging
import time

from tetris_board import Board
from tetris_config import BOARD_HEIGHT, BOARD_WIDTH, CONFIG, SCORE_TABLES, score_table
from tetris_game import TetrisGame
from tetris_input import KeyboardInput
from tetris_layout import compute_dims
from tetris_render import TerminalRenderer
from tetris_rng import PieceRandom
from tetris_scores import HighScoreStore
from tetris_sound import SoundTrigger

log = logging.getLogger("tetris")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Terminal Tetris")
    parser.add_argument("--seed", type=int, default=CONFIG["SEED"], help="seed for the piece randomizer")
    parser.add_argument("--no-ghost", action="store_true", help="start with the ghost piece hidden")
    parser.add_argument("--mute", action="store_true", help="disable music and sound effects")
    parser.add_argument("--sound-dir", default=CONFIG["SOUND_DIR"], help="directory holding the .wav files")
    parser.add_argument("--high-scores", default=CONFIG["HIGH_SCORE_FILE"], help="high score file")
    parser.add_argument("--scoring", choices=sorted(SCORE_TABLES), default=CONFIG["SCORING"],
                        help="line clear points table")
    parser.add_argument("--log-file", help="write a debug log here")
    return parser.parse_args(argv)


def configure(args):
    CONFIG["SEED"] = args.seed
    CONFIG["GHOST"] = not args.no_ghost
    CONFIG["SOUND"] = not args.mute
    CONFIG["SOUND_DIR"] = args.sound_dir
    CONFIG["HIGH_SCORE_FILE"] = args.high_scores
    CONFIG["SCORING"] = args.scoring
    if args.log_file:
        logging.basicConfig(filename=args.log_file, level=logging.INFO,
                            format="%(asctime)s %(name)s %(levelname)s %(message)s")
    else:
        # curses owns the screen; keep warnings off it
        logging.basicConfig(handlers=[logging.NullHandler()])


def play(game, keys, renderer):
    """Tick loop for one game: input, gravity, redraw, sleep."""
    st = game.state
    while st.running:
        was_paused = st.paused
        game.handle(keys.poll())

        if st.paused:
            if not was_paused:
                keys.flush()
                renderer.draw_pause(st)
            time.sleep(CONFIG["PAUSE_POLL_S"])
            continue

        if not st.running:
            break

        game.gravity_tick()

        if game.needs_redraw and st.running:
            game.refresh_ghost()
            with game.showing_current() as grid:
                renderer.draw(grid, st, game.next_type)
            game.needs_redraw = False

        time.sleep(game.tick_delay)


def animate_game_over(game, keys, renderer):
    game.show_final_piece()
    renderer.draw(game.board.grid, game.state, game.next_type)
    keys.flush()
    time.sleep(CONFIG["GAME_OVER_PAUSE_S"])
    keys.flush()

    for grid in game.game_over_frames():
        renderer.draw(grid, game.state, game.next_type)
        time.sleep(CONFIG["ANIM_DELAY_S"])

    keys.flush()
    time.sleep(0.5)
    keys.flush()


def play_round(game, keys, renderer):
    """One game from first tick to the end of the game-over animation."""
    play(game, keys, renderer)
    if not game.state.quit_by_user:
        animate_game_over(game, keys, renderer)


def run(stdscr, sound):
    curses.curs_set(0)
    dims = compute_dims(BOARD_WIDTH, BOARD_HEIGHT)
    h, w = stdscr.getmaxyx()
    if h < dims.total_h or w < dims.total_w:
        log.warning("terminal is %dx%d, game needs %dx%d", w, h, dims.total_w, dims.total_h)

    keys = KeyboardInput(stdscr)
    renderer = TerminalRenderer(stdscr, dims)
    store = HighScoreStore(CONFIG["HIGH_SCORE_FILE"])
    game = TetrisGame(
        board=Board(BOARD_WIDTH, BOARD_HEIGHT),
        rng=PieceRandom(CONFIG["SEED"]),
        sound=sound,
        ghost=CONFIG["GHOST"],
        score_table=score_table(),
    )

    while True:
        renderer.draw_start()
        keys.wait_key(CONFIG["KEY_WAIT_POLL_S"])

        # Restart background music cleanly
        sound.play("background-stop")
        time.sleep(0.1)
        sound.play("background-start")

        log.info("game started")
        game.load_high_scores(store)
        game.start()
        play_round(game, keys, renderer)

        sound.play("background-stop")
        rank = game.record_score(store)
        sound.play("game-over")
        renderer.draw_game_over(game.state, rank)

        choice = keys.wait_key(CONFIG["KEY_WAIT_POLL_S"])
        if choice != "r":
            break
        game.reset()


def main(argv=None):
    args = parse_args(argv)
    configure(args)
    sound = SoundTrigger(CONFIG["SOUND_DIR"], enabled=CONFIG["SOUND"],
                         level_up_delay=CONFIG["LEVEL_UP_DELAY_S"])
    try:
        curses.wrapper(run, sound)
    finally:
        sound.close()


if __name__ == '__main__':
    main()
