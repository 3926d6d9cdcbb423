# Command-line launcher for the Snake Evolution window.
from __future__ import annotations

import argparse
import logging

try:
    from .game_logic import GAME_SPEED_MS, SnakeConfig, SnakeGame
    from .session import JsonHighScoreStore, SessionTracker
    from .snake_gui import run_player_gui
except ImportError:
    from game_logic import GAME_SPEED_MS, SnakeConfig, SnakeGame
    from session import JsonHighScoreStore, SessionTracker
    from snake_gui import run_player_gui


logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Play Snake Evolution")
    parser.add_argument(
        "--high-score-file",
        default=None,
        help="JSON file holding the high score (default: $SNAKE_HIGH_SCORE_FILE or ~/.snake_evolution/high_score.json)",
    )
    parser.add_argument("--reset-high-score", action="store_true", help="Clear the stored high score before playing")
    parser.add_argument("--speed-ms", type=int, default=GAME_SPEED_MS, help="Tick period in milliseconds")
    parser.add_argument("--seed", type=int, default=None, help="Seed for apple placement")
    parser.add_argument("--log-level", default="WARNING", choices=LOG_LEVELS, help="Logging verbosity")
    return parser


def config_from_args(args: argparse.Namespace) -> SnakeConfig:
    cfg = SnakeConfig(speed_ms=args.speed_ms)
    cfg.validate()
    return cfg


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        cfg = config_from_args(args)
    except ValueError as exc:
        parser.error(str(exc))

    store = JsonHighScoreStore(args.high_score_file)
    if args.reset_high_score:
        try:
            store.clear()
        except OSError as exc:
            parser.error(f"cannot reset high score in {store.path}: {exc}")
        logger.info("High score cleared in %s", store.path)

    tracker = SessionTracker(store)
    game = SnakeGame(cfg, seed=args.seed)
    tracker.attach(game)
    logger.info("High score %d loaded from %s", tracker.high_score, store.path)
    run_player_gui(game, tracker)


if __name__ == "__main__":
    main()
