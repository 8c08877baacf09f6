"""Main entry point for Animal Memory."""

import argparse
import logging
import sys
import threading
from datetime import datetime
from pathlib import Path

from animal_memory.config import Config, load_config
from animal_memory.game.controller import ControllerState, RoundController, RoundOutcome
from animal_memory.game.engine import Resolution
from animal_memory.leaderboard import LeaderboardError, create_leaderboard
from animal_memory.logging import RoundLogger
from animal_memory.models.card import DealError
from animal_memory.utils.logger import BoardDisplay, setup_logging

logger = logging.getLogger(__name__)

# Extra seconds to wait for the resolution timer before resolving directly
RESOLVE_GRACE = 5.0


def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return number


def positive_float(value: str) -> float:
    number = float(value)
    if not number > 0:
        raise argparse.ArgumentTypeError(f"must be greater than 0, got {value}")
    return number


def generate_log_filename(log_dir: str, player_name: str) -> str:
    """Generate round log filename with timestamp and player name.

    Format: {ISO timestamp}_{player}.jsonl
    """
    timestamp = datetime.now().strftime("%Y%m%dT%H%M%S")
    safe_name = "".join(ch if ch.isalnum() else "_" for ch in player_name) or "player"
    return str(Path(log_dir) / f"{timestamp}_{safe_name}.jsonl")


def read_card_id(num_cards: int) -> int | None:
    """Prompt until the player enters a card number.

    Returns:
        Card id, or None if the player quits
    """
    while True:
        try:
            raw = input(f"Card (0-{num_cards - 1}, q to quit): ").strip()
        except EOFError:
            return None
        if raw.lower() in ("q", "quit"):
            return None
        if raw.isdigit() and int(raw) < num_cards:
            return int(raw)
        print("  -> Enter a card number")


def run_round(
    controller: RoundController,
    display: BoardDisplay,
    submit_timeout: float,
) -> RoundOutcome | None:
    """Play one round in the terminal.

    Returns:
        Outcome, or None if the player quit
    """
    resolved = threading.Event()
    completed = threading.Event()

    def on_resolution(resolution: Resolution) -> None:
        try:
            display.print_resolution(resolution)
        finally:
            resolved.set()

    def on_complete(outcome: RoundOutcome) -> None:
        completed.set()

    controller.set_callbacks(on_resolution=on_resolution, on_complete=on_complete)
    round_ = controller.start_round()

    while controller.state != ControllerState.COMPLETE:
        display.print_board(round_)
        card_id = read_card_id(len(round_.cards))
        if card_id is None:
            controller.cancel()
            return None

        completes_pair = len(round_.pending_reveals) == 1
        resolved.clear()
        if not controller.select(card_id):
            print("  -> That card cannot be revealed")
            continue

        if completes_pair:
            display.print_board(round_)
            if not resolved.wait(timeout=controller.config.timing.mismatch_delay + RESOLVE_GRACE):
                logger.warning("Resolution timer did not fire, resolving now")
                controller.resolve_now()

    display.print_board(round_)
    completed.wait(timeout=submit_timeout)
    return controller.outcome


def cmd_play(args: argparse.Namespace, config: Config) -> int:
    if args.pairs is not None:
        config.game.num_pairs = args.pairs
    if args.seed is not None:
        config.game.seed = args.seed
    if args.delay is not None:
        config.timing.mismatch_delay = args.delay

    round_log_enabled = args.round_log is not None or config.logging.round_log.enabled
    round_log_dir = str(args.round_log) if args.round_log else config.logging.round_log.output_path

    display = BoardDisplay()
    leaderboard = create_leaderboard(config.leaderboard)

    log_path = None
    if round_log_enabled:
        log_path = generate_log_filename(round_log_dir, args.name)
        config.logging.round_log.enabled = True
        print(f"Round log: {log_path}")

    with RoundLogger(config.logging.round_log, output_path=log_path) as round_logger:
        controller = RoundController(
            leaderboard=leaderboard,
            config=config,
            player_name=args.name,
            round_logger=round_logger,
        )
        try:
            outcome = run_round(
                controller, display, submit_timeout=config.leaderboard.timeout + 1
            )
        except DealError as e:
            print(f"Cannot deal round: {e}")
            return 1
        finally:
            controller.cancel()

    if outcome is None:
        print("\nRound abandoned")
        return 1

    display.print_outcome(outcome)
    return 0


def cmd_leaderboard(args: argparse.Namespace, config: Config) -> int:
    top_n = args.top or config.leaderboard.top_n
    leaderboard = create_leaderboard(config.leaderboard)
    try:
        entries = leaderboard.fetch_top(top_n)
    except LeaderboardError as e:
        print(f"Could not load leaderboard: {e}")
        return 1

    BoardDisplay().print_leaderboard(entries)
    return 0


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "-c",
        "--config",
        type=Path,
        help="Path to config file (YAML)",
    )
    common.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output",
    )

    parser = argparse.ArgumentParser(description="Animal memory matching game")
    subparsers = parser.add_subparsers(dest="command", required=True)

    play = subparsers.add_parser("play", parents=[common], help="Play a round")
    play.add_argument("-n", "--name", default="Player", help="Player name for the leaderboard")
    play.add_argument("--pairs", type=positive_int, help="Number of animal pairs (overrides config)")
    play.add_argument("--seed", type=int, help="Shuffle seed (overrides config)")
    play.add_argument(
        "--delay",
        type=positive_float,
        help="Seconds both cards stay visible before judging (overrides config)",
    )
    play.add_argument(
        "--round-log",
        type=Path,
        help="Directory for round log files (filename auto-generated)",
    )

    board = subparsers.add_parser("leaderboard", parents=[common], help="Show top scores")
    board.add_argument("--top", type=positive_int, help="Number of entries (overrides config)")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Returns:
        Exit code (0 for success)
    """
    args = build_parser().parse_args(argv)

    config = load_config(args.config)
    if args.verbose:
        config.logging.level = "DEBUG"
    setup_logging(config.logging.level)

    try:
        if args.command == "play":
            return cmd_play(args, config)
        return cmd_leaderboard(args, config)
    except KeyboardInterrupt:
        print("\nInterrupted by user")
        return 1
    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
