"""
Congklak CLI - Command-line interface for the engine.

Usage:
    congklak new                                  Print the initial board
    congklak move --board B --player P1 --pit N   Resolve one move
    congklak preview --pit N --seeds K            Landing pit of one pass
    congklak legal --board B --player P2          Playable houses
    congklak play                                 Hot-seat game in the terminal

Boards are 16 comma-separated seed counts.
"""

import argparse
import json
import sys

from .logging_utils import configure_logging


def parse_board(text):
    """argparse type for a comma-separated board."""
    try:
        return [int(part) for part in text.split(",")]
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid board: {text!r}")


def build_parser():
    parser = argparse.ArgumentParser(
        description="Congklak - Seed-sowing rules engine",
        prog="congklak",
    )
    parser.add_argument("--log-level", help="Logging level (default: $LOG_LEVEL or INFO)")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    subparsers.add_parser("new", help="Print the initial board")

    move_parser = subparsers.add_parser("move", help="Resolve one move")
    move_parser.add_argument("--board", type=parse_board, required=True, help="16 pit counts")
    move_parser.add_argument("--player", choices=["P1", "P2"], required=True)
    move_parser.add_argument("--pit", type=int, required=True, help="Starting house")
    move_parser.add_argument("--events", action="store_true", help="Include intermediate frames")

    preview_parser = subparsers.add_parser("preview", help="Landing pit of a single pass")
    preview_parser.add_argument("--pit", type=int, required=True)
    preview_parser.add_argument("--seeds", type=int, required=True)

    legal_parser = subparsers.add_parser("legal", help="Playable houses")
    legal_parser.add_argument("--board", type=parse_board, required=True)
    legal_parser.add_argument("--player", choices=["P1", "P2"], required=True)

    play_parser = subparsers.add_parser("play", help="Hot-seat game in the terminal")
    play_parser.add_argument("--first", choices=["P1", "P2"], default="P1")
    play_parser.add_argument(
        "--turn-seconds", type=float, default=None,
        help="Turn clock in seconds, 0 disables it",
    )
    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(level=args.log_level.upper() if args.log_level else None)

    commands = {
        "new": cmd_new,
        "move": cmd_move,
        "preview": cmd_preview,
        "legal": cmd_legal,
        "play": cmd_play,
    }
    handler = commands.get(args.command)
    if handler is None:
        parser.print_help()
        sys.exit(1)
    handler(args)


def _print_model(model):
    print(model.model_dump_json(indent=2, exclude_none=True))


def cmd_new(args):
    """Print the initial board."""
    from .api.service import APIService

    _print_model(APIService().board_config())


def cmd_move(args):
    """Resolve one move and print the result."""
    from pydantic import ValidationError
    from .api.schemas import MoveRequest, ErrorResponse
    from .api.service import APIService

    try:
        request = MoveRequest(
            board=args.board, player=args.player, pit=args.pit, include_events=args.events,
        )
    except ValidationError as e:
        print(f"Error: {e.errors()[0]['msg']}")
        sys.exit(1)

    response = APIService().apply_move(request)
    _print_model(response)
    if isinstance(response, ErrorResponse):
        sys.exit(1)


def cmd_preview(args):
    """Print where a single pass ends."""
    from .engine_core.engine import predict_landing

    try:
        print(predict_landing(args.pit, args.seeds))
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)


def cmd_legal(args):
    """Print the playable houses."""
    from .engine_core.board import Player
    from .engine_core.engine import legal_moves
    from .engine_core.errors import BoardInvariantError

    try:
        print(json.dumps(legal_moves(args.board, Player(args.player))))
    except BoardInvariantError as e:
        print(f"Error: {e}")
        sys.exit(1)


def cmd_play(args, input_fn=input):
    """Hot-seat game: each player types a house index, 'q' quits."""
    from .engine_core.board import Player, format_board
    from .session import SessionManager

    turn_seconds = args.turn_seconds
    if turn_seconds is not None and turn_seconds <= 0:
        turn_seconds = float("inf")

    manager = SessionManager()
    session = manager.create_session(first_player=Player(args.first), turn_time_limit=turn_seconds)

    while session.is_active():
        print()
        print(format_board(session.game_state.board))
        print(session.message)
        try:
            raw = input_fn(f"{session.current_player.value} pit> ").strip()
        except EOFError:
            raw = "q"
        if raw.lower() in {"q", "quit", "exit"}:
            manager.end_session(session.session_id, reason="quit")
            print("Game abandoned.")
            return

        if session.is_turn_expired():
            session.expire_turn()
            continue

        try:
            pit = int(raw)
        except ValueError:
            print(f"Not a pit number: {raw!r}")
            continue

        result = session.play(pit)
        if not result.success:
            print(f"Invalid move: {result.error}")
            continue
        for change in result.state_changes:
            print(f"  {change}")

    print()
    print(format_board(session.game_state.board))
    print(session.message)
    p1, p2 = session.game_state.scores
    print(f"Final score: Player 1 {p1} - Player 2 {p2}")
    print(f"Game time: {session.elapsed():.0f}s")
    for stats in session.stats().values():
        print(f"{stats.player.label}: {stats.turns} turns, {stats.average:.2f}s average")
    manager.end_session(session.session_id)


if __name__ == "__main__":
    main()
