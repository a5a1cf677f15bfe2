from __future__ import annotations

import argparse
import functools
import json
import logging
import sys
from typing import List, Optional

from .core import ascii_board
from .engine import game_status
from .errors import ChessVaultError, EmptyInputError, MoveError
from .fen import parse_fen, position_to_fen, default_start
from .perft import perft, perft_divide
from .pgn import ledger_to_pgn
from .rating import performance_rating
from .replay import new_move_id, replay_transcript
from .settings import Settings
from .tournament import GameOutcomeRecord, aggregate_tournament
from .api import ledger_to_study


LOGGER = logging.getLogger("chess_vault.cli")


def _read_text(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, encoding="utf-8") as fh:
        return fh.read()


def cmd_show(args: argparse.Namespace) -> int:
    p = parse_fen(args.fen) if args.fen else default_start()
    print(ascii_board(p))
    print()
    print(position_to_fen(p))
    print(game_status(p).value)
    return 0


def cmd_perft(args: argparse.Namespace) -> int:
    p = parse_fen(args.fen) if args.fen else default_start()
    if args.divide:
        out = perft_divide(p, args.depth)
        total = 0
        for k in sorted(out):
            print(f"{k}: {out[k]}")
            total += out[k]
        print(f"Total: {total}")
    else:
        print(perft(p, args.depth))
    return 0


def cmd_replay(args: argparse.Namespace, settings: Settings) -> int:
    id_factory = functools.partial(new_move_id, settings.move_id_length)
    try:
        ledger = replay_transcript(_read_text(args.file), id_factory=id_factory)
    except MoveError as exc:
        print(f"Replay stopped at move {exc.index + 1} ({exc.token}): {exc.reason}", file=sys.stderr)
        return 1

    if args.format == "pgn":
        print(ledger_to_pgn(ledger))
    elif args.format == "table":
        for entry in ledger:
            print(f"{entry.index + 1:>4} {entry.move.san:<8} {position_to_fen(entry.after)}")
    else:
        print(json.dumps(ledger_to_study(ledger), indent=2))
    return 0


def cmd_tournament(args: argparse.Namespace, settings: Settings) -> int:
    rows = json.loads(_read_text(args.records))
    if not isinstance(rows, list):
        print("Records file must hold a JSON list of game records.", file=sys.stderr)
        return 1
    records = [GameOutcomeRecord.from_mapping(row) for row in rows]

    k_factor = settings.k_factor if args.k_factor is None else args.k_factor
    try:
        summary = aggregate_tournament(args.name, args.start_rating, records, k_factor, require_games=True)
    except EmptyInputError:
        print("No games found for this tournament!", file=sys.stderr)
        return 1

    out = summary.to_fields()
    out["games"] = summary.games
    out["opponent_ratings"] = list(summary.opponent_ratings)
    print(json.dumps(out, indent=2))
    return 0


def cmd_performance(args: argparse.Namespace) -> int:
    print(performance_rating(args.ratings, args.score))
    return 0


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="chess-vault")
    ap.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
    )
    sub = ap.add_subparsers(dest="cmd", required=True)

    ss = sub.add_parser("show", help="Show ASCII board, FEN and status")
    ss.add_argument("--fen", type=str, default=None)
    ss.set_defaults(fn=cmd_show)

    sp = sub.add_parser("perft", help="Run perft")
    sp.add_argument("--depth", type=int, default=3)
    sp.add_argument("--fen", type=str, default=None)
    sp.add_argument("--divide", action="store_true")
    sp.set_defaults(fn=cmd_perft)

    rp = sub.add_parser("replay", help="Replay a PGN transcript into a move ledger")
    rp.add_argument("file", help="PGN file, or - for stdin")
    rp.add_argument("--format", choices=["study", "pgn", "table"], default="study")
    rp.set_defaults(fn=cmd_replay, needs_settings=True)

    tp = sub.add_parser("tournament", help="Summarize a tournament from game records")
    tp.add_argument("records", help="JSON list of game-note metadata, or - for stdin")
    tp.add_argument("--name", required=True)
    tp.add_argument("--start-rating", type=float, required=True)
    tp.add_argument("--k-factor", type=float, default=None)
    tp.set_defaults(fn=cmd_tournament, needs_settings=True)

    pp = sub.add_parser("performance", help="Performance rating from opponent ratings")
    pp.add_argument("--score", type=float, required=True)
    pp.add_argument("ratings", type=float, nargs="*")
    pp.set_defaults(fn=cmd_performance)

    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s %(message)s")

    try:
        if getattr(args, "needs_settings", False):
            return int(args.fn(args, Settings.from_env()))
        return int(args.fn(args))
    except (ChessVaultError, OSError, json.JSONDecodeError) as exc:
        LOGGER.debug("cli_failed", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
