from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, List, Mapping, Optional

from ..core import Position, Color, sq_name
from ..engine import MoveDescriptor, MoveFlag, game_status
from ..errors import FormatError
from ..fen import parse_fen, position_to_fen
from ..replay import MoveLedger, build_ledger, new_move_id


LOGGER = logging.getLogger("chess_vault.api.serde")

STUDY_VERSION = "0.0.2"


def _color_to_str(c: Color) -> str:
    return "WHITE" if c is Color.WHITE else "BLACK"


def move_flag_codes(d: MoveDescriptor) -> str:
    """Single-letter move flags as used by chess.js-based study tools."""
    codes = ""
    special = (MoveFlag.CAPTURE, MoveFlag.DOUBLE_PUSH, MoveFlag.KINGSIDE_CASTLE, MoveFlag.QUEENSIDE_CASTLE)
    if not any(d.has(f) for f in special):
        codes += "n"
    if d.has(MoveFlag.CAPTURE) and not d.has(MoveFlag.EN_PASSANT):
        codes += "c"
    if d.has(MoveFlag.DOUBLE_PUSH):
        codes += "b"
    if d.has(MoveFlag.EN_PASSANT):
        codes += "e"
    if d.has(MoveFlag.PROMOTION):
        codes += "p"
    if d.has(MoveFlag.KINGSIDE_CASTLE):
        codes += "k"
    if d.has(MoveFlag.QUEENSIDE_CASTLE):
        codes += "q"
    return codes


def descriptor_to_dict(d: MoveDescriptor) -> Dict[str, Any]:
    return {
        "color": _color_to_str(d.color),
        "piece": d.piece,
        "from": d.from_sq,
        "to": d.to_sq,
        "from_alg": sq_name(d.from_sq),
        "to_alg": sq_name(d.to_sq),
        "san": d.san,
        "lan": d.lan,
        "flags": sorted(f.value for f in d.flags),
        "captured": d.captured,
        "promotion": d.promotion,
        "move_id": d.move_id or None,
    }


def snapshot(position: Position) -> Dict[str, Any]:
    """JSON-friendly snapshot of one position."""
    pieces: List[Dict[str, Any]] = []
    for color in (Color.WHITE, Color.BLACK):
        for square, p in position.iter_pieces_of(color):
            pieces.append(
                {
                    "color": _color_to_str(p.color),
                    "type": type(p).__name__,
                    "pos": square,
                    "pos_alg": sq_name(square),
                    "symbol": p.symbol,
                }
            )

    status = game_status(position)
    return {
        "side_to_move": _color_to_str(position.side_to_move),
        "pieces": sorted(pieces, key=lambda x: (x["color"], x["type"], x["pos"])),
        "castling": position.castling_string(),
        "ep_square": None if position.ep_square is None else sq_name(position.ep_square),
        "halfmove_clock": position.halfmove_clock,
        "fullmove_number": position.fullmove_number,
        "status": status.value,
        "fen": position_to_fen(position),
    }


def ledger_to_study(ledger: MoveLedger, title: Optional[str] = None) -> Dict[str, Any]:
    """Chess-study storage document for a replayed game."""
    moves: List[Dict[str, Any]] = []
    for entry in ledger:
        d = entry.move
        moves.append(
            {
                "color": d.color.letter,
                "piece": d.piece,
                "from": sq_name(d.from_sq),
                "to": sq_name(d.to_sq),
                "san": d.san,
                "flags": move_flag_codes(d),
                "lan": d.lan,
                "before": position_to_fen(entry.before),
                "after": position_to_fen(entry.after),
                "moveId": d.move_id,
                "variants": list(entry.variants),
                "shapes": list(entry.shapes),
                "comment": entry.comment,
            }
        )

    if title is None:
        title = ledger.tags.get("Event") or None

    return {
        "version": STUDY_VERSION,
        "header": {"title": title},
        "moves": moves,
        "rootFEN": position_to_fen(ledger.start),
    }


def study_to_ledger(doc: Mapping[str, Any]) -> MoveLedger:
    """Rebuild a ledger from a study document by replaying its SAN list.

    Stored move ids and annotation slots are carried over.
    """
    try:
        root = str(doc["rootFEN"])
        stored = list(doc["moves"])
        sans = [str(m["san"]) for m in stored]
    except (KeyError, TypeError) as exc:
        raise FormatError(f"Invalid study document: {exc}") from exc

    if doc.get("version") != STUDY_VERSION:
        LOGGER.warning("study_version_mismatch", extra={"version": doc.get("version")})

    ids: Iterator[str] = iter([str(m.get("moveId") or "") or new_move_id() for m in stored])
    ledger = build_ledger(sans, parse_fen(root), id_factory=lambda: next(ids))

    title = (doc.get("header") or {}).get("title")
    entries = tuple(
        entry.annotate(
            comment=m.get("comment"),
            variants=tuple(m.get("variants") or ()),
            shapes=tuple(m.get("shapes") or ()),
        )
        for entry, m in zip(ledger.entries, stored)
    )
    tags = {"Event": title} if title else {}
    return MoveLedger(start=ledger.start, entries=entries, tags=tags)
