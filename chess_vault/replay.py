"""Replay a move list into an ordered, position-annotated ledger.

Each entry pairs the move descriptor with the positions immediately before and
after it. Replay stops at the first token that does not name exactly one legal
move; the error carries the ply index, the token and the entries built so far.
"""

from __future__ import annotations

import itertools
import logging
import secrets
from dataclasses import dataclass, field, replace
from typing import Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from .core import Position
from .engine import MoveDescriptor, apply
from .errors import MoveError
from .fen import default_start, parse_fen
from .pgn import Transcript, parse_pgn


LOGGER = logging.getLogger("chess_vault.replay")

MOVE_ID_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_"
MOVE_ID_LENGTH = 20

IdFactory = Callable[[], str]


def new_move_id(length: int = MOVE_ID_LENGTH) -> str:
    return "".join(secrets.choice(MOVE_ID_ALPHABET) for _ in range(length))


def counter_ids(prefix: str = "m") -> IdFactory:
    """Deterministic identifier factory, handy for tests and golden files."""
    counter = itertools.count(1)
    return lambda: f"{prefix}{next(counter)}"


@dataclass(frozen=True)
class MoveLedgerEntry:
    index: int
    move: MoveDescriptor
    before: Position
    after: Position
    # annotation slots for collaborators; fill them with dataclasses.replace
    comment: Optional[str] = None
    variants: Tuple = ()
    shapes: Tuple = ()

    @property
    def move_id(self) -> str:
        return self.move.move_id

    def annotate(self, **slots) -> "MoveLedgerEntry":
        return replace(self, **slots)


@dataclass(frozen=True)
class MoveLedger:
    start: Position
    entries: Tuple[MoveLedgerEntry, ...] = ()
    tags: Mapping[str, str] = field(default_factory=dict)

    def __iter__(self) -> Iterator[MoveLedgerEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __getitem__(self, index: int) -> MoveLedgerEntry:
        return self.entries[index]

    @property
    def final_position(self) -> Position:
        return self.entries[-1].after if self.entries else self.start

    @property
    def sans(self) -> List[str]:
        return [e.move.san for e in self.entries]


def build_ledger(
    tokens: Iterable[str],
    start: Optional[Position] = None,
    *,
    tags: Optional[Mapping[str, str]] = None,
    id_factory: IdFactory = new_move_id,
) -> MoveLedger:
    """Apply `tokens` in order from `start` (standard array by default)."""
    start = default_start() if start is None else start
    current = start
    entries: List[MoveLedgerEntry] = []
    seen_ids = set()

    for index, token in enumerate(tokens):
        try:
            after, descriptor = apply(current, token)
        except MoveError as exc:
            LOGGER.info(
                "replay_stopped",
                extra={"index": index, "token": token, "reason": exc.reason, "error": type(exc).__name__},
            )
            raise exc.at(index, tuple(entries)) from exc

        move_id = id_factory()
        if move_id in seen_ids:
            raise ValueError(f"Duplicate move id from id_factory: {move_id!r}")
        seen_ids.add(move_id)

        entries.append(
            MoveLedgerEntry(
                index=index,
                move=replace(descriptor, move_id=move_id),
                before=current,
                after=after,
            )
        )
        current = after

    LOGGER.debug("replay_complete", extra={"plies": len(entries)})
    return MoveLedger(start=start, entries=tuple(entries), tags=dict(tags or {}))


def start_from_tags(tags: Mapping[str, str]) -> Position:
    fen = tags.get("FEN")
    return parse_fen(fen) if fen else default_start()


def replay_transcript(text: str, *, id_factory: IdFactory = new_move_id) -> MoveLedger:
    """Parse a PGN transcript and replay its main line."""
    transcript: Transcript = parse_pgn(text)
    tags: Dict[str, str] = dict(transcript.tags)
    tags.setdefault("Result", transcript.result)
    return build_ledger(
        transcript.tokens,
        start_from_tags(tags),
        tags=tags,
        id_factory=id_factory,
    )
