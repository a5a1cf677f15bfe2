from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Tuple, TYPE_CHECKING

from .core import Color
from .errors import FormatError
from .fen import STARTPOS_FEN, position_to_fen

if TYPE_CHECKING:
    from .replay import MoveLedger


SEVEN_TAG_ROSTER = ("Event", "Site", "Date", "Round", "White", "Black", "Result")
RESULT_TOKENS = ("1-0", "0-1", "1/2-1/2", "*")

_TAG_RE = re.compile(r'^\[(?P<key>[A-Za-z0-9_]+)\s+"(?P<value>(?:[^"\\]|\\.)*)"\]$')
_MOVE_NUMBER_RE = re.compile(r"^\d+\.+")
_NAG_RE = re.compile(r"^\$\d+$")


@dataclass(frozen=True)
class Transcript:
    tags: Dict[str, str] = field(default_factory=dict)
    tokens: Tuple[str, ...] = ()
    result: str = "*"

    @property
    def fen(self) -> Optional[str]:
        return self.tags.get("FEN") or None


def _strip_commentary(movetext: str) -> str:
    out: List[str] = []
    in_comment = False
    in_line_comment = False
    depth = 0
    for ch in movetext:
        if in_line_comment:
            if ch == "\n":
                in_line_comment = False
                out.append(" ")
            continue
        if in_comment:
            if ch == "}":
                in_comment = False
            continue
        if ch == ";":
            # rest-of-line comment, only outside braces
            in_line_comment = True
        elif ch == "{":
            in_comment = True
        elif ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth < 0:
                raise FormatError("Unbalanced ')' in PGN move text")
        elif depth == 0:
            out.append(ch)
            continue
        out.append(" ")
    if in_comment:
        raise FormatError("Unterminated '{' comment in PGN move text")
    if depth:
        raise FormatError("Unterminated variation in PGN move text")
    return "".join(out)


def parse_pgn(text: str) -> Transcript:
    """Read tag pairs and SAN move tokens from a single-game PGN.

    This is not a general PGN reader: comments, NAGs and variations are
    dropped, and only the main line is returned.
    """
    tags: Dict[str, str] = {}
    movetext: List[str] = []

    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith("%"):
            continue
        if line.startswith("[") and not movetext:
            m = _TAG_RE.match(line)
            if m is None:
                raise FormatError(f"Malformed tag pair on line {lineno}: {line!r}")
            tags[m.group("key")] = m.group("value").replace('\\"', '"').replace("\\\\", "\\")
            continue
        movetext.append(line)

    tokens: List[str] = []
    result = tags.get("Result", "*")
    for tok in _strip_commentary("\n".join(movetext)).split():
        tok = _MOVE_NUMBER_RE.sub("", tok)
        if not tok or _NAG_RE.match(tok) or tok == "e.p.":
            continue
        if tok in RESULT_TOKENS:
            result = tok
            continue
        tokens.append(tok)

    return Transcript(tags=tags, tokens=tuple(tokens), result=result)


def _header_lines(ledger: "MoveLedger", headers: Mapping[str, str]) -> List[str]:
    merged: Dict[str, str] = {}
    for key in SEVEN_TAG_ROSTER:
        merged[key] = headers.get(key, "*" if key == "Result" else "?")
    for key, value in headers.items():
        merged.setdefault(key, value)

    start_fen = position_to_fen(ledger.start)
    if start_fen != STARTPOS_FEN:
        merged.setdefault("SetUp", "1")
        merged["FEN"] = start_fen

    return [f'[{k} "{v}"]' for k, v in merged.items()]


def ledger_to_pgn(ledger: "MoveLedger", headers: Optional[Mapping[str, str]] = None) -> str:
    """Serialize a replayed game back to PGN."""
    headers = dict(ledger.tags if headers is None else headers)
    out_lines = _header_lines(ledger, headers)
    out_lines.append("")

    tokens: List[str] = []
    for entry in ledger:
        before = entry.before
        if before.side_to_move is Color.WHITE:
            tokens.append(f"{before.fullmove_number}.")
        elif entry.index == 0:
            tokens.append(f"{before.fullmove_number}...")
        tokens.append(entry.move.san)
    tokens.append(headers.get("Result", "*"))

    # Wrap at ~80 chars
    line = ""
    for t in tokens:
        if len(line) + len(t) + 1 > 78:
            out_lines.append(line.rstrip())
            line = ""
        line += t + " "
    if line.strip():
        out_lines.append(line.rstrip())

    return "\n".join(out_lines)
