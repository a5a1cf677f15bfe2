"""Chess Vault: chess game records and tournament ratings.

- core: rules engine (pieces define movement, rules filter legality)
- engine: legal moves, move application and game status
- formats/tools: FEN/SAN/PGN/perft helpers
- replay: move ledgers with stable move ids
- rating/tournament: FIDE Elo and tournament summaries
- api: JSON-oriented study documents
"""

from . import core, api
from .errors import (
    ChessVaultError,
    FormatError,
    MoveError,
    IllegalMoveError,
    AmbiguousMoveError,
    EmptyInputError,
    ConfigurationError,
)
from .fen import parse_fen, position_to_fen, default_start, STARTPOS_FEN
from .engine import MoveDescriptor, MoveFlag, GameStatus, legal_moves, apply, game_status
from .perft import perft, perft_divide
from .san import to_san, parse_san, move_to_lan
from .pgn import parse_pgn, ledger_to_pgn
from .replay import MoveLedger, MoveLedgerEntry, build_ledger, replay_transcript, counter_ids
from .rating import (
    DeclaredResult,
    expected_score,
    rating_delta,
    performance_rating,
    parse_declared_result,
    describe_result,
)
from .tournament import GameOutcomeRecord, TournamentSummary, aggregate_tournament
from .settings import Settings

__all__ = [
    "core","api",
    "ChessVaultError","FormatError","MoveError","IllegalMoveError","AmbiguousMoveError",
    "EmptyInputError","ConfigurationError",
    "parse_fen","position_to_fen","default_start","STARTPOS_FEN",
    "MoveDescriptor","MoveFlag","GameStatus","legal_moves","apply","game_status",
    "perft","perft_divide",
    "to_san","parse_san","move_to_lan",
    "parse_pgn","ledger_to_pgn",
    "MoveLedger","MoveLedgerEntry","build_ledger","replay_transcript","counter_ids",
    "DeclaredResult","expected_score","rating_delta","performance_rating",
    "parse_declared_result","describe_result",
    "GameOutcomeRecord","TournamentSummary","aggregate_tournament",
    "Settings",
]
