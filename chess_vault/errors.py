"""Exceptions raised by the chess-vault core.

Everything derives from ``ChessVaultError``, itself a ``ValueError``, so callers
can catch all bad-input conditions with a single clause.
"""

from __future__ import annotations

from typing import Optional, Tuple


class ChessVaultError(ValueError):
    """Base exception for all chess-vault errors."""

    pass


class FormatError(ChessVaultError):
    """Raised when a position encoding or a transcript is malformed."""

    pass


class MoveError(ChessVaultError):
    """Base exception for move tokens that cannot be applied.

    ``index`` and ``partial`` are filled in by the replay builder: the ply at
    which replay stopped and the ledger entries built before it.
    """

    def __init__(
        self,
        reason: str,
        token: Optional[str] = None,
        index: Optional[int] = None,
        partial: Tuple = (),
    ) -> None:
        self.reason = reason
        self.token = token
        self.index = index
        self.partial = partial
        super().__init__(self._render())

    def _render(self) -> str:
        where = ""
        if self.index is not None:
            where = f"move {self.index + 1} "
        if self.token is not None:
            where += f"{self.token!r} "
        return f"{where}{self.reason}".strip() if where else self.reason

    def at(self, index: int, partial: Tuple = ()) -> "MoveError":
        """Copy of this error located at ply ``index`` of a replay."""
        return type(self)(self.reason, token=self.token, index=index, partial=partial)


class IllegalMoveError(MoveError):
    """Raised when a token matches no legal move in the current position."""

    pass


class AmbiguousMoveError(MoveError):
    """Raised when a token matches more than one legal move."""

    pass


class EmptyInputError(ChessVaultError):
    """Raised when an aggregation that requires games finds none."""

    pass


class ConfigurationError(ChessVaultError):
    """Raised when configuration values are invalid."""

    pass
