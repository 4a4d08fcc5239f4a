"""Core enumerations for the chess domain."""

from __future__ import annotations

from enum import IntEnum


class Team(IntEnum):
    """Side of the board. White moves on even turns."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Team:
        return Team(1 - self.value)

    @property
    def forward(self) -> int:
        """Rank direction pawns of this team advance in."""
        return 1 if self == Team.WHITE else -1

    @property
    def home_rank(self) -> int:
        """Back rank of this team (0 or 7)."""
        return 0 if self == Team.WHITE else 7

    @property
    def pawn_rank(self) -> int:
        """Rank pawns of this team start on."""
        return 1 if self == Team.WHITE else 6

    @property
    def promotion_rank(self) -> int:
        return 7 if self == Team.WHITE else 0

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Chess piece kinds ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6


PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)


class GameState(IntEnum):
    """Classification of the current position."""

    ONGOING = 0
    CHECKMATE = 1
    STALEMATE = 2
    DRAW = 3

    @property
    def is_terminal(self) -> bool:
        return self != GameState.ONGOING


class DrawReason(IntEnum):
    """Why a game ended in :attr:`GameState.DRAW`."""

    FIFTY_MOVE = 1
    THREEFOLD_REPETITION = 2


class MoveKind(IntEnum):
    """Special move classification of an executed move."""

    NORMAL = 0
    DOUBLE_PAWN = 1
    EN_PASSANT = 2
    CASTLE_KINGSIDE = 3
    CASTLE_QUEENSIDE = 4
    PROMOTION = 5
