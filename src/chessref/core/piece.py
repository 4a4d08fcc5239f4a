"""Piece record: identity plus mobility state of a single piece."""

from __future__ import annotations

from dataclasses import dataclass, field

from chessref.core.coordinate import Coordinate
from chessref.core.enums import PieceType, Team

# FEN character ↔ (Team, PieceType)
_CHAR_MAP: dict[str, tuple[Team, PieceType]] = {
    "P": (Team.WHITE, PieceType.PAWN),
    "N": (Team.WHITE, PieceType.KNIGHT),
    "B": (Team.WHITE, PieceType.BISHOP),
    "R": (Team.WHITE, PieceType.ROOK),
    "Q": (Team.WHITE, PieceType.QUEEN),
    "K": (Team.WHITE, PieceType.KING),
    "p": (Team.BLACK, PieceType.PAWN),
    "n": (Team.BLACK, PieceType.KNIGHT),
    "b": (Team.BLACK, PieceType.BISHOP),
    "r": (Team.BLACK, PieceType.ROOK),
    "q": (Team.BLACK, PieceType.QUEEN),
    "k": (Team.BLACK, PieceType.KING),
}

_UNICODE: dict[tuple[Team, PieceType], str] = {
    (Team.WHITE, PieceType.PAWN): "♙",
    (Team.WHITE, PieceType.KNIGHT): "♘",
    (Team.WHITE, PieceType.BISHOP): "♗",
    (Team.WHITE, PieceType.ROOK): "♖",
    (Team.WHITE, PieceType.QUEEN): "♕",
    (Team.WHITE, PieceType.KING): "♔",
    (Team.BLACK, PieceType.PAWN): "♟",
    (Team.BLACK, PieceType.KNIGHT): "♞",
    (Team.BLACK, PieceType.BISHOP): "♝",
    (Team.BLACK, PieceType.ROOK): "♜",
    (Team.BLACK, PieceType.QUEEN): "♛",
    (Team.BLACK, PieceType.KING): "♚",
}

_FEN_CHARS: dict[tuple[Team, PieceType], str] = {v: k for k, v in _CHAR_MAP.items()}


@dataclass(slots=True)
class Piece:
    """A chess piece as owned by a :class:`~chessref.core.board.Board`.

    ``en_passant`` is only meaningful for pawns: it is set for exactly one
    ply after the pawn's two-square advance. ``legal_moves`` is filled in by
    the board for the side to move and is empty otherwise.
    """

    kind: PieceType
    team: Team
    position: Coordinate
    has_moved: bool = False
    en_passant: bool = False
    legal_moves: list[Coordinate] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.en_passant and self.kind != PieceType.PAWN:
            raise ValueError(
                f"Only pawns can be en passant eligible, got {self.kind.name}"
            )

    # ── Queries ──────────────────────────────────────────────────────────

    @property
    def is_pawn(self) -> bool:
        return self.kind == PieceType.PAWN

    @property
    def is_king(self) -> bool:
        return self.kind == PieceType.KING

    def same_position(self, other: Coordinate) -> bool:
        return self.position == other

    def same_identity(self, other: Piece) -> bool:
        """Same team on the same square; locates a piece across board copies."""
        return self.team == other.team and self.position == other.position

    def clone(self) -> Piece:
        return Piece(
            self.kind,
            self.team,
            self.position,
            self.has_moved,
            self.en_passant,
            list(self.legal_moves),
        )

    # ── Serialisation ────────────────────────────────────────────────────

    def __str__(self) -> str:
        """FEN character (uppercase = white, lowercase = black)."""
        return _FEN_CHARS[(self.team, self.kind)]

    @classmethod
    def from_char(
        cls, char: str, position: Coordinate, has_moved: bool = False
    ) -> Piece:
        """Create a piece from its FEN character, e.g. 'N' → white knight."""
        try:
            team, kind = _CHAR_MAP[char]
        except KeyError:
            raise ValueError(f"Invalid piece character: {char!r}") from None
        return cls(kind, team, position, has_moved)

    @property
    def symbol(self) -> str:
        """Unicode chess symbol, e.g. ♞."""
        return _UNICODE[(self.team, self.kind)]
