"""Record of an executed move."""

from __future__ import annotations

from dataclasses import dataclass

from chessref.core.coordinate import Coordinate
from chessref.core.enums import MoveKind, PieceType, Team

_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """Immutable entry of a board's move history.

    For castling, ``destination`` is the king's landing square.
    """

    team: Team
    piece_type: PieceType
    origin: Coordinate
    destination: Coordinate
    kind: MoveKind = MoveKind.NORMAL
    captured: PieceType | None = None
    promotion: PieceType | None = None

    @property
    def is_capture(self) -> bool:
        return self.captured is not None

    @property
    def resets_half_move_clock(self) -> bool:
        return self.piece_type == PieceType.PAWN or self.captured is not None

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        base = f"{self.origin}{self.destination}"
        if self.promotion is not None:
            base += _PROMO_CHARS.get(self.promotion, "")
        return base

    @property
    def uci(self) -> str:
        """UCI long-algebraic notation."""
        return str(self)
