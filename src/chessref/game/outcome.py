"""Outcome data handed to the presentation layer after each move."""

from __future__ import annotations

from dataclasses import dataclass

from chessref.core.enums import DrawReason, GameState, MoveKind, Team
from chessref.core.move import MoveRecord


@dataclass(frozen=True, slots=True)
class MoveOutcome:
    """What happened on the board after a successful move."""

    record: MoveRecord
    fen_after: str
    was_check: bool = False
    game_state: GameState = GameState.ONGOING
    winning_team: Team | None = None
    draw_reason: DrawReason | None = None

    @property
    def was_capture(self) -> bool:
        return self.record.is_capture

    @property
    def was_promotion(self) -> bool:
        return self.record.kind == MoveKind.PROMOTION

    @property
    def was_castling(self) -> bool:
        return self.record.kind in (
            MoveKind.CASTLE_KINGSIDE,
            MoveKind.CASTLE_QUEENSIDE,
        )

    @property
    def is_terminal(self) -> bool:
        return self.game_state.is_terminal

    @property
    def feedback_cue(self) -> str:
        """Name of the cue to play.

        Priority (highest first): checkmate, check, promotion, capture, move.
        """
        if self.game_state == GameState.CHECKMATE:
            return "checkmate"
        if self.was_check:
            return "check"
        if self.was_promotion:
            return "promotion"
        if self.was_capture:
            return "capture"
        return "move"
