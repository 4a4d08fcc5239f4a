"""Tests for MoveOutcome flags and feedback cue priority."""

from __future__ import annotations

from chessref.core.coordinate import Coordinate
from chessref.core.enums import GameState, MoveKind, PieceType, Team
from chessref.core.move import MoveRecord
from chessref.game.outcome import MoveOutcome


def _record(
    kind: MoveKind = MoveKind.NORMAL,
    captured: PieceType | None = None,
    promotion: PieceType | None = None,
) -> MoveRecord:
    return MoveRecord(
        Team.WHITE,
        PieceType.PAWN,
        Coordinate.parse("e7"),
        Coordinate.parse("d8"),
        kind,
        captured,
        promotion,
    )


class TestFlags:
    def test_plain_move(self) -> None:
        outcome = MoveOutcome(_record(), fen_after="")
        assert not outcome.was_capture
        assert not outcome.was_promotion
        assert not outcome.was_castling
        assert not outcome.is_terminal

    def test_castling(self) -> None:
        record = MoveRecord(
            Team.WHITE,
            PieceType.KING,
            Coordinate.parse("e1"),
            Coordinate.parse("g1"),
            MoveKind.CASTLE_KINGSIDE,
        )
        assert MoveOutcome(record, fen_after="").was_castling

    def test_terminal(self) -> None:
        outcome = MoveOutcome(_record(), fen_after="", game_state=GameState.STALEMATE)
        assert outcome.is_terminal


class TestFeedbackCue:
    def test_move(self) -> None:
        assert MoveOutcome(_record(), fen_after="").feedback_cue == "move"

    def test_capture(self) -> None:
        record = _record(captured=PieceType.ROOK)
        assert MoveOutcome(record, fen_after="").feedback_cue == "capture"

    def test_promotion_beats_capture(self) -> None:
        record = _record(
            kind=MoveKind.PROMOTION,
            captured=PieceType.ROOK,
            promotion=PieceType.QUEEN,
        )
        assert MoveOutcome(record, fen_after="").feedback_cue == "promotion"

    def test_check_beats_promotion(self) -> None:
        record = _record(kind=MoveKind.PROMOTION, promotion=PieceType.QUEEN)
        outcome = MoveOutcome(record, fen_after="", was_check=True)
        assert outcome.feedback_cue == "check"

    def test_checkmate_beats_everything(self) -> None:
        outcome = MoveOutcome(
            _record(captured=PieceType.ROOK),
            fen_after="",
            was_check=True,
            game_state=GameState.CHECKMATE,
            winning_team=Team.WHITE,
        )
        assert outcome.feedback_cue == "checkmate"

    def test_stalemate_uses_move_cue(self) -> None:
        outcome = MoveOutcome(_record(), fen_after="", game_state=GameState.STALEMATE)
        assert outcome.feedback_cue == "move"
