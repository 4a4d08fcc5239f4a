"""Tests for GameController — the presentation-facing orchestrator."""

from __future__ import annotations

from chessref.core.board import Board
from chessref.core.coordinate import Coordinate
from chessref.core.enums import DrawReason, GameState, MoveKind, PieceType, Team
from chessref.core.notation import STARTING_FEN
from chessref.core.settings import RuleSettings
from chessref.game.controller import GameController
from chessref.game.interfaces import (
    IGameOverNotifier,
    IMoveFeedback,
    IPromotionChooser,
)
from chessref.game.outcome import MoveOutcome


def sq(name: str) -> Coordinate:
    return Coordinate.parse(name)


class _FixedChooser(IPromotionChooser):
    def __init__(self, choice: PieceType | None) -> None:
        self.choice = choice
        self.asked: list[tuple[Team, Coordinate]] = []

    def choose_promotion(self, team: Team, square: Coordinate) -> PieceType | None:
        self.asked.append((team, square))
        return self.choice


class _RecordingFeedback(IMoveFeedback):
    def __init__(self) -> None:
        self.cues: list[str] = []

    def on_move(self, outcome: MoveOutcome) -> None:
        self.cues.append(outcome.feedback_cue)


class _RecordingNotifier(IGameOverNotifier):
    def __init__(self) -> None:
        self.outcomes: list[MoveOutcome] = []

    def on_game_over(self, outcome: MoveOutcome) -> None:
        self.outcomes.append(outcome)


def _submit(ctrl: GameController, *moves: tuple[str, str]) -> None:
    for origin, dest in moves:
        assert ctrl.submit_move(sq(origin), sq(dest)), origin + dest


class TestNewGame:
    def test_starts_from_initial_position(self) -> None:
        ctrl = GameController()
        assert ctrl.board.to_fen() == STARTING_FEN
        assert ctrl.current_team == Team.WHITE
        assert ctrl.game_state == GameState.ONGOING
        assert not ctrl.can_undo and not ctrl.can_redo

    def test_moves_are_calculated(self) -> None:
        ctrl = GameController()
        assert {c.name for c in ctrl.legal_moves(sq("e2"))} == {"e3", "e4"}
        assert ctrl.legal_moves(sq("e4")) == []

    def test_custom_fen(self) -> None:
        fen = "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"
        ctrl = GameController()
        ctrl.new_game(fen)
        assert ctrl.current_team == Team.BLACK
        assert ctrl.board.to_fen() == fen

    def test_reset_clears_history(self) -> None:
        ctrl = GameController()
        _submit(ctrl, ("e2", "e4"))
        boards: list[Board] = []
        ctrl.events.on_position_changed.append(boards.append)
        ctrl.new_game()
        assert not ctrl.can_undo
        assert len(boards) == 1
        assert boards[0].to_fen() == STARTING_FEN

    def test_settings_are_applied(self) -> None:
        ctrl = GameController(RuleSettings(repetition_threshold=2))
        ctrl.new_game("4k2n/8/8/8/8/8/8/4K2N w - - 0 1")
        _submit(ctrl, ("h1", "f2"), ("h8", "f7"), ("f2", "h1"), ("f7", "h8"))
        assert ctrl.game_state == GameState.DRAW


class TestSubmitMove:
    def test_legal_move_accepted(self) -> None:
        ctrl = GameController()
        assert ctrl.submit_move(sq("e2"), sq("e4"))
        assert ctrl.current_team == Team.BLACK
        assert ctrl.can_undo

    def test_illegal_move_rejected(self) -> None:
        ctrl = GameController()
        assert not ctrl.submit_move(sq("e2"), sq("e5"))
        assert not ctrl.submit_move(sq("e4"), sq("e5"))
        assert ctrl.current_team == Team.WHITE
        assert not ctrl.can_undo

    def test_board_property_is_a_snapshot(self) -> None:
        ctrl = GameController()
        snapshot = ctrl.board
        snapshot.calculate_all_moves()
        pawn = snapshot.piece_at(sq("e2"))
        assert pawn is not None
        assert snapshot.play_move(pawn, sq("e4"))
        assert ctrl.board.to_fen() == STARTING_FEN

    def test_move_event_fires(self) -> None:
        ctrl = GameController()
        outcomes: list[MoveOutcome] = []
        ctrl.events.on_move.append(outcomes.append)
        _submit(ctrl, ("e2", "e4"))
        assert len(outcomes) == 1
        assert outcomes[0].record.uci == "e2e4"
        assert outcomes[0].record.kind == MoveKind.DOUBLE_PAWN
        assert outcomes[0].fen_after.split()[3] == "e3"

    def test_game_over_on_checkmate(self) -> None:
        notifier = _RecordingNotifier()
        ctrl = GameController(game_over_notifier=notifier)
        results: list[MoveOutcome] = []
        ctrl.events.on_game_over.append(results.append)
        _submit(ctrl, ("f2", "f3"), ("e7", "e5"), ("g2", "g4"), ("d8", "h4"))

        assert ctrl.game_state == GameState.CHECKMATE
        assert ctrl.winning_team == Team.BLACK
        assert len(results) == 1 and results[0].is_terminal
        assert notifier.outcomes == results
        assert not ctrl.submit_move(sq("e2"), sq("e4"))

    def test_draw_outcome_carries_reason(self) -> None:
        ctrl = GameController()
        ctrl.new_game("4k3/8/8/8/8/8/8/4K2R w - - 49 80")
        outcomes: list[MoveOutcome] = []
        ctrl.events.on_game_over.append(outcomes.append)
        _submit(ctrl, ("h1", "h2"))
        assert outcomes[0].game_state == GameState.DRAW
        assert outcomes[0].draw_reason == DrawReason.FIFTY_MOVE
        assert outcomes[0].winning_team is None


class TestFeedbackPort:
    def test_cues(self) -> None:
        feedback = _RecordingFeedback()
        ctrl = GameController(feedback=feedback)
        _submit(
            ctrl,
            ("e2", "e4"),
            ("d7", "d5"),
            ("e4", "d5"),
            ("d8", "d5"),
            ("f1", "b5"),
        )
        assert feedback.cues == ["move", "move", "capture", "capture", "check"]

    def test_checkmate_cue(self) -> None:
        feedback = _RecordingFeedback()
        ctrl = GameController(feedback=feedback)
        _submit(ctrl, ("f2", "f3"), ("e7", "e5"), ("g2", "g4"), ("d8", "h4"))
        assert feedback.cues[-1] == "checkmate"


class TestPromotionPort:
    FEN = "8/4P3/8/8/8/8/k7/4K3 w - - 0 1"

    def test_chooser_is_asked(self) -> None:
        chooser = _FixedChooser(PieceType.ROOK)
        ctrl = GameController(promotion_chooser=chooser)
        ctrl.new_game(self.FEN)
        outcomes: list[MoveOutcome] = []
        ctrl.events.on_move.append(outcomes.append)

        assert ctrl.submit_move(sq("e7"), sq("e8"))
        assert chooser.asked == [(Team.WHITE, sq("e8"))]
        promoted = ctrl.board.piece_at(sq("e8"))
        assert promoted is not None and promoted.kind == PieceType.ROOK
        assert outcomes[0].was_promotion

    def test_cancel_rejects_move(self) -> None:
        ctrl = GameController(promotion_chooser=_FixedChooser(None))
        ctrl.new_game(self.FEN)
        assert not ctrl.submit_move(sq("e7"), sq("e8"))
        assert ctrl.board.piece_at(sq("e7")) is not None
        assert not ctrl.can_undo

    def test_explicit_kind_skips_chooser(self) -> None:
        chooser = _FixedChooser(PieceType.ROOK)
        ctrl = GameController(promotion_chooser=chooser)
        ctrl.new_game(self.FEN)
        assert ctrl.submit_move(sq("e7"), sq("e8"), PieceType.BISHOP)
        assert chooser.asked == []

    def test_defaults_to_queen_without_chooser(self) -> None:
        ctrl = GameController()
        ctrl.new_game(self.FEN)
        assert ctrl.submit_move(sq("e7"), sq("e8"))
        promoted = ctrl.board.piece_at(sq("e8"))
        assert promoted is not None and promoted.kind == PieceType.QUEEN

    def test_chooser_not_asked_for_illegal_target(self) -> None:
        chooser = _FixedChooser(PieceType.QUEEN)
        ctrl = GameController(promotion_chooser=chooser)
        ctrl.new_game(self.FEN)
        assert not ctrl.submit_move(sq("e7"), sq("d8"))
        assert chooser.asked == []


class TestUndoRedo:
    def test_undo_restores_previous_board(self) -> None:
        ctrl = GameController()
        _submit(ctrl, ("e2", "e4"), ("e7", "e5"))
        assert ctrl.undo_move()
        assert ctrl.current_team == Team.BLACK
        assert ctrl.board.to_fen().startswith("rnbqkbnr/pppppppp/8/8/4P3/")
        assert ctrl.undo_move()
        assert ctrl.board.to_fen() == STARTING_FEN
        assert not ctrl.undo_move()

    def test_redo(self) -> None:
        ctrl = GameController()
        _submit(ctrl, ("e2", "e4"))
        after = ctrl.board.to_fen()
        ctrl.undo_move()
        assert ctrl.can_redo
        assert ctrl.redo_move()
        assert ctrl.board.to_fen() == after
        assert not ctrl.redo_move()

    def test_new_move_clears_redo(self) -> None:
        ctrl = GameController()
        _submit(ctrl, ("e2", "e4"))
        ctrl.undo_move()
        _submit(ctrl, ("d2", "d4"))
        assert not ctrl.can_redo

    def test_undo_after_checkmate_reopens_game(self) -> None:
        ctrl = GameController()
        _submit(ctrl, ("f2", "f3"), ("e7", "e5"), ("g2", "g4"), ("d8", "h4"))
        assert ctrl.undo_move()
        assert ctrl.game_state == GameState.ONGOING
        assert ctrl.legal_moves(sq("d8"))

    def test_undo_emits_position(self) -> None:
        ctrl = GameController()
        _submit(ctrl, ("e2", "e4"))
        boards: list[Board] = []
        ctrl.events.on_position_changed.append(boards.append)
        ctrl.undo_move()
        assert [b.to_fen() for b in boards] == [STARTING_FEN]
