"""GameController — drives a Board on behalf of a presentation layer.

Owns the live board plus undo/redo history made of board snapshots, and
notifies listeners through callbacks and the ports in
:mod:`chessref.game.interfaces`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from chessref.core.board import Board
from chessref.core.coordinate import Coordinate
from chessref.core.enums import GameState, PieceType, Team
from chessref.core.piece import Piece
from chessref.core.settings import RuleSettings
from chessref.game.interfaces import (
    IGameOverNotifier,
    IMoveFeedback,
    IPromotionChooser,
)
from chessref.game.outcome import MoveOutcome

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[MoveOutcome], None]
GameOverCallback = Callable[[MoveOutcome], None]
PositionCallback = Callable[[Board], None]  # new game, undo, redo


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_position_changed: list[PositionCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController:
    """Validates and applies moves, keeps undo/redo history, notifies listeners.

    Methods are meant to be called from a single thread (the UI thread).
    """

    __slots__ = (
        "_board",
        "_settings",
        "_undo_stack",
        "_redo_stack",
        "_promotion_chooser",
        "_feedback",
        "_game_over_notifier",
        "events",
    )

    def __init__(
        self,
        settings: RuleSettings | None = None,
        *,
        promotion_chooser: IPromotionChooser | None = None,
        feedback: IMoveFeedback | None = None,
        game_over_notifier: IGameOverNotifier | None = None,
    ) -> None:
        self._settings = settings
        self._promotion_chooser = promotion_chooser
        self._feedback = feedback
        self._game_over_notifier = game_over_notifier
        self._undo_stack: list[Board] = []
        self._redo_stack: list[Board] = []
        self.events = GameEvents()
        self._board = self._fresh_board(None)

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def board(self) -> Board:
        """Independent snapshot of the live board."""
        return self._board.clone()

    @property
    def current_team(self) -> Team:
        return self._board.current_team

    @property
    def game_state(self) -> GameState:
        return self._board.current_game_state

    @property
    def winning_team(self) -> Team | None:
        return self._board.winning_team_result

    @property
    def can_undo(self) -> bool:
        return bool(self._undo_stack)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo_stack)

    def pieces(self) -> list[Piece]:
        return self._board.get_pieces()

    def legal_moves(self, origin: Coordinate) -> list[Coordinate]:
        """Destinations to highlight for the piece on *origin*."""
        piece = self._board.piece_at(origin)
        return piece.legal_moves if piece is not None else []

    # ── Game flow ────────────────────────────────────────────────────────

    def new_game(self, fen: str | None = None) -> None:
        """Start over from the standard position or from *fen*."""
        self._board = self._fresh_board(fen)
        self._undo_stack.clear()
        self._redo_stack.clear()
        _LOGGER.info("New game started: %s", self._board.to_fen())
        self._emit_position()

    def submit_move(
        self,
        origin: Coordinate,
        destination: Coordinate,
        promotion: PieceType | None = None,
    ) -> bool:
        """Play the piece on *origin* to *destination*. Returns True if applied.

        When a pawn reaches the last rank without *promotion*, the promotion
        chooser (if any) is asked first; cancelling it rejects the move.
        """
        piece = self._board.piece_at(origin)
        if piece is None:
            return False

        if promotion is None and self._needs_promotion(piece, destination):
            if self._promotion_chooser is not None:
                promotion = self._promotion_chooser.choose_promotion(
                    piece.team, destination
                )
                if promotion is None:
                    _LOGGER.debug("Promotion on %s cancelled", destination)
                    return False

        snapshot = self._board.clone()
        if not self._board.play_move(piece, destination, promotion):
            return False

        self._undo_stack.append(snapshot)
        self._redo_stack.clear()

        outcome = self._outcome()
        self._emit_move(outcome)
        if outcome.is_terminal:
            self._emit_game_over(outcome)
        return True

    def undo_move(self) -> bool:
        """Restore the board as it was before the last move."""
        if not self._undo_stack:
            return False
        self._redo_stack.append(self._board)
        self._board = self._undo_stack.pop()
        self._emit_position()
        return True

    def redo_move(self) -> bool:
        """Re-apply a move taken back with :meth:`undo_move`."""
        if not self._redo_stack:
            return False
        self._undo_stack.append(self._board)
        self._board = self._redo_stack.pop()
        self._emit_position()
        return True

    # ── Internal helpers ─────────────────────────────────────────────────

    def _fresh_board(self, fen: str | None) -> Board:
        if fen is None:
            board = Board.initial(self._settings)
        else:
            board = Board.from_fen(fen, self._settings)
        board.calculate_all_moves()
        return board

    @staticmethod
    def _needs_promotion(piece: Piece, destination: Coordinate) -> bool:
        return (
            piece.is_pawn
            and destination.rank == piece.team.promotion_rank
            and destination in piece.legal_moves
        )

    def _outcome(self) -> MoveOutcome:
        board = self._board
        return MoveOutcome(
            record=board.move_history[-1],
            fen_after=board.to_fen(),
            was_check=board.in_check,
            game_state=board.current_game_state,
            winning_team=board.winning_team_result,
            draw_reason=board.draw_reason,
        )

    def _emit_move(self, outcome: MoveOutcome) -> None:
        if self._feedback is not None:
            self._feedback.on_move(outcome)
        for cb in self.events.on_move:
            cb(outcome)

    def _emit_game_over(self, outcome: MoveOutcome) -> None:
        _LOGGER.info("Game over: %s", outcome.game_state.name)
        if self._game_over_notifier is not None:
            self._game_over_notifier.on_game_over(outcome)
        for cb in self.events.on_game_over:
            cb(outcome)

    def _emit_position(self) -> None:
        for cb in self.events.on_position_changed:
            cb(self._board.clone())
