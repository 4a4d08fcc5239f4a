"""Qt bridge: re-emit controller events as Qt signals."""

from __future__ import annotations

from PyQt6.QtCore import QObject, pyqtSignal

from chessref.core.board import Board
from chessref.game.controller import GameController
from chessref.game.outcome import MoveOutcome


class GameSignals(QObject):
    """Signal hub a Qt presentation layer connects its widgets to.

    Signals carry :class:`MoveOutcome` / :class:`Board` snapshots, so slots
    can never mutate the controller's live board.
    """

    move_played = pyqtSignal(object)
    game_over = pyqtSignal(object)
    position_changed = pyqtSignal(object)

    def attach(self, controller: GameController) -> None:
        """Subscribe to *controller*'s events."""
        controller.events.on_move.append(self._on_move)
        controller.events.on_game_over.append(self._on_game_over)
        controller.events.on_position_changed.append(self._on_position_changed)

    def _on_move(self, outcome: MoveOutcome) -> None:
        self.move_played.emit(outcome)

    def _on_game_over(self, outcome: MoveOutcome) -> None:
        self.game_over.emit(outcome)

    def _on_position_changed(self, board: Board) -> None:
        self.position_changed.emit(board)
