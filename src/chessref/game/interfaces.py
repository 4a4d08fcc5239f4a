"""Ports the presentation layer implements.

The controller depends on these ABCs only; dialogs, audio and other
surfaces live outside this package and plug in here.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chessref.core.coordinate import Coordinate
    from chessref.core.enums import PieceType, Team
    from chessref.game.outcome import MoveOutcome


class IPromotionChooser(ABC):
    """Asks the user which piece a pawn promotes to."""

    @abstractmethod
    def choose_promotion(self, team: Team, square: Coordinate) -> PieceType | None:
        """Return the chosen piece type, or ``None`` to cancel the move."""


class IMoveFeedback(ABC):
    """Plays feedback (sound, animation) for a finished move."""

    @abstractmethod
    def on_move(self, outcome: MoveOutcome) -> None: ...


class IGameOverNotifier(ABC):
    """Presents the end of the game to the user."""

    @abstractmethod
    def on_game_over(self, outcome: MoveOutcome) -> None: ...
