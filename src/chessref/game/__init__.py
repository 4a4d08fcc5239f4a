"""Game layer — controller, undo/redo history and presentation ports.

Quick start::

    from chessref.core import Coordinate
    from chessref.game import GameController

    ctrl = GameController()
    ctrl.events.on_move.append(lambda outcome: print(outcome.record))
    ctrl.submit_move(Coordinate.parse("e2"), Coordinate.parse("e4"))

The Qt signal adapter lives in :mod:`chessref.game.qt_bridge` and is not
imported here.
"""

from chessref.game.controller import GameController, GameEvents
from chessref.game.interfaces import (
    IGameOverNotifier,
    IMoveFeedback,
    IPromotionChooser,
)
from chessref.game.outcome import MoveOutcome

__all__ = [
    # Interfaces
    "IGameOverNotifier",
    "IMoveFeedback",
    "IPromotionChooser",
    # Concrete
    "GameController",
    "GameEvents",
    "MoveOutcome",
]
