"""Core domain layer — pure chess rules with zero external dependencies.

Quick start::

    from chessref.core import Board, Coordinate

    board = Board.initial()
    board.calculate_all_moves()
    pawn = board.piece_at(Coordinate.parse("e2"))
    board.play_move(pawn, Coordinate.parse("e4"))
    print(board.to_fen())
"""

from chessref.core.board import Board, PositionKey
from chessref.core.coordinate import Coordinate
from chessref.core.enums import (
    PROMOTION_TYPES,
    DrawReason,
    GameState,
    MoveKind,
    PieceType,
    Team,
)
from chessref.core.errors import InvalidBoardError
from chessref.core.move import MoveRecord
from chessref.core.move_generator import (
    attacked_squares,
    bishop_moves,
    castling_moves,
    is_square_attacked,
    king_moves,
    knight_moves,
    occupancy,
    pawn_moves,
    pseudo_legal_moves,
    queen_moves,
    rook_moves,
)
from chessref.core.notation import (
    STARTING_FEN,
    board_from_fen,
    board_to_fen,
    initial_pieces,
)
from chessref.core.piece import Piece
from chessref.core.settings import DEFAULT_SETTINGS, RuleSettings

__all__ = [
    # Enums
    "DrawReason",
    "GameState",
    "MoveKind",
    "PieceType",
    "PROMOTION_TYPES",
    "Team",
    # Domain objects
    "Board",
    "Coordinate",
    "InvalidBoardError",
    "MoveRecord",
    "Piece",
    "PositionKey",
    # Configuration
    "DEFAULT_SETTINGS",
    "RuleSettings",
    # Move generation
    "attacked_squares",
    "bishop_moves",
    "castling_moves",
    "is_square_attacked",
    "king_moves",
    "knight_moves",
    "occupancy",
    "pawn_moves",
    "pseudo_legal_moves",
    "queen_moves",
    "rook_moves",
    # Notation
    "STARTING_FEN",
    "board_from_fen",
    "board_to_fen",
    "initial_pieces",
]
