"""chessref — chess legality engine."""

__version__ = "0.1.0"
