"""Exceptions raised by the core domain layer."""

from __future__ import annotations


class InvalidBoardError(ValueError):
    """The initial piece layout violates a board invariant.

    Raised at construction; a board is never built from such a layout.
    """
