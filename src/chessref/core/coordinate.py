"""Coordinate value object.

Files and ranks are zero based: ``Coordinate(0, 0)`` is a1 and
``Coordinate(7, 7)`` is h8.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

_FILES = "abcdefgh"
_RANKS = "12345678"


@dataclass(frozen=True, slots=True)
class Coordinate:
    """Immutable board coordinate."""

    file: int
    rank: int

    def is_on_board(self) -> bool:
        return 0 <= self.file < 8 and 0 <= self.rank < 8

    def distance_to(self, other: Coordinate) -> float:
        """Euclidean distance, used for highlighting only."""
        return math.hypot(self.file - other.file, self.rank - other.rank)

    # ── Notation ─────────────────────────────────────────────────────────

    @property
    def name(self) -> str:
        """Algebraic name, e.g. ``Coordinate(4, 3)`` → 'e4'."""
        if not self.is_on_board():
            raise ValueError(f"Coordinate off board: ({self.file}, {self.rank})")
        return _FILES[self.file] + _RANKS[self.rank]

    @classmethod
    def parse(cls, name: str) -> Coordinate:
        """Parse an algebraic square name, e.g. 'e4'."""
        if len(name) != 2 or name[0] not in _FILES or name[1] not in _RANKS:
            raise ValueError(f"Invalid square name: {name!r}")
        return cls(_FILES.index(name[0]), _RANKS.index(name[1]))

    def __str__(self) -> str:
        return self.name
