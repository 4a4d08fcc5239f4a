"""Rule thresholds shared by every board of a game."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class RuleSettings:
    """Draw thresholds.

    ``fifty_move_limit`` counts half-moves without a pawn move or capture;
    ``repetition_threshold`` is how often a position must occur to draw.
    """

    fifty_move_limit: int = 50
    repetition_threshold: int = 3

    def __post_init__(self) -> None:
        if self.fifty_move_limit < 1:
            raise ValueError(f"Invalid fifty-move limit: {self.fifty_move_limit!r}")
        if self.repetition_threshold < 1:
            raise ValueError(
                f"Invalid repetition threshold: {self.repetition_threshold!r}"
            )


DEFAULT_SETTINGS = RuleSettings()
