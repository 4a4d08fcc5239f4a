"""Tests for Coordinate."""

import pytest

from chessref.core.coordinate import Coordinate


class TestCoordinate:
    def test_structural_equality(self) -> None:
        assert Coordinate(4, 3) == Coordinate(4, 3)
        assert Coordinate(4, 3) != Coordinate(3, 4)

    def test_hashable(self) -> None:
        assert len({Coordinate(0, 0), Coordinate(0, 0), Coordinate(7, 7)}) == 2

    def test_is_on_board(self) -> None:
        assert Coordinate(0, 0).is_on_board()
        assert Coordinate(7, 7).is_on_board()
        assert not Coordinate(8, 0).is_on_board()
        assert not Coordinate(0, -1).is_on_board()

    def test_distance(self) -> None:
        assert Coordinate(0, 0).distance_to(Coordinate(3, 4)) == pytest.approx(5.0)
        assert Coordinate(2, 2).distance_to(Coordinate(2, 2)) == 0.0

    def test_immutable(self) -> None:
        c = Coordinate(1, 1)
        with pytest.raises(AttributeError):
            c.file = 2  # type: ignore[misc]


class TestCoordinateNotation:
    def test_name(self) -> None:
        assert Coordinate(0, 0).name == "a1"
        assert Coordinate(4, 3).name == "e4"
        assert str(Coordinate(7, 7)) == "h8"

    def test_parse(self) -> None:
        assert Coordinate.parse("e4") == Coordinate(4, 3)
        assert Coordinate.parse("h8") == Coordinate(7, 7)

    @pytest.mark.parametrize("name", ["", "e", "i1", "a9", "e44", "E4"])
    def test_parse_invalid(self, name: str) -> None:
        with pytest.raises(ValueError, match="Invalid square name"):
            Coordinate.parse(name)

    def test_off_board_has_no_name(self) -> None:
        with pytest.raises(ValueError, match="off board"):
            _ = Coordinate(8, 8).name
