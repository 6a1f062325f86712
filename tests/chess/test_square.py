"""Unit tests for /netchess/chess/square.py"""

from string import ascii_lowercase

import pytest

from netchess.chess.square import BOARD_SIZE, Square, all_squares


@pytest.mark.parametrize(
    "row, col, notation",
    [
        (row, col, f"{ascii_lowercase[col]}{8 - row}")
        for row in range(BOARD_SIZE)
        for col in range(BOARD_SIZE)
    ],
)
def test_creating_from_algebraic(row: int, col: int, notation: str) -> None:
    """Row 0 is the 8th rank, column 0 is the a-file"""
    square = Square.from_algebraic(notation)
    assert square.row == row
    assert square.col == col
    assert square.to_algebraic() == notation


def test_well_known_squares() -> None:
    assert Square.from_algebraic("a8") == Square(0, 0)
    assert Square.from_algebraic("e2") == Square(6, 4)
    assert Square.from_algebraic("h1") == Square(7, 7)


def test_square_within_bounds() -> None:
    """happy case: every square of the board"""
    for square in all_squares():
        assert square.is_within_bounds()


@pytest.mark.parametrize("row, col", [(-1, 0), (0, -1), (8, 0), (0, 8), (8, 8)])
def test_square_out_of_bounds(row: int, col: int) -> None:
    assert not Square(row, col).is_within_bounds()


def test_all_squares_are_unique() -> None:
    squares = all_squares()
    assert len(squares) == BOARD_SIZE * BOARD_SIZE
    assert len(set(squares)) == len(squares)
