"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures required for testing multiple layers.
"""

import time
from typing import Callable

import pytest

from netchess.chess.board import Board
from netchess.chess.pieces import Piece
from netchess.chess.square import Square

BoardFactory = Callable[[dict[str, str]], Board]


@pytest.fixture
def board_with() -> BoardFactory:
    """Call the inner function with {square name: FEN character}, e.g. {"e1": "K", "e8": "k"}"""

    def _create_board(pieces: dict[str, str]) -> Board:
        board = Board.empty()
        for square_name, fen_char in pieces.items():
            board.place_piece(Piece.from_fen(fen_char), Square.from_algebraic(square_name))
        return board

    return _create_board


@pytest.fixture
def kings_only_board(board_with: BoardFactory) -> Board:
    """
    Only the kings on their canonical starting squares.
    Moves cannot be validated on a board without one of the kings (a missing king counts as being in check).
    """
    return board_with({"e1": "K", "e8": "k"})


@pytest.fixture
def castling_board(board_with: BoardFactory) -> Board:
    """Only the Kings and the Rooks. Ready to perform any castling move (if allowed)."""
    return board_with(
        {"e1": "K", "a1": "R", "h1": "R", "e8": "k", "a8": "r", "h8": "r"}
    )


@pytest.fixture
def wait_until() -> Callable[[Callable[[], bool], float], bool]:
    """Poll a condition set by another thread."""

    def _wait(predicate: Callable[[], bool], timeout: float = 2.0) -> bool:
        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            if predicate():
                return True
            time.sleep(0.01)
        return predicate()

    return _wait
