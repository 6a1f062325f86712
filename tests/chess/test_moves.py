"""Unit tests for /netchess/chess/moves.py"""

from unittest.mock import Mock, patch

import pytest

from netchess.chess.board import Board
from netchess.chess.moves import (
    SHAPE_RULES,
    Move,
    candidate_destinations,
    is_legal_shape,
    squares_between,
)
from netchess.chess.pieces import Color, Piece, PieceType
from netchess.chess.square import Square

sq = Square.from_algebraic


# -- MOVE CREATION, UCI NOTATION ---
@pytest.mark.parametrize(
    "uci_move, from_uci, to_uci",
    [
        ("e2e4", "e2", "e4"),
        ("a1a5", "a1", "a5"),
        ("d2e4", "d2", "e4"),
        ("g3a7", "g3", "a7"),
    ],
)
def test_creating_move_from_uci(uci_move: str, from_uci: str, to_uci: str) -> None:
    """Parsing logic of UCI notation for the move should be <from_square><to_square>"""
    move = Move.from_uci(uci_move)
    assert move.from_square == sq(from_uci)
    assert move.to_square == sq(to_uci)
    assert move.to_uci() == uci_move


def test_move_delta() -> None:
    """White pawn push: two rows up the board (towards row 0)"""
    assert Move.from_uci("e2e4").delta == (-2, 0)
    assert Move.from_uci("b8c6").delta == (2, 1)


# -- PATH HELPERS ---
@pytest.mark.parametrize(
    "from_name, to_name, expected",
    [
        ("a1", "a4", ["a2", "a3"]),
        ("a1", "d1", ["b1", "c1"]),
        ("h8", "e8", ["g8", "f8"]),
        ("a1", "d4", ["b2", "c3"]),
        ("f3", "d5", ["e4"]),
        ("e4", "e5", []),
    ],
)
def test_squares_between(from_name: str, to_name: str, expected: list[str]) -> None:
    found = squares_between(sq(from_name), sq(to_name))
    assert found == [sq(name) for name in expected]


def test_squares_between_requires_aligned_squares() -> None:
    with pytest.raises(ValueError):
        squares_between(sq("a1"), sq("b3"))


# -- PAWN ---
@pytest.mark.parametrize(
    "uci, legal",
    [
        ("e2e3", True),
        ("e2e4", True),
        ("e2e5", False),
        ("e2d3", False),  # diagonal onto an empty square
        ("e7e6", True),
        ("e7e5", True),
        ("e7e4", False),
    ],
)
def test_pawn_moves_from_starting_position(uci: str, legal: bool) -> None:
    board = Board.starting_position()
    move = Move.from_uci(uci)
    assert is_legal_shape(board, move.from_square, move.to_square) is legal


def test_pawn_scenario_e2e4_is_row_6_to_row_4() -> None:
    board = Board.starting_position()
    assert is_legal_shape(board, Square(6, 4), Square(4, 4))


def test_pawn_cannot_move_backwards(board_with) -> None:
    board = board_with({"e4": "P", "d5": "p"})
    assert not is_legal_shape(board, sq("e4"), sq("e3"))
    assert not is_legal_shape(board, sq("d5"), sq("d6"))


def test_pawn_blocked_by_piece_in_front(board_with) -> None:
    """A pawn cannot take straight ahead, and cannot jump over a piece on its double step"""
    board = board_with({"e2": "P", "e3": "n", "d2": "P", "d4": "n"})
    assert not is_legal_shape(board, sq("e2"), sq("e3"))
    assert not is_legal_shape(board, sq("e2"), sq("e4"))
    assert is_legal_shape(board, sq("d2"), sq("d3"))
    assert not is_legal_shape(board, sq("d2"), sq("d4"))


def test_pawn_double_step_only_from_starting_row(board_with) -> None:
    board = board_with({"e3": "P", "d6": "p"})
    assert not is_legal_shape(board, sq("e3"), sq("e5"))
    assert not is_legal_shape(board, sq("d6"), sq("d4"))


@pytest.mark.parametrize("target", ["d5", "f5"])
def test_pawn_takes_diagonally(board_with, target: str) -> None:
    board = board_with({"e4": "P", target: "p"})
    assert is_legal_shape(board, sq("e4"), sq(target))


def test_black_pawn_takes_downwards(board_with) -> None:
    board = board_with({"d5": "p", "e4": "P", "c6": "P"})
    assert is_legal_shape(board, sq("d5"), sq("e4"))
    assert not is_legal_shape(board, sq("d5"), sq("c6"))


# -- SLIDING PIECES ---
def test_rook_moves(board_with) -> None:
    board = board_with({"d4": "R", "d7": "p", "b4": "P"})
    assert is_legal_shape(board, sq("d4"), sq("d7"))
    assert is_legal_shape(board, sq("d4"), sq("h4"))
    assert is_legal_shape(board, sq("d4"), sq("d1"))
    assert not is_legal_shape(board, sq("d4"), sq("d8"))  # blocked by d7
    assert not is_legal_shape(board, sq("d4"), sq("a4"))  # blocked by b4
    assert not is_legal_shape(board, sq("d4"), sq("e5"))


def test_bishop_moves(board_with) -> None:
    board = board_with({"c1": "B", "e3": "p"})
    assert is_legal_shape(board, sq("c1"), sq("d2"))
    assert is_legal_shape(board, sq("c1"), sq("e3"))
    assert not is_legal_shape(board, sq("c1"), sq("f4"))  # blocked by e3
    assert is_legal_shape(board, sq("c1"), sq("a3"))
    assert not is_legal_shape(board, sq("c1"), sq("c3"))


def test_queen_combines_rook_and_bishop(board_with) -> None:
    board = board_with({"d4": "Q"})
    assert is_legal_shape(board, sq("d4"), sq("d8"))
    assert is_legal_shape(board, sq("d4"), sq("a4"))
    assert is_legal_shape(board, sq("d4"), sq("h8"))
    assert is_legal_shape(board, sq("d4"), sq("a1"))
    assert not is_legal_shape(board, sq("d4"), sq("e6"))


def test_knight_jumps_over_pieces() -> None:
    board = Board.starting_position()
    assert is_legal_shape(board, sq("g1"), sq("f3"))
    assert is_legal_shape(board, sq("g1"), sq("h3"))
    assert not is_legal_shape(board, sq("g1"), sq("g3"))


@pytest.mark.parametrize("target", ["d3", "d5", "e3", "e5", "f3", "f4", "f5", "d4"])
def test_king_single_steps(target: str, board_with) -> None:
    board = board_with({"e4": "K"})
    assert is_legal_shape(board, sq("e4"), sq(target))


@pytest.mark.parametrize("target", ["g1", "c1"])
def test_king_two_square_move_is_not_a_shape(castling_board: Board, target: str) -> None:
    """Castling is a separate exception on top of the king shape (see castling.py)"""
    assert not is_legal_shape(castling_board, sq("e1"), sq(target))


# -- GENERAL ---
def test_empty_source_square() -> None:
    board = Board.starting_position()
    assert not is_legal_shape(board, sq("e4"), sq("e5"))


def test_zero_length_move() -> None:
    board = Board.starting_position()
    assert not is_legal_shape(board, sq("d1"), sq("d1"))


def test_off_the_board() -> None:
    board = Board.starting_position()
    assert not is_legal_shape(board, sq("a1"), Square(8, 0))


def test_shape_ignores_colors(board_with) -> None:
    """Capturing your own piece is not this layer's concern"""
    board = board_with({"a1": "R", "a5": "P"})
    assert is_legal_shape(board, sq("a1"), sq("a5"))


@pytest.mark.parametrize("piece_type", list(PieceType))
def test_dispatch_on_piece_type(piece_type: PieceType) -> None:
    """The rule for the piece standing on the source square gets used, and only that rule"""
    board = Board.empty()
    board.place_piece(Piece(Color.WHITE, piece_type), sq("d4"))
    mock_rules = {kind: Mock(return_value=False) for kind in PieceType}
    mock_rules[piece_type].return_value = True

    with patch.dict("netchess.chess.moves.SHAPE_RULES", mock_rules):
        assert is_legal_shape(board, sq("d4"), sq("d5"))

    mock_rules[piece_type].assert_called_once_with(Move(sq("d4"), sq("d5")), board)
    for kind, rule in mock_rules.items():
        if kind != piece_type:
            rule.assert_not_called()


def test_every_piece_type_has_a_rule() -> None:
    assert set(SHAPE_RULES) == set(PieceType)


# -- CANDIDATE DESTINATIONS ---
@pytest.mark.parametrize(
    "square_name, expected",
    [
        ("g1", {"f3", "h3"}),
        ("e2", {"e3", "e4"}),
        ("a1", set()),
        ("e1", set()),
    ],
)
def test_candidate_destinations_from_start(square_name: str, expected: set[str]) -> None:
    board = Board.starting_position()
    found = candidate_destinations(board, sq(square_name))
    assert {square.to_algebraic() for square in found} == expected


def test_candidate_destinations_include_captures_only_of_the_opponent(board_with) -> None:
    board = board_with({"a1": "R", "a3": "p", "c1": "N"})
    found = {square.to_algebraic() for square in candidate_destinations(board, sq("a1"))}
    assert found == {"a2", "a3", "b1"}
