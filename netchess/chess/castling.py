"""
Castling: rights bookkeeping, the legality exception for the two-square king move, and the rook relocation after it.

The king shape rule itself only allows single steps. Castling is allowed on top of that when:

* neither the king nor the rook on that side has moved (or been captured) before,
* both still stand on their home squares,
* the squares between them are empty,
* the king is not in check, does not pass through an attacked square and does not end up in check
  (the last part is covered by the regular self-check test every move goes through).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Self

from netchess.chess.board import Board
from netchess.chess.check import is_in_check
from netchess.chess.moves import Move, squares_between
from netchess.chess.pieces import Color, Piece, PieceType
from netchess.chess.square import Square


class CastlingSide(Enum):
    """Values are the index into `CastlingRights.rook_moved`."""

    QUEEN_SIDE = 0
    KING_SIDE = 1


@dataclass
class CastlingRights:
    """
    Flags only ever go from False to True. There is deliberately no way to reset them.
    """

    king_moved: bool = False
    rook_moved: list[bool] = field(default_factory=lambda: [False, False])

    def mark_king_moved(self) -> None:
        self.king_moved = True

    def mark_rook_moved(self, side: CastlingSide) -> None:
        self.rook_moved[side.value] = True

    def allows(self, side: CastlingSide) -> bool:
        return not self.king_moved and not self.rook_moved[side.value]


def new_castling_rights() -> dict[Color, CastlingRights]:
    return {color: CastlingRights() for color in Color}


@dataclass(frozen=True)
class CastlingSquares:
    """
    Store the squares where king/rook start from/end up in by castling.
    """

    king_from: Square
    king_to: Square
    rook_from: Square
    rook_to: Square

    @classmethod
    def from_algebraic(cls, k_from: str, k_to: str, r_from: str, r_to: str) -> Self:
        """Convenience method: to make mapping shown below more readable"""
        king_from = Square.from_algebraic(k_from)
        king_to = Square.from_algebraic(k_to)
        rook_from = Square.from_algebraic(r_from)
        rook_to = Square.from_algebraic(r_to)
        return cls(king_from, king_to, rook_from, rook_to)

    @property
    def king_crosses(self) -> Square:
        """The square the king passes over. It is also where the rook lands."""
        return self.rook_to


# The moves (in classical chess) made when castling
CASTLING_RULES: dict[tuple[Color, CastlingSide], CastlingSquares] = {
    (Color.WHITE, CastlingSide.KING_SIDE): CastlingSquares.from_algebraic(
        "e1", "g1", "h1", "f1"
    ),
    (Color.WHITE, CastlingSide.QUEEN_SIDE): CastlingSquares.from_algebraic(
        "e1", "c1", "a1", "d1"
    ),
    (Color.BLACK, CastlingSide.KING_SIDE): CastlingSquares.from_algebraic(
        "e8", "g8", "h8", "f8"
    ),
    (Color.BLACK, CastlingSide.QUEEN_SIDE): CastlingSquares.from_algebraic(
        "e8", "c8", "a8", "d8"
    ),
}


def castling_side(piece: Optional[Piece], move: Move) -> Optional[CastlingSide]:
    """Which side a king move castles to, or None if it is not a castling pattern (king, home square, two files sideways)."""
    if piece is None or piece.type != PieceType.KING:
        return None

    for (color, side), squares in CASTLING_RULES.items():
        if color != piece.color:
            continue
        if move.from_square == squares.king_from and move.to_square == squares.king_to:
            return side
    return None


def can_castle(
    board: Board,
    rights: dict[Color, CastlingRights],
    color: Color,
    side: CastlingSide,
) -> bool:
    """
    Checks everything except whether the king ends in check
    (every move, castling included, gets simulated for that afterwards).
    """
    squares = CASTLING_RULES[(color, side)]

    # rights are gone for good once revoked
    if not rights[color].allows(side):
        return False

    # both pieces still on their home squares
    if board.piece(squares.king_from) != Piece(color, PieceType.KING):
        return False
    if board.piece(squares.rook_from) != Piece(color, PieceType.ROOK):
        return False

    # nothing may stand between king and rook
    path = squares_between(squares.king_from, squares.rook_from)
    if any(not board.is_empty(square) for square in path):
        return False

    # not out of check
    if is_in_check(board, color):
        return False

    # nor through an attacked square
    passing = board.copy()
    passing.apply(Move(squares.king_from, squares.king_crosses))
    return not is_in_check(passing, color)


def handle_castling(
    board: Board,
    rights: dict[Color, CastlingRights],
    piece: Piece,
    move: Move,
) -> None:
    """
    Post-move bookkeeping, run after `move` has been applied to `board`.

    1. If you moved your king --> flag it
    2. If the king moved two files from its home square --> also move the rook and flag it
    3. If anything moved away from, or captured on, a rook's home corner --> flag that rook
    """
    if piece.type == PieceType.KING:
        rights[piece.color].mark_king_moved()

        side = castling_side(piece, move)
        if side is not None:
            squares = CASTLING_RULES[(piece.color, side)]
            if board.piece(squares.rook_from) == Piece(piece.color, PieceType.ROOK):
                board.apply(Move(squares.rook_from, squares.rook_to))
            rights[piece.color].mark_rook_moved(side)

    for square in (move.from_square, move.to_square):
        _flag_rook_corner(rights, square)


def _flag_rook_corner(rights: dict[Color, CastlingRights], square: Square) -> None:
    for (color, side), squares in CASTLING_RULES.items():
        if squares.rook_from == square:
            rights[color].mark_rook_moved(side)
