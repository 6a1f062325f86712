"""
Geometry/Base movement rules

Key idea: Use strategy pattern to define the move shape for each piece type.


Shape legality only: whose turn it is, capturing your own pieces and moving into check are checked later by GameState.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Self

from netchess.chess.pieces import Color, Piece, PieceType
from netchess.chess.square import Square, all_squares


class Board(Protocol):
    """Just the parts the movement strategies need"""

    def piece(self, square: Square) -> Optional[Piece]: ...
    def is_empty(self, square: Square) -> bool: ...


Vector = tuple[int, int]


@dataclass(frozen=True)
class Move:
    """basic definition of a move to be made. This is also the only thing ever sent to the peer."""

    from_square: Square
    to_square: Square

    @classmethod
    def from_uci(cls, uci: str) -> Self:
        """
        Universal Chess Interface notation, without the promotion suffix (promotion is always to a queen)

        examples:
        * "e2e4": move the piece that was on e2 to e4
        * "e1g1": the king castles king side
        """
        from_sq = Square.from_algebraic(uci[:2])
        to_sq = Square.from_algebraic(uci[2:4])
        return cls(from_sq, to_sq)

    def to_uci(self) -> str:
        return f"{self.from_square.to_algebraic()}{self.to_square.to_algebraic()}"

    @property
    def delta(self) -> Vector:
        """(rows moved, columns moved)"""
        return (
            self.to_square.row - self.from_square.row,
            self.to_square.col - self.from_square.col,
        )


# --- PATH HELPERS ---
def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def squares_between(from_square: Square, to_square: Square) -> list[Square]:
    """
    Find the squares strictly in between the two squares specified.

    Both squares must share a row, a column or a diagonal.
    """
    dr = to_square.row - from_square.row
    dc = to_square.col - from_square.col
    if not (dr == 0 or dc == 0 or abs(dr) == abs(dc)):
        raise ValueError(
            f"squares_between requires both squares to be aligned. \n from: {from_square}\n to:{to_square}"
        )

    step_row, step_col = _sign(dr), _sign(dc)
    squares_found: list[Square] = []
    row, col = from_square.row + step_row, from_square.col + step_col
    while (row, col) != (to_square.row, to_square.col):
        squares_found.append(Square(row, col))
        row += step_row
        col += step_col
    return squares_found


def is_path_clear(move: Move, board: Board) -> bool:
    """Sliding pieces cannot jump: every square in between must be empty"""
    return all(
        board.is_empty(square)
        for square in squares_between(move.from_square, move.to_square)
    )


# --- SHAPE RULES ---
def pawn_direction(color: Color) -> int:
    """White moves UP the board (towards row 0), black moves DOWN"""
    return -1 if color == Color.WHITE else 1


def pawn_starting_row(color: Color) -> int:
    return 6 if color == Color.WHITE else 1


def is_pawn_shape(move: Move, board: Board) -> bool:
    """
    A pawn:
    - moves by a single square forward, onto an empty square.
    - It can move by two in their first move (so when on their starting row), if nothing is in the way
    - takes diagonally, and only when there is something to take

    NOTE: No en passant.
    """
    pawn = board.piece(move.from_square)
    assert pawn is not None
    direction = pawn_direction(pawn.color)
    dr, dc = move.delta

    if dc == 0 and board.is_empty(move.to_square):
        if dr == direction:
            return True
        crossed = Square(move.from_square.row + direction, move.from_square.col)
        if (
            move.from_square.row == pawn_starting_row(pawn.color)
            and dr == 2 * direction
            and board.is_empty(crossed)
        ):
            return True

    return abs(dc) == 1 and dr == direction and not board.is_empty(move.to_square)


def is_rook_shape(move: Move, board: Board) -> bool:
    """Rooks move either horizontally or vertically"""
    dr, dc = move.delta
    if dr != 0 and dc != 0:
        return False
    return is_path_clear(move, board)


def is_bishop_shape(move: Move, board: Board) -> bool:
    """Bishops move diagonally: |delta_row| = |delta_col|"""
    dr, dc = move.delta
    if abs(dr) != abs(dc):
        return False
    return is_path_clear(move, board)


def is_queen_shape(move: Move, board: Board) -> bool:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    return is_rook_shape(move, board) or is_bishop_shape(move, board)


def is_knight_shape(move: Move, board: Board) -> bool:
    """Knights jump: |delta_row| + |delta_col| = 3, never in a straight line"""
    dr, dc = move.delta
    return (abs(dr), abs(dc)) in [(2, 1), (1, 2)]


def is_king_shape(move: Move, board: Board) -> bool:
    """
    The king can move by a single square at the time.

    Castling is not a king shape. It is handled as a separate exception (see castling.py).
    """
    dr, dc = move.delta
    return abs(dr) <= 1 and abs(dc) <= 1


# -- STRATEGY PATTERN: SHAPE RULES ---
ShapeRuleFn = Callable[[Move, Board], bool]
SHAPE_RULES: dict[PieceType, ShapeRuleFn] = {
    PieceType.PAWN: is_pawn_shape,
    PieceType.KNIGHT: is_knight_shape,
    PieceType.BISHOP: is_bishop_shape,
    PieceType.ROOK: is_rook_shape,
    PieceType.QUEEN: is_queen_shape,
    PieceType.KING: is_king_shape,
}


def is_legal_shape(board: Board, from_square: Square, to_square: Square) -> bool:
    """Does the piece standing on `from_square` move like that? (ignores turns, own pieces and checks)"""
    if not (from_square.is_within_bounds() and to_square.is_within_bounds()):
        return False
    if from_square == to_square:
        return False

    piece = board.piece(from_square)
    if piece is None:
        return False

    shape_rule = SHAPE_RULES[piece.type]
    return shape_rule(Move(from_square, to_square), board)


def candidate_destinations(board: Board, square: Square) -> list[Square]:
    """
    Squares the piece on `square` could move to by shape, leaving out those occupied by its own color.
    Used to highlight options for the player. Still needs the check test before it can be played.
    """
    piece = board.piece(square)
    if piece is None:
        return []

    destinations: list[Square] = []
    for target in all_squares():
        target_piece = board.piece(target)
        if target_piece is not None and target_piece.color == piece.color:
            continue
        if is_legal_shape(board, square, target):
            destinations.append(target)
    return destinations
