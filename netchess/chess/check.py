"""
Check / Checkmate detection.

Both build on the shape rules only: an enemy piece gives check if it could move onto the king's square
(one-ply attack test, the attacker's own king safety is irrelevant).
"""

from typing import Iterator

from netchess.chess.board import Board
from netchess.chess.moves import Move, is_legal_shape
from netchess.chess.pieces import Color, Piece, PieceType
from netchess.chess.square import Square, all_squares


def is_in_check(board: Board, color: Color) -> bool:
    """Is the king of `color` attacked by any of the opponent's pieces?"""
    king_squares = board.locate(Piece(color, PieceType.KING))
    if not king_squares:
        # Should not happen in a reachable position. Treat a missing king as lost.
        return True

    king_square = king_squares[0]
    return any(
        is_legal_shape(board, square, king_square)
        for square in board.locate_color(color.opponent)
    )


def escape_moves(board: Board, color: Color) -> Iterator[Move]:
    """
    All (piece, destination) pairs of `color` that leave its king out of check.

    A pair qualifies when the shape holds and the destination does not hold one of your own pieces.
    Every pair is played on a copy of the board, the live board is never touched.
    """
    for from_square in board.locate_color(color):
        for to_square in all_squares():
            if not _is_candidate(board, color, from_square, to_square):
                continue
            move = Move(from_square, to_square)
            simulated = board.copy()
            simulated.apply(move)
            if not is_in_check(simulated, color):
                yield move


def is_checkmate(board: Board, color: Color) -> bool:
    """In check, and no move gets you out of it."""
    if not is_in_check(board, color):
        return False
    return next(escape_moves(board, color), None) is None


def _is_candidate(board: Board, color: Color, from_square: Square, to_square: Square) -> bool:
    target = board.piece(to_square)
    if target is not None and target.color == color:
        return False
    return is_legal_shape(board, from_square, to_square)
