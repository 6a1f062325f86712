"""Pawn promotion. There is no choice offered: a pawn reaching the far end always becomes a queen."""

from typing import Optional

from netchess.chess.board import Board
from netchess.chess.moves import Move
from netchess.chess.pieces import Color, PieceType

PROMOTION_PIECE = PieceType.QUEEN


def promotion_row(color: Color) -> int:
    """The opponent's back rank"""
    return 0 if color == Color.WHITE else 7


def promotion_for(board: Board, move: Move) -> Optional[PieceType]:
    """
    Look at the board BEFORE the move is applied.
    Returns the piece type the moving pawn turns into, or None when nothing gets promoted.
    """
    piece = board.piece(move.from_square)
    if piece is None or piece.type != PieceType.PAWN:
        return None
    if move.to_square.row != promotion_row(piece.color):
        return None
    return PROMOTION_PIECE
