"""The Board holds the position (in chess: the configuration of pieces on the board). It does not know any rules."""

from dataclasses import dataclass
from itertools import groupby
from typing import Optional, Self

from netchess.chess.moves import Move
from netchess.chess.pieces import Color, Piece, PieceType
from netchess.chess.square import BOARD_SIZE, Square, all_squares
from netchess.core.exceptions import GameStateError

STARTING_POSITION_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"
EMPTY_FEN = "/".join(["8"] * BOARD_SIZE)


@dataclass
class Board:
    position: dict[Square, Optional[Piece]]

    @classmethod
    def empty(cls) -> Self:
        return cls({square: None for square in all_squares()})

    @classmethod
    def starting_position(cls) -> Self:
        return cls.from_fen(STARTING_POSITION_FEN)

    @classmethod
    def from_fen(cls, placement: str) -> Self:
        """
        Piece placement part of a FEN string, e.g. rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR

        Ranks are listed from the 8th down to the 1st, which is also the order of the rows.
        Digits count empty squares, letters are pieces (upper case for White).
        """
        ranks = placement.split("/")
        if len(ranks) != BOARD_SIZE:
            raise ValueError(f"Expected {BOARD_SIZE} ranks in {placement!r}")

        board = cls.empty()
        for row, rank in enumerate(ranks):
            col = 0
            for character in rank:
                if character.isdigit():
                    col += int(character)
                    continue
                board.place_piece(Piece.from_fen(character), Square(row, col))
                col += 1
            if col != BOARD_SIZE:
                raise ValueError(f"Rank {rank!r} does not describe {BOARD_SIZE} squares")
        return board

    def to_fen(self) -> str:
        return "/".join(self._rank_to_fen(row) for row in range(BOARD_SIZE))

    def _rank_to_fen(self, row: int) -> str:
        cells = [self.piece(Square(row, col)) for col in range(BOARD_SIZE)]
        parts: list[str] = []
        for is_empty, group in groupby(cells, key=lambda piece: piece is None):
            run = list(group)
            if is_empty:
                parts.append(str(len(run)))
            else:
                parts.extend(piece.to_fen() for piece in run)
        return "".join(parts)

    def piece(self, square: Square) -> Optional[Piece]:
        return self.position[square]

    def is_empty(self, square: Square) -> bool:
        return self.position[square] is None

    def locate(self, piece: Piece) -> list[Square]:
        return [square for square, found in self.position.items() if found == piece]

    def locate_color(self, color: Color) -> list[Square]:
        return [
            square
            for square, piece in self.position.items()
            if piece is not None and piece.color == color
        ]

    def place_piece(self, piece: Piece, square: Square) -> None:
        self.position[square] = piece

    def remove_piece(self, square: Square) -> None:
        self.position[square] = None

    def apply(self, move: Move, promote_to: Optional[PieceType] = None) -> None:
        """
        Update the position on the board. Whatever stood on the target square is captured.

        No rules are checked here: the same call is used for validated local moves and trusted moves from the peer.
        """
        piece_that_moved = self.piece(move.from_square)
        if piece_that_moved is None:
            raise GameStateError(
                f"No piece on {move.from_square.to_algebraic()} to move."
            )

        if promote_to is not None:
            piece_that_moved = piece_that_moved.promoted_to(promote_to)
        self.position[move.from_square] = None
        self.position[move.to_square] = piece_that_moved

    def copy(self) -> Self:
        """Independent snapshot (pieces are immutable, so copying the mapping is enough)."""
        return type(self)(dict(self.position))
