"""Colors, piece kinds and the piece itself"""

from dataclasses import dataclass
from enum import Enum
from typing import Self


class PieceType(Enum):
    """The value is the (black, lower case) FEN letter of the piece"""

    PAWN = "p"
    KNIGHT = "n"
    BISHOP = "b"
    ROOK = "r"
    QUEEN = "q"
    KING = "k"


class Color(Enum):
    WHITE = "w"
    BLACK = "b"

    @property
    def opponent(self) -> "Color":
        return Color.BLACK if self == Color.WHITE else Color.WHITE

    @property
    def display_name(self) -> str:
        return self.name.capitalize()


FEN_TO_PIECE: dict[str, PieceType] = {kind.value: kind for kind in PieceType}
PIECE_TO_FEN: dict[PieceType, str] = {kind: kind.value for kind in PieceType}


@dataclass(frozen=True)
class Piece:
    """
    An empty square is not a piece: the board stores None there.
    Frozen, so a shallow copy of the board is already fully independent.
    """

    color: Color
    type: PieceType

    @classmethod
    def from_fen(cls, character: str) -> Self:
        # upper case is White
        if character.lower() not in FEN_TO_PIECE:
            raise ValueError(f"Not a FEN piece letter: {character!r}")
        return cls(
            Color.WHITE if character.isupper() else Color.BLACK,
            FEN_TO_PIECE[character.lower()],
        )

    def to_fen(self) -> str:
        letter = PIECE_TO_FEN[self.type]
        return letter.upper() if self.color == Color.WHITE else letter

    def promoted_to(self, new_type: PieceType) -> Self:
        """Pieces are immutable: promotion hands back a new piece of the same color."""
        return type(self)(self.color, new_type)
