"""
A square on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass

# Chess board is always 8x8.
BOARD_SIZE = 8


@dataclass(frozen=True)
class Square:
    """
    Row 0 is the far rank (Black's back rank), row 7 the near rank (White's back rank).
    Columns run from the a-file (0) to the h-file (7).
    """

    row: int
    col: int

    @classmethod
    def from_algebraic(cls, sq: str) -> Square:
        """Algebraic notation: 'a8' gets converted to (0, 0), 'h1' to (7, 7)"""
        col = ord(sq[0]) - ord("a")
        row = BOARD_SIZE - int(sq[1])
        return cls(row, col)

    def to_algebraic(self) -> str:
        return f"{chr(self.col + ord('a'))}{BOARD_SIZE - self.row}"

    def is_within_bounds(self) -> bool:
        return (0 <= self.row < BOARD_SIZE) and (0 <= self.col < BOARD_SIZE)


def all_squares() -> list[Square]:
    """All 64 squares, row by row starting from the far rank."""
    return [Square(row, col) for row in range(BOARD_SIZE) for col in range(BOARD_SIZE)]
