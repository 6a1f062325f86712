"""
Wire format between the two peers.

One move per line, four comma separated integers: `fromRow,fromCol,toRow,toCol`, e.g. `6,4,4,4`.
There are no other message types.
"""

from typing import Annotated, Self

from pydantic import BaseModel, Field, ValidationError

from netchess.chess.moves import Move
from netchess.chess.square import BOARD_SIZE, Square
from netchess.core.exceptions import ProtocolError

FIELD_SEPARATOR = ","
LINE_TERMINATOR = "\n"

Coordinate = Annotated[int, Field(ge=0, le=BOARD_SIZE - 1)]


class MoveMessage(BaseModel):
    from_row: Coordinate
    from_col: Coordinate
    to_row: Coordinate
    to_col: Coordinate

    @classmethod
    def from_move(cls, move: Move) -> Self:
        return cls(
            from_row=move.from_square.row,
            from_col=move.from_square.col,
            to_row=move.to_square.row,
            to_col=move.to_square.col,
        )

    def to_move(self) -> Move:
        return Move(
            Square(self.from_row, self.from_col),
            Square(self.to_row, self.to_col),
        )


def encode_move(move: Move) -> str:
    """The line (without terminator) that gets sent to the peer"""
    message = MoveMessage.from_move(move)
    return FIELD_SEPARATOR.join(
        str(value)
        for value in (message.from_row, message.from_col, message.to_row, message.to_col)
    )


def decode_move(line: str) -> Move:
    """Parse one received line. Anything that is not exactly four integers on the board raises ProtocolError."""
    fields = [field.strip() for field in line.strip().split(FIELD_SEPARATOR)]
    if len(fields) != 4:
        raise ProtocolError(f"Expected 4 fields, got {len(fields)}: {line!r}")

    if not all(field.isascii() and field.isdigit() for field in fields):
        raise ProtocolError(f"Fields must be plain integers: {line!r}")

    from_row, from_col, to_row, to_col = (int(field) for field in fields)
    try:
        message = MoveMessage(
            from_row=from_row, from_col=from_col, to_row=to_row, to_col=to_col
        )
    except ValidationError as exc:
        raise ProtocolError(f"Square outside of the board: {line!r}") from exc
    return message.to_move()
