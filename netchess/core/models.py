"""
Boundary layer data model(s).

These objects cross the boundary between the game controller and whatever sits around it
(presentation layer, session wiring, command line).
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from netchess.chess.pieces import Color


class Status(Enum):
    IN_PROGRESS = auto()
    CHECKMATE = auto()
    TIMEOUT = auto()
    ABORTED = auto()


class Role(Enum):
    """Which side of the connection this peer is on. Fixed for the duration of a game."""

    HOST = auto()
    JOIN = auto()

    @property
    def color(self) -> Color:
        # The host moves first
        return Color.WHITE if self == Role.HOST else Color.BLACK


@dataclass(frozen=True)
class GameResult:
    """How the game ended. `winner` is None when the game was abandoned."""

    status: Status
    winner: Optional[Color]

    @property
    def message(self) -> str:
        if self.winner is None:
            return "Connection lost. The game was abandoned."
        loser = self.winner.opponent
        if self.status == Status.TIMEOUT:
            return f"{loser.display_name}'s time is up! {self.winner.display_name} wins!"
        return f"Checkmate! {self.winner.display_name} wins!"
