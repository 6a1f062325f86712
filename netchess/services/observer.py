"""
Protocols at the edges of the controller (can implement later for any GUI toolkit / test double etc.)

The controller never renders anything and never opens connections itself: it only talks to these.
"""

from typing import Optional, Protocol

from netchess.chess.board import Board
from netchess.chess.moves import Move
from netchess.chess.pieces import Color
from netchess.chess.square import Square
from netchess.core.models import GameResult


class GameObserver(Protocol):
    """Presentation layer"""

    def on_board_changed(self, board: Board) -> None:
        """A move was committed. `board` is a snapshot, not the live board."""
        ...

    def on_status_changed(self, message: str) -> None:
        """A notice for the user (whose turn it is, check, a rejected move, ...)."""
        ...

    def on_game_over(self, result: GameResult) -> None:
        """Called once. Nothing changes on the board afterwards."""
        ...

    def on_clock_changed(self, remaining: dict[Color, int]) -> None:
        """Seconds left for both colors."""
        ...

    def on_selection_changed(
        self, square: Optional[Square], destinations: list[Square]
    ) -> None:
        """The selected square (None when cleared) and where that piece may go."""
        ...


class MoveSender(Protocol):
    """Networking transport"""

    def send_move(self, move: Move) -> None:
        """Fire-and-forget. Raises TransportError when the connection is gone."""
        ...
