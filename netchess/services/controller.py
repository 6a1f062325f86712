"""
Orchestration of everything that can change the game: local input, moves from the peer and clock ticks.

The controller is the only owner of the GameState. All three sources run on different threads, so every
public method holds the same lock for its whole validate -> commit -> castling/promotion -> send -> clock -> notify sequence.
Nobody can observe a half-applied move.
"""

import logging
import threading
from copy import deepcopy
from typing import Optional

from netchess.chess.board import Board
from netchess.chess.castling import CastlingRights
from netchess.chess.clock import TurnClock
from netchess.chess.game import GameState
from netchess.chess.moves import Move
from netchess.chess.pieces import Color
from netchess.chess.square import Square
from netchess.core.config import DEFAULT_TURN_SECONDS
from netchess.core.exceptions import (
    GameError,
    GameStateError,
    IllegalMoveError,
    TransportError,
)
from netchess.core.models import GameResult, Status
from netchess.services.observer import GameObserver, MoveSender

logger = logging.getLogger(__name__)


class GameController:
    """Single writer of the game state for one peer."""

    def __init__(
        self,
        local_color: Color,
        observer: GameObserver,
        sender: MoveSender,
        turn_seconds: int = DEFAULT_TURN_SECONDS,
        state: Optional[GameState] = None,
    ) -> None:
        self.local_color = local_color
        self.observer = observer
        self.sender = sender
        self._state = state if state is not None else GameState.new_game()
        self._clock = TurnClock(turn_seconds, active=self._state.turn)
        self._selected: Optional[Square] = None
        self._lock = threading.RLock()

    # -- Read-only views (copies, never the live objects) ---
    @property
    def board(self) -> Board:
        with self._lock:
            return self._state.board.copy()

    @property
    def turn(self) -> Color:
        with self._lock:
            return self._state.turn

    @property
    def status(self) -> Status:
        with self._lock:
            return self._state.status

    @property
    def winner(self) -> Optional[Color]:
        with self._lock:
            return self._state.winner

    @property
    def game_over(self) -> bool:
        with self._lock:
            return self._state.game_over

    @property
    def selected(self) -> Optional[Square]:
        with self._lock:
            return self._selected

    @property
    def castling_rights(self) -> dict[Color, CastlingRights]:
        with self._lock:
            return deepcopy(self._state.castling_rights)

    def remaining_time(self) -> dict[Color, int]:
        with self._lock:
            return self._clock.snapshot()

    # -- Entry points ---
    def start(self) -> None:
        """Push the initial state to the presentation layer."""
        with self._lock:
            self.observer.on_board_changed(self._state.board.copy())
            self.observer.on_clock_changed(self._clock.snapshot())
            self.observer.on_status_changed(self._turn_message())

    def on_square_selected(self, square: Square) -> None:
        """
        Local input, one click at the time
        ----

        1. first click on one of your pieces selects it (and reports where it may go)
        2. clicking the selected square again drops the selection
        3. any other second click is a move attempt from the selected square
        """
        with self._lock:
            if self._state.game_over:
                self.observer.on_status_changed("The game is over.")
                return

            if self._state.turn != self.local_color:
                self.observer.on_status_changed(
                    f"Not your turn! Wait for {self._state.turn.display_name} to move."
                )
                return

            if self._selected is None:
                self._select(square)
                return

            if square == self._selected:
                self._clear_selection()
                return

            self.submit_move(Move(self._selected, square))

    def submit_move(self, move: Move) -> bool:
        """
        Attempt a local move. Returns True when it was committed.

        A rejected move changes nothing except the selection, which is always cleared.
        """
        with self._lock:
            self._clear_selection()
            try:
                self._state.validate_move(move, self.local_color)
            except (IllegalMoveError, GameStateError) as exc:
                logger.info("Rejected move %s: %s", move.to_uci(), exc)
                self.observer.on_status_changed(str(exc))
                return False

            self._commit(move)
            try:
                self.sender.send_move(move)
            except TransportError as exc:
                self._abandon(exc)
            return True

    def apply_remote(self, move: Move) -> bool:
        """
        Move received from the peer. It already validated the move on its side, so it is trusted and committed as is.
        Returns True when it was committed.
        """
        with self._lock:
            if self._state.game_over:
                logger.warning(
                    "Ignoring move %s from peer, the game is over", move.to_uci()
                )
                return False

            try:
                self._commit(move)
            except GameStateError as exc:
                # e.g. nothing on the source square: the boards are out of sync, no way to continue
                logger.error("Cannot apply move %s from peer: %s", move.to_uci(), exc)
                self._abandon(exc)
                return False
            return True

    def tick(self) -> bool:
        """One clock period passed. Returns False once the clock no longer runs."""
        with self._lock:
            if self._state.game_over or self._clock.stopped:
                return False

            expired = self._clock.tick()
            self.observer.on_clock_changed(self._clock.snapshot())
            if expired is not None:
                self._finish(Status.TIMEOUT, winner=expired.opponent)
                return False
            return True

    def connection_lost(self, error: GameError) -> None:
        """The transport failed or the peer sent garbage. Nothing can be exchanged anymore."""
        with self._lock:
            self._abandon(error)

    # -- Internal helpers --
    def _select(self, square: Square) -> None:
        piece = self._state.board.piece(square)
        if piece is None or piece.color != self.local_color:
            return
        self._selected = square
        self.observer.on_selection_changed(
            square, self._state.legal_destinations(square)
        )

    def _clear_selection(self) -> None:
        if self._selected is None:
            return
        self._selected = None
        self.observer.on_selection_changed(None, [])

    def _commit(self, move: Move) -> None:
        """Shared by local and remote moves: board, turn, clock, notifications and the end-of-game test."""
        mover = self._state.turn
        self._state.commit(move)
        self._clock.switch_turn(mover)
        logger.info("%s played %s", mover.display_name, move.to_uci())

        self.observer.on_board_changed(self._state.board.copy())
        self.observer.on_clock_changed(self._clock.snapshot())

        if self._state.is_checkmate():
            self._finish(Status.CHECKMATE, winner=mover)
        elif self._state.is_check():
            self.observer.on_status_changed(f"Check to {self._state.turn.display_name}!")
        else:
            self.observer.on_status_changed(self._turn_message())

    def _abandon(self, error: Exception) -> None:
        if self._state.game_over:
            logger.debug("Connection closed after the game ended: %s", error)
            return
        logger.error("Abandoning the game: %s", error)
        self._finish(Status.ABORTED, winner=None)

    def _finish(self, status: Status, winner: Optional[Color]) -> None:
        self._state.finish(status, winner)
        self._clock.stop()
        self._clear_selection()

        result = GameResult(status, winner)
        logger.info("Game over: %s", result.message)
        self.observer.on_status_changed(result.message)
        self.observer.on_game_over(result)

    def _turn_message(self) -> str:
        return (
            f"You are playing as: {self.local_color.display_name}"
            f" | Current turn: {self._state.turn.display_name}"
        )
