"""
The GameState is the entrypoint into the domain layer for the controller.
It is responsible for all the business logic required to play a single move:
checking it against the rules of chess and committing it to the board.
"""

from copy import deepcopy
from dataclasses import dataclass, field
from typing import Optional, Self

from netchess.chess.board import Board
from netchess.chess.castling import (
    CASTLING_RULES,
    CastlingRights,
    can_castle,
    castling_side,
    handle_castling,
    new_castling_rights,
)
from netchess.chess.check import is_checkmate, is_in_check
from netchess.chess.moves import Move, candidate_destinations, is_legal_shape
from netchess.chess.pieces import Color, Piece
from netchess.chess.promotion import promotion_for
from netchess.chess.square import Square
from netchess.core.exceptions import (
    GameStateError,
    IllegalMoveError,
    NotYourTurnError,
)
from netchess.core.models import Status


@dataclass
class GameState:
    board: Board
    turn: Color = Color.WHITE
    castling_rights: dict[Color, CastlingRights] = field(
        default_factory=new_castling_rights
    )
    status: Status = Status.IN_PROGRESS
    winner: Optional[Color] = None

    @classmethod
    def new_game(cls) -> Self:
        """Standard starting position, white to move, nothing has moved yet."""
        return cls(board=Board.starting_position())

    @property
    def game_over(self) -> bool:
        return self.status != Status.IN_PROGRESS

    def validate_move(self, move: Move, color: Color) -> None:
        """
        Raise if `color` may not play `move` right now
        -----

        1. the game must (still) be in progress
        2. it must be your turn
        3. you must move one of your own pieces, and not onto another one of your own
        4. the piece must move like that (or it is a castling move that is allowed)
        5. after the move your king must not be in check
        """
        if self.game_over:
            raise GameStateError(f"The game is over. status: {self.status.name.lower()}")

        if color != self.turn:
            raise NotYourTurnError(
                f"Not your turn! Wait for {self.turn.display_name} to move."
            )

        if not (move.from_square.is_within_bounds() and move.to_square.is_within_bounds()):
            raise IllegalMoveError(f"Move {move} leaves the board.")

        piece = self.board.piece(move.from_square)
        if piece is None or piece.color != color:
            raise IllegalMoveError(
                f"There is no {color.display_name.lower()} piece on {move.from_square.to_algebraic()}."
            )

        target = self.board.piece(move.to_square)
        if target is not None and target.color == color:
            raise IllegalMoveError("Cannot capture your own piece!")

        side = castling_side(piece, move)
        if side is not None:
            if not can_castle(self.board, self.castling_rights, color, side):
                raise IllegalMoveError("Castling is not allowed here.")
        elif not is_legal_shape(self.board, move.from_square, move.to_square):
            raise IllegalMoveError(
                f"A {piece.type.name.lower()} cannot move from {move.from_square.to_algebraic()} to {move.to_square.to_algebraic()}."
            )

        if is_in_check(self.simulate(move), color):
            raise IllegalMoveError("Cannot move into check!")

    def simulate(self, move: Move) -> Board:
        """Play the move on a copy of the board (castling rook + promotion included). The live board is not touched."""
        board = self.board.copy()
        self._play(board, deepcopy(self.castling_rights), move)
        return board

    def commit(self, move: Move) -> Piece:
        """
        Make the move on the live board and pass the turn. No rules are checked:
        local moves went through `validate_move` first, moves of the peer are trusted.

        Returns the piece that moved (as it was before a possible promotion).
        """
        if self.game_over:
            raise GameStateError(f"The game is over. status: {self.status.name.lower()}")

        piece = self._play(self.board, self.castling_rights, move)
        self.turn = self.turn.opponent
        return piece

    def finish(self, status: Status, winner: Optional[Color]) -> None:
        self.status = status
        self.winner = winner

    def is_check(self) -> bool:
        """Is the side to move in check?"""
        return is_in_check(self.board, self.turn)

    def is_checkmate(self) -> bool:
        """Is the side to move mated?"""
        return is_checkmate(self.board, self.turn)

    def legal_destinations(self, square: Square) -> list[Square]:
        """Every square the piece on `square` may move to right now. Used to highlight the options."""
        piece = self.board.piece(square)
        if piece is None:
            return []

        candidates = candidate_destinations(self.board, square)
        candidates.extend(
            squares.king_to
            for (color, _), squares in CASTLING_RULES.items()
            if color == piece.color and squares.king_from == square
        )

        destinations: list[Square] = []
        for target in candidates:
            try:
                self.validate_move(Move(square, target), piece.color)
            except (IllegalMoveError, GameStateError):
                continue
            destinations.append(target)
        return destinations

    # -- PRIVATE HELPERS ---
    @staticmethod
    def _play(
        board: Board, rights: dict[Color, CastlingRights], move: Move
    ) -> Piece:
        """apply + castling rook + promotion, all on the given board"""
        piece = board.piece(move.from_square)
        if piece is None:
            raise GameStateError(
                f"No piece on {move.from_square.to_algebraic()} to move."
            )

        board.apply(move, promote_to=promotion_for(board, move))
        handle_castling(board, rights, piece, move)
        return piece
