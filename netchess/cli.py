"""
Command line entry point: `netchess host` (White) or `netchess join` (Black).

The console presenter is the simplest possible presentation layer: it prints the board and the notices,
and turns typed squares ("e2") or moves ("e2e4") into input for the controller.
"""

import argparse
import logging
import re
import sys
import threading
from typing import Iterable, Optional, TextIO

from netchess.chess.board import Board
from netchess.chess.moves import Move
from netchess.chess.pieces import Color
from netchess.chess.square import BOARD_SIZE, Square
from netchess.core.config import GameSettings
from netchess.core.exceptions import ConfigError, TransportError
from netchess.core.models import GameResult, Role
from netchess.services.controller import GameController
from netchess.services.session import GameSession

logger = logging.getLogger(__name__)

INPUT_PATTERN = re.compile(r"^[a-h][1-8]([a-h][1-8])?$")
QUIT_COMMANDS = ("quit", "exit")


def render_board(board: Board) -> str:
    """ASCII board, white at the bottom. Empty squares are dots."""
    lines: list[str] = []
    for row in range(BOARD_SIZE):
        cells = []
        for col in range(BOARD_SIZE):
            piece = board.piece(Square(row, col))
            cells.append(piece.to_fen() if piece is not None else ".")
        lines.append(f"{BOARD_SIZE - row} {' '.join(cells)}")
    lines.append("  a b c d e f g h")
    return "\n".join(lines)


class ConsolePresenter:
    """GameObserver that writes to a text stream."""

    def __init__(self, stream: TextIO = sys.stdout) -> None:
        self._stream = stream
        self._lock = threading.Lock()
        self._remaining: dict[Color, int] = {}
        self.finished = threading.Event()

    def on_board_changed(self, board: Board) -> None:
        clocks = "  ".join(
            f"{color.display_name}: {seconds}s" for color, seconds in self._remaining.items()
        )
        self._write(f"\n{clocks}\n{render_board(board)}" if clocks else f"\n{render_board(board)}")

    def on_status_changed(self, message: str) -> None:
        self._write(message)

    def on_game_over(self, result: GameResult) -> None:
        self.finished.set()
        self._write("Press Enter to exit.")

    def on_clock_changed(self, remaining: dict[Color, int]) -> None:
        # Only shown with the next board, printing every second would drown the board.
        self._remaining = dict(remaining)

    def on_selection_changed(
        self, square: Optional[Square], destinations: list[Square]
    ) -> None:
        if square is None:
            return
        options = ", ".join(target.to_algebraic() for target in destinations) or "none"
        self._write(f"Selected {square.to_algebraic()}. Possible moves: {options}")

    def _write(self, text: str) -> None:
        with self._lock:
            print(text, file=self._stream, flush=True)


def run_input_loop(
    controller: GameController, presenter: ConsolePresenter, lines: Iterable[str]
) -> None:
    """Feed typed input to the controller until the game ends or the user quits."""
    for raw in lines:
        if presenter.finished.is_set():
            return

        command = raw.strip().lower()
        if not command:
            continue
        if command in QUIT_COMMANDS:
            return
        if not INPUT_PATTERN.match(command):
            presenter.on_status_changed("Enter a square (e2) or a move (e2e4).")
            continue

        if len(command) == 2:
            controller.on_square_selected(Square.from_algebraic(command))
        else:
            controller.submit_move(Move.from_uci(command))


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="netchess", description="Two-player chess over a network connection")
    ap.add_argument("--port", type=int, default=None)
    ap.add_argument("--turn-seconds", type=int, default=None, help="seconds per move")
    ap.add_argument("--log-level", type=str, default="WARNING")
    sub = ap.add_subparsers(dest="cmd", required=True)

    hp = sub.add_parser("host", help="Wait for a peer to join. The host plays White.")
    hp.add_argument("--bind", type=str, default=None, help="address to listen on (default: all)")

    jp = sub.add_parser("join", help="Join a hosted game. The joiner plays Black.")
    jp.add_argument("address", nargs="?", default=None, help="address of the host (default: localhost)")
    jp.add_argument("--timeout", type=float, default=None, help="seconds to wait for the connection")
    return ap


def main(argv: Optional[list[str]] = None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = GameSettings.from_env().with_overrides(
            port=args.port,
            turn_seconds=args.turn_seconds,
            bind_address=getattr(args, "bind", None),
            address=getattr(args, "address", None),
            connect_timeout=getattr(args, "timeout", None),
        )
    except ConfigError as exc:
        ap.error(str(exc))

    role = Role.HOST if args.cmd == "host" else Role.JOIN
    presenter = ConsolePresenter()
    if role == Role.HOST:
        print(f"Waiting for a peer on port {settings.port} ...", flush=True)

    try:
        session = GameSession.connect(role, presenter, settings)
    except TransportError as exc:
        logger.error("Could not start the game: %s", exc)
        print(exc, file=sys.stderr)
        return 1

    session.start()
    try:
        run_input_loop(session.controller, presenter, sys.stdin)
    finally:
        session.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
