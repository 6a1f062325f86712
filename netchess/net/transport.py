"""
The single connection between the two peers, and the replication of moves over it.

The host opens a listener and accepts exactly one peer, the joiner connects to the host.
After that both sides are identical: one blocking listener thread reads moves, sending is fire-and-forget.
Nothing gets retried: once the connection fails the game is over for this peer.
"""

import logging
import socket
import threading
from contextlib import suppress
from typing import Callable, Iterator, Optional

from netchess.chess.moves import Move
from netchess.core.exceptions import GameError, ProtocolError, TransportError
from netchess.net.protocol import LINE_TERMINATOR, decode_move, encode_move

logger = logging.getLogger(__name__)

ENCODING = "ascii"


class Connection:
    """Line based wrapper around a connected stream socket."""

    def __init__(self, sock: socket.socket) -> None:
        self._sock = sock
        self._reader = sock.makefile("r", encoding=ENCODING, newline=LINE_TERMINATOR)
        self._send_lock = threading.Lock()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def send_line(self, line: str) -> None:
        data = (line + LINE_TERMINATOR).encode(ENCODING)
        try:
            with self._send_lock:
                self._sock.sendall(data)
        except OSError as exc:
            raise TransportError(f"Could not send to peer: {exc}") from exc

    def read_lines(self) -> Iterator[str]:
        """Blocks until the next line arrives. Stops when the peer closes the connection."""
        try:
            for line in self._reader:
                yield line.rstrip("\r\n")
        except UnicodeDecodeError as exc:
            raise ProtocolError(f"Received non-ASCII data: {exc}") from exc
        except OSError as exc:
            raise TransportError(f"Could not read from peer: {exc}") from exc
        except ValueError as exc:
            # reader closed by `close()` from another thread
            raise TransportError("Connection closed.") from exc

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        # shutdown wakes up a listener that is blocked in read_lines. The peer may already be gone.
        with suppress(OSError):
            self._sock.shutdown(socket.SHUT_RDWR)
        self._reader.close()
        self._sock.close()


# --- CONNECTION SETUP ---
def open_listener(address: str, port: int) -> socket.socket:
    """Host side, step 1. Use port 0 to let the OS pick a free port (see `listener.getsockname()`)."""
    try:
        listener = socket.create_server((address, port))
    except OSError as exc:
        raise TransportError(f"Cannot listen on {address or '*'}:{port}: {exc}") from exc
    logger.info("Listening on %s:%s, waiting for a peer", address or "*", listener.getsockname()[1])
    return listener


def accept_peer(listener: socket.socket) -> Connection:
    """Host side, step 2. Accepts exactly one peer and closes the listener afterwards."""
    try:
        sock, peer_address = listener.accept()
    except OSError as exc:
        raise TransportError(f"No peer connected: {exc}") from exc
    finally:
        listener.close()
    logger.info("Peer connected from %s:%s", peer_address[0], peer_address[1])
    return Connection(sock)


def connect_to_host(
    address: str, port: int, timeout: Optional[float] = None
) -> Connection:
    """Joiner side."""
    try:
        sock = socket.create_connection((address, port), timeout=timeout)
    except OSError as exc:
        raise TransportError(f"Cannot connect to {address}:{port}: {exc}") from exc
    # the timeout only applies to setting up the connection, reading blocks for as long as the game lasts
    sock.settimeout(None)
    logger.info("Connected to host %s:%s", address, port)
    return Connection(sock)


# --- MOVE REPLICATION ---
MoveHandler = Callable[[Move], None]
FailureHandler = Callable[[GameError], None]


class NetworkSync:
    """Sends our committed moves to the peer and hands the peer's moves to the controller."""

    def __init__(self, connection: Connection) -> None:
        self._connection = connection

    def send_move(self, move: Move) -> None:
        """Fire-and-forget: there is no acknowledgement from the peer."""
        line = encode_move(move)
        logger.debug("Sending move %s (%s)", move.to_uci(), line)
        self._connection.send_line(line)

    def listen(self, on_move: MoveHandler, on_failure: FailureHandler) -> None:
        """
        Blocks for the rest of the game.
        `on_failure` gets called exactly once: for a malformed line, an I/O error, or the peer hanging up.
        """
        try:
            for line in self._connection.read_lines():
                move = decode_move(line)
                logger.debug("Received move %s (%s)", move.to_uci(), line)
                on_move(move)
        except (ProtocolError, TransportError) as exc:
            logger.error("Connection with peer failed: %s", exc)
            on_failure(exc)
            return

        logger.warning("Peer closed the connection")
        on_failure(TransportError("Peer closed the connection."))

    def start_listener(
        self, on_move: MoveHandler, on_failure: FailureHandler
    ) -> threading.Thread:
        thread = threading.Thread(
            target=self.listen,
            args=(on_move, on_failure),
            name="netchess-listener",
            daemon=True,
        )
        thread.start()
        return thread

    def close(self) -> None:
        self._connection.close()
