"""
Wiring of one peer: role -> connection -> controller -> listener + clock threads.

Connection setup and teardown live here, so the controller only ever sees a MoveSender.
"""

import logging
import threading
from typing import Optional, Self

from netchess.core.config import GameSettings
from netchess.core.models import Role
from netchess.net.transport import (
    Connection,
    NetworkSync,
    accept_peer,
    connect_to_host,
    open_listener,
)
from netchess.services.controller import GameController
from netchess.services.observer import GameObserver
from netchess.services.ticker import ClockTicker

logger = logging.getLogger(__name__)


def establish_connection(role: Role, settings: GameSettings) -> Connection:
    """Host: listen and wait for exactly one peer. Joiner: connect to the host. Raises TransportError."""
    if role == Role.HOST:
        listener = open_listener(settings.bind_address, settings.port)
        return accept_peer(listener)
    return connect_to_host(settings.address, settings.port, settings.connect_timeout)


class GameSession:
    """One running game on this peer."""

    def __init__(
        self,
        role: Role,
        connection: Connection,
        observer: GameObserver,
        settings: Optional[GameSettings] = None,
    ) -> None:
        settings = settings if settings is not None else GameSettings()
        self.role = role
        self.sync = NetworkSync(connection)
        self.controller = GameController(
            local_color=role.color,
            observer=observer,
            sender=self.sync,
            turn_seconds=settings.turn_seconds,
        )
        self.ticker = ClockTicker(self.controller.tick, period=settings.tick_seconds)
        self._listener: Optional[threading.Thread] = None

    @classmethod
    def connect(
        cls, role: Role, observer: GameObserver, settings: Optional[GameSettings] = None
    ) -> Self:
        """Blocks until the connection with the peer is established."""
        settings = settings if settings is not None else GameSettings()
        connection = establish_connection(role, settings)
        return cls(role, connection, observer, settings)

    def start(self) -> None:
        logger.info("Starting game as %s (%s)", self.role.name.lower(), self.role.color.display_name)
        self.controller.start()
        self._listener = self.sync.start_listener(
            self.controller.apply_remote, self.controller.connection_lost
        )
        self.ticker.start()

    def close(self) -> None:
        """Stop the clock and hang up. The listener thread ends on its own once the socket is closed."""
        self.ticker.stop()
        self.sync.close()
        if self._listener is not None:
            self._listener.join(timeout=1.0)
