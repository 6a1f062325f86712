"""
Custom exceptions.

`GameError` is the top-level exception: callers that only care that "something went wrong with the game" can catch that one.
"""


class GameError(Exception):
    """Base class for everything raised by netchess."""


# --- DOMAIN LAYER ---
class IllegalMoveError(GameError):
    """The move breaks the rules of chess (shape, own-piece capture, moving into check)."""


class NotYourTurnError(IllegalMoveError):
    """A move was attempted by the color that is not on turn."""


class GameStateError(GameError):
    """The game is in a state that does not allow the request (game over, empty source square, ...)."""


# --- NETWORK LAYER ---
class ProtocolError(GameError):
    """A line received from the peer could not be decoded into a move."""


class TransportError(GameError):
    """The connection with the peer could not be established or broke down."""


# --- CONFIGURATION ---
class ConfigError(GameError):
    """Invalid settings were supplied (environment or command line)."""
