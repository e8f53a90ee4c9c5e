"""
Exceptions raised across layers.

Everything derives from GameError so the outer layers can catch a single type.
"""


class GameError(Exception):
    """Base class for all errors raised by this application"""


# --- DOMAIN ---
class MalformedFENError(GameError):
    """The FEN string (or its placement field) cannot be decoded into a board."""


class IllegalMoveError(GameError):
    """The move is not in the set of pseudo-legal moves of the side to move."""


class NotYourTurnError(GameError):
    """The requested action belongs to the other side."""


class GameStateError(GameError):
    """The game is not in a state that allows the requested action."""


class InvalidSkillLevelError(GameError):
    """Skill levels live on the 0-20 scale used by UCI engines."""


# --- BOUNDARY / PERSISTENCE ---
class InvalidRequestError(GameError):
    """Request data failed validation."""


class RepositoryError(GameError):
    """Record could not be found or stored."""


# --- EXTERNAL ENGINE ---
class EngineError(GameError):
    """Base class for failures talking to an external UCI engine."""


class EngineUnavailableError(EngineError):
    """The engine process could not be started or has gone away."""


class EngineTimeoutError(EngineError):
    """The engine did not answer within the configured timeout."""


class EngineProtocolError(EngineError):
    """The engine answered with something that does not follow the UCI protocol."""
