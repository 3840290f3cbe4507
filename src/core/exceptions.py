"""
Exceptions raised by the engine.

NOTE: an illegal move is NOT an exception. The engine answers those with a plain `False`.
These errors mark programming mistakes (corrupted boards, bad setup strings, bad configuration).
"""


class ChessEngineError(Exception):
    """Base class for everything the engine raises on purpose"""


class BoardIntegrityError(ChessEngineError):
    """The board got into a state that validated moves can never reach (ex. two white kings)"""


class InvalidPlacementError(ChessEngineError):
    """Could not parse the piece placement string"""


class ConfigError(ChessEngineError):
    """Engine configuration did not validate"""
