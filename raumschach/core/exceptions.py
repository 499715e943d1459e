"""
Custom exceptions.

The rules engine itself fails soft (no-ops, deselection, empty move lists). These are raised at the boundaries:
request validation, notation parsing, settings validation and the service layer.
"""


class GameError(Exception):
    """Top-level exception for anything related to playing a game."""


class InvalidRequestError(GameError):
    """A request coming from outside could not be interpreted."""


class InvalidPositionError(GameError):
    """Text could not be parsed into a position on the 5x5x5 board."""


class InvalidSettingsError(GameError):
    """Game settings contain an unsupported value."""


class IllegalMoveError(GameError):
    """Move was requested that is not among the legal moves."""


class GameStateError(GameError):
    """Operation does not make sense in the current state of the game."""
