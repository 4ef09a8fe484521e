"""Exceptions raised by the Cribbage engine."""


class CribbageError(Exception):
    """Base class for all engine errors."""

    pass


class MoveError(CribbageError):
    """Raised when a submitted move is rejected.

    The game state the move was submitted against is left unchanged.
    """

    pass


class InvalidMoveError(MoveError):
    """Wrong phase, wrong turn, card not owned, or bad discard count."""

    pass


class PeggingOverflowError(MoveError):
    """Playing the card would take the pegging count past 31."""

    pass


class GameAlreadyOverError(MoveError):
    """The game has a winner and accepts no further moves."""

    pass


class MalformedHandError(CribbageError, ValueError):
    """Scoring was asked to evaluate the wrong number of cards."""

    pass


class ConfigError(CribbageError, ValueError):
    """Invalid game configuration."""

    pass
