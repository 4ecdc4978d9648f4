"""Exceptions raised by the round engine."""

from unoround.engine.card import InvalidCardError


class RoundError(Exception):
    """Base class for all round engine errors."""


class ConfigurationError(RoundError, ValueError):
    """Invalid round configuration (player count, cards per player)."""


class InvalidIndexError(RoundError, IndexError):
    """A dealer, player or card index is not an integer or is out of bounds."""


class RoundStateError(RoundError):
    """The operation is not allowed in the round's current state."""


class RoundFinishedError(RoundStateError):
    """The round has already ended."""


class MementoError(RoundStateError, ValueError):
    """A memento does not describe a consistent round."""


class IllegalPlayError(RoundError, ValueError):
    """The requested action breaks the rules."""


class DrawPileExhaustedError(RoundError):
    """No card can be drawn, even after reshuffling the discard pile."""


class DealError(RoundError):
    """The initial deal could not be built."""


def ensure_index(index: object, count: int, label: str) -> int:
    """Validate that index is an integer in [0, count)."""
    if isinstance(index, bool) or not isinstance(index, int):
        raise InvalidIndexError(f"{label} must be an integer, got {index!r}")
    if not 0 <= index < count:
        raise InvalidIndexError(f"{label} {index} is out of bounds (0..{count - 1})")
    return index


__all__ = [
    "RoundError",
    "ConfigurationError",
    "InvalidIndexError",
    "RoundStateError",
    "RoundFinishedError",
    "MementoError",
    "IllegalPlayError",
    "DrawPileExhaustedError",
    "DealError",
    "InvalidCardError",
    "ensure_index",
]
