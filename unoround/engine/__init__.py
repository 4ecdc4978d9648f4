"""Rules engine for a single round of UNO."""

from unoround.engine.card import COLORS, Card, CardType, Color, InvalidCardError, can_play, card_points
from unoround.engine.deck import (
    Deck,
    Shuffler,
    create_initial_deck,
    from_memento,
    seeded_shuffler,
    standard_shuffler,
)
from unoround.engine.errors import (
    ConfigurationError,
    DealError,
    DrawPileExhaustedError,
    IllegalPlayError,
    InvalidIndexError,
    MementoError,
    RoundError,
    RoundFinishedError,
    RoundStateError,
)
from unoround.engine.game_state import Direction, PlayerView, RoundConfig, RoundEnded
from unoround.engine.memento import RoundMemento
from unoround.engine.piles import DiscardPile, DrawPile
from unoround.engine.round import Round, create_round, create_round_from_memento

__all__ = [
    "COLORS",
    "Card",
    "CardType",
    "Color",
    "InvalidCardError",
    "can_play",
    "card_points",
    "Deck",
    "Shuffler",
    "create_initial_deck",
    "from_memento",
    "seeded_shuffler",
    "standard_shuffler",
    "ConfigurationError",
    "DealError",
    "DrawPileExhaustedError",
    "IllegalPlayError",
    "InvalidIndexError",
    "MementoError",
    "RoundError",
    "RoundFinishedError",
    "RoundStateError",
    "Direction",
    "PlayerView",
    "RoundConfig",
    "RoundEnded",
    "RoundMemento",
    "DiscardPile",
    "DrawPile",
    "Round",
    "create_round",
    "create_round_from_memento",
]
