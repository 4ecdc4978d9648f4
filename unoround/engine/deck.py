"""Deck creation, serialisation and shuffling."""

import random
from typing import Any, Callable, Iterable, Iterator, List, Mapping, Optional, Sequence

from unoround.engine.card import COLORS, Card, CardType, InvalidCardError, WILD, WILD_DRAW

Shuffler = Callable[[List[Card]], None]


def standard_shuffler(cards: List[Card]) -> None:
    """Shuffle in place with the module-level random generator."""
    random.shuffle(cards)


def seeded_shuffler(seed: int) -> Shuffler:
    """Return a shuffler with its own generator, for reproducible rounds."""
    rng = random.Random(seed)

    def shuffle(cards: List[Card]) -> None:
        rng.shuffle(cards)

    return shuffle


class Deck:
    """An ordered pile of cards, dealt from the front."""

    def __init__(self, cards: Iterable[Card] = ()):
        self._cards: List[Card] = list(cards)

    @property
    def size(self) -> int:
        return len(self._cards)

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(list(self._cards))

    def deal(self) -> Optional[Card]:
        """Remove and return the front card, or None if the pile is empty."""
        if not self._cards:
            return None
        return self._cards.pop(0)

    def shuffle(self, shuffler: Shuffler = standard_shuffler) -> None:
        shuffler(self._cards)

    def filter(self, predicate: Callable[[Card], bool]) -> "Deck":
        """Return a new pile with the cards matching predicate, in order."""
        return type(self)(c for c in self._cards if predicate(c))

    def to_memento(self) -> List[dict[str, Any]]:
        return [c.to_record() for c in self._cards]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({[str(c) for c in self._cards]})"


def standard_cards() -> List[Card]:
    """The 108 cards of a standard deck, in a fixed order.

    - 4 colors x (one 0, two of each 1-9, two Skip, two Reverse, two Draw Two): 100 cards
    - 4 Wild, 4 Wild Draw Four: 8 cards
    """
    cards: List[Card] = []

    for color in COLORS:
        cards.append(Card(CardType.NUMBERED, color, 0))
        for number in range(1, 10):
            cards.append(Card(CardType.NUMBERED, color, number))
            cards.append(Card(CardType.NUMBERED, color, number))
        for card_type in (CardType.SKIP, CardType.REVERSE, CardType.DRAW):
            cards.append(Card(card_type, color))
            cards.append(Card(card_type, color))

    for _ in range(4):
        cards.append(WILD)
        cards.append(WILD_DRAW)

    return cards


def create_initial_deck() -> Deck:
    """Create an unshuffled standard deck."""
    return Deck(standard_cards())


def from_memento(records: Sequence[Mapping[str, Any]]) -> Deck:
    """Rebuild a pile from card records, rejecting malformed entries."""
    if isinstance(records, (str, bytes)) or not isinstance(records, Sequence):
        raise InvalidCardError("Card records must be a list")
    cards = []
    for i, record in enumerate(records):
        try:
            cards.append(Card.from_record(record))
        except InvalidCardError as exc:
            raise InvalidCardError(f"Card record {i}: {exc}") from exc
    return Deck(cards)
