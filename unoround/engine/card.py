"""Card and Color types for UNO."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional


class Color(str, Enum):
    """Card colors."""

    RED = "RED"
    BLUE = "BLUE"
    GREEN = "GREEN"
    YELLOW = "YELLOW"


COLORS = tuple(Color)


class CardType(str, Enum):
    """Card variants. The value is the tag used in card records."""

    NUMBERED = "NUMBERED"
    SKIP = "SKIP"
    REVERSE = "REVERSE"
    DRAW = "DRAW"
    WILD = "WILD"
    WILD_DRAW = "WILD DRAW"


WILD_TYPES = frozenset({CardType.WILD, CardType.WILD_DRAW})
ACTION_TYPES = frozenset({CardType.SKIP, CardType.REVERSE, CardType.DRAW})


class InvalidCardError(ValueError):
    """Raised for malformed cards and card records."""


@dataclass(frozen=True)
class Card:
    """A UNO card.

    NUMBERED cards carry a color and a number 0-9.
    SKIP, REVERSE and DRAW (draw two) carry a color only.
    WILD and WILD DRAW (draw four) carry neither.
    """

    type: CardType
    color: Optional[Color] = None
    number: Optional[int] = None

    def __post_init__(self) -> None:
        if not isinstance(self.type, CardType):
            raise InvalidCardError(f"Invalid card type: {self.type!r}")
        if self.type in WILD_TYPES:
            if self.color is not None:
                raise InvalidCardError("Wild cards must have color=None")
        elif not isinstance(self.color, Color):
            raise InvalidCardError(f"{self.type.value} cards must have a color")
        if self.type is CardType.NUMBERED:
            if isinstance(self.number, bool) or not isinstance(self.number, int):
                raise InvalidCardError("Numbered cards must have an integer number")
            if not 0 <= self.number <= 9:
                raise InvalidCardError(f"Invalid card number: {self.number}")
        elif self.number is not None:
            raise InvalidCardError(f"{self.type.value} cards have no number")

    @property
    def is_wild(self) -> bool:
        return self.type in WILD_TYPES

    def to_record(self) -> dict[str, Any]:
        """Plain serialisable form: type tag plus color/number where present."""
        record: dict[str, Any] = {"type": self.type.value}
        if self.color is not None:
            record["color"] = self.color.value
        if self.number is not None:
            record["number"] = self.number
        return record

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Card":
        """Parse a card record, raising InvalidCardError when it is malformed."""
        if not isinstance(record, Mapping):
            raise InvalidCardError(f"Card record must be a mapping, got {type(record).__name__}")
        unknown = set(record) - {"type", "color", "number"}
        if unknown:
            raise InvalidCardError(f"Unknown card record fields: {sorted(unknown)}")
        try:
            card_type = CardType(record.get("type"))
        except ValueError:
            raise InvalidCardError(f"Invalid card type: {record.get('type')!r}") from None
        color = record.get("color")
        if color is not None:
            try:
                color = Color(color)
            except ValueError:
                raise InvalidCardError(f"Invalid card color: {color!r}") from None
        return cls(type=card_type, color=color, number=record.get("number"))

    def __str__(self) -> str:
        if self.color is None:
            return self.type.value
        if self.type is CardType.NUMBERED:
            return f"{self.color.value} {self.number}"
        return f"{self.color.value} {self.type.value}"


def numbered(color: Color, number: int) -> Card:
    return Card(CardType.NUMBERED, color, number)


def skip(color: Color) -> Card:
    return Card(CardType.SKIP, color)


def reverse(color: Color) -> Card:
    return Card(CardType.REVERSE, color)


def draw_two(color: Color) -> Card:
    return Card(CardType.DRAW, color)


WILD = Card(CardType.WILD)
WILD_DRAW = Card(CardType.WILD_DRAW)


def can_play(card: Card, top: Card, enforced_color: Optional[Color] = None) -> bool:
    """Check if a card can be played on top of another card.

    Wild cards can always be played. Otherwise the card must match the color
    in effect (the enforced color if set, else the top card's color), or share
    the top card's number (numbered cards) or type (action cards).
    """
    if card.is_wild:
        return True
    effective = enforced_color if enforced_color is not None else top.color
    if card.color == effective:
        return True
    if card.type is CardType.NUMBERED:
        return top.type is CardType.NUMBERED and card.number == top.number
    return card.type == top.type


def card_points(card: Card) -> int:
    """Score value of a card left in a losing hand."""
    if card.type is CardType.NUMBERED:
        return card.number
    if card.type in ACTION_TYPES:
        return 20
    if card.type in WILD_TYPES:
        return 50
    raise InvalidCardError(f"Unknown card type: {card.type!r}")
