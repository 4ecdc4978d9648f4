"""Conversion between a round and its plain, serialisable memento."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, TypedDict

from unoround.engine.card import Card, Color, InvalidCardError
from unoround.engine.deck import from_memento
from unoround.engine.errors import ConfigurationError, InvalidIndexError, MementoError, ensure_index
from unoround.engine.game_state import Direction, Finished, InTurn, Turn, validate_players

CardRecord = dict[str, Any]


class RoundMemento(TypedDict):
    players: List[str]
    hands: List[List[CardRecord]]
    drawPile: List[CardRecord]
    discardPile: List[CardRecord]
    currentColor: str
    currentDirection: str
    dealer: int
    playerInTurn: Optional[int]


MEMENTO_KEYS = (
    "players", "hands", "drawPile", "discardPile",
    "currentColor", "currentDirection", "dealer",
)


@dataclass
class RoundData:
    """Everything needed to build a round, already validated."""

    players: List[str]
    dealer: int
    hands: List[List[Card]]
    draw_pile: List[Card]
    discard_pile: List[Card]
    direction: Direction
    turn: Turn
    enforced_color: Optional[Color] = None

    @property
    def current_color(self) -> Color:
        if self.enforced_color is not None:
            return self.enforced_color
        return self.discard_pile[-1].color


def encode(data: RoundData) -> RoundMemento:
    """Deep-copy round data into a memento."""
    return {
        "players": list(data.players),
        "hands": [[c.to_record() for c in hand] for hand in data.hands],
        "drawPile": [c.to_record() for c in data.draw_pile],
        "discardPile": [c.to_record() for c in data.discard_pile],
        "currentColor": data.current_color.value,
        "currentDirection": data.direction.label,
        "dealer": data.dealer,
        "playerInTurn": data.turn.player if isinstance(data.turn, InTurn) else None,
    }


def _cards(records: Any, label: str) -> List[Card]:
    try:
        return list(from_memento(records))
    except InvalidCardError as exc:
        raise MementoError(f"{label}: {exc}") from exc


def decode(memento: Mapping[str, Any]) -> RoundData:
    """Validate a memento and turn it into round data.

    Raises:
        MementoError: If the memento is malformed or describes an
            inconsistent round.
    """
    if not isinstance(memento, Mapping):
        raise MementoError("Round memento must be a mapping")
    missing = [key for key in MEMENTO_KEYS if key not in memento]
    if missing:
        raise MementoError(f"Round memento is missing {', '.join(missing)}")

    try:
        players = validate_players(memento["players"])
        dealer = ensure_index(memento["dealer"], len(players), "dealer")
    except (ConfigurationError, InvalidIndexError) as exc:
        raise MementoError(str(exc)) from exc

    try:
        direction = Direction.from_label(memento["currentDirection"])
    except ValueError as exc:
        raise MementoError(str(exc)) from exc

    try:
        color = Color(memento["currentColor"])
    except ValueError:
        raise MementoError(f"Invalid color: {memento['currentColor']!r}") from None

    raw_hands = memento["hands"]
    if isinstance(raw_hands, (str, bytes)) or not isinstance(raw_hands, list):
        raise MementoError("hands must be a list")
    if len(raw_hands) != len(players):
        raise MementoError(
            f"Hands count ({len(raw_hands)}) must equal players count ({len(players)})"
        )
    hands = [_cards(hand, f"hand {i}") for i, hand in enumerate(raw_hands)]
    draw_pile = _cards(memento["drawPile"], "drawPile")
    discard_pile = _cards(memento["discardPile"], "discardPile")

    if not discard_pile:
        raise MementoError("Discard pile cannot be empty")

    winners = [i for i, hand in enumerate(hands) if not hand]
    if len(winners) > 1:
        raise MementoError("Round memento cannot contain multiple winners")

    player_in_turn = memento.get("playerInTurn")
    turn: Turn
    if winners:
        if player_in_turn is not None:
            raise MementoError("playerInTurn must be absent for a finished round")
        turn = Finished(winners[0])
    else:
        if player_in_turn is None:
            raise MementoError("playerInTurn is required for unfinished rounds")
        try:
            turn = InTurn(ensure_index(player_in_turn, len(players), "playerInTurn"))
        except InvalidIndexError as exc:
            raise MementoError(str(exc)) from exc

    top = discard_pile[-1]
    enforced_color = None
    if top.is_wild:
        enforced_color = color
    elif top.color is not color:
        raise MementoError(
            f"currentColor {color.value} must match the color of the top discard ({top})"
        )

    return RoundData(
        players=players,
        dealer=dealer,
        hands=hands,
        draw_pile=draw_pile,
        discard_pile=discard_pile,
        direction=direction,
        turn=turn,
        enforced_color=enforced_color,
    )
