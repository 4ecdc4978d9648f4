"""UNO rules: what each card does to turn order."""

from dataclasses import dataclass

from unoround.engine.card import Card, CardType
from unoround.engine.game_state import Direction


@dataclass(frozen=True)
class TurnEffect:
    """Effect of a played (or opening) card on turn order.

    steps: seats to advance, counted in the direction after any reversal
    reverses: whether the direction flips
    penalty: cards the next player must draw
    """

    steps: int = 1
    reverses: bool = False
    penalty: int = 0


def effect_of(card: Card, player_count: int) -> TurnEffect:
    """Return the turn effect of a card in a round with player_count players."""
    card_type = card.type
    if card_type is CardType.NUMBERED or card_type is CardType.WILD:
        return TurnEffect()
    if card_type is CardType.SKIP:
        return TurnEffect(steps=2)
    if card_type is CardType.REVERSE:
        # With two players a reverse hands the turn straight back, like a skip
        return TurnEffect(steps=2 if player_count == 2 else 1, reverses=True)
    if card_type is CardType.DRAW:
        return TurnEffect(steps=2, penalty=2)
    if card_type is CardType.WILD_DRAW:
        return TurnEffect(steps=2, penalty=4)
    raise ValueError(f"Unknown card type: {card_type!r}")


def next_index(current: int, steps: int, direction: Direction, player_count: int) -> int:
    """Seat reached by moving steps seats from current in the given direction."""
    return (current + steps * int(direction)) % player_count
