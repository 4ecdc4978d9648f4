"""
Helpers shared by the round engine tests.

Rounds in most tests are rebuilt from hand-written mementos so that every
card's position is known.
"""

from typing import Optional, Sequence

from unoround.engine import Card, Color, Round, create_round_from_memento
from unoround.engine.card import numbered


def identity_shuffler(cards: list) -> None:
    """Leave the cards in their current order."""


class RiggedShuffler:
    """Moves one copy of `card` to `position` on the first `times` calls.

    Later calls leave the cards alone.
    """

    def __init__(self, card: Card, position: int, times: int = 1):
        self.card = card
        self.position = position
        self.times = times
        self.calls = 0

    def __call__(self, cards: list) -> None:
        self.calls += 1
        if self.calls <= self.times:
            cards.remove(self.card)
            cards.insert(self.position, self.card)


def make_memento(
    hands: Sequence[Sequence[Card]],
    discard: Sequence[Card],
    draw: Sequence[Card] = (),
    player_in_turn: Optional[int] = 0,
    color: Optional[Color] = None,
    direction: str = "clockwise",
    dealer: int = 0,
    players: Optional[Sequence[str]] = None,
) -> dict:
    if players is None:
        players = [f"p{i}" for i in range(len(hands))]
    top = discard[-1]
    current_color = color if color is not None else top.color
    return {
        "players": list(players),
        "hands": [[c.to_record() for c in hand] for hand in hands],
        "drawPile": [c.to_record() for c in draw],
        "discardPile": [c.to_record() for c in discard],
        "currentColor": current_color.value,
        "currentDirection": direction,
        "dealer": dealer,
        "playerInTurn": player_in_turn,
    }


def make_round(*args, **kwargs) -> Round:
    return create_round_from_memento(make_memento(*args, **kwargs), shuffler=identity_shuffler)


def filler(count: int, color: Color = Color.YELLOW) -> list:
    """Cards that are never playable on a red or blue top with a different number."""
    return [numbered(color, 9) for _ in range(count)]


def assert_invariants(round_: Round) -> None:
    discard = round_.discard_pile()
    assert discard.size > 0
    hands = [round_.player_hand(i) for i in range(round_.player_count)]
    empty = [i for i, hand in enumerate(hands) if not hand]
    assert len(empty) <= 1
    top = discard.top()
    if not top.is_wild:
        assert round_.current_color() == top.color
    if round_.has_ended():
        assert round_.player_in_turn() is None
        assert empty == [round_.winner()]
    else:
        assert round_.player_in_turn() is not None
        assert empty == []

