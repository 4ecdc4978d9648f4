"""Initial deal for a fresh round."""

import logging
from dataclasses import dataclass
from typing import List

from unoround.engine.card import Card
from unoround.engine.deck import Shuffler, create_initial_deck
from unoround.engine.errors import DealError
from unoround.engine.game_state import Direction
from unoround.engine.rules import effect_of, next_index

logger = logging.getLogger(__name__)

MAX_DEAL_ATTEMPTS = 100


@dataclass
class InitialDeal:
    """Hands, piles and turn order at the start of a round."""

    hands: List[List[Card]]
    draw_pile: List[Card]
    discard_pile: List[Card]
    current_player: int
    direction: Direction


def _take(cards: List[Card], count: int) -> List[Card]:
    if len(cards) < count:
        raise DealError("Deck exhausted while dealing")
    taken = cards[:count]
    del cards[:count]
    return taken


def build_initial_deal(
    player_count: int,
    dealer: int,
    cards_per_player: int,
    shuffler: Shuffler,
) -> InitialDeal:
    """Shuffle, deal and flip the opening card.

    Cards are dealt one at a time starting from player 0. A wild opening card
    throws the whole deal away and starts again. Any other opening card takes
    effect as if the dealer had played it.

    Raises:
        DealError: If the deck cannot cover the deal, or every attempt up to
            MAX_DEAL_ATTEMPTS flipped a wild card.
    """
    for attempt in range(1, MAX_DEAL_ATTEMPTS + 1):
        deck = create_initial_deck()
        deck.shuffle(shuffler)
        cards = list(deck)

        hands: List[List[Card]] = [[] for _ in range(player_count)]
        for _ in range(cards_per_player):
            for hand in hands:
                hand.extend(_take(cards, 1))

        opening = _take(cards, 1)[0]
        if opening.is_wild:
            logger.debug("Deal attempt %d flipped %s, redealing", attempt, opening)
            continue

        effect = effect_of(opening, player_count)
        direction = Direction.CLOCKWISE
        if effect.reverses:
            direction = direction.flipped()
        if effect.penalty:
            victim = next_index(dealer, 1, direction, player_count)
            hands[victim].extend(_take(cards, effect.penalty))
        current = next_index(dealer, effect.steps, direction, player_count)

        logger.debug(
            "Dealt %d cards to %d players, opening card %s, player %d starts",
            cards_per_player, player_count, opening, current,
        )
        return InitialDeal(
            hands=hands,
            draw_pile=cards,
            discard_pile=[opening],
            current_player=current,
            direction=direction,
        )

    raise DealError(f"No valid opening card after {MAX_DEAL_ATTEMPTS} deals")
