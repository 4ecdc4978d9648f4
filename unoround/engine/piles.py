"""Read-only views of a round's draw and discard piles.

A view is built from a copy of the round's storage each time it is requested.
Dealing from or shuffling a view only changes the view.
"""

from typing import Optional

from unoround.engine.card import Card
from unoround.engine.deck import Deck


class DrawPile(Deck):
    """The draw pile; cards are drawn from the front."""

    def peek(self) -> Optional[Card]:
        """The next card to be drawn, without removing it."""
        return self._cards[0] if self._cards else None


class DiscardPile(Deck):
    """The discard pile; the last card is the top."""

    def top(self) -> Optional[Card]:
        return self._cards[-1] if self._cards else None
