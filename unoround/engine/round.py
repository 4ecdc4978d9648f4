"""The round state machine: turn order, piles, penalties and the UNO rule."""

from __future__ import annotations

import logging
from typing import Any, Callable, List, Mapping, Optional, Union

from unoround.engine.card import Card, Color, can_play, card_points
from unoround.engine.deck import Shuffler, standard_shuffler
from unoround.engine.errors import (
    DrawPileExhaustedError,
    IllegalPlayError,
    RoundFinishedError,
    RoundStateError,
    ensure_index,
)
from unoround.engine.game_state import (
    Direction,
    Finished,
    InTurn,
    PlayerView,
    RoundConfig,
    RoundEnded,
    Turn,
    UnoWindow,
)
from unoround.engine.memento import RoundData, RoundMemento, decode, encode
from unoround.engine.piles import DiscardPile, DrawPile
from unoround.engine.rules import effect_of, next_index
from unoround.engine.setup import build_initial_deal

logger = logging.getLogger(__name__)

UNO_PENALTY = 4

EndHandler = Callable[[RoundEnded], None]


def _ensure_color(value: Union[Color, str]) -> Color:
    try:
        return Color(value)
    except ValueError:
        raise IllegalPlayError(f"Invalid color: {value!r}") from None


class Round:
    """A single round of UNO, from the deal until a player empties their hand.

    All state lives here and changes only through the public operations. Each
    operation checks everything it needs before changing anything, so a failed
    call leaves the round untouched.
    """

    def __init__(self, data: RoundData, shuffler: Shuffler = standard_shuffler):
        self._players = list(data.players)
        self.player_count = len(self._players)
        self.dealer = data.dealer
        self._hands = [list(hand) for hand in data.hands]
        self._draw_pile = list(data.draw_pile)
        self._discard_pile = list(data.discard_pile)
        self._direction = Direction(data.direction)
        self._turn: Turn = data.turn
        self._enforced_color = data.enforced_color
        self._shuffler = shuffler

        self._listeners: List[EndHandler] = []
        self._uno_declared = [False] * self.player_count
        self._uno_window: Optional[UnoWindow] = None
        self._history: List[str] = []
        self._score: Optional[int] = None

        if len(self._hands) != self.player_count:
            raise RoundStateError("Hands count must equal players count")
        if not self._discard_pile:
            raise RoundStateError("Discard pile cannot be empty")
        if self._top().is_wild and self._enforced_color is None:
            raise RoundStateError("A wild top card requires an enforced color")
        if not self._top().is_wild and self._enforced_color is not None:
            raise RoundStateError("Enforced color is only allowed on a wild top card")

        winners = [i for i, hand in enumerate(self._hands) if not hand]
        if len(winners) > 1:
            raise RoundStateError("Round cannot be initialised with multiple winners")
        if isinstance(self._turn, Finished):
            if winners != [self._turn.winner]:
                raise RoundStateError("The winner of a finished round must have an empty hand")
            self._score = self._compute_score(self._turn.winner)
        else:
            ensure_index(self._turn.player, self.player_count, "player in turn")
            if winners:
                raise RoundStateError("An unfinished round cannot contain an empty hand")

    # Queries

    def player(self, index: int) -> str:
        ensure_index(index, self.player_count, "player")
        return self._players[index]

    def player_hand(self, index: int) -> List[Card]:
        """A copy of the player's hand."""
        ensure_index(index, self.player_count, "player")
        return list(self._hands[index])

    def draw_pile(self) -> DrawPile:
        return DrawPile(self._draw_pile)

    def discard_pile(self) -> DiscardPile:
        return DiscardPile(self._discard_pile)

    def player_in_turn(self) -> Optional[int]:
        if isinstance(self._turn, InTurn):
            return self._turn.player
        return None

    @property
    def direction(self) -> Direction:
        return self._direction

    def current_color(self) -> Color:
        """The color to match: the chosen color after a wild, else the top card's."""
        if self._enforced_color is not None:
            return self._enforced_color
        return self._top().color

    def can_play(self, card_index: int) -> bool:
        if not isinstance(self._turn, InTurn):
            return False
        hand = self._hands[self._turn.player]
        if isinstance(card_index, bool) or not isinstance(card_index, int):
            return False
        if not 0 <= card_index < len(hand):
            return False
        return can_play(hand[card_index], self._top(), self._enforced_color)

    def can_play_any(self) -> bool:
        if not isinstance(self._turn, InTurn):
            return False
        top = self._top()
        return any(can_play(card, top, self._enforced_color) for card in self._hands[self._turn.player])

    def has_ended(self) -> bool:
        return isinstance(self._turn, Finished)

    def winner(self) -> Optional[int]:
        if isinstance(self._turn, Finished):
            return self._turn.winner
        return None

    def score(self) -> Optional[int]:
        """Points left in the losers' hands, or None while the round is active."""
        return self._score

    def history(self) -> tuple[str, ...]:
        return tuple(self._history)

    def player_view(self, index: int) -> PlayerView:
        ensure_index(index, self.player_count, "player")
        return PlayerView.from_round(self, index)

    # Actions

    def play(self, card_index: int, color: Optional[Union[Color, str]] = None) -> Card:
        """Play a card from the current player's hand.

        Args:
            card_index: Position of the card in the current player's hand.
            color: Color to enforce; required for wild cards, forbidden otherwise.

        Returns:
            The played card.

        Raises:
            RoundFinishedError: If the round has ended.
            InvalidIndexError: If card_index is outside the hand.
            IllegalPlayError: If the card cannot be played or the color choice is wrong.
            DrawPileExhaustedError: If a penalty cannot be drawn.
        """
        current = self._ensure_in_turn()
        hand = self._hands[current]
        ensure_index(card_index, len(hand), "card index")
        card = hand[card_index]
        top = self._top()

        if not can_play(card, top, self._enforced_color):
            raise IllegalPlayError(f"{card} cannot be played on {top}")
        if card.is_wild:
            if color is None:
                raise IllegalPlayError("Color must be specified when playing a wild card")
            color = _ensure_color(color)
        elif color is not None:
            raise IllegalPlayError("Color can only be provided for wild cards")

        effect = effect_of(card, self.player_count)
        # The played card lands on top, so every card now in the discard pile can be reshuffled
        if effect.penalty > len(self._draw_pile) + len(self._discard_pile):
            raise DrawPileExhaustedError(f"Not enough cards left for a {effect.penalty} card penalty")

        self._expire_windows_except(current)
        hand.pop(card_index)
        self._discard_pile.append(card)
        self._enforced_color = color if card.is_wild else None
        if color is not None:
            self._log(f"{self._players[current]} played {card} (chose {color.value})")
        else:
            self._log(f"{self._players[current]} played {card}")

        if effect.reverses:
            self._direction = self._direction.flipped()
        if effect.penalty:
            victim = next_index(current, 1, self._direction, self.player_count)
            self._apply_penalty(victim, effect.penalty)

        self._update_uno_state(current)

        if not hand:
            self._finish(current)
            return card

        self._advance(current, effect.steps)
        return card

    def draw(self) -> Card:
        """Draw one card for the current player.

        The turn passes only if the drawn card cannot be played; a playable
        card keeps the turn with the player so they may play it right away.
        """
        current = self._ensure_in_turn()
        self._ensure_drawable(1)

        self._expire_windows_except(current)
        card = self._take_from_draw_pile()
        self._hands[current].append(card)
        self._log(f"{self._players[current]} drew a card")
        self._update_uno_state(current)

        if not can_play(card, self._top(), self._enforced_color):
            self._advance(current, 1)
        return card

    def say_uno(self, player_index: int) -> None:
        ensure_index(player_index, self.player_count, "player")
        if self.has_ended():
            raise RoundFinishedError("Round has finished")
        if len(self._hands[player_index]) > 2:
            raise IllegalPlayError("UNO can only be declared with two or fewer cards")

        self._uno_declared[player_index] = True
        if self._uno_window is not None and self._uno_window.player == player_index:
            self._uno_window = None
        self._log(f"{self._players[player_index]} said UNO")

    def catch_uno_failure(self, accuser: int, accused: int) -> bool:
        """Accuse a player of holding one card without having said UNO.

        Returns True and makes the accused draw four cards if the accusation
        holds; returns False and changes nothing otherwise.
        """
        ensure_index(accuser, self.player_count, "accuser")
        ensure_index(accused, self.player_count, "accused")

        window = self._uno_window
        if window is None or window.player != accused or not window.window_open:
            return False
        if self._uno_declared[accused]:
            return False
        if len(self._hands[accused]) != 1:
            return False
        self._ensure_drawable(UNO_PENALTY)

        self._uno_window = None
        self._log(f"{self._players[accuser]} caught {self._players[accused]} failing to say UNO")
        self._apply_penalty(accused, UNO_PENALTY)
        return True

    def on_end(self, handler: EndHandler) -> None:
        """Call handler once when the round ends, or right away if it already has.

        Handlers run in registration order. If one raises, the rest still run
        and the first exception is re-raised from the call that ended the
        round; the round stays ended.
        """
        if isinstance(self._turn, Finished):
            handler(RoundEnded(winner=self._turn.winner, score=self._score))
        else:
            self._listeners.append(handler)

    def to_memento(self) -> RoundMemento:
        return encode(
            RoundData(
                players=self._players,
                dealer=self.dealer,
                hands=self._hands,
                draw_pile=self._draw_pile,
                discard_pile=self._discard_pile,
                direction=self._direction,
                turn=self._turn,
                enforced_color=self._enforced_color,
            )
        )

    def __repr__(self) -> str:
        return (
            f"Round(players={self._players!r}, turn={self._turn!r}, "
            f"top={self._top()}, color={self.current_color().value})"
        )

    # Internals

    def _top(self) -> Card:
        return self._discard_pile[-1]

    def _ensure_in_turn(self) -> int:
        if isinstance(self._turn, Finished):
            raise RoundFinishedError("Round has finished")
        if not isinstance(self._turn, InTurn):
            raise RoundStateError("No player currently in turn")
        return self._turn.player

    def _advance(self, current: int, steps: int) -> None:
        self._turn = InTurn(next_index(current, steps, self._direction, self.player_count))
        logger.debug("Turn passes from player %d to player %d", current, self._turn.player)

    def _log(self, event: str) -> None:
        self._history.append(event)
        logger.debug(event)

    def _ensure_drawable(self, count: int) -> None:
        available = len(self._draw_pile) + len(self._discard_pile) - 1
        if count > available:
            raise DrawPileExhaustedError("Cannot replenish draw pile")

    def _take_from_draw_pile(self) -> Card:
        if not self._draw_pile:
            self._refill_draw_pile()
        return self._draw_pile.pop(0)

    def _refill_draw_pile(self) -> None:
        if len(self._discard_pile) <= 1:
            raise DrawPileExhaustedError("Cannot replenish draw pile")
        self._draw_pile.extend(self._discard_pile[:-1])
        del self._discard_pile[:-1]
        self._shuffler(self._draw_pile)
        logger.debug("Reshuffled %d discarded cards into the draw pile", len(self._draw_pile))

    def _apply_penalty(self, player: int, count: int) -> None:
        hand = self._hands[player]
        for _ in range(count):
            hand.append(self._take_from_draw_pile())
        self._log(f"{self._players[player]} drew {count} cards (penalty)")
        self._update_uno_state(player)

    def _expire_windows_except(self, player: int) -> None:
        if self._uno_window is not None and self._uno_window.player != player:
            self._uno_window.window_open = False

    def _update_uno_state(self, player: int) -> None:
        window = self._uno_window
        if len(self._hands[player]) == 1:
            if not self._uno_declared[player]:
                self._uno_window = UnoWindow(player)
            elif window is not None and window.player == player:
                self._uno_window = None
        else:
            self._uno_declared[player] = False
            if window is not None and window.player == player:
                self._uno_window = None

        window = self._uno_window
        if window is not None and len(self._hands[window.player]) != 1:
            self._uno_window = None

    def _finish(self, winner: int) -> None:
        self._turn = Finished(winner)
        self._uno_window = None
        self._score = self._compute_score(winner)
        self._log(f"{self._players[winner]} won the round")
        logger.info("Round won by %s with %d points", self._players[winner], self._score)

        listeners, self._listeners = self._listeners, []
        event = RoundEnded(winner=winner, score=self._score)
        errors = []
        for listener in listeners:
            try:
                listener(event)
            except Exception as exc:
                logger.exception("End-of-round handler %r failed", listener)
                errors.append(exc)
        if errors:
            raise errors[0]

    def _compute_score(self, winner: int) -> int:
        return sum(
            card_points(card)
            for index, hand in enumerate(self._hands)
            if index != winner
            for card in hand
        )


def create_round(config: Optional[RoundConfig] = None, **options: Any) -> Round:
    """Deal a fresh round.

    Accepts either a RoundConfig or its fields as keyword arguments:
    create_round(players=["Ann", "Bob"], dealer=0).
    """
    if config is None:
        config = RoundConfig(**options)
    elif options:
        raise TypeError("Pass either a RoundConfig or keyword options, not both")

    deal = build_initial_deal(
        len(config.players), config.dealer, config.cards_per_player, config.shuffler
    )
    data = RoundData(
        players=list(config.players),
        dealer=config.dealer,
        hands=deal.hands,
        draw_pile=deal.draw_pile,
        discard_pile=deal.discard_pile,
        direction=deal.direction,
        turn=InTurn(deal.current_player),
    )
    return Round(data, shuffler=config.shuffler)


def create_round_from_memento(
    memento: Mapping[str, Any],
    shuffler: Shuffler = standard_shuffler,
) -> Round:
    """Rebuild a round from a memento, validating it fully first."""
    return Round(decode(memento), shuffler=shuffler)
