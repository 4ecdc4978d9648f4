"""State types for a UNO round."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import TYPE_CHECKING, List, Optional, Sequence, Union

from unoround.engine.card import Card, Color
from unoround.engine.deck import Shuffler, standard_shuffler
from unoround.engine.errors import ConfigurationError, ensure_index

if TYPE_CHECKING:
    from unoround.engine.round import Round

MIN_PLAYERS = 2
MAX_PLAYERS = 10
DEFAULT_CARDS_PER_PLAYER = 7


class Direction(IntEnum):
    """Turn direction: 1 = clockwise, -1 = counter-clockwise."""

    CLOCKWISE = 1
    COUNTERCLOCKWISE = -1

    @property
    def label(self) -> str:
        return "clockwise" if self is Direction.CLOCKWISE else "counterclockwise"

    @classmethod
    def from_label(cls, label: str) -> "Direction":
        if label == "clockwise":
            return cls.CLOCKWISE
        if label == "counterclockwise":
            return cls.COUNTERCLOCKWISE
        raise ValueError(f"Unknown direction: {label!r}")

    def flipped(self) -> "Direction":
        return Direction(-self.value)


@dataclass(frozen=True)
class InTurn:
    """The round is active and `player` is to move."""

    player: int


@dataclass(frozen=True)
class Finished:
    """The round is over and `winner` emptied their hand."""

    winner: int


Turn = Union[InTurn, Finished]


@dataclass
class UnoWindow:
    """A player holding one card without having said UNO."""

    player: int
    window_open: bool = True


@dataclass(frozen=True)
class RoundEnded:
    """Event passed to end-of-round handlers."""

    winner: int
    score: int


def validate_players(players: Sequence[str]) -> List[str]:
    if isinstance(players, str) or not isinstance(players, Sequence):
        raise ConfigurationError("players must be a list of names")
    if len(players) < MIN_PLAYERS:
        raise ConfigurationError(f"A round requires at least {MIN_PLAYERS} players")
    if len(players) > MAX_PLAYERS:
        raise ConfigurationError(f"A round supports at most {MAX_PLAYERS} players")
    for name in players:
        if not isinstance(name, str):
            raise ConfigurationError(f"Player names must be strings, got {name!r}")
    return list(players)


@dataclass(frozen=True)
class RoundConfig:
    """
    Configuration for a fresh round.

    Attributes:
        players: Player names in seating order (2-10)
        dealer: Index of the dealing player
        cards_per_player: Cards dealt to each player
        shuffler: In-place shuffle applied to the deck and reshuffled draw piles
    """

    players: Sequence[str]
    dealer: int
    cards_per_player: int = DEFAULT_CARDS_PER_PLAYER
    shuffler: Shuffler = standard_shuffler

    def __post_init__(self) -> None:
        object.__setattr__(self, "players", tuple(validate_players(self.players)))
        cards = self.cards_per_player
        if isinstance(cards, bool) or not isinstance(cards, int):
            raise ConfigurationError(f"cards_per_player must be an integer, got {cards!r}")
        if cards <= 0:
            raise ConfigurationError("cards_per_player must be positive")
        ensure_index(self.dealer, len(self.players), "dealer")
        if not callable(self.shuffler):
            raise ConfigurationError("shuffler must be callable")


@dataclass
class PlayerView:
    """Round state visible to a single player.

    Contains only that player's hand and public info.
    """

    player: int
    my_hand: List[Card]
    top_discard: Card
    current_color: Color
    direction: Direction
    player_in_turn: Optional[int]
    winner: Optional[int]
    players: tuple[str, ...]
    num_cards_per_player: List[int]
    history: List[str] = field(default_factory=list)

    @classmethod
    def from_round(cls, round_: "Round", player: int) -> "PlayerView":
        """Create a player view from a round, hiding other players' hands."""
        return cls(
            player=player,
            my_hand=round_.player_hand(player),
            top_discard=round_.discard_pile().top(),
            current_color=round_.current_color(),
            direction=round_.direction,
            player_in_turn=round_.player_in_turn(),
            winner=round_.winner(),
            players=tuple(round_.player(i) for i in range(round_.player_count)),
            num_cards_per_player=[len(round_.player_hand(i)) for i in range(round_.player_count)],
            history=list(round_.history()[-10:]),
        )
