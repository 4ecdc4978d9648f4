"""Unit tests for round history logging and player views."""

from helpers import filler, make_round

from unoround.engine import Color, Direction, PlayerView
from unoround.engine.card import WILD, draw_two, numbered

R, B, G = Color.RED, Color.BLUE, Color.GREEN


def _round():
    return make_round(
        hands=[[numbered(R, 5), WILD, draw_two(R)], [numbered(G, 1), numbered(G, 2)]],
        discard=[numbered(R, 1)],
        draw=filler(10),
        players=["Ann", "Bob"],
    )


def test_history_initialization():
    assert _round().history() == ()


def test_history_records_play():
    round_ = _round()
    round_.play(0)
    assert round_.history() == ("Ann played RED 5",)


def test_history_records_wild_color():
    round_ = _round()
    round_.play(1, Color.GREEN)
    assert round_.history()[-1] == "Ann played WILD (chose GREEN)"


def test_history_records_draw_and_penalty():
    round_ = _round()
    round_.play(2)
    assert round_.history() == ("Ann played RED DRAW", "Bob drew 2 cards (penalty)")
    round_.draw()
    assert round_.history()[-1] == "Ann drew a card"


def test_history_records_uno_and_win():
    round_ = make_round(
        hands=[[numbered(R, 5), numbered(R, 6)], [numbered(G, 1), numbered(G, 2)]],
        discard=[numbered(R, 1)],
        draw=filler(10),
        players=["Ann", "Bob"],
    )
    round_.play(0)
    assert round_.catch_uno_failure(accuser=1, accused=0)
    round_.say_uno(1)
    assert round_.history()[-3:] == (
        "Bob caught Ann failing to say UNO",
        "Ann drew 4 cards (penalty)",
        "Bob said UNO",
    )

    last = make_round(hands=[[numbered(R, 5)], [numbered(G, 1)]], discard=[numbered(R, 1)], players=["Ann", "Bob"])
    last.play(0)
    assert last.history()[-1] == "Ann won the round"


def test_player_view_hides_other_hands():
    round_ = _round()
    round_.play(0)
    view = round_.player_view(1)
    assert isinstance(view, PlayerView)
    assert view.my_hand == [numbered(G, 1), numbered(G, 2)]
    assert view.num_cards_per_player == [2, 2]
    assert view.top_discard == numbered(R, 5)
    assert view.current_color is R
    assert view.direction is Direction.CLOCKWISE
    assert view.player_in_turn == 1
    assert view.winner is None
    assert view.players == ("Ann", "Bob")
    assert view.history == ["Ann played RED 5"]
