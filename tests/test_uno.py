"""Tests for saying UNO and catching players who forget to."""

import pytest

from helpers import filler, make_round

from unoround.engine import Color, DrawPileExhaustedError, IllegalPlayError, InvalidIndexError
from unoround.engine.card import numbered, skip

R, B, G = Color.RED, Color.BLUE, Color.GREEN


def n(color: Color, number: int):
    return numbered(color, number)


@pytest.fixture
def round_():
    return make_round(
        hands=[[n(R, 5), n(R, 6)], [n(R, 7), n(B, 1), n(B, 2)], [n(G, 1), n(G, 2), n(G, 3)]],
        discard=[n(R, 1)],
        draw=filler(10),
    )


def test_missing_uno_can_be_caught(round_) -> None:
    round_.play(0)
    assert round_.player_hand(0) == [n(R, 6)]

    assert round_.catch_uno_failure(accuser=1, accused=0) is True
    assert round_.player_hand(0) == [n(R, 6)] + filler(4)
    assert round_.player_in_turn() == 1

    # The window is consumed by the catch
    assert round_.catch_uno_failure(accuser=2, accused=0) is False
    assert len(round_.player_hand(0)) == 5


def test_any_player_can_accuse(round_) -> None:
    round_.play(0)
    assert round_.catch_uno_failure(accuser=2, accused=0) is True


def test_other_players_play_closes_window(round_) -> None:
    round_.play(0)
    round_.play(0)  # player 1 plays RED 7
    assert round_.catch_uno_failure(accuser=2, accused=0) is False
    assert len(round_.player_hand(0)) == 1


def test_other_players_draw_closes_window(round_) -> None:
    round_.play(0)
    round_.draw()
    assert round_.player_in_turn() == 2
    assert round_.catch_uno_failure(accuser=1, accused=0) is False
    assert len(round_.player_hand(0)) == 1


def test_failed_accusation_keeps_window_open(round_) -> None:
    round_.play(0)
    assert round_.catch_uno_failure(accuser=0, accused=2) is False
    assert round_.catch_uno_failure(accuser=1, accused=1) is False
    assert round_.catch_uno_failure(accuser=1, accused=0) is True


def test_saying_uno_closes_window(round_) -> None:
    round_.play(0)
    round_.say_uno(0)
    assert round_.catch_uno_failure(accuser=1, accused=0) is False
    assert len(round_.player_hand(0)) == 1


def test_saying_uno_before_playing(round_) -> None:
    round_.say_uno(0)
    round_.play(0)
    assert round_.catch_uno_failure(accuser=1, accused=0) is False


def test_saying_uno_with_too_many_cards(round_) -> None:
    with pytest.raises(IllegalPlayError):
        round_.say_uno(1)


def test_index_validation(round_) -> None:
    with pytest.raises(InvalidIndexError):
        round_.say_uno(3)
    with pytest.raises(InvalidIndexError):
        round_.catch_uno_failure(accuser=3, accused=0)
    with pytest.raises(InvalidIndexError):
        round_.catch_uno_failure(accuser=0, accused=-1)


def test_declaration_resets_when_hand_grows() -> None:
    round_ = make_round(
        hands=[[n(R, 5), n(R, 6)], [n(R, 7), n(R, 8), n(R, 9)]],
        discard=[n(R, 1)],
        draw=[n(B, 9)] + filler(10),
    )
    round_.say_uno(0)
    round_.draw()
    assert round_.player_hand(0) == [n(R, 5), n(R, 6), n(B, 9)]
    assert round_.player_in_turn() == 1

    round_.play(0)  # RED 7
    round_.play(0)  # RED 5
    round_.play(0)  # RED 8
    round_.play(0)  # RED 6
    assert round_.player_hand(0) == [n(B, 9)]
    assert round_.catch_uno_failure(accuser=1, accused=0) is True


def test_window_stays_open_while_holder_keeps_turn() -> None:
    round_ = make_round(
        hands=[[skip(R), n(R, 6)], [n(B, 1), n(B, 2)]],
        discard=[n(R, 1)],
        draw=filler(10),
    )
    round_.play(0)
    assert round_.player_in_turn() == 0
    assert round_.catch_uno_failure(accuser=1, accused=0) is True


def test_holders_own_draw_clears_window() -> None:
    round_ = make_round(
        hands=[[skip(R), n(R, 6)], [n(B, 1), n(B, 2)]],
        discard=[n(R, 1)],
        draw=filler(10),
    )
    round_.play(0)
    round_.draw()
    assert len(round_.player_hand(0)) == 2
    assert round_.catch_uno_failure(accuser=1, accused=0) is False


def test_penalty_that_cannot_be_drawn() -> None:
    round_ = make_round(
        hands=[[n(R, 5), n(R, 6)], [n(B, 1), n(B, 2)]],
        discard=[n(R, 1)],
    )
    round_.play(0)
    with pytest.raises(DrawPileExhaustedError):
        round_.catch_uno_failure(accuser=1, accused=0)
    assert round_.player_hand(0) == [n(R, 6)]
