"""Simulate a round where everyone plays their first legal card."""

import logging

from unoround.engine import COLORS, Round, create_round, seeded_shuffler


def take_turn(round_: Round) -> None:
    player = round_.player_in_turn()
    hand = round_.player_hand(player)
    for i, card in enumerate(hand):
        if round_.can_play(i):
            # Name the color we hold most of when playing a wild
            color = None
            if card.is_wild:
                color = max(COLORS, key=lambda c: sum(1 for h in hand if h.color == c))
            if len(hand) == 2:
                round_.say_uno(player)
            round_.play(i, color)
            return
    round_.draw()


def main():
    logging.basicConfig(level=logging.INFO)
    round_ = create_round(
        players=["Ann", "Bob", "Cid", "Dee"],
        dealer=0,
        shuffler=seeded_shuffler(42),
    )
    round_.on_end(lambda event: print(f"Round over! Winner: {round_.player(event.winner)}"))

    turns = 0
    while not round_.has_ended() and turns < 1000:
        take_turn(round_)
        turns += 1
        if round_.history():
            print(f"> {round_.history()[-1]}")

    print(f"Turns: {turns}  Score: {round_.score()}")


if __name__ == "__main__":
    main()
