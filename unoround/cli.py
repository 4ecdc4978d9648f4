"""CLI entry point.

Every command works on a round memento stored as JSON: `new` writes one, the
action commands load it, apply the action and write it back.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv

from unoround.engine import (
    ConfigurationError,
    Round,
    RoundConfig,
    RoundError,
    Shuffler,
    create_round,
    create_round_from_memento,
    seeded_shuffler,
    standard_shuffler,
)
from unoround.settings import get_settings

# Load environment variables from .env file
load_dotenv()

app = typer.Typer(help="Rules engine for a single round of UNO")


def _shuffler(seed: Optional[int]) -> Shuffler:
    if seed is None:
        seed = get_settings().seed
    return standard_shuffler if seed is None else seeded_shuffler(seed)


def _load(path: Path, seed: Optional[int] = None) -> Round:
    try:
        memento = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        typer.echo(f"Error: cannot read {path}: {exc}", err=True)
        raise typer.Exit(code=1)
    try:
        return create_round_from_memento(memento, shuffler=_shuffler(seed))
    except RoundError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1)


def _save(round_: Round, path: Optional[Path]) -> None:
    text = json.dumps(round_.to_memento(), indent=2)
    if path is None:
        typer.echo(text)
    else:
        path.write_text(text + "\n", encoding="utf-8")


def _summary(round_: Round) -> str:
    top = round_.discard_pile().top()
    lines = [
        f"Top card: {top}   Color: {round_.current_color().value}   "
        f"Direction: {round_.direction.label}",
        f"Draw pile: {round_.draw_pile().size} cards",
    ]
    for i in range(round_.player_count):
        marker = ">" if round_.player_in_turn() == i else " "
        dealer = " (dealer)" if i == round_.dealer else ""
        lines.append(f"{marker} {i}: {round_.player(i)}{dealer} - {len(round_.player_hand(i))} cards")
    if round_.has_ended():
        lines.append(f"Winner: {round_.player(round_.winner())}  Score: {round_.score()}")
    return "\n".join(lines)


def _player_view(round_: Round, player: int) -> str:
    view = round_.player_view(player)
    in_turn = view.player_in_turn == player
    lines = [f"=== {view.players[player]}'s hand ==="]
    for i, card in enumerate(view.my_hand):
        playable = " *" if in_turn and round_.can_play(i) else ""
        lines.append(f"  {i}: {card}{playable}")
    lines.extend([
        "",
        f"Top card: {view.top_discard}   Color: {view.current_color.value}",
        "Your turn" if in_turn else "Waiting",
    ])
    if view.history:
        lines.append("")
        lines.extend(f"- {event}" for event in view.history)
    return "\n".join(lines)


@app.callback()
def main() -> None:
    """Configure logging from the environment."""
    try:
        settings = get_settings()
    except ConfigurationError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1)
    logging.basicConfig(level=settings.log_level)


@app.command()
def new(
    players: List[str] = typer.Argument(..., help="Player names in seating order (2-10)"),
    dealer: int = typer.Option(0, "--dealer", "-d", help="Index of the dealer"),
    cards: Optional[int] = typer.Option(None, "--cards", "-c", help="Cards dealt to each player"),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Random seed"),
    out: Optional[Path] = typer.Option(None, "--out", "-o", help="Write the memento here"),
) -> None:
    """Deal a new round and write its memento."""
    try:
        config = RoundConfig(
            players=players,
            dealer=dealer,
            cards_per_player=cards if cards is not None else get_settings().cards_per_player,
            shuffler=_shuffler(seed),
        )
        round_ = create_round(config)
    except RoundError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1)
    _save(round_, out)
    if out is not None:
        typer.echo(_summary(round_))


@app.command()
def show(
    memento: Path = typer.Argument(..., help="Round memento JSON file"),
    player: Optional[int] = typer.Option(None, "--player", "-p", help="Show this player's view"),
) -> None:
    """Show a round, or one player's view of it."""
    round_ = _load(memento)
    if player is None:
        typer.echo(_summary(round_))
        return
    try:
        typer.echo(_player_view(round_, player))
    except RoundError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1)


@app.command()
def play(
    memento: Path = typer.Argument(..., help="Round memento JSON file"),
    card_index: int = typer.Argument(..., help="Index of the card in the current player's hand"),
    color: Optional[str] = typer.Option(None, "--color", help="Color to choose for a wild card"),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Random seed for reshuffles"),
) -> None:
    """Play a card for the player in turn."""
    round_ = _load(memento, seed)
    player = round_.player_in_turn()
    try:
        card = round_.play(card_index, color.upper() if color else None)
    except RoundError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1)
    _save(round_, memento)
    typer.echo(f"{round_.player(player)} played {card}")
    if round_.has_ended():
        typer.echo(f"{round_.player(player)} won the round with {round_.score()} points")


@app.command()
def draw(
    memento: Path = typer.Argument(..., help="Round memento JSON file"),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Random seed for reshuffles"),
) -> None:
    """Draw a card for the player in turn."""
    round_ = _load(memento, seed)
    player = round_.player_in_turn()
    try:
        card = round_.draw()
    except RoundError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1)
    _save(round_, memento)
    typer.echo(f"{round_.player(player)} drew {card}")


if __name__ == "__main__":
    app()
