from __future__ import annotations

import random
from dataclasses import dataclass
from enum import StrEnum


class Choice(StrEnum):
    """Game objects in canonical-cycle order.

    Each member beats the next (N-1)/2 members cyclically, so the cycle must
    stay odd-length when members are added.
    """

    rock = "rock"
    scissors = "scissors"
    paper = "paper"


CHOICE_DESCRIPTIONS: dict[Choice, str] = {
    Choice.rock: "sedimentary, igneous, or perhaps even metamorphic",
    Choice.scissors: "careful ! sharp ! edges !!",
    Choice.paper: "versatile and iconic",
}

# Flavour verbs for the outcome sentence; pairs not listed use "beats".
WIN_VERBS: dict[tuple[Choice, Choice], str] = {
    (Choice.rock, Choice.scissors): "crushes",
    (Choice.scissors, Choice.paper): "cuts",
    (Choice.paper, Choice.rock): "covers",
}


@dataclass(frozen=True, slots=True)
class Player:
    id: str
    choice: Choice


@dataclass(frozen=True, slots=True)
class Outcome:
    """On a tie `winner` and `loser` are just the challenger and responder."""

    winner: Player
    loser: Player
    tie: bool = False


def parse_choice(value: str) -> Choice:
    try:
        return Choice((value or "").strip().lower())
    except ValueError as e:
        raise ValueError(f"Invalid choice: {value!r}") from e


def beats(a: Choice, b: Choice) -> bool:
    members = list(Choice)
    distance = (members.index(b) - members.index(a)) % len(members)
    return 1 <= distance <= (len(members) - 1) // 2


def play(challenger: Player, responder: Player) -> Outcome:
    if challenger.choice == responder.choice:
        return Outcome(winner=challenger, loser=responder, tie=True)
    if beats(challenger.choice, responder.choice):
        return Outcome(winner=challenger, loser=responder)
    return Outcome(winner=responder, loser=challenger)


def resolve(challenger: Player, responder: Player) -> str:
    """Return the human-readable result sentence for a finished game."""

    outcome = play(challenger, responder)
    if outcome.tie:
        return f"<@{challenger.id}> and <@{responder.id}> draw with **{challenger.choice.value}**"

    verb = WIN_VERBS.get((outcome.winner.choice, outcome.loser.choice), "beats")
    return (
        f"<@{outcome.winner.id}>'s **{outcome.winner.choice.value}** {verb} "
        f"<@{outcome.loser.id}>'s **{outcome.loser.choice.value}**"
    )


def shuffled_options(*, rng: random.Random | None = None) -> list[dict[str, str]]:
    """All choices as select-menu options, in a fresh random order."""

    options = [
        {"label": c.value.capitalize(), "value": c.value, "description": CHOICE_DESCRIPTIONS.get(c, "")}
        for c in Choice
    ]
    (rng or random).shuffle(options)
    return options


def command_choices() -> list[dict[str, str]]:
    """Static option choices for the `/challenge` command schema."""

    return [{"name": c.value.capitalize(), "value": c.value} for c in Choice]
