from __future__ import annotations

from app.commands.definitions import ALL_COMMANDS, CHALLENGE_COMMAND, FIBONACCI_COMMAND
from app.dispatcher import InteractionDispatcher
from app.game.rules import Choice
from app.session_store import InMemorySessionStore


def test_every_registered_command_has_a_handler() -> None:
    dispatcher = InteractionDispatcher(store=InMemorySessionStore())
    assert sorted(c["name"] for c in ALL_COMMANDS) == dispatcher.command_names


def test_challenge_option_offers_every_choice() -> None:
    (option,) = CHALLENGE_COMMAND["options"]
    assert option["required"] is True
    assert [c["value"] for c in option["choices"]] == [c.value for c in Choice]


def test_fibonacci_schema_matches_enforced_bound() -> None:
    (option,) = FIBONACCI_COMMAND["options"]
    assert (option["min_value"], option["max_value"]) == (1, 100)
