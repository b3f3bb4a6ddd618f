"""Command metadata for bulk registration against the platform.

Not used at request time; see `scripts/register_commands.py`.
"""

from __future__ import annotations

from typing import Any

from app.commands.converters import FIBONACCI_MAX, FIBONACCI_MIN
from app.game.rules import command_choices

CHAT_INPUT = 1

OPTION_STRING = 3
OPTION_INTEGER = 4

ALL_INTEGRATIONS = [0, 1]
ALL_CONTEXTS = [0, 1, 2]


def _command(name: str, description: str, *, options: list[dict[str, Any]] | None = None, contexts: list[int] | None = None) -> dict[str, Any]:
    cmd: dict[str, Any] = {
        "name": name,
        "description": description,
        "type": CHAT_INPUT,
        "integration_types": ALL_INTEGRATIONS,
        "contexts": contexts or ALL_CONTEXTS,
    }
    if options:
        cmd["options"] = options
    return cmd


def _direction_option(*, target: str, encode_desc: str, decode_desc: str) -> dict[str, Any]:
    return {
        "name": "direction",
        "description": f"Encode to {target} or decode from {target}",
        "type": OPTION_STRING,
        "required": True,
        "choices": [
            {"name": "Encode", "value": "encode", "description": encode_desc},
            {"name": "Decode", "value": "decode", "description": decode_desc},
        ],
    }


TEST_COMMAND = _command("test", "Basic command")

CHALLENGE_COMMAND = _command(
    "challenge",
    "Challenge to a match of rock paper scissors",
    options=[
        {
            "type": OPTION_STRING,
            "name": "object",
            "description": "Pick your object",
            "required": True,
            "choices": command_choices(),
        }
    ],
    # Guilds and private channels only; the bot DM has no second player.
    contexts=[0, 2],
)

FLIP_COMMAND = _command("flip", "Flip a coin!")

DICE_COMMAND = _command(
    "roll",
    "Roll a die with optional number of sides",
    options=[
        {"type": OPTION_INTEGER, "name": "sides", "description": "Number of sides on the die (default is 6)", "required": False},
        {"type": OPTION_INTEGER, "name": "count", "description": "Number of dice to roll (default is 1, max is 100)", "required": False},
    ],
)

UPTIME_COMMAND = _command("uptime", "Show how long the bot has been running")

PING_COMMAND = _command("ping", "Check bot and API latency. Returns the total time in milliseconds.")

MATH_COMMAND = _command(
    "math",
    "Calculate a basic math expression (e.g., 5 + 2 * 3)",
    options=[
        {
            "type": OPTION_STRING,
            "name": "expression",
            "description": "The math expression to evaluate (e.g. 5 + 2 * 3)",
            "required": True,
        }
    ],
)

BINARY_COMMAND = _command(
    "binary",
    "Encode or decode binary",
    options=[
        _direction_option(
            target="binary",
            encode_desc="Converts (ASCII) text to binary",
            decode_desc="Converts binary strings to ASCII characters",
        ),
        {"name": "input", "description": "The text or binary to convert", "type": OPTION_STRING, "required": True},
    ],
)

HEX_COMMAND = _command(
    "hex",
    "Encode or decode hexadecimal",
    options=[
        _direction_option(
            target="hex",
            encode_desc="Converts ASCII text to its hexadecimal representation",
            decode_desc="Converts hex values to ASCII characters",
        ),
        {"name": "input", "description": "The text or hex to convert", "type": OPTION_STRING, "required": True},
    ],
)

SORT_COMMAND = _command(
    "sort",
    "Sorts a list of numbers in ascending order",
    options=[{"name": "input", "description": "Comma-separated list of numbers", "type": OPTION_STRING, "required": True}],
)

FIBONACCI_COMMAND = _command(
    "fibonacci",
    "Generates the first N Fibonacci numbers",
    options=[
        {
            "name": "n",
            "description": "How many Fibonacci numbers to return",
            "type": OPTION_INTEGER,
            "required": True,
            "min_value": FIBONACCI_MIN,
            "max_value": FIBONACCI_MAX,
        }
    ],
)


ALL_COMMANDS: list[dict[str, Any]] = [
    TEST_COMMAND,
    CHALLENGE_COMMAND,
    FLIP_COMMAND,
    DICE_COMMAND,
    UPTIME_COMMAND,
    PING_COMMAND,
    MATH_COMMAND,
    BINARY_COMMAND,
    HEX_COMMAND,
    SORT_COMMAND,
    FIBONACCI_COMMAND,
]
