from __future__ import annotations

import logging
import math
import re

from app.api.models import Interaction, InteractionResponse
from app.commands.base import CommandContext
from app.commands.calculator import format_number

logger = logging.getLogger(__name__)

_LEADING_NUMBER = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")

FIBONACCI_MIN = 1
FIBONACCI_MAX = 100

MISSING_DIRECTION_OR_INPUT = "⚠️ Missing direction or input."
BINARY_WARNING = "⚠️ Could not convert the input. Make sure it's valid."
HEX_WARNING = "⚠️ Could not convert the input. Make sure it's valid hex or text."
SORT_WARNING = "⚠️ Could not parse the numbers. Please enter a comma-separated list like `5, 2, 9, 1`."
FIBONACCI_WARNING = f"⚠️ Please choose a number between {FIBONACCI_MIN} and {FIBONACCI_MAX}."


def text_to_binary(text: str) -> str:
    return " ".join(format(ord(ch), "08b") for ch in text)


def binary_to_text(binary: str) -> str:
    return "".join(chr(int(group, 2)) for group in binary.split(" "))


def text_to_hex(text: str) -> str:
    return " ".join(format(ord(ch), "02x") for ch in text)


def hex_to_text(hex_text: str) -> str:
    return "".join(chr(int(group, 16)) for group in hex_text.split(" "))


def parse_number_list(text: str) -> list[float]:
    """Parse a comma-separated list by the leading number of each entry.

    `"5abc"` reads as 5 and `"1_000"` as 1; entries with no leading number are skipped.
    """

    numbers: list[float] = []
    for part in (text or "").split(","):
        m = _LEADING_NUMBER.match(part.strip())
        if m is None:
            continue
        value = float(m.group(0))
        if math.isfinite(value):
            numbers.append(value)
    return numbers


def sort_numbers(text: str) -> str:
    numbers = parse_number_list(text)
    if not numbers:
        raise ValueError("No valid numbers found")
    return ", ".join(format_number(n) for n in sorted(numbers))


def fibonacci(n: int) -> list[int]:
    if n < FIBONACCI_MIN or n > FIBONACCI_MAX:
        raise ValueError(f"n must be between {FIBONACCI_MIN} and {FIBONACCI_MAX}")
    seq = [0, 1]
    while len(seq) < n:
        seq.append(seq[-1] + seq[-2])
    return seq[:n]


def _code_block(text: str) -> str:
    return f"```\n{text}\n```"


def _direction_and_input(interaction: Interaction) -> tuple[str | None, str | None]:
    data = interaction.data
    if data is None:
        return None, None
    return data.option("direction"), data.option("input")

def handle_binary(interaction: Interaction, ctx: CommandContext) -> InteractionResponse:
    direction, text = _direction_and_input(interaction)
    if not direction or not text:
        return InteractionResponse.message(MISSING_DIRECTION_OR_INPUT)

    try:
        if direction == "encode":
            result = text_to_binary(text)
        elif direction == "decode":
            result = binary_to_text(text)
        else:
            raise ValueError(f"Invalid direction: {direction}")
    except (ValueError, OverflowError) as e:
        logger.info("binary: conversion failed: %s", e)
        return InteractionResponse.message(BINARY_WARNING)

    label = "Binary" if direction == "encode" else "Text"
    return InteractionResponse.message(f"🧠 **{label} Result:**\n{_code_block(result)}")


def handle_hex(interaction: Interaction, ctx: CommandContext) -> InteractionResponse:
    direction, text = _direction_and_input(interaction)
    if not direction or not text:
        return InteractionResponse.message(MISSING_DIRECTION_OR_INPUT)

    try:
        if direction == "encode":
            result = text_to_hex(text)
        elif direction == "decode":
            result = hex_to_text(text)
        else:
            raise ValueError(f"Invalid direction: {direction}")
    except (ValueError, OverflowError) as e:
        logger.info("hex: conversion failed: %s", e)
        return InteractionResponse.message(HEX_WARNING)

    label = "Hex" if direction == "encode" else "Text"
    return InteractionResponse.message(f"🔢 **{label} Result:**\n{_code_block(result)}")


def handle_sort(interaction: Interaction, ctx: CommandContext) -> InteractionResponse:
    text = str((interaction.data.option("input") if interaction.data else None) or "")
    try:
        result = sort_numbers(text)
    except ValueError as e:
        logger.info("sort: %s", e)
        return InteractionResponse.message(SORT_WARNING)
    return InteractionResponse.message(f"🔢 Sorted result:\n{_code_block(result)}")


def handle_fibonacci(interaction: Interaction, ctx: CommandContext) -> InteractionResponse:
    raw = interaction.data.option("n") if interaction.data else None
    try:
        n = int(raw)
        seq = fibonacci(n)
    except (TypeError, ValueError):
        return InteractionResponse.message(FIBONACCI_WARNING)

    listed = ", ".join(str(v) for v in seq)
    return InteractionResponse.message(f"🔢 First {n} Fibonacci numbers:\n{_code_block(listed)}")
