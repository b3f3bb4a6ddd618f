from __future__ import annotations

import logging
import random

from app.api.models import Interaction, InteractionResponse
from app.commands.base import CommandContext

logger = logging.getLogger(__name__)

EMOJIS: tuple[str, ...] = ("😭", "😄", "😌", "🤓", "😎", "😤", "🤖", "😶‍🌫️", "🌏", "📸", "💿", "👋", "🌊", "✨")

DEFAULT_SIDES = 6
MIN_SIDES = 2
MIN_ROLLS = 1
MAX_ROLLS = 100


def random_emoji(*, rng: random.Random | None = None) -> str:
    return (rng or random).choice(EMOJIS)


def flip_coin(*, rng: random.Random | None = None) -> str:
    return "🪙 Heads!" if (rng or random).random() < 0.5 else "🪙 Tails!"


def clamp_dice(sides: int | None, count: int | None) -> tuple[int, int]:
    """Apply dice limits: sides floored at 2, count clamped to [1, 100]."""

    s = DEFAULT_SIDES if sides is None else max(MIN_SIDES, int(sides))
    c = MIN_ROLLS if count is None else min(max(MIN_ROLLS, int(count)), MAX_ROLLS)
    return s, c


def roll_dice(*, sides: int | None = None, count: int | None = None, rng: random.Random | None = None) -> tuple[int, int, list[int]]:
    s, c = clamp_dice(sides, count)
    r = rng or random
    return s, c, [r.randint(1, s) for _ in range(c)]


def format_uptime(seconds: float) -> str:
    total = int(max(0, seconds))
    days, rem = divmod(total, 86_400)
    hours, rem = divmod(rem, 3_600)
    minutes, secs = divmod(rem, 60)

    parts: list[str] = []
    if days:
        parts.append(f"{days}d")
    if hours:
        parts.append(f"{hours}h")
    if minutes:
        parts.append(f"{minutes}m")
    if secs or not parts:
        parts.append(f"{secs}s")
    return " ".join(parts)


def handle_test(interaction: Interaction, ctx: CommandContext) -> InteractionResponse:
    return InteractionResponse.message(f"hello world {random_emoji()}")


def handle_flip(interaction: Interaction, ctx: CommandContext) -> InteractionResponse:
    return InteractionResponse.message(flip_coin())


def handle_roll(interaction: Interaction, ctx: CommandContext) -> InteractionResponse:
    data = interaction.data
    sides = data.option("sides") if data else None
    count = data.option("count") if data else None

    s, c, rolls = roll_dice(sides=sides, count=count)
    listed = ", ".join(str(v) for v in rolls)
    return InteractionResponse.message(f"🎲 Rolled {c} d{s}: [{listed}] → Total: **{sum(rolls)}**")


def handle_uptime(interaction: Interaction, ctx: CommandContext) -> InteractionResponse:
    return InteractionResponse.message(f"⏱️ Uptime: {format_uptime(ctx.clock() - ctx.started_at)}")


def handle_ping(interaction: Interaction, ctx: CommandContext) -> InteractionResponse:
    # Receipt -> reply time inside this process; platform round-trip is not included.
    latency_ms = int(round((ctx.clock() - ctx.received_at) * 1000))
    logger.debug("ping processed; latency=%sms", latency_ms)
    return InteractionResponse.message(f"🏓 Pong! Total latency: {latency_ms}ms")
