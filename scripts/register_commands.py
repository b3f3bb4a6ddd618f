"""Register the bot's slash commands globally.

Contract
- Inputs: DISCORD_APPLICATION_ID and DISCORD_TOKEN from the environment (or `.env`).
- Effect: bulk-overwrites the application's global commands with `ALL_COMMANDS`.

Usage:
    uv run python scripts/register_commands.py
    uv run python scripts/register_commands.py --dry-run
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from app.commands.definitions import ALL_COMMANDS
from app.config import settings_from_env
from app.notifier import DiscordNotifier, NotifierError

logger = logging.getLogger("register_commands")


async def install(*, dry_run: bool) -> int:
    settings = settings_from_env()

    if dry_run:
        print(json.dumps(ALL_COMMANDS, indent=2, ensure_ascii=False))
        return 0

    if not settings.application_id or not settings.bot_token:
        logger.error("DISCORD_APPLICATION_ID and DISCORD_TOKEN must be set")
        return 2

    notifier = DiscordNotifier(
        bot_token=settings.bot_token,
        base_url=settings.api_base_url,
        max_attempts=settings.followup_max_attempts,
    )
    try:
        registered = await notifier.install_global_commands(application_id=settings.application_id, commands=ALL_COMMANDS)
    except NotifierError as e:
        logger.error("Command registration failed: %s %s", e, e.body or "")
        return 1
    finally:
        await notifier.aclose()

    logger.info("Registered %d commands: %s", len(registered), ", ".join(c.get("name", "?") for c in registered))
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--dry-run", action="store_true", help="print the command payload instead of sending it")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    return asyncio.run(install(dry_run=args.dry_run))


if __name__ == "__main__":
    sys.exit(main())
