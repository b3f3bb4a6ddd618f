from __future__ import annotations

import logging
from dataclasses import dataclass

from app.config import Settings, settings_from_env
from app.dispatcher import InteractionDispatcher
from app.infra.redis_client import create_redis
from app.notifier import DiscordNotifier
from app.session_store import InMemorySessionStore, RedisSessionStore, SessionStore

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Runtime:
    settings: Settings
    dispatcher: InteractionDispatcher
    notifier: DiscordNotifier


_RUNTIME: Runtime | None = None


def build_session_store(settings: Settings) -> SessionStore:
    if settings.session_backend == "redis":
        logger.info("Using Redis session store at %s", settings.redis_url)
        return RedisSessionStore(r=create_redis(settings.redis_url), ttl_seconds=settings.session_ttl_seconds)
    logger.info("Using in-memory session store")
    return InMemorySessionStore(ttl_seconds=settings.session_ttl_seconds)


def init_runtime(
    *,
    settings: Settings | None = None,
    store: SessionStore | None = None,
    notifier: DiscordNotifier | None = None,
) -> Runtime:
    """Build the process-wide dispatcher/notifier once and cache them.

    Safe to call multiple times; subsequent calls return the already built instance.
    """

    global _RUNTIME
    if _RUNTIME is None:
        s = settings or settings_from_env()
        _RUNTIME = Runtime(
            settings=s,
            dispatcher=InteractionDispatcher(store=store or build_session_store(s), application_id=s.application_id),
            notifier=notifier
            or DiscordNotifier(bot_token=s.bot_token, base_url=s.api_base_url, max_attempts=s.followup_max_attempts),
        )
    return _RUNTIME


def get_runtime() -> Runtime:
    if _RUNTIME is None:
        raise RuntimeError("Runtime not initialized. Call init_runtime() at startup.")
    return _RUNTIME


async def shutdown_runtime() -> None:
    if _RUNTIME is not None:
        await _RUNTIME.notifier.aclose()


def reset_runtime_for_tests() -> None:
    """Drop the cached runtime so tests can initialize it with their own settings."""

    global _RUNTIME
    _RUNTIME = None
