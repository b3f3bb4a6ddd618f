from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_API_BASE_URL = "https://discord.com/api/v10/"


def _first_env(*names: str) -> str | None:
    for name in names:
        value = os.environ.get(name)
        if value:
            return value
    return None


def _int_env(name: str, default: int | None) -> int | None:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from e


@dataclass(frozen=True, slots=True)
class Settings:
    application_id: str | None
    bot_token: str | None
    public_key: str | None
    api_base_url: str = DEFAULT_API_BASE_URL
    session_backend: str = "memory"
    redis_url: str = "redis://localhost:6379/0"
    # None or 0 => sessions never expire.
    session_ttl_seconds: int | None = None
    followup_max_attempts: int = 3
    log_level: str = "INFO"


def settings_from_env(*, load_dotenv_file: bool = True) -> Settings:
    """Build settings from the process environment (and `.env` if present).

    `APP_ID` / `PUBLIC_KEY` are accepted as aliases for the `DISCORD_*` names.
    """

    if load_dotenv_file:
        load_dotenv(override=False)

    backend = (os.environ.get("SESSION_BACKEND") or "memory").strip().lower()
    if backend not in {"memory", "redis"}:
        raise ValueError(f"SESSION_BACKEND must be 'memory' or 'redis', got {backend!r}")

    ttl = _int_env("SESSION_TTL_SECONDS", None)
    attempts = _int_env("FOLLOWUP_MAX_ATTEMPTS", 3) or 1

    return Settings(
        application_id=_first_env("DISCORD_APPLICATION_ID", "APP_ID"),
        bot_token=_first_env("DISCORD_TOKEN", "BOT_TOKEN"),
        public_key=_first_env("DISCORD_PUBLIC_KEY", "PUBLIC_KEY"),
        api_base_url=os.environ.get("DISCORD_API_BASE_URL", DEFAULT_API_BASE_URL),
        session_backend=backend,
        redis_url=os.environ.get("REDIS_URL", "redis://localhost:6379/0"),
        session_ttl_seconds=ttl if ttl and ttl > 0 else None,
        followup_max_attempts=max(1, attempts),
        log_level=os.environ.get("LOG_LEVEL", "INFO"),
    )
