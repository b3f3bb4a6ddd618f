from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from typing import Any

import httpx

from app.commands.base import Followup
from app.config import DEFAULT_API_BASE_URL

logger = logging.getLogger(__name__)

USER_AGENT = "DiscordBot (interaction-bot, 0.1.0)"
RETRYABLE_STATUS = frozenset({429, 500, 502, 503, 504})


class NotifierError(RuntimeError):
    def __init__(self, message: str, *, status_code: int | None = None, body: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


def message_endpoint(application_id: str, token: str, message_id: str) -> str:
    return f"webhooks/{application_id}/{token}/messages/{message_id}"


class DiscordNotifier:
    """Thin REST client for follow-up calls against the platform API.

    `send` raises NotifierError on transport failure or a non-2xx status once
    `max_attempts` is exhausted. Only transport errors, 429 and 5xx are retried.
    """

    def __init__(
        self,
        *,
        bot_token: str | None,
        base_url: str = DEFAULT_API_BASE_URL,
        max_attempts: int = 3,
        backoff_seconds: float = 0.5,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._bot_token = bot_token
        self._base_url = base_url if base_url.endswith("/") else base_url + "/"
        self._max_attempts = max(1, max_attempts)
        self._backoff = backoff_seconds
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(base_url=self._base_url, timeout=10.0)
        return self._client

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json; charset=UTF-8", "User-Agent": USER_AGENT}
        if self._bot_token:
            headers["Authorization"] = f"Bot {self._bot_token}"
        return headers

    async def send(self, endpoint: str, *, method: str, body: Any = None) -> httpx.Response:
        client = self._get_client()
        url = self._base_url + endpoint.lstrip("/")
        attempt = 0

        while True:
            attempt += 1
            try:
                resp = await client.request(method, url, headers=self._headers(), json=body)
            except httpx.TransportError as e:
                last_error = NotifierError(f"{method} {endpoint} failed: {e}")
            else:
                if resp.is_success:
                    return resp
                last_error = NotifierError(
                    f"{method} {endpoint} returned {resp.status_code}",
                    status_code=resp.status_code,
                    body=resp.text,
                )
                if resp.status_code not in RETRYABLE_STATUS:
                    raise last_error

            if attempt >= self._max_attempts:
                raise last_error
            logger.warning("%s (attempt %s/%s); retrying", last_error, attempt, self._max_attempts)
            await asyncio.sleep(self._backoff * attempt)

    async def delete_message(self, *, application_id: str, token: str, message_id: str) -> None:
        await self.send(message_endpoint(application_id, token, message_id), method="DELETE")

    async def edit_message(self, *, application_id: str, token: str, message_id: str, body: dict[str, Any]) -> None:
        await self.send(message_endpoint(application_id, token, message_id), method="PATCH", body=body)

    async def install_global_commands(self, *, application_id: str, commands: Sequence[dict[str, Any]]) -> list[dict[str, Any]]:
        """Bulk-overwrite the application's global commands."""

        resp = await self.send(f"applications/{application_id}/commands", method="PUT", body=list(commands))
        return resp.json()


async def run_followup(notifier: DiscordNotifier, followup: Followup) -> None:
    if followup.kind == "delete_message":
        await notifier.delete_message(
            application_id=followup.application_id,
            token=followup.token,
            message_id=followup.message_id,
        )
    elif followup.kind == "edit_message":
        await notifier.edit_message(
            application_id=followup.application_id,
            token=followup.token,
            message_id=followup.message_id,
            body=followup.body or {},
        )
    else:
        raise ValueError(f"Unknown follow-up kind: {followup.kind}")


async def run_followups(notifier: DiscordNotifier, followups: Sequence[Followup]) -> None:
    """Best-effort: failures are logged and dropped, never raised or compensated."""

    for followup in followups:
        try:
            await run_followup(notifier, followup)
        except Exception:
            logger.exception("Error sending %s for message %s", followup.kind, followup.message_id)
