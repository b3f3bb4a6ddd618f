from __future__ import annotations

import json
from collections.abc import Callable, Generator
from typing import Any

import httpx
import pytest
from fastapi.testclient import TestClient
from nacl.encoding import HexEncoder
from nacl.signing import SigningKey

from app.config import Settings
from app.notifier import DiscordNotifier
from app.runtime import init_runtime, reset_runtime_for_tests
from app.session_store import InMemorySessionStore

APPLICATION_ID = "app-123"
BOT_TOKEN = "bot-token"


@pytest.fixture(scope="session")
def signing_key() -> SigningKey:
    return SigningKey.generate()


@pytest.fixture()
def settings(signing_key: SigningKey) -> Settings:
    return Settings(
        application_id=APPLICATION_ID,
        bot_token=BOT_TOKEN,
        public_key=signing_key.verify_key.encode(encoder=HexEncoder).decode(),
        followup_max_attempts=1,
    )


@pytest.fixture()
def store() -> InMemorySessionStore:
    return InMemorySessionStore()


@pytest.fixture()
def rest_calls() -> list[httpx.Request]:
    """Requests seen by the mocked platform REST API."""

    return []


@pytest.fixture()
def notifier(rest_calls: list[httpx.Request]) -> DiscordNotifier:
    def _handler(request: httpx.Request) -> httpx.Response:
        rest_calls.append(request)
        return httpx.Response(204)

    client = httpx.AsyncClient(transport=httpx.MockTransport(_handler))
    return DiscordNotifier(bot_token=BOT_TOKEN, max_attempts=1, backoff_seconds=0, client=client)


@pytest.fixture()
def client(settings: Settings, store: InMemorySessionStore, notifier: DiscordNotifier) -> Generator[TestClient, None, None]:
    reset_runtime_for_tests()
    init_runtime(settings=settings, store=store, notifier=notifier)

    from app.main import app

    with TestClient(app) as c:
        yield c
    reset_runtime_for_tests()


@pytest.fixture()
def post_interaction(client: TestClient, signing_key: SigningKey) -> Callable[[dict[str, Any]], httpx.Response]:
    """POST a correctly signed interaction payload."""

    def _post(payload: dict[str, Any]) -> httpx.Response:
        body = json.dumps(payload).encode("utf-8")
        timestamp = "1700000000"
        signature = signing_key.sign(timestamp.encode("utf-8") + body).signature.hex()
        return client.post(
            "/interactions",
            content=body,
            headers={
                "Content-Type": "application/json",
                "X-Signature-Ed25519": signature,
                "X-Signature-Timestamp": timestamp,
            },
        )

    return _post
