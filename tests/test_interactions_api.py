from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import httpx
from fastapi.testclient import TestClient

from app.session_store import InMemorySessionStore

PostInteraction = Callable[[dict[str, Any]], httpx.Response]


def _command(name: str, options: dict[str, Any] | None = None, *, interaction_id: str = "i-1", user_id: str = "alice") -> dict[str, Any]:
    return {
        "id": interaction_id,
        "type": 2,
        "application_id": "app-123",
        "token": "cmd-token",
        "context": 0,
        "member": {"user": {"id": user_id, "username": user_id}},
        "data": {"id": "cmd", "name": name, "type": 1, "options": [{"name": k, "type": 3, "value": v} for k, v in (options or {}).items()]},
    }


def _component(custom_id: str, *, values: list[str] | None = None, user_id: str = "bob", message_id: str = "m-1") -> dict[str, Any]:
    return {
        "id": "c-1",
        "type": 3,
        "application_id": "app-123",
        "token": "component-token",
        "context": 0,
        "member": {"user": {"id": user_id}},
        "message": {"id": message_id, "content": "whatever"},
        "data": {"custom_id": custom_id, "component_type": 3 if values else 2, "values": values or []},
    }


def test_healthcheck_and_info(client: TestClient) -> None:
    assert client.get("/healthcheck").json() == {"status": "ok"}
    assert client.get("/info").json()["name"] == "interaction-bot"


def test_unsigned_request_is_rejected(client: TestClient) -> None:
    resp = client.post("/interactions", json={"id": "p", "type": 1})
    assert resp.status_code == 401


def test_tampered_body_is_rejected(client: TestClient, post_interaction: PostInteraction) -> None:
    good = post_interaction({"id": "p", "type": 1})
    assert good.status_code == 200

    resp = client.post(
        "/interactions",
        content=json.dumps({"id": "p", "type": 1}).encode(),
        headers={"X-Signature-Ed25519": "00" * 64, "X-Signature-Timestamp": "1700000000"},
    )
    assert resp.status_code == 401


def test_ping_returns_pong(post_interaction: PostInteraction) -> None:
    resp = post_interaction({"id": "p", "type": 1})
    assert resp.status_code == 200
    assert resp.json() == {"type": 1}


def test_unknown_command_is_400(post_interaction: PostInteraction) -> None:
    resp = post_interaction(_command("nope"))
    assert resp.status_code == 400
    assert resp.json() == {"error": "unknown command"}


def test_unknown_interaction_type_is_400(post_interaction: PostInteraction) -> None:
    resp = post_interaction({"id": "x", "type": 42})
    assert resp.status_code == 400
    assert resp.json() == {"error": "unknown interaction type"}


def test_malformed_interaction_is_400(post_interaction: PostInteraction) -> None:
    resp = post_interaction({"type": "not-a-number"})
    assert resp.status_code == 400


def test_utility_command_reply(post_interaction: PostInteraction) -> None:
    resp = post_interaction(_command("math", {"expression": "5 + 2 * 3"}))
    assert resp.status_code == 200
    assert resp.json() == {"type": 4, "data": {"content": "🧮 Result: 5 + 2 * 3 = **11**"}}


def test_game_over_http_runs_followups_after_reply(
    post_interaction: PostInteraction,
    store: InMemorySessionStore,
    rest_calls: list[httpx.Request],
) -> None:
    resp = post_interaction(_command("challenge", {"object": "paper"}, interaction_id="game-9"))
    assert resp.status_code == 200
    assert store.get("game-9") is not None
    assert rest_calls == []

    resp = post_interaction(_component("accept:game-9", message_id="challenge-msg"))
    assert resp.status_code == 200
    body = resp.json()
    assert body["data"]["flags"] == 64
    assert body["data"]["components"][0]["components"][0]["custom_id"] == "choice:game-9"

    assert len(rest_calls) == 1
    assert rest_calls[0].method == "DELETE"
    assert rest_calls[0].url.path.endswith("/webhooks/app-123/component-token/messages/challenge-msg")

    resp = post_interaction(_component("choice:game-9", values=["rock"], message_id="prompt-msg"))
    assert resp.status_code == 200
    assert resp.json()["data"]["content"] == "<@alice>'s **paper** covers <@bob>'s **rock**"
    assert store.get("game-9") is None

    assert len(rest_calls) == 2
    assert rest_calls[1].method == "PATCH"
    patched = json.loads(rest_calls[1].content)
    assert patched["components"] == []
    assert patched["content"].startswith("Nice choice")


def test_choice_for_resolved_game_gets_no_reply(post_interaction: PostInteraction, rest_calls: list[httpx.Request]) -> None:
    resp = post_interaction(_component("choice:never-created", values=["rock"]))
    assert resp.status_code == 204
    assert rest_calls == []


def test_followup_failure_does_not_affect_reply(
    client: TestClient,
    post_interaction: PostInteraction,
    notifier: Any,
) -> None:
    async def _boom(*args: Any, **kwargs: Any) -> None:
        raise RuntimeError("platform down")

    notifier.delete_message = _boom

    post_interaction(_command("challenge", {"object": "rock"}, interaction_id="g-2"))
    resp = post_interaction(_component("accept:g-2"))
    assert resp.status_code == 200
    assert resp.json()["data"]["content"] == "What is your object of choice?"
