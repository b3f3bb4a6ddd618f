from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Protocol

import redis

from app.api.models import Session
from app.game.rules import Choice

logger = logging.getLogger(__name__)

SESSION_KEY_PREFIX = "interaction-bot:session:"  # + {session_id}


class SessionExistsError(ValueError):
    pass


def _now() -> datetime:
    return datetime.now(tz=UTC)


def _session_key(session_id: str) -> str:
    return f"{SESSION_KEY_PREFIX}{session_id}"


class SessionStore(Protocol):
    """Pending-challenge state keyed by session id.

    Implementations give no guarantee under concurrent access to the same id:
    two racing `get` calls can both see a live session.
    """

    def create(self, *, session_id: str, challenger_id: str, choice: Choice) -> Session:  # pragma: no cover
        ...

    def get(self, session_id: str) -> Session | None:  # pragma: no cover
        ...

    def save(self, session: Session) -> None:  # pragma: no cover
        ...

    def delete(self, session_id: str) -> None:  # pragma: no cover
        ...


class InMemorySessionStore:
    """Process-local store. Everything is lost on restart.

    With `ttl_seconds` set, expired sessions are evicted lazily on `get`.
    """

    def __init__(self, *, ttl_seconds: int | None = None, clock: Callable[[], datetime] = _now) -> None:
        self._sessions: dict[str, Session] = {}
        self._ttl = timedelta(seconds=ttl_seconds) if ttl_seconds else None
        self._clock = clock

    def __len__(self) -> int:
        return len(self._sessions)

    def _expired(self, session: Session) -> bool:
        return self._ttl is not None and self._clock() - session.created_at >= self._ttl

    def create(self, *, session_id: str, challenger_id: str, choice: Choice) -> Session:
        existing = self.get(session_id)
        if existing is not None:
            raise SessionExistsError(f"Session already exists: {session_id}")
        session = Session(
            session_id=session_id,
            challenger_id=challenger_id,
            challenger_choice=choice,
            created_at=self._clock(),
        )
        self._sessions[session_id] = session
        return session

    def get(self, session_id: str) -> Session | None:
        session = self._sessions.get(session_id)
        if session is None:
            return None
        if self._expired(session):
            logger.info("Evicting expired session %s", session_id)
            self._sessions.pop(session_id, None)
            return None
        return session

    def save(self, session: Session) -> None:
        self._sessions[session.session_id] = session

    def delete(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)


class RedisSessionStore:
    """Redis-backed store; sessions survive restarts and are shared across workers."""

    def __init__(self, *, r: redis.Redis, ttl_seconds: int | None = None) -> None:
        self._r = r
        self._ttl = ttl_seconds or None

    def create(self, *, session_id: str, challenger_id: str, choice: Choice) -> Session:
        session = Session(
            session_id=session_id,
            challenger_id=challenger_id,
            challenger_choice=choice,
            created_at=_now(),
        )
        # NX: never clobber an open session with the same id.
        created = self._r.set(_session_key(session_id), session.model_dump_json(), nx=True, ex=self._ttl)
        if not created:
            raise SessionExistsError(f"Session already exists: {session_id}")
        return session

    def get(self, session_id: str) -> Session | None:
        raw = self._r.get(_session_key(session_id))
        if not raw:
            return None
        return Session.model_validate_json(raw)

    def save(self, session: Session) -> None:
        self._r.set(_session_key(session.session_id), session.model_dump_json(), xx=True, keepttl=True)

    def delete(self, session_id: str) -> None:
        self._r.delete(_session_key(session_id))
