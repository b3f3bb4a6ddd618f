from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Literal

from app.api.models import Interaction, InteractionResponse
from app.session_store import SessionStore

FollowupKind = Literal["delete_message", "edit_message"]


class InteractionError(ValueError):
    """Protocol-level failure; surfaced to the caller as a 400."""


class UnknownCommandError(InteractionError):
    def __init__(self, name: str | None) -> None:
        super().__init__("unknown command")
        self.name = name


class UnknownInteractionTypeError(InteractionError):
    def __init__(self, interaction_type: int) -> None:
        super().__init__("unknown interaction type")
        self.interaction_type = interaction_type


class InvalidCommandOptionsError(InteractionError):
    pass


@dataclass(frozen=True, slots=True)
class Followup:
    """A best-effort REST call to run after the primary reply has been sent."""

    kind: FollowupKind
    application_id: str
    token: str
    message_id: str
    body: dict[str, Any] | None = None


@dataclass(frozen=True, slots=True)
class DispatchResult:
    # None => nothing to send back (e.g. a choice for an already resolved game).
    response: InteractionResponse | None
    followups: list[Followup] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class CommandContext:
    store: SessionStore
    started_at: float
    received_at: float
    application_id: str | None = None
    clock: Callable[[], float] = time.monotonic


CommandHandler = Callable[[Interaction, CommandContext], InteractionResponse]
ComponentHandler = Callable[[Interaction, str, CommandContext], DispatchResult]
