from __future__ import annotations

from datetime import datetime
from enum import IntEnum, StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from app.game.rules import Choice


class InteractionType(IntEnum):
    ping = 1
    application_command = 2
    message_component = 3


class InteractionResponseType(IntEnum):
    pong = 1
    channel_message_with_source = 4


class InteractionContextType(IntEnum):
    guild = 0
    bot_dm = 1
    private_channel = 2


class MessageFlags(IntEnum):
    ephemeral = 1 << 6


class ComponentType(IntEnum):
    action_row = 1
    button = 2
    string_select = 3


class ButtonStyle(IntEnum):
    primary = 1


class _Inbound(BaseModel):
    # Platform payloads carry many more fields than we use.
    model_config = ConfigDict(extra="ignore")


class User(_Inbound):
    id: str
    username: str | None = None


class Member(_Inbound):
    user: User | None = None


class CommandOption(_Inbound):
    name: str
    type: int | None = None
    value: Any = None


class Message(_Inbound):
    id: str


class InteractionData(_Inbound):
    name: str | None = None
    options: list[CommandOption] = Field(default_factory=list)
    custom_id: str | None = None
    component_type: int | None = None
    values: list[str] = Field(default_factory=list)

    def option(self, name: str) -> Any:
        opt = next((o for o in self.options if o.name == name), None)
        return opt.value if opt is not None else None


class Interaction(_Inbound):
    id: str
    type: int
    application_id: str | None = None
    token: str | None = None
    context: int | None = None
    data: InteractionData | None = None
    member: Member | None = None
    user: User | None = None
    message: Message | None = None

    @property
    def user_id(self) -> str | None:
        """Invoking user: `member.user` in guilds, `user` in (group) DMs."""

        member_user = self.member.user if self.member is not None else None
        if self.context == InteractionContextType.guild:
            primary, fallback = member_user, self.user
        else:
            primary, fallback = self.user, member_user
        found = primary or fallback
        return found.id if found is not None else None


class InteractionCallbackData(BaseModel):
    content: str | None = None
    components: list[dict[str, Any]] | None = None
    flags: int | None = None


class InteractionResponse(BaseModel):
    type: InteractionResponseType
    data: InteractionCallbackData | None = None

    @staticmethod
    def pong() -> "InteractionResponse":
        return InteractionResponse(type=InteractionResponseType.pong)

    @staticmethod
    def message(
        content: str,
        *,
        components: list[dict[str, Any]] | None = None,
        ephemeral: bool = False,
    ) -> "InteractionResponse":
        return InteractionResponse(
            type=InteractionResponseType.channel_message_with_source,
            data=InteractionCallbackData(
                content=content,
                components=components,
                flags=MessageFlags.ephemeral.value if ephemeral else None,
            ),
        )

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


class ErrorResponse(BaseModel):
    error: str


class SessionPhase(StrEnum):
    challenged = "challenged"
    accepted = "accepted"
    resolved = "resolved"


class Session(BaseModel):
    """A pending two-player challenge awaiting the second participant's choice."""

    session_id: str
    challenger_id: str
    challenger_choice: Choice
    phase: SessionPhase = SessionPhase.challenged
    created_at: datetime
