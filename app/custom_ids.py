from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

SEPARATOR = ":"
# Platform limit on component custom_id length.
MAX_CUSTOM_ID_LENGTH = 100


class ComponentAction(StrEnum):
    accept = "accept"
    choice = "choice"


class InvalidCustomIdError(ValueError):
    pass


@dataclass(frozen=True, slots=True)
class CustomId:
    """Correlation token carried in a component's custom_id.

    Serialized as `<action>:<session_id>`; decoded once when a component
    interaction arrives.
    """

    action: ComponentAction
    session_id: str

    def encode(self) -> str:
        value = f"{self.action.value}{SEPARATOR}{self.session_id}"
        if len(value) > MAX_CUSTOM_ID_LENGTH:
            raise InvalidCustomIdError(f"custom_id exceeds {MAX_CUSTOM_ID_LENGTH} characters")
        return value

    @staticmethod
    def decode(raw: str | None) -> "CustomId":
        action, sep, session_id = (raw or "").partition(SEPARATOR)
        if not sep or not session_id:
            raise InvalidCustomIdError(f"Malformed custom_id: {raw!r}")
        try:
            return CustomId(action=ComponentAction(action), session_id=session_id)
        except ValueError as e:
            raise InvalidCustomIdError(f"Unknown component action: {action!r}") from e
