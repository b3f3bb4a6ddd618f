from __future__ import annotations

import logging
import time
from collections.abc import Callable, Mapping

from app.api.models import Interaction, InteractionResponse, InteractionType
from app.commands.base import (
    CommandContext,
    CommandHandler,
    ComponentHandler,
    DispatchResult,
    UnknownCommandError,
    UnknownInteractionTypeError,
)
from app.commands.calculator import handle_math
from app.commands.converters import handle_binary, handle_fibonacci, handle_hex, handle_sort
from app.commands.game import handle_accept, handle_challenge, handle_choice
from app.commands.utilities import handle_flip, handle_ping, handle_roll, handle_test, handle_uptime
from app.custom_ids import ComponentAction, CustomId, InvalidCustomIdError
from app.session_store import SessionStore

logger = logging.getLogger(__name__)


DEFAULT_COMMAND_HANDLERS: dict[str, CommandHandler] = {
    "test": handle_test,
    "challenge": handle_challenge,
    "flip": handle_flip,
    "roll": handle_roll,
    "uptime": handle_uptime,
    "ping": handle_ping,
    "math": handle_math,
    "binary": handle_binary,
    "hex": handle_hex,
    "sort": handle_sort,
    "fibonacci": handle_fibonacci,
}

DEFAULT_COMPONENT_HANDLERS: dict[ComponentAction, ComponentHandler] = {
    ComponentAction.accept: handle_accept,
    ComponentAction.choice: handle_choice,
}


class InteractionDispatcher:
    """Routes a verified interaction to its handler.

    Contract:
      - PING -> PONG, no side effects.
      - APPLICATION_COMMAND -> exact-name lookup; unknown names raise UnknownCommandError.
      - MESSAGE_COMPONENT -> custom_id decoded once into a CustomId, then routed by action.
      - anything else raises UnknownInteractionTypeError.

    Follow-ups in the result are meant to run after the primary reply is sent.
    """

    def __init__(
        self,
        *,
        store: SessionStore,
        started_at: float | None = None,
        application_id: str | None = None,
        clock: Callable[[], float] = time.monotonic,
        command_handlers: Mapping[str, CommandHandler] | None = None,
        component_handlers: Mapping[ComponentAction, ComponentHandler] | None = None,
    ) -> None:
        self.store = store
        self.clock = clock
        self.started_at = clock() if started_at is None else started_at
        self.application_id = application_id
        self._commands = dict(command_handlers or DEFAULT_COMMAND_HANDLERS)
        self._components = dict(component_handlers or DEFAULT_COMPONENT_HANDLERS)

    @property
    def command_names(self) -> list[str]:
        return sorted(self._commands)

    def _context(self, received_at: float | None) -> CommandContext:
        return CommandContext(
            store=self.store,
            started_at=self.started_at,
            received_at=self.clock() if received_at is None else received_at,
            application_id=self.application_id,
            clock=self.clock,
        )

    def dispatch(self, interaction: Interaction, *, received_at: float | None = None) -> DispatchResult:
        ctx = self._context(received_at)

        if interaction.type == InteractionType.ping:
            return DispatchResult(response=InteractionResponse.pong())

        if interaction.type == InteractionType.application_command:
            name = interaction.data.name if interaction.data else None
            handler = self._commands.get(name or "")
            if handler is None:
                logger.error("unknown command: %s", name)
                raise UnknownCommandError(name)
            logger.debug("Dispatching command %s (interaction %s)", name, interaction.id)
            return DispatchResult(response=handler(interaction, ctx))

        if interaction.type == InteractionType.message_component:
            raw = interaction.data.custom_id if interaction.data else None
            try:
                custom_id = CustomId.decode(raw)
            except InvalidCustomIdError as e:
                logger.warning("Ignoring component interaction %s: %s", interaction.id, e)
                return DispatchResult(response=None)
            logger.debug("Dispatching component %s for session %s", custom_id.action.value, custom_id.session_id)
            component_handler = self._components.get(custom_id.action)
            if component_handler is None:
                logger.warning("No handler for component action %s", custom_id.action.value)
                return DispatchResult(response=None)
            return component_handler(interaction, custom_id.session_id, ctx)

        logger.error("unknown interaction type: %s", interaction.type)
        raise UnknownInteractionTypeError(interaction.type)
