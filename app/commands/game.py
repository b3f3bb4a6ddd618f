from __future__ import annotations

import logging
from typing import Any

from app.api.models import ButtonStyle, ComponentType, Interaction, InteractionResponse
from app.commands.base import (
    CommandContext,
    DispatchResult,
    Followup,
    FollowupKind,
    InteractionError,
    InvalidCommandOptionsError,
)
from app.commands.utilities import random_emoji
from app.custom_ids import ComponentAction, CustomId
from app.game.fsm import SessionFSM
from app.game.rules import Player, parse_choice, resolve, shuffled_options
from app.session_store import SessionExistsError

logger = logging.getLogger(__name__)


def _require_user_id(interaction: Interaction) -> str:
    user_id = interaction.user_id
    if not user_id:
        raise InvalidCommandOptionsError("Interaction has no invoking user")
    return user_id


def _message_followup(interaction: Interaction, ctx: CommandContext, *, kind: FollowupKind, body: dict[str, Any] | None = None) -> list[Followup]:
    application_id = ctx.application_id or interaction.application_id
    message_id = interaction.message.id if interaction.message is not None else None
    if not (application_id and interaction.token and message_id):
        logger.warning("Skipping %s for interaction %s: missing application id, token or message id", kind, interaction.id)
        return []
    return [
        Followup(
            kind=kind,
            application_id=application_id,
            token=interaction.token,
            message_id=message_id,
            body=body,
        )
    ]


def accept_button(session_id: str) -> dict[str, Any]:
    return {
        "type": ComponentType.action_row.value,
        "components": [
            {
                "type": ComponentType.button.value,
                "custom_id": CustomId(action=ComponentAction.accept, session_id=session_id).encode(),
                "label": "Accept",
                "style": ButtonStyle.primary.value,
            }
        ],
    }


def choice_select(session_id: str) -> dict[str, Any]:
    return {
        "type": ComponentType.action_row.value,
        "components": [
            {
                "type": ComponentType.string_select.value,
                "custom_id": CustomId(action=ComponentAction.choice, session_id=session_id).encode(),
                "options": shuffled_options(),
            }
        ],
    }


def handle_challenge(interaction: Interaction, ctx: CommandContext) -> InteractionResponse:
    """Open a session keyed by the interaction id and post an Accept button."""

    user_id = _require_user_id(interaction)
    raw_choice = interaction.data.option("object") if interaction.data else None
    if raw_choice is None:
        raise InvalidCommandOptionsError("challenge requires an 'object' option")
    try:
        choice = parse_choice(str(raw_choice))
    except ValueError as e:
        raise InvalidCommandOptionsError(str(e)) from e

    try:
        ctx.store.create(session_id=interaction.id, challenger_id=user_id, choice=choice)
    except SessionExistsError as e:
        raise InteractionError(str(e)) from e

    logger.info("Session %s opened by %s", interaction.id, user_id)
    return InteractionResponse.message(
        f"Rock papers scissors challenge from <@{user_id}>",
        components=[accept_button(interaction.id)],
    )


def handle_accept(interaction: Interaction, session_id: str, ctx: CommandContext) -> DispatchResult:
    """Send the accepting user a private choice prompt, then remove the challenge message."""

    session = ctx.store.get(session_id)
    if session is not None:
        fsm = SessionFSM(session)
        if fsm.current_state == fsm.challenged:
            fsm.accept()
            fsm.sync_phase_to_model()
            ctx.store.save(session)
    else:
        # Still prompt; the choice step reports nothing for a dead session.
        logger.info("Accept for unknown session %s", session_id)

    response = InteractionResponse.message(
        "What is your object of choice?",
        components=[choice_select(session_id)],
        ephemeral=True,
    )
    return DispatchResult(response=response, followups=_message_followup(interaction, ctx, kind="delete_message"))


def handle_choice(interaction: Interaction, session_id: str, ctx: CommandContext) -> DispatchResult:
    """Resolve the game. A missing session (already resolved, invalid) yields no reply."""

    session = ctx.store.get(session_id)
    if session is None:
        logger.info("Choice for unknown or resolved session %s; ignoring", session_id)
        return DispatchResult(response=None)

    user_id = _require_user_id(interaction)
    values = interaction.data.values if interaction.data else []
    if not values:
        raise InvalidCommandOptionsError("choice submission has no selected value")
    try:
        choice = parse_choice(values[0])
    except ValueError as e:
        raise InvalidCommandOptionsError(str(e)) from e

    result = resolve(
        Player(id=session.challenger_id, choice=session.challenger_choice),
        Player(id=user_id, choice=choice),
    )

    fsm = SessionFSM(session)
    fsm.finish()
    fsm.sync_phase_to_model()
    ctx.store.delete(session_id)
    logger.info("Session %s resolved", session_id)

    followups = _message_followup(
        interaction,
        ctx,
        kind="edit_message",
        body={"content": f"Nice choice {random_emoji()}", "components": []},
    )
    return DispatchResult(response=InteractionResponse.message(result), followups=followups)
