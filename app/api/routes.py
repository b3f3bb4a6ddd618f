from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, BackgroundTasks, Depends, Request, Response, status
from fastapi.responses import JSONResponse

from app.api.deps import get_dispatcher, get_notifier, verified_interaction
from app.api.models import ErrorResponse, Interaction
from app.commands.base import InteractionError
from app.dispatcher import InteractionDispatcher
from app.notifier import DiscordNotifier, run_followups

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/healthcheck")
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.post(
    "/interactions",
    responses={status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}},
)
async def interactions_route(
    request: Request,
    background_tasks: BackgroundTasks,
    interaction: Interaction = Depends(verified_interaction),
    dispatcher: InteractionDispatcher = Depends(get_dispatcher),
    notifier: DiscordNotifier = Depends(get_notifier),
) -> Any:
    received_at = getattr(request.state, "received_at", None)
    logger.debug("Interaction %s (type %s) received", interaction.id, interaction.type)

    try:
        result = dispatcher.dispatch(interaction, received_at=received_at)
    except InteractionError as e:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=ErrorResponse(error=str(e)).model_dump())

    # Follow-ups run after the reply is on the wire and never affect it.
    if result.followups:
        background_tasks.add_task(run_followups, notifier, result.followups)

    if result.response is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return result.response.to_payload()
