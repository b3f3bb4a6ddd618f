from __future__ import annotations

import time

from fastapi import Depends, HTTPException, Request, status
from pydantic import ValidationError

from app.api.models import Interaction
from app.config import Settings
from app.dispatcher import InteractionDispatcher
from app.notifier import DiscordNotifier
from app.runtime import get_runtime
from app.security import SIGNATURE_HEADER, TIMESTAMP_HEADER, SignatureError, verify_signature


def get_settings() -> Settings:
    return get_runtime().settings


def get_dispatcher() -> InteractionDispatcher:
    return get_runtime().dispatcher


def get_notifier() -> DiscordNotifier:
    return get_runtime().notifier


async def verified_interaction(request: Request, settings: Settings = Depends(get_settings)) -> Interaction:
    """Verify the request signature over the raw body, then parse the interaction."""

    request.state.received_at = time.monotonic()
    body = await request.body()

    try:
        verify_signature(
            public_key=settings.public_key or "",
            signature=request.headers.get(SIGNATURE_HEADER),
            timestamp=request.headers.get(TIMESTAMP_HEADER),
            body=body,
        )
    except SignatureError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="invalid request signature") from e

    try:
        return Interaction.model_validate_json(body)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="malformed interaction") from e
