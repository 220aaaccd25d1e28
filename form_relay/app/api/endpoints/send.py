"""
Relay endpoint.

``POST /api/send`` receives the contact form, validates it and
forwards a notification to Telegram.  Errors are returned as
``{"error": "..."}`` bodies: 400 for invalid submissions and 500 when
the Bot API call fails.  Upstream details are logged, never returned.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, Request, status
from fastapi.responses import JSONResponse

from form_relay.app.schemas.submission import ErrorResponse, SendResult
from form_relay.app.services.relay_service import (
    RELAY_FAILED_MESSAGE,
    RelayService,
    SubmissionInvalid,
)
from form_relay.app.services.telegram_client import RelayFailed, TelegramClient


logger = logging.getLogger(__name__)

router = APIRouter()


def get_relay_service(request: Request) -> RelayService:
    """Build a relay service from the application's settings."""
    settings = request.app.state.settings
    client = TelegramClient(
        settings.bot_token,
        api_url=settings.telegram_api_url,
        timeout=settings.relay_timeout,
    )
    return RelayService(client, chat_id=settings.chat_id)


@router.post(
    "/send",
    response_model=SendResult,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    },
    summary="Relay a contact form submission to Telegram",
)
async def send(
    body: Dict[str, Any] = Body(...),
    relay: RelayService = Depends(get_relay_service),
):
    """Validate the submission and forward it to the configured chat.

    The body must contain a non-empty ``name``, a non-empty ``contact``
    and a non-empty ``services`` list.  Exactly one Bot API call is
    made per valid submission.
    """
    try:
        submission = RelayService.parse_submission(body)
    except SubmissionInvalid as e:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": str(e)})

    try:
        await relay.relay(submission)
    except RelayFailed as e:
        logger.error("Telegram relay failed: %s", e)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": RELAY_FAILED_MESSAGE},
        )
    return SendResult(success=True)
