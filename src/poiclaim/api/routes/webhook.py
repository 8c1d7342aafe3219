"""
CFTools Hephaistos webhook endpoint.

Receives in-game chat events, runs them through the command interpreter
and queues the response for delivery back to the game chat.
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Header, HTTPException, Request, Response, status
from pydantic import BaseModel, Field, ValidationError

from poiclaim.api.deps import Channel, Interpreter, verify_webhook
from poiclaim.gameserver import deliver

logger = logging.getLogger(__name__)

router = APIRouter(tags=["webhook"])

CHAT_EVENT = "user.chat"


class ChatEvent(BaseModel):
    """A chat line forwarded by CFTools."""

    player_name: str = Field(..., min_length=1, description="In-game player name")
    message: str = Field(..., description="Raw chat message")


@router.post(
    "/webhook",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(verify_webhook)],
)
async def receive_webhook(
    request: Request,
    background_tasks: BackgroundTasks,
    interpreter: Interpreter,
    channel: Channel,
    x_hephaistos_event: Annotated[Optional[str], Header()] = None,
) -> Response:
    """
    Handle one webhook delivery.

    Non-chat events are acknowledged and ignored. The chat response is sent
    after the HTTP response so a slow game server never delays the webhook.
    """
    if x_hephaistos_event != CHAT_EVENT:
        logger.debug(f"Ignoring webhook event: {x_hephaistos_event}")
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    try:
        event = ChatEvent.model_validate(await request.json())
    except (ValidationError, ValueError) as e:
        logger.warning(f"Malformed chat event: {e}")
        raise HTTPException(
            status_code=422,
            detail="Invalid chat event payload",
        )

    reply = await interpreter.handle(event.player_name, event.message)
    if reply:
        background_tasks.add_task(deliver, channel, reply)

    return Response(status_code=status.HTTP_204_NO_CONTENT)
