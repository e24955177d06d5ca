"""
Message API routes.

Route prefix: /api/messages — every route requires a Bearer token.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Request, Response, status

from auth.dependencies import CurrentUser, get_message_repository, require_user
from auth.errors import MissingField, NotFound
from database.messages import MessageRepository
from utils.schemas import MessageCreateRequest, MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["messages"], dependencies=[Depends(require_user)])


@router.get("", response_model=List[MessageResponse])
async def list_messages(
    messages: MessageRepository = Depends(get_message_repository),
) -> List[MessageResponse]:
    rows = await messages.list_all()
    return [MessageResponse.model_validate(row) for row in rows]


@router.post("", status_code=status.HTTP_201_CREATED, response_model=MessageResponse)
async def create_message(
    request: Request,
    response: Response,
    req: Optional[MessageCreateRequest] = None,
    current_user: CurrentUser = Depends(require_user),
    messages: MessageRepository = Depends(get_message_repository),
) -> MessageResponse:
    """Post a message as the authenticated user."""
    if req is None:
        req = MessageCreateRequest()
    if req.content is None:
        raise MissingField("content")

    message = await messages.insert(
        {
            "content": req.content,
            "conversation_id": req.conversation_id,
            "user_id": current_user.id,
        }
    )
    logger.info("User %s posted message %s", current_user.id, message.id)
    response.headers["Location"] = f"{request.url.path.rstrip('/')}/{message.id}"
    return MessageResponse.model_validate(message)


@router.get("/{message_id}", response_model=MessageResponse)
async def get_message(
    message_id: int,
    messages: MessageRepository = Depends(get_message_repository),
) -> MessageResponse:
    message = await messages.find_by_id(message_id)
    if message is None:
        raise NotFound("Message doesn't exist")
    return MessageResponse.model_validate(message)
