"""
Team chat routes. Every route requires a signed-in member of the team.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, Response, status

from core.rate_limit import MESSAGE_RATE_LIMIT, limiter
from core.security import get_current_user
from db.models import User
from schemas.message import (
    ChannelListResp,
    ChannelReadResp,
    ChatMessageResp,
    MessageCreateReq,
    MessageDirection,
    MessageListResp,
    MessageUpdateReq,
    PinMessageReq,
    UnreadResp,
)
from services.message_service import MessageService
from utils.constants import CHANNEL_GENERAL

router = APIRouter(prefix="/teams/{team_id}", tags=["Team chat"])


@router.get('/channels', response_model=ChannelListResp, summary="Channels with counts and write access")
async def list_channels(team_id: int, user: User = Depends(get_current_user)) -> ChannelListResp:
    return await MessageService.list_channels(team_id, user)


@router.post('/channels/{channel}/read', response_model=ChannelReadResp, summary="Mark a channel read")
async def mark_channel_read(team_id: int, channel: str, user: User = Depends(get_current_user)) -> ChannelReadResp:
    return await MessageService.mark_read(team_id, channel, user)


@router.get('/unread', response_model=UnreadResp, summary="Unread counts per channel")
async def unread_counts(team_id: int, user: User = Depends(get_current_user)) -> UnreadResp:
    return await MessageService.unread_counts(team_id, user)


@router.get(
    '/messages',
    response_model=MessageListResp,
    summary="Channel messages",
    description="Newest first. Pass cursor with direction=older to page back, direction=newer to page forward.",
)
async def list_messages(
    team_id: int,
    channel: str = Query(CHANNEL_GENERAL),
    cursor: Optional[int] = Query(None),
    limit: Optional[int] = Query(None),
    direction: MessageDirection = Query('older'),
    pinned_only: bool = Query(False, alias="pinnedOnly"),
    user: User = Depends(get_current_user),
) -> MessageListResp:
    return await MessageService.list_messages(team_id, user, channel, cursor, limit, direction, pinned_only)


@router.post('/messages', response_model=ChatMessageResp, status_code=status.HTTP_201_CREATED)
@limiter.limit(MESSAGE_RATE_LIMIT)
async def create_message(
    request: Request,
    team_id: int,
    req: MessageCreateReq,
    user: User = Depends(get_current_user),
) -> ChatMessageResp:
    return await MessageService.create_message(team_id, user, req)


@router.get('/messages/{message_id}', response_model=ChatMessageResp)
async def get_message(team_id: int, message_id: int, user: User = Depends(get_current_user)) -> ChatMessageResp:
    return await MessageService.get_message(team_id, message_id, user)


@router.patch('/messages/{message_id}', response_model=ChatMessageResp)
async def edit_message(
    team_id: int,
    message_id: int,
    req: MessageUpdateReq,
    user: User = Depends(get_current_user),
) -> ChatMessageResp:
    return await MessageService.edit_message(team_id, message_id, user, req)


@router.delete('/messages/{message_id}', status_code=status.HTTP_204_NO_CONTENT)
async def delete_message(team_id: int, message_id: int, user: User = Depends(get_current_user)) -> Response:
    await MessageService.delete_message(team_id, message_id, user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch('/messages/{message_id}/pin', response_model=ChatMessageResp)
async def pin_message(
    team_id: int,
    message_id: int,
    req: PinMessageReq,
    user: User = Depends(get_current_user),
) -> ChatMessageResp:
    return await MessageService.pin_message(team_id, message_id, user, req.is_pinned)
