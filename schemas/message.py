from datetime import datetime
from typing import Dict, List, Literal, Optional

from pydantic import Field, field_validator

from utils.constants import CHANNEL_GENERAL, CHANNEL_TYPES, MESSAGE_MAX_LENGTH
from utils.sanitize import sanitize_message_content
from .common import BaseRequest, BaseResponse, CamelModel
from .user import AuthorOut


def _valid_channel(v: Optional[str]) -> Optional[str]:
    if v is not None and v not in CHANNEL_TYPES:
        raise ValueError(f"Channel must be one of: {', '.join(CHANNEL_TYPES)}")
    return v


def _clean_content(v: str) -> str:
    if len(v) > MESSAGE_MAX_LENGTH:
        raise ValueError(f"Message cannot exceed {MESSAGE_MAX_LENGTH} characters")
    v = sanitize_message_content(v)
    if not v:
        raise ValueError("Message content is required")
    return v

# ------------------------------- Team Chat Models ------------------------------- #

#                          ------- Incoming -------                           #

class MessageCreateReq(BaseRequest):
    content: str
    channel: str = CHANNEL_GENERAL
    reply_to_id: Optional[int] = None

    @field_validator("content")
    @classmethod
    def sanitized_content(cls, v):
        return _clean_content(v)

    @field_validator("channel")
    @classmethod
    def known_channel(cls, v):
        return _valid_channel(v)


class MessageUpdateReq(BaseRequest):
    content: str

    @field_validator("content")
    @classmethod
    def sanitized_content(cls, v):
        return _clean_content(v)


class PinMessageReq(BaseRequest):
    is_pinned: bool

#                          ------- Outgoing -------                           #

class ReplyPreviewOut(CamelModel):
    id: int
    content: str
    author: AuthorOut


class MessageOut(CamelModel):
    id: int
    team_id: int
    channel: str
    author_id: int
    content: str
    reply_to_id: Optional[int] = None
    is_pinned: bool
    pinned_at: Optional[datetime] = None
    is_edited: bool
    edited_at: Optional[datetime] = None
    is_deleted: bool
    deleted_at: Optional[datetime] = None
    created_at: datetime
    author: AuthorOut
    reply_to: Optional[ReplyPreviewOut] = None


class CursorOut(CamelModel):
    next: Optional[int] = None
    previous: Optional[int] = None


class MessageListOut(CamelModel):
    messages: List[MessageOut] = Field(default_factory=list)
    cursor: CursorOut
    has_more: bool
    total_pinned: int
    channel: str


class ChannelOut(CamelModel):
    id: str
    name: str
    description: str
    icon: str
    sort_order: int
    can_write: bool
    message_count: int
    last_message_at: Optional[datetime] = None
    pinned_count: int
    unread_count: int


class UnreadOut(CamelModel):
    team_id: int
    channels: Dict[str, int]
    total: int


class ChannelReadOut(CamelModel):
    team_id: int
    channel: str
    last_read_at: datetime


class ChatMessageResp(BaseResponse):
    data: MessageOut


class MessageListResp(BaseResponse):
    data: MessageListOut


class ChannelListResp(BaseResponse):
    data: List[ChannelOut] = Field(default_factory=list)


class UnreadResp(BaseResponse):
    data: UnreadOut


class ChannelReadResp(BaseResponse):
    data: ChannelReadOut


MessageDirection = Literal["older", "newer"]
