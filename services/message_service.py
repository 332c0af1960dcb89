"""
Team chat: per-team channels with replies, pins, soft deletes and unread counts.

Messages are paged by id. Ids only ever grow, so "older" means a smaller id.
"""

from typing import Dict, List, Optional

from peewee import fn

from core.errors import BadRequestError, ForbiddenError, NotFoundError, ValidationFailedError
from core.logging import get_logger
from db.models import ChannelRead, Message, Team, User
from schemas.message import (
    ChannelListResp,
    ChannelOut,
    ChannelReadOut,
    ChannelReadResp,
    ChatMessageResp,
    CursorOut,
    MessageCreateReq,
    MessageDirection,
    MessageListOut,
    MessageListResp,
    MessageUpdateReq,
    UnreadOut,
    UnreadResp,
)
from services.channels import can_moderate, can_pin, can_post, can_view
from services.views import message_out
from utils.constants import CHANNEL_GENERAL, CHANNELS
from utils.dates import utcnow

log = get_logger("messages")

DEFAULT_MESSAGE_LIMIT = 50
MAX_MESSAGE_LIMIT = 100


def _team_for(team_id: int, user: User, action: str) -> Team:
    team = Team.get_or_none(Team.id == team_id)
    if team is None:
        raise NotFoundError("Team", team_id)
    if not can_view(user, team):
        raise ForbiddenError(f"You must be a member of this team to {action}")
    return team


def _message_for(team: Team, message_id: int) -> Message:
    message = Message.get_or_none(Message.id == message_id)
    # Messages from other teams are reported as missing
    if message is None or message.team_id != team.id or message.is_deleted:
        raise NotFoundError("Message", message_id)
    return message


def _check_channel(channel: str) -> str:
    if channel not in CHANNELS:
        raise ValidationFailedError({'channel': [f"Channel must be one of: {', '.join(CHANNELS)}"]})
    return channel


def _visible(team_id: int, channel: str):
    return Message.select().where(
        (Message.team == team_id) & (Message.channel == channel) & (Message.is_deleted == False)  # noqa: E712
    )


def _unread(team_id: int, channel: str, user: User):
    query = _visible(team_id, channel).where(Message.author != user.id)
    read = ChannelRead.get_or_none(
        (ChannelRead.user == user.id) & (ChannelRead.team == team_id) & (ChannelRead.channel == channel)
    )
    if read is not None:
        query = query.where(Message.created_at > read.last_read_at)
    return query


def clamp_limit(limit: Optional[int]) -> int:
    if not limit or limit < 1:
        return DEFAULT_MESSAGE_LIMIT
    return min(limit, MAX_MESSAGE_LIMIT)


class MessageService:

    @staticmethod
    async def list_messages(team_id: int, user: User, channel: str = CHANNEL_GENERAL, cursor: Optional[int] = None,
                            limit: Optional[int] = None, direction: MessageDirection = 'older',
                            pinned_only: bool = False) -> MessageListResp:
        team = _team_for(team_id, user, "view messages")
        channel = _check_channel(channel)
        limit = clamp_limit(limit)

        base = _visible(team.id, channel)
        if pinned_only:
            base = base.where(Message.is_pinned == True)  # noqa: E712

        if cursor is not None and direction == 'newer':
            page = list(base.where(Message.id > cursor).order_by(Message.id).limit(limit))
            page.reverse()
        else:
            query = base.where(Message.id < cursor) if cursor is not None else base
            page = list(query.order_by(Message.id.desc()).limit(limit))

        has_older = bool(page) and base.where(Message.id < page[-1].id).exists()
        has_newer = bool(page) and base.where(Message.id > page[0].id).exists()
        has_more = has_newer if direction == 'newer' and cursor is not None else has_older

        total_pinned = _visible(team.id, channel).where(Message.is_pinned == True).count()  # noqa: E712

        return MessageListResp(data=MessageListOut(
            messages=[message_out(m) for m in page],
            cursor=CursorOut(
                next=page[-1].id if has_older else None,
                previous=page[0].id if has_newer else None,
            ),
            has_more=has_more,
            total_pinned=total_pinned,
            channel=channel,
        ))

    @staticmethod
    async def get_message(team_id: int, message_id: int, user: User) -> ChatMessageResp:
        team = _team_for(team_id, user, "view messages")
        return ChatMessageResp(data=message_out(_message_for(team, message_id)))

    @staticmethod
    async def create_message(team_id: int, user: User, req: MessageCreateReq) -> ChatMessageResp:
        team = _team_for(team_id, user, "send messages")

        if not can_post(user, team, req.channel):
            raise ForbiddenError(f"Only team managers can post to the {CHANNELS[req.channel]['name']} channel")

        if req.reply_to_id is not None:
            parent = Message.get_or_none(Message.id == req.reply_to_id)
            if parent is None or parent.team_id != team.id:
                raise BadRequestError("Reply target must be a message in this team")

        message = Message.create(
            team=team.id,
            author=user.id,
            channel=req.channel,
            content=req.content,
            reply_to=req.reply_to_id,
        )
        log.info("message_created", message_id=message.id, team_id=team.id, channel=message.channel)
        return ChatMessageResp(data=message_out(message))

    @staticmethod
    async def edit_message(team_id: int, message_id: int, user: User, req: MessageUpdateReq) -> ChatMessageResp:
        team = _team_for(team_id, user, "edit messages")
        message = _message_for(team, message_id)
        if message.author_id != user.id:
            raise ForbiddenError("You can only edit your own messages")

        message.content = req.content
        message.is_edited = True
        message.edited_at = utcnow()
        message.save()

        log.info("message_edited", message_id=message.id, team_id=team.id)
        return ChatMessageResp(data=message_out(message))

    @staticmethod
    async def delete_message(team_id: int, message_id: int, user: User) -> None:
        team = _team_for(team_id, user, "delete messages")
        message = _message_for(team, message_id)
        if message.author_id != user.id and not can_moderate(user, team):
            raise ForbiddenError("You can only delete your own messages")

        message.is_deleted = True
        message.deleted_at = utcnow()
        message.is_pinned = False
        message.save()
        log.info("message_deleted", message_id=message.id, team_id=team.id, by=user.id)

    @staticmethod
    async def pin_message(team_id: int, message_id: int, user: User, is_pinned: bool) -> ChatMessageResp:
        team = _team_for(team_id, user, "pin messages")
        if not can_pin(user, team):
            raise ForbiddenError("Only team managers can pin messages")
        message = _message_for(team, message_id)

        message.is_pinned = is_pinned
        message.pinned_at = utcnow() if is_pinned else None
        message.pinned_by = user.id if is_pinned else None
        message.save()

        log.info("message_pinned" if is_pinned else "message_unpinned", message_id=message.id, team_id=team.id)
        return ChatMessageResp(data=message_out(message))

    @staticmethod
    async def list_channels(team_id: int, user: User) -> ChannelListResp:
        team = _team_for(team_id, user, "view channels")

        stats = {
            channel: (count, last)
            for channel, count, last in (
                Message.select(Message.channel, fn.COUNT(Message.id), fn.MAX(Message.created_at))
                .where((Message.team == team.id) & (Message.is_deleted == False))  # noqa: E712
                .group_by(Message.channel)
                .tuples()
            )
        }

        channels: List[ChannelOut] = []
        for channel, config in sorted(CHANNELS.items(), key=lambda item: item[1]['sort_order']):
            count, last = stats.get(channel, (0, None))
            channels.append(ChannelOut(
                id=channel,
                name=config['name'],
                description=config['description'],
                icon=config['icon'],
                sort_order=config['sort_order'],
                can_write=can_post(user, team, channel),
                message_count=count,
                last_message_at=Message.created_at.python_value(last) if last else None,
                pinned_count=_visible(team.id, channel).where(Message.is_pinned == True).count(),  # noqa: E712
                unread_count=_unread(team.id, channel, user).count(),
            ))
        return ChannelListResp(data=channels)

    @staticmethod
    async def mark_read(team_id: int, channel: str, user: User) -> ChannelReadResp:
        team = _team_for(team_id, user, "view messages")
        channel = _check_channel(channel)

        read, created = ChannelRead.get_or_create(
            user=user.id,
            team=team.id,
            channel=channel,
            defaults={'last_read_at': utcnow()},
        )
        if not created:
            read.last_read_at = utcnow()
            read.save()

        return ChannelReadResp(data=ChannelReadOut(team_id=team.id, channel=channel, last_read_at=read.last_read_at))

    @staticmethod
    async def unread_counts(team_id: int, user: User) -> UnreadResp:
        team = _team_for(team_id, user, "view messages")
        counts: Dict[str, int] = {channel: _unread(team.id, channel, user).count() for channel in CHANNELS}
        return UnreadResp(data=UnreadOut(team_id=team.id, channels=counts, total=sum(counts.values())))
