"""Builders that turn peewee rows into response models."""

from typing import Optional

from db.models import Game, Message, Team, User
from schemas.game import GameOut, GameStateOut
from schemas.message import MessageOut, ReplyPreviewOut
from schemas.team import TeamSummaryOut
from schemas.user import AuthorOut
from services.game_status import is_extra_innings
from utils.constants import DELETED_MESSAGE_PLACEHOLDER, REPLY_PREVIEW_LENGTH


def author_out(user: Optional[User]) -> Optional[AuthorOut]:
    if user is None:
        return None
    return AuthorOut(id=user.id, full_name=user.full_name, avatar_url=user.avatar_url)


def team_summary(team: Team) -> TeamSummaryOut:
    return TeamSummaryOut.model_validate(team)


def game_out(game: Game) -> GameOut:
    return GameOut(
        id=game.id,
        season_id=game.season_id,
        game_number=game.game_number,
        home_team_id=game.home_team_id,
        away_team_id=game.away_team_id,
        game_date=game.game_date,
        game_time=game.game_time,
        timezone=game.timezone,
        location_name=game.location_name,
        location_address=game.location_address,
        status=game.status,
        home_score=game.home_score,
        away_score=game.away_score,
        current_inning=game.current_inning,
        current_inning_half=game.current_inning_half,
        outs=game.outs,
        home_inning_scores=game.home_inning_scores or [],
        away_inning_scores=game.away_inning_scores or [],
        notes=game.notes,
        started_at=game.started_at,
        ended_at=game.ended_at,
        created_at=game.created_at,
        updated_at=game.updated_at,
        home_team=team_summary(game.home_team),
        away_team=team_summary(game.away_team),
    )


def game_state(game: Game) -> GameStateOut:
    return GameStateOut(
        id=game.id,
        status=game.status,
        home_score=game.home_score,
        away_score=game.away_score,
        current_inning=game.current_inning,
        current_inning_half=game.current_inning_half,
        outs=game.outs,
        home_inning_scores=list(game.home_inning_scores or []),
        away_inning_scores=list(game.away_inning_scores or []),
        is_extra_innings=is_extra_innings(game.current_inning),
        notes=game.notes,
        started_at=game.started_at,
        ended_at=game.ended_at,
        updated_at=game.updated_at,
    )


def _preview(content: str) -> str:
    if len(content) > REPLY_PREVIEW_LENGTH:
        return content[:REPLY_PREVIEW_LENGTH] + "..."
    return content


def message_out(message: Message) -> MessageOut:
    reply = None
    parent = message.reply_to if message.reply_to_id else None
    if parent is not None:
        reply = ReplyPreviewOut(
            id=parent.id,
            content=DELETED_MESSAGE_PLACEHOLDER if parent.is_deleted else _preview(parent.content),
            author=author_out(parent.author),
        )

    return MessageOut(
        id=message.id,
        team_id=message.team_id,
        channel=message.channel,
        author_id=message.author_id,
        content=DELETED_MESSAGE_PLACEHOLDER if message.is_deleted else message.content,
        reply_to_id=message.reply_to_id,
        is_pinned=message.is_pinned,
        pinned_at=message.pinned_at,
        is_edited=message.is_edited,
        edited_at=message.edited_at,
        is_deleted=message.is_deleted,
        deleted_at=message.deleted_at,
        created_at=message.created_at,
        author=author_out(message.author),
        reply_to=reply,
    )
