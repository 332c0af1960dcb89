from typing import Optional

from core.errors import BadRequestError, NotFoundError, ValidationFailedError
from core.logging import get_logger
from db.models import Announcement, Season, User
from schemas.announcement import (
    AnnouncementCreateReq,
    AnnouncementListResp,
    AnnouncementOut,
    AnnouncementResp,
    AnnouncementUpdateReq,
)
from schemas.common import PageParams
from services.views import author_out
from utils.dates import utcnow
from utils.sanitize import sanitize_string

log = get_logger("announcements")


def announcement_out(announcement: Announcement) -> AnnouncementOut:
    return AnnouncementOut.model_validate({
        **announcement.__data__,
        'season_id': announcement.season_id,
        'author': author_out(announcement.author),
    })


def _get_announcement(announcement_id: int) -> Announcement:
    announcement = Announcement.get_or_none(Announcement.id == announcement_id)
    if announcement is None:
        raise NotFoundError("Announcement", announcement_id)
    return announcement


def _check_season(season_id: Optional[int]) -> None:
    if season_id is not None and Season.get_or_none(Season.id == season_id) is None:
        raise BadRequestError(f"Season with ID '{season_id}' not found")


class AnnouncementService:

    @staticmethod
    async def list_announcements(page: PageParams, season_id: Optional[int] = None, priority: Optional[int] = None,
                                 pinned_only: bool = False, include_expired: bool = False) -> AnnouncementListResp:
        if priority is not None and priority not in (1, 2, 3):
            raise ValidationFailedError({'priority': ["Priority must be between 1 and 3"]})

        query = Announcement.select().where(Announcement.is_published == True)  # noqa: E712
        if not include_expired:
            query = query.where(Announcement.expires_at.is_null() | (Announcement.expires_at > utcnow()))
        if season_id is not None:
            query = query.where(Announcement.season == season_id)
        if priority is not None:
            query = query.where(Announcement.priority == priority)
        if pinned_only:
            query = query.where(Announcement.is_pinned == True)  # noqa: E712

        query = query.order_by(
            Announcement.is_pinned.desc(),
            Announcement.priority.desc(),
            Announcement.published_at.desc(),
            Announcement.id.desc(),
        )
        total = query.count()
        return AnnouncementListResp(
            data=[announcement_out(a) for a in page.paginate(query)],
            pagination=page.pagination(total),
        )

    @staticmethod
    async def get_announcement(announcement_id: int, user: Optional[User] = None) -> AnnouncementResp:
        announcement = _get_announcement(announcement_id)
        if not announcement.is_published and not (user and user.is_admin):
            raise NotFoundError("Announcement", announcement_id)
        return AnnouncementResp(data=announcement_out(announcement))

    @staticmethod
    async def create_announcement(req: AnnouncementCreateReq, author: User) -> AnnouncementResp:
        _check_season(req.season_id)

        announcement = Announcement.create(
            author=author.id,
            season=req.season_id,
            title=sanitize_string(req.title),
            content=sanitize_string(req.content),
            is_published=req.is_published,
            published_at=utcnow() if req.is_published else None,
            is_pinned=req.is_pinned,
            priority=req.priority,
            expires_at=req.expires_at,
        )
        log.info("announcement_created", announcement_id=announcement.id, published=announcement.is_published)
        return AnnouncementResp(data=announcement_out(announcement))

    @staticmethod
    async def update_announcement(announcement_id: int, req: AnnouncementUpdateReq) -> AnnouncementResp:
        announcement = _get_announcement(announcement_id)
        changes = req.model_dump(exclude_unset=True)

        if 'season_id' in changes:
            _check_season(changes['season_id'])
            announcement.season = changes.pop('season_id')
        for field in ('title', 'content'):
            if changes.get(field) is not None:
                changes[field] = sanitize_string(changes[field])

        publishing = changes.get('is_published') and not announcement.is_published
        for field, value in changes.items():
            if value is None and field not in ('expires_at',):
                continue
            setattr(announcement, field, value)
        if publishing:
            announcement.published_at = utcnow()
        elif changes.get('is_published') is False:
            announcement.published_at = None
        announcement.save()

        log.info("announcement_updated", announcement_id=announcement.id, fields=sorted(req.model_fields_set))
        return AnnouncementResp(data=announcement_out(announcement))

    @staticmethod
    async def delete_announcement(announcement_id: int) -> None:
        announcement = _get_announcement(announcement_id)
        announcement.delete_instance()
        log.info("announcement_deleted", announcement_id=announcement_id)
