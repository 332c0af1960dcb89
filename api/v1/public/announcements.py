from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from core.rate_limit import PUBLIC_RATE_LIMIT, limiter
from core.security import get_optional_user
from db.models import User
from schemas.announcement import AnnouncementListResp, AnnouncementResp
from schemas.common import PageParams, page_params
from services.announcement_service import AnnouncementService

router = APIRouter(prefix="/announcements", tags=["Announcements"])


@router.get(
    "",
    response_model=AnnouncementListResp,
    summary="Published announcements",
    description="Pinned first, then by priority, then newest. Expired announcements are hidden unless includeExpired.",
)
@limiter.limit(PUBLIC_RATE_LIMIT)
async def list_announcements(
    request: Request,
    season_id: Optional[int] = Query(None, alias="seasonId"),
    priority: Optional[int] = Query(None),
    pinned_only: bool = Query(False, alias="pinnedOnly"),
    include_expired: bool = Query(False, alias="includeExpired"),
    page: PageParams = Depends(page_params),
) -> AnnouncementListResp:
    return await AnnouncementService.list_announcements(page, season_id, priority, pinned_only, include_expired)


@router.get("/{announcement_id}", response_model=AnnouncementResp, summary="Get an announcement")
@limiter.limit(PUBLIC_RATE_LIMIT)
async def get_announcement(
    request: Request,
    announcement_id: int,
    user: Optional[User] = Depends(get_optional_user),
) -> AnnouncementResp:
    return await AnnouncementService.get_announcement(announcement_id, user)
