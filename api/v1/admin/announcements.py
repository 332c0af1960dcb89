from fastapi import APIRouter, Depends, Response, status

from core.security import require_admin
from db.models import User
from schemas.announcement import AnnouncementCreateReq, AnnouncementResp, AnnouncementUpdateReq
from services.announcement_service import AnnouncementService

router = APIRouter(prefix="/announcements", tags=["Admin: announcements"])


@router.post('', response_model=AnnouncementResp, status_code=status.HTTP_201_CREATED)
async def create_announcement(req: AnnouncementCreateReq, user: User = Depends(require_admin)) -> AnnouncementResp:
    return await AnnouncementService.create_announcement(req, user)


@router.patch('/{announcement_id}', response_model=AnnouncementResp)
async def update_announcement(
    announcement_id: int,
    req: AnnouncementUpdateReq,
    user: User = Depends(require_admin),
) -> AnnouncementResp:
    return await AnnouncementService.update_announcement(announcement_id, req)


@router.delete('/{announcement_id}', status_code=status.HTTP_204_NO_CONTENT)
async def delete_announcement(announcement_id: int, user: User = Depends(require_admin)) -> Response:
    await AnnouncementService.delete_announcement(announcement_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
