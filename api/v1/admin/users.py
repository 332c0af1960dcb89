from typing import Optional

from fastapi import APIRouter, Depends, Query

from core.security import require_admin
from db.models import User
from schemas.common import PageParams, page_params
from schemas.user import AdminUserListResp, AdminUserResp, AdminUserUpdateReq
from services.user_service import AdminUserService

router = APIRouter(prefix="/users", tags=["Admin: users"])


@router.get('', response_model=AdminUserListResp, summary="Search league members")
async def list_users(
    search: Optional[str] = Query(None, description="Matches name or email"),
    role: Optional[str] = Query(None),
    team_id: Optional[int] = Query(None, alias="teamId"),
    assignment_status: Optional[str] = Query(None, alias="assignmentStatus", description="assigned, unassigned or all"),
    is_active: Optional[bool] = Query(None, alias="isActive"),
    sort: str = Query("name", description="name, email or createdAt"),
    sort_dir: str = Query("asc", alias="sortDir"),
    page: PageParams = Depends(page_params),
    user: User = Depends(require_admin),
) -> AdminUserListResp:
    return await AdminUserService.list_users(page, search, role, team_id, assignment_status, is_active, sort, sort_dir)


@router.patch('/{user_id}', response_model=AdminUserResp, summary="Change a member's role or deactivate them")
async def update_user(user_id: int, req: AdminUserUpdateReq, user: User = Depends(require_admin)) -> AdminUserResp:
    return await AdminUserService.update_user(user_id, req, user)
