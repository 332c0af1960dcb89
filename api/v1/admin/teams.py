from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from core.security import require_admin, require_commissioner
from db.models import User
from schemas.team import AdminTeamListResp, AdminTeamResp, TeamCreateReq, TeamUpdateReq
from services.team_service import AdminTeamService

router = APIRouter(prefix="/teams", tags=["Admin: teams"])


@router.get('', response_model=AdminTeamListResp, summary="List teams with roster counts")
async def list_teams(
    season_id: Optional[int] = Query(None, alias="seasonId"),
    active: Optional[bool] = Query(None),
    user: User = Depends(require_admin),
) -> AdminTeamListResp:
    return await AdminTeamService.list_teams(season_id, active)


@router.post('', response_model=AdminTeamResp, status_code=status.HTTP_201_CREATED)
async def create_team(req: TeamCreateReq, user: User = Depends(require_admin)) -> AdminTeamResp:
    return await AdminTeamService.create_team(req)


@router.get('/{team_id}', response_model=AdminTeamResp)
async def get_team(team_id: int, user: User = Depends(require_admin)) -> AdminTeamResp:
    return await AdminTeamService.get_team(team_id)


@router.patch('/{team_id}', response_model=AdminTeamResp)
async def update_team(team_id: int, req: TeamUpdateReq, user: User = Depends(require_admin)) -> AdminTeamResp:
    return await AdminTeamService.update_team(team_id, req)


@router.delete('/{team_id}', status_code=status.HTTP_204_NO_CONTENT)
async def delete_team(team_id: int, user: User = Depends(require_commissioner)) -> Response:
    await AdminTeamService.delete_team(team_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
