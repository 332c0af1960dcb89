from typing import Optional

from fastapi import APIRouter, Query, Request

from core.rate_limit import PUBLIC_RATE_LIMIT, limiter
from schemas.team import RosterResp, TeamDetailResp, TeamListResp
from services.team_service import TeamService

router = APIRouter(prefix="/teams", tags=["Teams"])


@router.get("", response_model=TeamListResp, summary="List teams")
@limiter.limit(PUBLIC_RATE_LIMIT)
async def list_teams(
    request: Request,
    season_id: Optional[int] = Query(None, alias="seasonId"),
    active: Optional[bool] = Query(None),
) -> TeamListResp:
    return await TeamService.list_teams(season_id, active)


@router.get("/{team_id}", response_model=TeamDetailResp, summary="Team detail with manager and record")
@limiter.limit(PUBLIC_RATE_LIMIT)
async def get_team(request: Request, team_id: int) -> TeamDetailResp:
    return await TeamService.get_team(team_id)


@router.get("/{team_id}/roster", response_model=RosterResp, summary="Active roster, by jersey number")
@limiter.limit(PUBLIC_RATE_LIMIT)
async def get_roster(request: Request, team_id: int) -> RosterResp:
    return await TeamService.get_roster(team_id)
