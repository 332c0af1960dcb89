from typing import Optional

from fastapi import APIRouter, Query, Request

from core.rate_limit import PUBLIC_RATE_LIMIT, limiter
from schemas.standings import StandingsResp
from services.standings_service import StandingsService

router = APIRouter(prefix="/standings", tags=["Standings"])


@router.get(
    "",
    response_model=StandingsResp,
    summary="League standings",
    description="Win percentage order with games behind the leader. Defaults to the active season.",
)
@limiter.limit(PUBLIC_RATE_LIMIT)
async def get_standings(
    request: Request,
    season_id: Optional[int] = Query(None, alias="seasonId"),
) -> StandingsResp:
    return await StandingsService.get_standings(season_id)
