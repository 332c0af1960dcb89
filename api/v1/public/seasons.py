from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from core.rate_limit import PUBLIC_RATE_LIMIT, limiter
from schemas.common import PageParams, page_params
from schemas.season import SeasonDetailResp, SeasonListResp, SeasonResp
from services.season_service import SeasonService

router = APIRouter(prefix="/seasons", tags=["Seasons"])


@router.get("", response_model=SeasonListResp, summary="List seasons, newest first")
@limiter.limit(PUBLIC_RATE_LIMIT)
async def list_seasons(
    request: Request,
    year: Optional[int] = Query(None),
    active_only: bool = Query(False, alias="activeOnly"),
    page: PageParams = Depends(page_params),
) -> SeasonListResp:
    return await SeasonService.list_seasons(page, year, active_only)


@router.get("/active", response_model=SeasonResp, summary="The active season")
@limiter.limit(PUBLIC_RATE_LIMIT)
async def active_season(request: Request) -> SeasonResp:
    return await SeasonService.get_active()


@router.get(
    "/{season_id}",
    response_model=SeasonDetailResp,
    summary="Season detail",
    description="Season with game and roster counts, team records and a month-by-month schedule overview.",
)
@limiter.limit(PUBLIC_RATE_LIMIT)
async def get_season(request: Request, season_id: int) -> SeasonDetailResp:
    return await SeasonService.get_season(season_id)
