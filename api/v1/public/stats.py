"""
Public API routes for season batting and pitching statistics.
"""

from typing import Optional

from fastapi import APIRouter, Query, Request

from core.rate_limit import PUBLIC_RATE_LIMIT, limiter
from schemas.common import PageParams
from schemas.stats import BattingLeadersResp, BattingStatsResp, PitchingLeadersResp, PitchingStatsResp
from services.stats_service import StatsService
from utils.constants import STATS_PAGE_SIZE

router = APIRouter(prefix="/stats", tags=["Stats"])


@router.get(
    "/batting",
    response_model=BattingStatsResp,
    summary="Season batting stats",
    description="Totals plus AVG/OBP/SLG/OPS per player. Sort by avg, homeRuns, rbi, hits, runs, stolenBases or ops.",
)
@limiter.limit(PUBLIC_RATE_LIMIT)
async def batting_stats(
    request: Request,
    season_id: Optional[int] = Query(None, alias="seasonId"),
    team_id: Optional[int] = Query(None, alias="teamId"),
    min_at_bats: Optional[int] = Query(None, alias="minAtBats"),
    sort_by: str = Query("avg", alias="sortBy"),
    page: Optional[str] = Query(None),
    page_size: Optional[str] = Query(None, alias="pageSize"),
) -> BattingStatsResp:
    return await StatsService.batting(
        PageParams(page, page_size, default_size=STATS_PAGE_SIZE),
        season_id=season_id,
        team_id=team_id,
        min_at_bats=min_at_bats,
        sort_by=sort_by,
    )


@router.get("/batting/leaders", response_model=BattingLeadersResp, summary="Batting leaderboards")
@limiter.limit(PUBLIC_RATE_LIMIT)
async def batting_leaders(
    request: Request,
    season_id: Optional[int] = Query(None, alias="seasonId"),
    min_at_bats: Optional[int] = Query(None, alias="minAtBats", description="Qualifier for the average board"),
) -> BattingLeadersResp:
    return await StatsService.batting_leaders(season_id, min_at_bats)


@router.get(
    "/pitching",
    response_model=PitchingStatsResp,
    summary="Season pitching stats",
    description="ERA and WHIP sort ascending; wins, strikeouts and saves sort descending.",
)
@limiter.limit(PUBLIC_RATE_LIMIT)
async def pitching_stats(
    request: Request,
    season_id: Optional[int] = Query(None, alias="seasonId"),
    team_id: Optional[int] = Query(None, alias="teamId"),
    min_innings_pitched: Optional[float] = Query(None, alias="minInningsPitched"),
    sort_by: str = Query("era", alias="sortBy"),
    page: Optional[str] = Query(None),
    page_size: Optional[str] = Query(None, alias="pageSize"),
) -> PitchingStatsResp:
    return await StatsService.pitching(
        PageParams(page, page_size, default_size=STATS_PAGE_SIZE),
        season_id=season_id,
        team_id=team_id,
        min_innings_pitched=min_innings_pitched,
        sort_by=sort_by,
    )


@router.get("/pitching/leaders", response_model=PitchingLeadersResp, summary="Pitching leaderboards")
@limiter.limit(PUBLIC_RATE_LIMIT)
async def pitching_leaders(
    request: Request,
    season_id: Optional[int] = Query(None, alias="seasonId"),
    min_innings_pitched: Optional[float] = Query(None, alias="minInningsPitched"),
) -> PitchingLeadersResp:
    return await StatsService.pitching_leaders(season_id, min_innings_pitched)
