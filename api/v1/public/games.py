"""
Public API routes for the schedule, results and live games.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, Request

from core.rate_limit import PUBLIC_RATE_LIMIT, limiter
from schemas.common import PageParams, page_params
from schemas.game import GameListResp, GameResp, LiveGamesResp
from schemas.game_stats import GameStatsResp
from services.game_service import GameFilters, GameService
from services.game_stats_service import GameStatsService

router = APIRouter(prefix="/games", tags=["Games"])


@router.get(
    "",
    response_model=GameListResp,
    summary="List games",
    description="Filter by season, team (home or away), comma-separated status list and date range.",
    responses={422: {"description": "Invalid status or date filter"}},
)
@limiter.limit(PUBLIC_RATE_LIMIT)
async def list_games(
    request: Request,
    season_id: Optional[int] = Query(None, alias="seasonId"),
    team_id: Optional[int] = Query(None, alias="teamId"),
    status: Optional[str] = Query(None, description="Comma-separated statuses"),
    start_date: Optional[str] = Query(None, alias="startDate", description="YYYY-MM-DD"),
    end_date: Optional[str] = Query(None, alias="endDate", description="YYYY-MM-DD"),
    sort_by: Optional[str] = Query(None, alias="sortBy", description="date or status"),
    sort_dir: Optional[str] = Query(None, alias="sortDir", description="asc or desc"),
    page: PageParams = Depends(page_params),
) -> GameListResp:
    filters = GameFilters.from_query(season_id, team_id, status, start_date, end_date, sort_by, sort_dir)
    return await GameService.list_games(filters, page)


@router.get(
    "/live",
    response_model=LiveGamesResp,
    summary="Games in progress",
    description="Polled by scoreboards while games are being played.",
)
@limiter.limit(PUBLIC_RATE_LIMIT)
async def live_games(request: Request) -> LiveGamesResp:
    return await GameService.live_games()


@router.get("/{game_id}", response_model=GameResp, summary="Get a game")
@limiter.limit(PUBLIC_RATE_LIMIT)
async def get_game(request: Request, game_id: int = Path(...)) -> GameResp:
    return await GameService.get_game(game_id)


@router.get("/{game_id}/stats", response_model=GameStatsResp, summary="Box score for a game")
@limiter.limit(PUBLIC_RATE_LIMIT)
async def get_game_stats(request: Request, game_id: int = Path(...)) -> GameStatsResp:
    return await GameStatsService.get_game_stats(game_id)
