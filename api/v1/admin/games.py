"""
Admin routes for scheduling and correcting games.

All routes require an admin or commissioner; deleting needs a commissioner.
"""

from typing import Optional, Union

from fastapi import APIRouter, Depends, Query, Response, status

from core.security import require_admin, require_commissioner
from db.models import User
from schemas.common import PageParams, page_params
from schemas.game import (
    AdminGameCreateReq,
    AdminGameListResp,
    AdminGameResp,
    AdminGameUpdateReq,
    CancelGameReq,
    GameActionResp,
    GameResp,
    GameSeriesResp,
    PostponeGameReq,
)
from services.admin_game_service import AdminGameService
from services.game_service import GameFilters

router = APIRouter(prefix="/games", tags=["Admin: games"])


@router.get('', response_model=AdminGameListResp, summary="List games with box score completeness")
async def list_games(
    season_id: Optional[int] = Query(None, alias="seasonId"),
    team_id: Optional[int] = Query(None, alias="teamId"),
    status_filter: Optional[str] = Query(None, alias="status"),
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    stats_status: Optional[str] = Query(None, alias="statsStatus", description="complete, partial or missing"),
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    sort_dir: Optional[str] = Query(None, alias="sortDir"),
    page: PageParams = Depends(page_params),
    user: User = Depends(require_admin),
) -> AdminGameListResp:
    filters = GameFilters.from_query(season_id, team_id, status_filter, start_date, end_date, sort_by, sort_dir)
    return await AdminGameService.list_games(filters, page, stats_status)


@router.post(
    '',
    response_model=Union[GameSeriesResp, GameResp],
    status_code=status.HTTP_201_CREATED,
    summary="Create a game, or a series when the body has games[]",
)
async def create_games(req: AdminGameCreateReq, user: User = Depends(require_admin)):
    return await AdminGameService.create_games(req)


@router.get('/{game_id}', response_model=AdminGameResp)
async def get_game(game_id: int, user: User = Depends(require_admin)) -> AdminGameResp:
    return await AdminGameService.get_game(game_id)


@router.patch('/{game_id}', response_model=AdminGameResp)
async def update_game(game_id: int, req: AdminGameUpdateReq, user: User = Depends(require_admin)) -> AdminGameResp:
    return await AdminGameService.update_game(game_id, req)


@router.delete('/{game_id}', status_code=status.HTTP_204_NO_CONTENT)
async def delete_game(game_id: int, user: User = Depends(require_commissioner)) -> Response:
    await AdminGameService.delete_game(game_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post('/{game_id}/cancel', response_model=GameActionResp)
async def cancel_game(
    game_id: int,
    req: Optional[CancelGameReq] = None,
    user: User = Depends(require_admin),
) -> GameActionResp:
    return await AdminGameService.cancel_game(game_id, req.reason if req else None)


@router.post('/{game_id}/postpone', response_model=GameActionResp)
async def postpone_game(
    game_id: int,
    req: Optional[PostponeGameReq] = None,
    user: User = Depends(require_admin),
) -> GameActionResp:
    """Postpone, or reschedule straight away when rescheduleDate is given."""
    req = req or PostponeGameReq()
    return await AdminGameService.postpone_game(game_id, req.reason, req.reschedule_date, req.reschedule_time)
