from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from core.security import require_admin
from db.models import User
from schemas.plate_appearance import (
    GamePlateAppearancesResp,
    PlateAppearanceSummaryResp,
    PlayerPlateAppearancesReq,
    PlayerPlateAppearancesResp,
    TeamPlateAppearancesReq,
)
from services.plate_appearance_service import PlateAppearanceService

router = APIRouter(prefix="/games/{game_id}/plate-appearances", tags=["Scorebook"])


@router.get('', response_model=GamePlateAppearancesResp, summary="Plate appearances for a game")
async def list_plate_appearances(
    game_id: int,
    team: Optional[str] = Query(None, description="home or away"),
) -> GamePlateAppearancesResp:
    return await PlateAppearanceService.list_for_game(game_id, team)


@router.put('', response_model=GamePlateAppearancesResp, summary="Replace one side's scorebook")
async def save_team_plate_appearances(
    game_id: int,
    req: TeamPlateAppearancesReq,
    team: str = Query(..., description="home or away"),
    user: User = Depends(require_admin),
) -> GamePlateAppearancesResp:
    return await PlateAppearanceService.save_for_team(game_id, team, req)


@router.get('/summary', response_model=PlateAppearanceSummaryResp, summary="Scorebook completeness")
async def plate_appearance_summary(game_id: int) -> PlateAppearanceSummaryResp:
    return await PlateAppearanceService.summary(game_id)


@router.get('/players/{player_id}', response_model=PlayerPlateAppearancesResp)
async def get_player_plate_appearances(game_id: int, player_id: int) -> PlayerPlateAppearancesResp:
    return await PlateAppearanceService.get_for_player(game_id, player_id)


@router.put('/players/{player_id}', response_model=PlayerPlateAppearancesResp)
async def save_player_plate_appearances(
    game_id: int,
    player_id: int,
    req: PlayerPlateAppearancesReq,
    user: User = Depends(require_admin),
) -> PlayerPlateAppearancesResp:
    """Replaces the player's plate appearances and their derived batting line."""
    return await PlateAppearanceService.save_for_player(game_id, player_id, req)


@router.delete('/players/{player_id}', status_code=status.HTTP_204_NO_CONTENT)
async def delete_player_plate_appearances(
    game_id: int,
    player_id: int,
    user: User = Depends(require_admin),
) -> Response:
    await PlateAppearanceService.delete_for_player(game_id, player_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
