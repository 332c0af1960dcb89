from typing import Optional

from fastapi import APIRouter, Depends, Query

from core.security import get_current_user
from db.models import User
from schemas.availability import AvailabilityResp, AvailabilityUpdateReq, GameAvailabilityResp
from services.availability_service import AvailabilityService

router = APIRouter(prefix="/games/{game_id}/availability", tags=["Availability"])


@router.get('', response_model=GameAvailabilityResp, summary="Who is coming to a game")
async def team_availability(
    game_id: int,
    team_id: Optional[int] = Query(None, alias="teamId", description="Managers and admins may pick a side"),
    user: User = Depends(get_current_user),
) -> GameAvailabilityResp:
    return await AvailabilityService.team_availability(game_id, user, team_id)


@router.put('', response_model=AvailabilityResp, summary="Set your own availability")
async def set_availability(
    game_id: int,
    req: AvailabilityUpdateReq,
    user: User = Depends(get_current_user),
) -> AvailabilityResp:
    return await AvailabilityService.set_availability(game_id, user, req)
