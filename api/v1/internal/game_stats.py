from fastapi import APIRouter, Depends

from core.security import require_admin
from db.models import User
from schemas.game_stats import SaveGameStatsReq, SaveGameStatsResp
from services.game_stats_service import GameStatsService

router = APIRouter(prefix="/games/{game_id}/stats", tags=["Game stats"])


@router.post(
    '',
    response_model=SaveGameStatsResp,
    summary="Save one side's batting or pitching lines",
    description="Replaces every existing line of that type for the side. Line errors are keyed stats[i].field.",
)
async def save_game_stats(
    game_id: int,
    req: SaveGameStatsReq,
    user: User = Depends(require_admin),
) -> SaveGameStatsResp:
    return await GameStatsService.save_game_stats(game_id, req)
