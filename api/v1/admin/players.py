from fastapi import APIRouter, Depends, Response, status

from core.security import require_admin
from db.models import User
from schemas.player import PlayerAssignReq, PlayerResp, PlayerUpdateReq
from services.player_service import PlayerService

router = APIRouter(prefix="/players", tags=["Admin: players"])


@router.post('', response_model=PlayerResp, status_code=status.HTTP_201_CREATED, summary="Put a user on a team")
async def assign_player(req: PlayerAssignReq, user: User = Depends(require_admin)) -> PlayerResp:
    return await PlayerService.assign_player(req)


@router.get('/{player_id}', response_model=PlayerResp)
async def get_player(player_id: int, user: User = Depends(require_admin)) -> PlayerResp:
    return await PlayerService.get_player(player_id)


@router.patch('/{player_id}', response_model=PlayerResp, summary="Edit a roster spot or move it to another team")
async def update_player(player_id: int, req: PlayerUpdateReq, user: User = Depends(require_admin)) -> PlayerResp:
    return await PlayerService.update_player(player_id, req)


@router.delete('/{player_id}', status_code=status.HTTP_204_NO_CONTENT, summary="Remove a player from their team")
async def remove_player(player_id: int, user: User = Depends(require_admin)) -> Response:
    await PlayerService.remove_player(player_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
