from fastapi import APIRouter, Depends, Response, status

from core.security import require_admin, require_role
from db.models import User
from schemas.season import SeasonCreateReq, SeasonResp, SeasonUpdateReq
from services.season_service import SeasonService
from utils.constants import ROLE_COMMISSIONER

router = APIRouter(prefix="/seasons", tags=["Admin: seasons"])


@router.post('', response_model=SeasonResp, status_code=status.HTTP_201_CREATED)
async def create_season(req: SeasonCreateReq, user: User = Depends(require_admin)) -> SeasonResp:
    return await SeasonService.create_season(req)


@router.patch('/{season_id}', response_model=SeasonResp)
async def update_season(season_id: int, req: SeasonUpdateReq, user: User = Depends(require_admin)) -> SeasonResp:
    return await SeasonService.update_season(season_id, req)


@router.post('/{season_id}/activate', response_model=SeasonResp, summary="Make this the only active season")
async def activate_season(season_id: int, user: User = Depends(require_admin)) -> SeasonResp:
    return await SeasonService.activate_season(season_id)


@router.delete('/{season_id}', status_code=status.HTTP_204_NO_CONTENT)
async def delete_season(
    season_id: int,
    user: User = Depends(require_role(ROLE_COMMISSIONER, message="Only commissioners can delete seasons")),
) -> Response:
    await SeasonService.delete_season(season_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
