"""
Live scoring routes, used from the dugout while a game is being played.

Managers may score games involving a team they manage; admins and
commissioners may score any game.
"""

from typing import Optional

from fastapi import APIRouter, Depends

from core.security import get_current_user, require_admin
from db.models import User
from schemas.game import (
    AdvanceInningReq,
    EndGameReq,
    GameStateResp,
    RecordOutReq,
    RecordScoreReq,
    ScoringActionResp,
    StartGameReq,
    UpdateGameStateReq,
)
from services.scoring_service import ScoringService

router = APIRouter(prefix="/games/{game_id}", tags=["Live scoring"])


@router.get('/state', response_model=GameStateResp, summary="Current score, inning and outs")
async def get_state(game_id: int) -> GameStateResp:
    return await ScoringService.get_state(game_id)


@router.post('/start', response_model=ScoringActionResp, summary="Start (or resume) a game")
async def start_game(
    game_id: int,
    req: Optional[StartGameReq] = None,
    user: User = Depends(get_current_user),
) -> ScoringActionResp:
    return await ScoringService.start_game(game_id, user, (req or StartGameReq()).status)


@router.post('/score', response_model=ScoringActionResp, summary="Add runs for the team at bat")
async def record_score(game_id: int, req: RecordScoreReq, user: User = Depends(get_current_user)) -> ScoringActionResp:
    return await ScoringService.record_score(game_id, user, req.runs)


@router.post('/out', response_model=ScoringActionResp, summary="Record outs; the third out ends the half-inning")
async def record_out(
    game_id: int,
    req: Optional[RecordOutReq] = None,
    user: User = Depends(get_current_user),
) -> ScoringActionResp:
    return await ScoringService.record_out(game_id, user, (req or RecordOutReq()).count)


@router.post('/advance', response_model=ScoringActionResp, summary="Move to the next (or a given) half-inning")
async def advance_inning(
    game_id: int,
    req: Optional[AdvanceInningReq] = None,
    user: User = Depends(get_current_user),
) -> ScoringActionResp:
    return await ScoringService.advance_inning(game_id, user, req or AdvanceInningReq())


@router.post('/end', response_model=ScoringActionResp, summary="End, suspend, postpone or cancel a game")
async def end_game(
    game_id: int,
    req: Optional[EndGameReq] = None,
    user: User = Depends(get_current_user),
) -> ScoringActionResp:
    return await ScoringService.end_game(game_id, user, req or EndGameReq())


@router.patch('/state', response_model=ScoringActionResp, summary="Correct the game state")
async def update_state(
    game_id: int,
    req: UpdateGameStateReq,
    user: User = Depends(require_admin),
) -> ScoringActionResp:
    return await ScoringService.update_state(game_id, req)
