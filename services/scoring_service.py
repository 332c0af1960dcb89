"""
Live scoring for a game in progress.

Every action returns the game state before and after the change so clients
can show or undo what happened.
"""

from typing import List, Optional

from core.errors import BadRequestError, ForbiddenError, NotFoundError
from core.logging import get_logger
from db.base import db
from db.models import Game, Team, User
from schemas.game import (
    AdvanceInningReq,
    EndGameReq,
    GameStateResp,
    ScoringActionOut,
    ScoringActionResp,
    UpdateGameStateReq,
)
from services.game_status import can_end, can_score, can_start, can_transition, next_half_inning
from services.standings_service import refresh_team_records
from services.views import game_state
from utils.constants import ADMIN_ROLES, MANAGER_ROLES, MAX_OUTS
from utils.dates import utcnow

log = get_logger("scoring")


def pad_innings(scores: Optional[List[int]], inning: int) -> List[int]:
    """Return a copy of scores with a slot for every inning up to and including inning."""
    padded = list(scores or [])
    while len(padded) < inning:
        padded.append(0)
    return padded


def _close_half_inning(game: Game) -> None:
    inning = game.current_inning or 1
    if (game.current_inning_half or 'top') == 'top':
        game.away_inning_scores = pad_innings(game.away_inning_scores, inning)
    else:
        game.home_inning_scores = pad_innings(game.home_inning_scores, inning)


def _advance(game: Game) -> None:
    _close_half_inning(game)
    game.current_inning, game.current_inning_half = next_half_inning(
        game.current_inning or 1, game.current_inning_half or 'top'
    )
    game.outs = 0


def load_game_for_scoring(game_id: int, user: User) -> Game:
    game = Game.get_or_none(Game.id == game_id)
    if game is None:
        raise NotFoundError("Game", game_id)

    if user.role not in MANAGER_ROLES:
        raise ForbiddenError("Only team managers can record scores")

    if user.role not in ADMIN_ROLES:
        managed = Team.select().where(
            (Team.manager == user.id) & (Team.id.in_([game.home_team_id, game.away_team_id]))
        )
        if not managed.exists():
            raise ForbiddenError("You can only score games for your team")

    return game


def _result(action: str, game: Game, previous, auto_advanced: Optional[bool] = None) -> ScoringActionResp:
    return ScoringActionResp(data=ScoringActionOut(
        action=action,
        previous_state=previous,
        new_state=game_state(game),
        auto_advanced=auto_advanced,
    ))


class ScoringService:

    @staticmethod
    async def get_state(game_id: int) -> GameStateResp:
        game = Game.get_or_none(Game.id == game_id)
        if game is None:
            raise NotFoundError("Game", game_id)
        return GameStateResp(data=game_state(game))

    @staticmethod
    async def start_game(game_id: int, user: User, status: str = 'in_progress') -> ScoringActionResp:
        game = load_game_for_scoring(game_id, user)

        reason = can_start(game.status)
        if reason:
            raise BadRequestError(reason)
        # Starting warmup again is allowed
        repeated = game.status == status
        if not repeated and not can_transition(game.status, status):
            raise BadRequestError(f"Cannot change game status from '{game.status}' to '{status}'")

        previous = game_state(game)
        resuming = game.status == 'suspended'

        with db.atomic():
            game.status = status
            if not ((resuming or repeated) and game.started_at):
                game.started_at = utcnow()
            if status == 'in_progress' and not resuming:
                game.current_inning = 1
                game.current_inning_half = 'top'
                game.outs = 0
                game.home_inning_scores = []
                game.away_inning_scores = []
                game.home_score = 0
                game.away_score = 0
            game.save()

        log.info("game_started", game_id=game.id, status=status, resumed=resuming, user_id=user.id)
        return _result('start', game, previous)

    @staticmethod
    async def record_score(game_id: int, user: User, runs: int) -> ScoringActionResp:
        game = load_game_for_scoring(game_id, user)

        reason = can_score(game.status)
        if reason:
            raise BadRequestError(reason)

        previous = game_state(game)
        inning = game.current_inning or 1

        with db.atomic():
            if (game.current_inning_half or 'top') == 'top':
                innings = pad_innings(game.away_inning_scores, inning)
                innings[inning - 1] += runs
                game.away_inning_scores = innings
                game.away_score += runs
            else:
                innings = pad_innings(game.home_inning_scores, inning)
                innings[inning - 1] += runs
                game.home_inning_scores = innings
                game.home_score += runs
            game.save()

        log.info("runs_recorded", game_id=game.id, runs=runs, inning=inning, half=game.current_inning_half)
        return _result('score', game, previous)

    @staticmethod
    async def record_out(game_id: int, user: User, count: int = 1) -> ScoringActionResp:
        game = load_game_for_scoring(game_id, user)

        reason = can_score(game.status)
        if reason:
            raise BadRequestError(reason)

        previous = game_state(game)
        auto_advanced = False

        with db.atomic():
            game.outs = min((game.outs or 0) + count, MAX_OUTS)
            if game.outs >= MAX_OUTS:
                _advance(game)
                auto_advanced = True
            game.save()

        log.info("outs_recorded", game_id=game.id, count=count, auto_advanced=auto_advanced)
        return _result('out', game, previous, auto_advanced=auto_advanced)

    @staticmethod
    async def advance_inning(game_id: int, user: User, req: AdvanceInningReq) -> ScoringActionResp:
        game = load_game_for_scoring(game_id, user)

        reason = can_score(game.status)
        if reason:
            raise BadRequestError(reason)

        previous = game_state(game)

        with db.atomic():
            if req.force_inning is not None and req.force_half is not None:
                game.current_inning = req.force_inning
                game.current_inning_half = req.force_half
                game.outs = 0
            else:
                _advance(game)
            game.save()

        log.info("inning_advanced", game_id=game.id, inning=game.current_inning, half=game.current_inning_half)
        return _result('advance', game, previous)

    @staticmethod
    async def end_game(game_id: int, user: User, req: EndGameReq) -> ScoringActionResp:
        game = load_game_for_scoring(game_id, user)

        if req.status == 'final':
            reason = can_end(game.status)
            if reason:
                raise BadRequestError(reason)
        elif not can_transition(game.status, req.status):
            raise BadRequestError(f"Cannot change game status from '{game.status}' to '{req.status}'")

        previous = game_state(game)

        with db.atomic():
            game.status = req.status
            game.ended_at = utcnow()
            if req.notes:
                game.notes = req.notes
            game.save()
            if game.status == 'final':
                refresh_team_records([game.home_team_id, game.away_team_id])

        log.info("game_ended", game_id=game.id, status=game.status, home_score=game.home_score, away_score=game.away_score)
        return _result('end', game, previous)

    @staticmethod
    async def update_state(game_id: int, req: UpdateGameStateReq) -> ScoringActionResp:
        game = Game.get_or_none(Game.id == game_id)
        if game is None:
            raise NotFoundError("Game", game_id)

        previous = game_state(game)
        changes = req.model_dump(exclude_unset=True)

        with db.atomic():
            for field in ('current_inning', 'current_inning_half', 'outs', 'home_score', 'away_score', 'notes'):
                if field in changes:
                    setattr(game, field, changes[field])
            # Inning lines win over explicit totals
            if req.home_inning_scores is not None:
                game.home_inning_scores = list(req.home_inning_scores)
                game.home_score = sum(req.home_inning_scores)
            if req.away_inning_scores is not None:
                game.away_inning_scores = list(req.away_inning_scores)
                game.away_score = sum(req.away_inning_scores)
            game.save()
            if game.status == 'final':
                refresh_team_records([game.home_team_id, game.away_team_id])

        log.info("game_state_corrected", game_id=game.id, fields=sorted(changes))
        return _result('update', game, previous)
