"""
Back-office game management: scheduling, corrections, cancellation and
postponement.
"""

from typing import Dict, List, Optional

from core.errors import BadRequestError, NotFoundError, ValidationFailedError
from core.logging import get_logger
from db.base import db
from db.models import BattingStats, Game, PitchingStats, Season, Team
from schemas.common import PageParams
from schemas.game import (
    AdminGameCreateReq,
    AdminGameListResp,
    AdminGameOut,
    AdminGameResp,
    AdminGameUpdateReq,
    GameActionOut,
    GameActionResp,
    GameCreateIn,
    GameResp,
    GameSeriesOut,
    GameSeriesResp,
)
from services.game_service import GameFilters, filtered_games
from services.game_status import POSTPONABLE_STATUSES, can_transition
from services.standings_service import refresh_team_records
from services.views import game_out
from utils.dates import LEAGUE_TIMEZONE, iso, parse_date, parse_time, utcnow

log = get_logger("admin_games")

STATS_STATUSES = ('complete', 'partial', 'missing')


def stats_statuses(games: List[Game]) -> Dict[int, str]:
    """Map game id to complete/partial/missing based on which sides have box score lines."""
    game_ids = [g.id for g in games]
    if not game_ids:
        return {}

    batting = set(
        BattingStats.select(BattingStats.game, BattingStats.team)
        .where(BattingStats.game.in_(game_ids))
        .distinct()
        .tuples()
    )
    pitching = set(
        PitchingStats.select(PitchingStats.game, PitchingStats.team)
        .where(PitchingStats.game.in_(game_ids))
        .distinct()
        .tuples()
    )

    result = {}
    for game in games:
        sides = [(game.id, game.home_team_id), (game.id, game.away_team_id)]
        present = [side in batting for side in sides] + [side in pitching for side in sides]
        if all(present):
            result[game.id] = 'complete'
        elif any(present):
            result[game.id] = 'partial'
        else:
            result[game.id] = 'missing'
    return result


def _admin_out(game: Game, stats_status: str) -> AdminGameOut:
    return AdminGameOut(**game_out(game).model_dump(), stats_status=stats_status)


def _game_errors(game: GameCreateIn) -> Dict[str, List[str]]:
    errors = {}
    if not game.home_team_id:
        errors['homeTeamId'] = ["Home team is required"]
    if not game.away_team_id:
        errors['awayTeamId'] = ["Away team is required"]
    elif game.home_team_id == game.away_team_id:
        errors['awayTeamId'] = ["Home and away teams must be different"]

    if not game.game_date:
        errors['gameDate'] = ["Game date is required"]
    else:
        try:
            parse_date(game.game_date)
        except ValueError:
            errors['gameDate'] = ["Game date must be in YYYY-MM-DD format"]

    if not game.game_time:
        errors['gameTime'] = ["Game time is required"]
    else:
        try:
            parse_time(game.game_time)
        except ValueError:
            errors['gameTime'] = ["Game time must be in HH:MM format"]
    return errors


def _create_game(data: GameCreateIn) -> Game:
    home = Team.get_or_none(Team.id == data.home_team_id)
    if home is None:
        raise BadRequestError(f"Home team with ID '{data.home_team_id}' not found")
    away = Team.get_or_none(Team.id == data.away_team_id)
    if away is None:
        raise BadRequestError(f"Away team with ID '{data.away_team_id}' not found")

    season_id = data.season_id
    if season_id is None:
        season = Season.get_active()
        season_id = season.id if season else home.season_id
    elif Season.get_or_none(Season.id == season_id) is None:
        raise BadRequestError(f"Season with ID '{season_id}' not found")

    return Game.create(
        season=season_id,
        game_number=data.game_number,
        home_team=home,
        away_team=away,
        game_date=parse_date(data.game_date),
        game_time=parse_time(data.game_time),
        timezone=data.timezone or LEAGUE_TIMEZONE,
        location_name=data.location_name or None,
        location_address=data.location_address or None,
        notes=data.notes or None,
    )


def _append_note(notes: Optional[str], entry: str) -> str:
    return f"{notes or ''}\n{entry}".strip()


class AdminGameService:

    @staticmethod
    async def list_games(filters: GameFilters, page: PageParams, stats_status: Optional[str] = None) -> AdminGameListResp:
        query = filtered_games(filters)

        if stats_status is not None:
            if stats_status not in STATS_STATUSES:
                raise ValidationFailedError({'statsStatus': [f"Stats status must be one of: {', '.join(STATS_STATUSES)}"]})
            games = list(query)
            statuses = stats_statuses(games)
            games = [g for g in games if statuses[g.id] == stats_status]
            total = len(games)
            games = games[page.offset:page.offset + page.page_size]
        else:
            total = query.count()
            games = list(page.paginate(query))
            statuses = stats_statuses(games)

        return AdminGameListResp(
            data=[_admin_out(game, statuses[game.id]) for game in games],
            pagination=page.pagination(total),
        )

    @staticmethod
    async def get_game(game_id: int) -> AdminGameResp:
        game = Game.get_or_none(Game.id == game_id)
        if game is None:
            raise NotFoundError("Game", game_id)
        return AdminGameResp(data=_admin_out(game, stats_statuses([game])[game.id]))

    @staticmethod
    async def create_games(req: AdminGameCreateReq):
        if req.games is not None:
            errors = {}
            for index, game in enumerate(req.games, start=1):
                game_errors = _game_errors(game)
                if game_errors:
                    errors[f"game{index}"] = [msg for messages in game_errors.values() for msg in messages]
            if errors:
                raise ValidationFailedError(errors)
            if not req.games:
                raise BadRequestError("At least one game is required")

            with db.atomic():
                created = [_create_game(game) for game in req.games]
            log.info("game_series_created", count=len(created), game_ids=[g.id for g in created])
            return GameSeriesResp(data=GameSeriesOut(
                message=f"Created {len(created)} games",
                games=[game_out(g) for g in created],
            ))

        errors = _game_errors(req)
        if errors:
            raise ValidationFailedError(errors)

        with db.atomic():
            game = _create_game(req)
        log.info("game_created", game_id=game.id, home_team_id=game.home_team_id, away_team_id=game.away_team_id)
        return GameResp(data=game_out(game))

    @staticmethod
    async def update_game(game_id: int, req: AdminGameUpdateReq) -> AdminGameResp:
        game = Game.get_or_none(Game.id == game_id)
        if game is None:
            raise NotFoundError("Game", game_id)

        changes = req.model_dump(exclude_unset=True)
        errors = {}

        home_id = changes.get('home_team_id') or game.home_team_id
        away_id = changes.get('away_team_id') or game.away_team_id
        if home_id == away_id:
            errors['awayTeamId'] = ["Home and away teams must be different"]

        status = changes.get('status')
        if status and status != game.status and not can_transition(game.status, status):
            errors['status'] = [f"Cannot change game status from '{game.status}' to '{status}'"]

        for field, label, parser in (('game_date', 'gameDate', parse_date), ('game_time', 'gameTime', parse_time)):
            if changes.get(field):
                try:
                    changes[field] = parser(changes[field])
                except ValueError:
                    errors[label] = [f"Invalid {'date' if field == 'game_date' else 'time'} format"]

        if errors:
            raise ValidationFailedError(errors)

        for field in ('home_team_id', 'away_team_id'):
            if changes.get(field) and Team.get_or_none(Team.id == changes[field]) is None:
                raise BadRequestError(f"Team with ID '{changes[field]}' not found")

        was_final = game.status == 'final'
        previous_teams = {game.home_team_id, game.away_team_id}

        with db.atomic():
            for field, value in changes.items():
                if field in ('home_team_id', 'away_team_id', 'game_date', 'game_time', 'status') and not value:
                    continue
                setattr(game, field, value)
            if status == 'final' and not was_final:
                game.ended_at = game.ended_at or utcnow()
            if status == 'in_progress' and not game.started_at:
                game.started_at = utcnow()
            game.save()

            if was_final or game.status == 'final':
                refresh_team_records(previous_teams | {game.home_team_id, game.away_team_id})

        log.info("game_updated", game_id=game.id, fields=sorted(changes))
        game = Game.get_by_id(game.id)
        return AdminGameResp(data=_admin_out(game, stats_statuses([game])[game.id]))

    @staticmethod
    async def delete_game(game_id: int) -> None:
        game = Game.get_or_none(Game.id == game_id)
        if game is None:
            raise NotFoundError("Game", game_id)

        if game.status in ('in_progress', 'final'):
            raise BadRequestError(
                "Cannot delete a game that is in progress or has been completed. Consider cancelling instead."
            )

        game.delete_instance(recursive=True)
        log.info("game_deleted", game_id=game_id)

    @staticmethod
    async def cancel_game(game_id: int, reason: Optional[str] = None) -> GameActionResp:
        game = Game.get_or_none(Game.id == game_id)
        if game is None:
            raise NotFoundError("Game", game_id)

        if game.status == 'final':
            raise BadRequestError("Cannot cancel a completed game. The game has already been marked as final.")
        if game.status == 'in_progress':
            raise BadRequestError(
                "Cannot cancel a game in progress. Please suspend the game first, then cancel if needed."
            )
        if game.status == 'cancelled':
            raise BadRequestError("Game is already cancelled")

        stamp = iso(utcnow())
        entry = f"[{stamp}] Cancelled: {reason}" if reason else f"[{stamp}] Game cancelled"

        game.status = 'cancelled'
        game.notes = _append_note(game.notes, entry)
        game.save()

        log.info("game_cancelled", game_id=game.id, reason=reason)
        return GameActionResp(data=GameActionOut(
            game=game_out(game),
            action='cancelled',
            message='Game has been cancelled',
        ))

    @staticmethod
    async def postpone_game(game_id: int, reason: Optional[str] = None, reschedule_date=None,
                            reschedule_time: Optional[str] = None) -> GameActionResp:
        game = Game.get_or_none(Game.id == game_id)
        if game is None:
            raise NotFoundError("Game", game_id)

        if game.status not in POSTPONABLE_STATUSES:
            raise BadRequestError(
                f'Cannot postpone a game with status "{game.status}". '
                'Only scheduled, warmup, or suspended games can be postponed.'
            )

        stamp = iso(utcnow())
        entry = f"[{stamp}] Postponed: {reason}" if reason else f"[{stamp}] Game postponed"

        if reschedule_date is not None:
            entry += f" - Rescheduled to {reschedule_date.isoformat()}"
            if reschedule_time:
                entry += f" at {reschedule_time}"
            entry = entry.replace("Postponed:", "Rescheduled from postponement:", 1)

            game.game_date = reschedule_date
            if reschedule_time:
                game.game_time = parse_time(reschedule_time)
            game.status = 'scheduled'
            action = 'rescheduled'
            message = f"Game has been rescheduled to {reschedule_date.isoformat()}"
        else:
            game.status = 'postponed'
            action = 'postponed'
            message = 'Game has been postponed'

        game.notes = _append_note(game.notes, entry)
        game.save()

        log.info("game_postponed", game_id=game.id, action=action, reason=reason)
        return GameActionResp(data=GameActionOut(game=game_out(game), action=action, message=message))
