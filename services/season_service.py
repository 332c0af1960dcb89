from collections import OrderedDict
from typing import Optional

from core.errors import BadRequestError, NotFoundError, ValidationFailedError
from core.logging import get_logger
from db.base import db
from db.models import Game, Player, Season, Team
from schemas.common import PageParams
from schemas.season import (
    MonthOverviewOut,
    SeasonCreateReq,
    SeasonDetailOut,
    SeasonDetailResp,
    SeasonListResp,
    SeasonOut,
    SeasonResp,
    SeasonStatsOut,
    SeasonTeamOut,
    SeasonUpdateReq,
)
from utils.sanitize import sanitize_string

log = get_logger("seasons")


def _get_season(season_id: int) -> Season:
    season = Season.get_or_none(Season.id == season_id)
    if season is None:
        raise NotFoundError("Season", season_id)
    return season


def _deactivate_others(season_id: int) -> None:
    Season.update(is_active=False).where((Season.id != season_id) & (Season.is_active == True)).execute()  # noqa: E712


def season_detail(season: Season) -> SeasonDetailOut:
    games = list(Game.select(Game.game_date, Game.status).where(Game.season == season.id).order_by(Game.game_date))
    teams = list(Team.select().where(Team.season == season.id).order_by(Team.name))
    players_count = (
        Player.select()
        .where((Player.season == season.id) & (Player.is_active == True))  # noqa: E712
        .count()
    )

    months = OrderedDict()
    for game in games:
        key = game.game_date.strftime("%Y-%m")
        entry = months.setdefault(key, {'games_count': 0, 'completed_count': 0})
        entry['games_count'] += 1
        if game.status == 'final':
            entry['completed_count'] += 1

    stats = SeasonStatsOut(
        games_played=sum(1 for g in games if g.status == 'final'),
        games_scheduled=sum(1 for g in games if g.status in ('scheduled', 'warmup')),
        teams_count=len(teams),
        players_count=players_count,
    )
    return SeasonDetailOut(
        **SeasonOut.model_validate(season).model_dump(),
        stats=stats,
        teams=[SeasonTeamOut.model_validate(t) for t in teams],
        schedule_overview=[MonthOverviewOut(month=k, **v) for k, v in months.items()],
    )


class SeasonService:

    @staticmethod
    async def list_seasons(page: PageParams, year: Optional[int] = None, active_only: bool = False) -> SeasonListResp:
        query = Season.select()
        if year is not None:
            query = query.where(Season.year == year)
        if active_only:
            query = query.where(Season.is_active == True)  # noqa: E712
        query = query.order_by(Season.year.desc(), Season.start_date.desc())

        total = query.count()
        return SeasonListResp(
            data=[SeasonOut.model_validate(s) for s in page.paginate(query)],
            pagination=page.pagination(total),
        )

    @staticmethod
    async def get_active() -> SeasonResp:
        season = Season.get_active()
        if season is None:
            raise NotFoundError("Active season")
        return SeasonResp(data=SeasonOut.model_validate(season))

    @staticmethod
    async def get_season(season_id: int) -> SeasonDetailResp:
        return SeasonDetailResp(data=season_detail(_get_season(season_id)))

    @staticmethod
    async def create_season(req: SeasonCreateReq) -> SeasonResp:
        name = sanitize_string(req.name)
        if not name:
            raise ValidationFailedError({'name': ["Season name is required"]})

        with db.atomic():
            season = Season.create(
                name=name,
                year=req.year,
                start_date=req.start_date,
                end_date=req.end_date,
                is_active=req.is_active,
                registration_open=req.registration_open,
            )
            if season.is_active:
                _deactivate_others(season.id)

        log.info("season_created", season_id=season.id, year=season.year, active=season.is_active)
        return SeasonResp(data=SeasonOut.model_validate(season))

    @staticmethod
    async def update_season(season_id: int, req: SeasonUpdateReq) -> SeasonResp:
        season = _get_season(season_id)
        changes = req.model_dump(exclude_unset=True, exclude_none=True)

        start = changes.get('start_date', season.start_date)
        end = changes.get('end_date', season.end_date)
        if end <= start:
            raise ValidationFailedError({'endDate': ["End date must be after start date"]})
        if 'name' in changes:
            changes['name'] = sanitize_string(changes['name'])

        with db.atomic():
            for field, value in changes.items():
                setattr(season, field, value)
            season.save()
            if season.is_active:
                _deactivate_others(season.id)

        log.info("season_updated", season_id=season.id, fields=sorted(changes))
        return SeasonResp(data=SeasonOut.model_validate(season))

    @staticmethod
    async def activate_season(season_id: int) -> SeasonResp:
        season = _get_season(season_id)

        with db.atomic():
            _deactivate_others(season.id)
            season.is_active = True
            season.save()

        log.info("season_activated", season_id=season.id)
        return SeasonResp(data=SeasonOut.model_validate(season))

    @staticmethod
    async def delete_season(season_id: int) -> None:
        season = _get_season(season_id)

        if season.is_active:
            raise BadRequestError("Cannot delete an active season. Deactivate it first.")
        games = Game.select().where(Game.season == season.id).count()
        if games:
            raise BadRequestError(f"Cannot delete season with {games} game(s). Remove its games first.")

        season.delete_instance(recursive=True)
        log.info("season_deleted", season_id=season_id)
