from dataclasses import dataclass, field
from typing import List, Optional

from core.errors import NotFoundError, ValidationFailedError
from db.models import Game, Team
from schemas.common import PageParams, parse_list
from schemas.game import GameListResp, GameResp, LiveGamesOut, LiveGamesResp
from services.views import game_out
from utils.constants import GAME_STATUSES
from utils.dates import parse_date, utcnow

GAME_SORTS = ('date', 'status')


@dataclass
class GameFilters:
    season_id: Optional[int] = None
    team_id: Optional[int] = None
    statuses: List[str] = field(default_factory=list)
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    sort_by: str = 'date'
    sort_dir: str = 'asc'

    @classmethod
    def from_query(cls, season_id=None, team_id=None, status=None, start_date=None, end_date=None,
                   sort_by=None, sort_dir=None) -> "GameFilters":
        return cls(
            season_id=season_id,
            team_id=team_id,
            statuses=parse_list(status),
            start_date=start_date or None,
            end_date=end_date or None,
            sort_by=sort_by if sort_by in GAME_SORTS else 'date',
            sort_dir='desc' if (sort_dir or '').lower() == 'desc' else 'asc',
        )


def filtered_games(filters: GameFilters):
    """Build the game query for a set of filters, raising 422 on bad dates or statuses."""
    errors = {}

    bad_statuses = [s for s in filters.statuses if s not in GAME_STATUSES]
    if bad_statuses:
        errors['status'] = [f"Invalid status: {', '.join(bad_statuses)}"]

    start = end = None
    for name, raw in (('startDate', filters.start_date), ('endDate', filters.end_date)):
        if raw is None:
            continue
        try:
            parsed = parse_date(raw)
        except ValueError:
            errors[name] = ["Date must be in YYYY-MM-DD format"]
            continue
        if name == 'startDate':
            start = parsed
        else:
            end = parsed
    if start and end and start > end:
        errors['startDate'] = ["Start date must be before or equal to end date"]

    if errors:
        raise ValidationFailedError(errors)

    HomeTeam = Team.alias()
    AwayTeam = Team.alias()
    query = (
        Game.select(Game, HomeTeam, AwayTeam)
        .join(HomeTeam, on=(Game.home_team == HomeTeam.id), attr='home_team')
        .switch(Game)
        .join(AwayTeam, on=(Game.away_team == AwayTeam.id), attr='away_team')
    )

    if filters.season_id is not None:
        query = query.where(Game.season == filters.season_id)
    if filters.team_id is not None:
        query = query.where((Game.home_team == filters.team_id) | (Game.away_team == filters.team_id))
    if filters.statuses:
        query = query.where(Game.status.in_(filters.statuses))
    if start:
        query = query.where(Game.game_date >= start)
    if end:
        query = query.where(Game.game_date <= end)

    if filters.sort_by == 'status':
        order = [Game.status, Game.game_date, Game.game_time]
    else:
        order = [Game.game_date, Game.game_time]
    if filters.sort_dir == 'desc':
        order = [column.desc() for column in order]
    return query.order_by(*order, Game.id)


class GameService:

    @staticmethod
    async def list_games(filters: GameFilters, page: PageParams) -> GameListResp:
        query = filtered_games(filters)
        total = query.count()
        games = [game_out(game) for game in page.paginate(query)]
        return GameListResp(data=games, pagination=page.pagination(total))

    @staticmethod
    async def live_games() -> LiveGamesResp:
        query = filtered_games(GameFilters(statuses=['in_progress']))
        games = [game_out(game) for game in query]
        return LiveGamesResp(data=LiveGamesOut(games=games, count=len(games), timestamp=utcnow()))

    @staticmethod
    async def get_game(game_id: int) -> GameResp:
        game = Game.get_or_none(Game.id == game_id)
        if game is None:
            raise NotFoundError("Game", game_id)
        return GameResp(data=game_out(game))
