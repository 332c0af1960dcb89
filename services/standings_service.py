from typing import Iterable, Optional

from core.errors import NotFoundError
from core.logging import get_logger
from db.base import db
from db.models import Game, Season, Team
from schemas.standings import StandingsOut, StandingsResp, StandingsRow
from utils.dates import utcnow

log = get_logger("standings")


def win_pct(wins: int, games_played: int) -> float:
    if not games_played:
        return 0.0
    return round(wins / games_played, 3)


def standings_sort_key(row: StandingsRow):
    return (-row.win_pct, -row.wins, -row.run_differential)


def games_behind(leader: StandingsRow, row: StandingsRow) -> float:
    return ((leader.wins - row.wins) + (row.losses - leader.losses)) / 2


def refresh_team_records(team_ids: Iterable[int]) -> None:
    """Recompute wins, losses, ties and run totals for each team from its final games."""
    for team_id in set(team_ids):
        team = Team.get_or_none(Team.id == team_id)
        if team is None:
            continue

        wins = losses = ties = scored = allowed = 0
        finals = Game.select().where(
            (Game.status == 'final') & ((Game.home_team == team_id) | (Game.away_team == team_id))
        )
        for game in finals:
            if game.home_team_id == team_id:
                ours, theirs = game.home_score, game.away_score
            else:
                ours, theirs = game.away_score, game.home_score
            scored += ours
            allowed += theirs
            if ours > theirs:
                wins += 1
            elif ours < theirs:
                losses += 1
            else:
                ties += 1

        with db.atomic():
            team.wins, team.losses, team.ties = wins, losses, ties
            team.runs_scored, team.runs_allowed = scored, allowed
            team.save()
        log.info("team_record_refreshed", team_id=team_id, wins=wins, losses=losses, ties=ties)


class StandingsService:

    @staticmethod
    async def get_standings(season_id: Optional[int] = None) -> StandingsResp:
        if season_id is not None:
            season = Season.get_or_none(Season.id == season_id)
            if season is None:
                raise NotFoundError("Season", season_id)
        else:
            season = Season.get_active()

        if season is None:
            return StandingsResp(data=StandingsOut(standings=[], as_of=utcnow()))

        teams = Team.select().where((Team.season == season.id) & (Team.is_active == True))  # noqa: E712

        rows = []
        for team in teams:
            played = team.games_played
            rows.append(StandingsRow(
                rank=0,
                team_id=team.id,
                team_name=team.name,
                abbreviation=team.abbreviation,
                primary_color=team.primary_color,
                wins=team.wins,
                losses=team.losses,
                ties=team.ties,
                games_played=played,
                win_pct=win_pct(team.wins, played),
                runs_scored=team.runs_scored,
                runs_allowed=team.runs_allowed,
                run_differential=team.runs_scored - team.runs_allowed,
                games_behind=0.0,
            ))

        rows.sort(key=standings_sort_key)
        if rows:
            leader = rows[0]
            for rank, row in enumerate(rows, start=1):
                row.rank = rank
                row.games_behind = games_behind(leader, row)

        return StandingsResp(data=StandingsOut(
            standings=rows,
            season_id=season.id,
            season_name=season.name,
            as_of=utcnow(),
        ))
