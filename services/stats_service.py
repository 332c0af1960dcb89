"""
Season batting and pitching aggregates built from per-game box score lines.

Innings pitched are stored in baseball notation (6.2 is six and two-thirds),
so they are converted to outs before being summed.
"""

from collections import OrderedDict
from decimal import Decimal
from typing import Callable, Dict, List, Optional

from core.errors import ValidationFailedError
from db.models import BattingStats, Game, PitchingStats, Player, Season, Team, User
from schemas.common import PageParams
from schemas.stats import (
    BattingLeadersOut,
    BattingLeadersResp,
    BattingRow,
    BattingStatsResp,
    LeaderEntry,
    PitchingLeadersOut,
    PitchingLeadersResp,
    PitchingRow,
    PitchingStatsResp,
)
from utils.constants import BATTING_MIN_AB, LEADERBOARD_SIZE, PITCHING_MIN_IP

BATTING_SORTS = {
    'avg': 'avg',
    'homeRuns': 'home_runs',
    'rbi': 'rbi',
    'hits': 'hits',
    'runs': 'runs',
    'stolenBases': 'stolen_bases',
    'ops': 'ops',
}
PITCHING_SORTS = {
    'era': 'era',
    'whip': 'whip',
    'wins': 'wins',
    'strikeouts': 'strikeouts',
    'saves': 'saves',
}
ASCENDING_PITCHING_SORTS = ('era', 'whip')


def innings_to_outs(innings) -> int:
    """6.2 innings -> 20 outs."""
    value = Decimal(str(innings or 0))
    whole = int(value)
    thirds = int((value - whole) * 10)
    return whole * 3 + thirds


def outs_to_innings(outs: int) -> float:
    """20 outs -> 6.2 innings."""
    return float(f"{outs // 3}.{outs % 3}")


def _rate(numerator: float, denominator: float, places: int = 3) -> float:
    if not denominator:
        return 0.0
    return round(numerator / denominator, places)


def _resolve_season(season_id: Optional[int]) -> Optional[int]:
    if season_id is not None:
        return season_id
    season = Season.get_active()
    return season.id if season else None


def _stat_rows(model, season_id: Optional[int], team_id: Optional[int]):
    query = (
        model.select(model, Player, User, Team)
        .join(Player, on=(model.player == Player.id))
        .join(User, on=(Player.user == User.id))
        .switch(model)
        .join(Team, on=(model.team == Team.id))
        .switch(model)
        .join(Game, on=(model.game == Game.id))
    )
    if season_id is not None:
        query = query.where(Game.season == season_id)
    if team_id is not None:
        query = query.where(model.team == team_id)
    return query


def _identity(row) -> dict:
    return {
        'player_id': row.player_id,
        'player_name': row.player.user.full_name,
        'team_id': row.team_id,
        'team_name': row.team.name,
        'team_abbr': row.team.abbreviation,
    }


def aggregate_batting(rows) -> List[BattingRow]:
    totals: Dict[int, dict] = OrderedDict()
    counted = ('plate_appearances', 'at_bats', 'runs', 'hits', 'doubles', 'triples', 'home_runs',
               'walks', 'strikeouts', 'stolen_bases', 'caught_stealing', 'hit_by_pitch', 'sacrifice_flies')

    for row in rows:
        entry = totals.get(row.player_id)
        if entry is None:
            entry = totals[row.player_id] = {**_identity(row), 'games': set(), 'rbi': 0, **{f: 0 for f in counted}}
        entry['games'].add(row.game_id)
        entry['rbi'] += row.rbis
        for f in counted:
            entry[f] += getattr(row, f)

    result = []
    for entry in totals.values():
        ab, h = entry['at_bats'], entry['hits']
        singles = h - entry['doubles'] - entry['triples'] - entry['home_runs']
        total_bases = singles + 2 * entry['doubles'] + 3 * entry['triples'] + 4 * entry['home_runs']
        on_base = h + entry['walks'] + entry['hit_by_pitch']
        obp_denominator = ab + entry['walks'] + entry['hit_by_pitch'] + entry['sacrifice_flies']

        avg = _rate(h, ab)
        obp = _rate(on_base, obp_denominator)
        slg = _rate(total_bases, ab)
        result.append(BattingRow(
            **{k: v for k, v in entry.items() if k != 'games'},
            games=len(entry['games']),
            avg=avg,
            obp=obp,
            slg=slg,
            ops=round(obp + slg, 3),
        ))
    return result


def aggregate_pitching(rows) -> List[PitchingRow]:
    totals: Dict[int, dict] = OrderedDict()
    counted = ('hits_allowed', 'runs_allowed', 'earned_runs', 'walks_allowed', 'strikeouts', 'home_runs_allowed')
    decisions = {'W': 'wins', 'L': 'losses', 'S': 'saves'}

    for row in rows:
        entry = totals.get(row.player_id)
        if entry is None:
            entry = totals[row.player_id] = {
                **_identity(row), 'games': set(), 'outs': 0, 'wins': 0, 'losses': 0, 'saves': 0,
                **{f: 0 for f in counted},
            }
        entry['games'].add(row.game_id)
        entry['outs'] += innings_to_outs(row.innings_pitched)
        if row.decision in decisions:
            entry[decisions[row.decision]] += 1
        for f in counted:
            entry[f] += getattr(row, f)

    result = []
    for entry in totals.values():
        outs = entry.pop('outs')
        innings = outs / 3
        result.append(PitchingRow(
            **{k: v for k, v in entry.items() if k != 'games'},
            games=len(entry['games']),
            innings_pitched=outs_to_innings(outs),
            era=_rate(entry['earned_runs'] * 9, innings, 2),
            whip=_rate(entry['walks_allowed'] + entry['hits_allowed'], innings, 2),
            k_per9=_rate(entry['strikeouts'] * 9, innings, 2),
        ))
    return result


def leaderboard(rows: list, value: Callable, ascending: bool = False, size: int = LEADERBOARD_SIZE) -> List[LeaderEntry]:
    ordered = sorted(rows, key=lambda r: (value(r) if ascending else -value(r), r.player_name))[:size]
    return [
        LeaderEntry(
            rank=rank,
            player_id=row.player_id,
            player_name=row.player_name,
            team_id=row.team_id,
            team_abbr=row.team_abbr,
            value=value(row),
        )
        for rank, row in enumerate(ordered, start=1)
    ]


def _check_minimum(name: str, value: Optional[float]) -> None:
    if value is not None and value < 0:
        raise ValidationFailedError({name: [f"{name} must be a non-negative number"]})


class StatsService:

    @staticmethod
    async def batting(page: PageParams, season_id: Optional[int] = None, team_id: Optional[int] = None,
                      min_at_bats: Optional[int] = None, sort_by: str = 'avg') -> BattingStatsResp:
        _check_minimum('minAtBats', min_at_bats)
        rows = aggregate_batting(_stat_rows(BattingStats, _resolve_season(season_id), team_id))
        if min_at_bats:
            rows = [r for r in rows if r.at_bats >= min_at_bats]

        attr = BATTING_SORTS.get(sort_by, 'avg')
        rows.sort(key=lambda r: (-getattr(r, attr), r.player_name))
        return BattingStatsResp(
            data=rows[page.offset:page.offset + page.page_size],
            pagination=page.pagination(len(rows)),
        )

    @staticmethod
    async def batting_leaders(season_id: Optional[int] = None, min_at_bats: Optional[int] = None) -> BattingLeadersResp:
        _check_minimum('minAtBats', min_at_bats)
        qualifier = BATTING_MIN_AB if min_at_bats is None else min_at_bats
        rows = aggregate_batting(_stat_rows(BattingStats, _resolve_season(season_id), None))
        qualified = [r for r in rows if r.at_bats >= qualifier]

        return BattingLeadersResp(data=BattingLeadersOut(
            avg=leaderboard(qualified, lambda r: r.avg),
            home_runs=leaderboard(rows, lambda r: r.home_runs),
            rbi=leaderboard(rows, lambda r: r.rbi),
            hits=leaderboard(rows, lambda r: r.hits),
            stolen_bases=leaderboard(rows, lambda r: r.stolen_bases),
        ))

    @staticmethod
    async def pitching(page: PageParams, season_id: Optional[int] = None, team_id: Optional[int] = None,
                       min_innings_pitched: Optional[float] = None, sort_by: str = 'era') -> PitchingStatsResp:
        _check_minimum('minInningsPitched', min_innings_pitched)
        rows = aggregate_pitching(_stat_rows(PitchingStats, _resolve_season(season_id), team_id))
        if min_innings_pitched:
            min_outs = innings_to_outs(min_innings_pitched)
            rows = [r for r in rows if innings_to_outs(r.innings_pitched) >= min_outs]

        attr = PITCHING_SORTS.get(sort_by, 'era')
        if attr in ASCENDING_PITCHING_SORTS:
            # Pitchers without an out recorded sort last
            rows.sort(key=lambda r: (r.innings_pitched == 0, getattr(r, attr), r.player_name))
        else:
            rows.sort(key=lambda r: (-getattr(r, attr), r.player_name))
        return PitchingStatsResp(
            data=rows[page.offset:page.offset + page.page_size],
            pagination=page.pagination(len(rows)),
        )

    @staticmethod
    async def pitching_leaders(season_id: Optional[int] = None,
                               min_innings_pitched: Optional[float] = None) -> PitchingLeadersResp:
        _check_minimum('minInningsPitched', min_innings_pitched)
        qualifier = innings_to_outs(PITCHING_MIN_IP if min_innings_pitched is None else min_innings_pitched)
        rows = aggregate_pitching(_stat_rows(PitchingStats, _resolve_season(season_id), None))
        qualified = [r for r in rows if r.innings_pitched > 0 and innings_to_outs(r.innings_pitched) >= qualifier]

        return PitchingLeadersResp(data=PitchingLeadersOut(
            era=leaderboard(qualified, lambda r: r.era, ascending=True),
            wins=leaderboard(rows, lambda r: r.wins),
            strikeouts=leaderboard(rows, lambda r: r.strikeouts),
            saves=leaderboard(rows, lambda r: r.saves),
            whip=leaderboard(qualified, lambda r: r.whip, ascending=True),
        ))
