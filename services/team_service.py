from typing import Dict, Optional

from peewee import fn

from core.errors import BadRequestError, NotFoundError
from core.logging import get_logger
from db.models import Player, Season, Team, User
from schemas.team import (
    AdminTeamListResp,
    AdminTeamOut,
    AdminTeamResp,
    RosterEntryOut,
    RosterOut,
    RosterResp,
    TeamCreateReq,
    TeamDetailOut,
    TeamDetailResp,
    TeamListResp,
    TeamOut,
    TeamUpdateReq,
)
from services.standings_service import win_pct
from services.views import author_out, team_summary
from utils.sanitize import sanitize_string

log = get_logger("teams")


def get_team(team_id: int) -> Team:
    team = Team.get_or_none(Team.id == team_id)
    if team is None:
        raise NotFoundError("Team", team_id)
    return team


def team_out(team: Team) -> TeamOut:
    return TeamOut.model_validate({**team.__data__, 'games_played': team.games_played})


def _filtered(season_id: Optional[int], active: Optional[bool]):
    query = Team.select()
    if season_id is not None:
        query = query.where(Team.season == season_id)
    if active is not None:
        query = query.where(Team.is_active == active)
    return query.order_by(Team.name)


def _roster_counts(team_ids) -> Dict[int, int]:
    if not team_ids:
        return {}
    rows = (
        Player.select(Player.team, fn.COUNT(Player.id).alias('n'))
        .where((Player.team.in_(team_ids)) & (Player.is_active == True))  # noqa: E712
        .group_by(Player.team)
        .tuples()
    )
    return {team_id: count for team_id, count in rows}


def admin_team_out(team: Team, roster_count: int) -> AdminTeamOut:
    return AdminTeamOut(
        **team_out(team).model_dump(),
        manager=author_out(team.manager) if team.manager_id else None,
        roster_count=roster_count,
    )


def _check_manager(manager_id: Optional[int]) -> None:
    if manager_id is not None and User.get_or_none(User.id == manager_id) is None:
        raise BadRequestError("Manager not found")


def _check_unique_name(season_id: int, name: str, exclude_id: Optional[int] = None) -> None:
    query = Team.select().where((Team.season == season_id) & (fn.LOWER(Team.name) == name.lower()))
    if exclude_id is not None:
        query = query.where(Team.id != exclude_id)
    if query.exists():
        raise BadRequestError("A team with this name already exists")


def _jersey_sort_key(entry: RosterEntryOut):
    # Numeric jerseys first, in numeric order
    number = entry.jersey_number or ""
    return (0, int(number), "") if number.isdigit() else (1, 0, number)


class TeamService:

    @staticmethod
    async def list_teams(season_id: Optional[int] = None, active: Optional[bool] = None) -> TeamListResp:
        return TeamListResp(data=[team_out(t) for t in _filtered(season_id, active)])

    @staticmethod
    async def get_team(team_id: int) -> TeamDetailResp:
        team = get_team(team_id)
        return TeamDetailResp(data=TeamDetailOut(
            **team_out(team).model_dump(),
            manager=author_out(team.manager) if team.manager_id else None,
            run_differential=team.runs_scored - team.runs_allowed,
            win_pct=win_pct(team.wins, team.games_played),
        ))

    @staticmethod
    async def get_roster(team_id: int) -> RosterResp:
        team = get_team(team_id)
        players = (
            Player.select(Player, User)
            .join(User)
            .where((Player.team == team.id) & (Player.is_active == True))  # noqa: E712
        )
        entries = sorted(
            (
                RosterEntryOut(
                    player_id=p.id,
                    user_id=p.user_id,
                    full_name=p.user.full_name,
                    avatar_url=p.user.avatar_url,
                    jersey_number=p.jersey_number,
                    primary_position=p.primary_position,
                    secondary_position=p.secondary_position,
                    bats=p.bats,
                    throws=p.throws,
                    is_captain=p.is_captain,
                    joined_at=p.joined_at,
                )
                for p in players
            ),
            key=_jersey_sort_key,
        )
        return RosterResp(data=RosterOut(team=team_summary(team), players=entries, count=len(entries)))


class AdminTeamService:

    @staticmethod
    async def list_teams(season_id: Optional[int] = None, active: Optional[bool] = None) -> AdminTeamListResp:
        teams = list(_filtered(season_id, active))
        counts = _roster_counts([t.id for t in teams])
        return AdminTeamListResp(data=[admin_team_out(t, counts.get(t.id, 0)) for t in teams])

    @staticmethod
    async def get_team(team_id: int) -> AdminTeamResp:
        team = get_team(team_id)
        return AdminTeamResp(data=admin_team_out(team, _roster_counts([team.id]).get(team.id, 0)))

    @staticmethod
    async def create_team(req: TeamCreateReq) -> AdminTeamResp:
        if req.season_id is not None:
            season = Season.get_or_none(Season.id == req.season_id)
            if season is None:
                raise BadRequestError("Season not found")
        else:
            season = Season.get_active()
            if season is None:
                raise BadRequestError("No active season. Provide a seasonId.")

        name = sanitize_string(req.name)
        _check_unique_name(season.id, name)
        _check_manager(req.manager_id)

        team = Team.create(
            season=season.id,
            name=name,
            abbreviation=req.abbreviation,
            logo_url=req.logo_url,
            primary_color=req.primary_color,
            secondary_color=req.secondary_color,
            manager=req.manager_id,
            is_active=req.is_active,
        )
        log.info("team_created", team_id=team.id, season_id=season.id, name=team.name)
        return AdminTeamResp(data=admin_team_out(team, 0))

    @staticmethod
    async def update_team(team_id: int, req: TeamUpdateReq) -> AdminTeamResp:
        team = get_team(team_id)
        changes = req.model_dump(exclude_unset=True)

        if changes.get('name'):
            changes['name'] = sanitize_string(changes['name'])
            _check_unique_name(team.season_id, changes['name'], exclude_id=team.id)
        if 'manager_id' in changes:
            _check_manager(changes['manager_id'])
            team.manager = changes.pop('manager_id')

        for field, value in changes.items():
            if value is None and field in ('name', 'abbreviation', 'is_active'):
                continue
            setattr(team, field, value)
        team.save()

        log.info("team_updated", team_id=team.id, fields=sorted(req.model_fields_set))
        return await AdminTeamService.get_team(team.id)

    @staticmethod
    async def delete_team(team_id: int) -> None:
        team = get_team(team_id)

        active_players = _roster_counts([team.id]).get(team.id, 0)
        if active_players:
            raise BadRequestError(
                f"Cannot delete team with {active_players} active player(s). Remove or reassign players first."
            )

        team.delete_instance(recursive=True)
        log.info("team_deleted", team_id=team_id)
