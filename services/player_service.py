"""Roster administration: putting users on teams, editing and removing roster spots."""

from typing import Optional

from core.errors import BadRequestError, NotFoundError
from core.logging import get_logger
from db.base import db
from db.models import Player, Season, Team, User
from schemas.player import PlayerAssignReq, PlayerOut, PlayerResp, PlayerUpdateReq, PlayerUserOut
from services.views import team_summary

log = get_logger("players")


def _get_player(player_id: int) -> Player:
    player = Player.get_or_none(Player.id == player_id)
    if player is None:
        raise NotFoundError("Player", player_id)
    return player


def player_out(player: Player) -> PlayerOut:
    return PlayerOut.model_validate({
        **player.__data__,
        'user_id': player.user_id,
        'team_id': player.team_id,
        'season_id': player.season_id,
        'user': PlayerUserOut.model_validate(player.user),
        'team': team_summary(player.team),
    })


def _check_jersey(team_id: int, jersey_number: str, exclude_id: Optional[int] = None) -> None:
    query = Player.select().where(
        (Player.team == team_id) & (Player.jersey_number == jersey_number) & (Player.is_active == True)  # noqa: E712
    )
    if exclude_id is not None:
        query = query.where(Player.id != exclude_id)
    if query.exists():
        raise BadRequestError(f"Jersey number {jersey_number} is already taken on this team")


class PlayerService:

    @staticmethod
    async def assign_player(req: PlayerAssignReq) -> PlayerResp:
        user = User.get_or_none(User.id == req.user_id)
        if user is None:
            raise BadRequestError("User not found")
        team = Team.get_or_none(Team.id == req.team_id)
        if team is None:
            raise BadRequestError("Team not found")

        season_id = req.season_id or team.season_id
        if Season.get_or_none(Season.id == season_id) is None:
            raise BadRequestError("Season not found")

        already = Player.active_for_user(user.id).where(Player.season == season_id).exists()
        if already:
            raise BadRequestError("User is already assigned to a team. Remove them first.")
        _check_jersey(team.id, req.jersey_number)

        player = Player.create(
            user=user,
            team=team,
            season=season_id,
            jersey_number=req.jersey_number,
            primary_position=req.primary_position,
            secondary_position=req.secondary_position,
            bats=req.bats,
            throws=req.throws,
            is_captain=req.is_captain,
        )
        log.info("player_assigned", player_id=player.id, user_id=user.id, team_id=team.id)
        return PlayerResp(data=player_out(player))

    @staticmethod
    async def get_player(player_id: int) -> PlayerResp:
        return PlayerResp(data=player_out(_get_player(player_id)))

    @staticmethod
    async def update_player(player_id: int, req: PlayerUpdateReq) -> PlayerResp:
        changes = req.model_dump(exclude_unset=True, exclude_none=True)
        if not changes:
            raise BadRequestError("No valid update fields provided")

        player = _get_player(player_id)

        team_id = changes.pop('team_id', player.team_id)
        moved = team_id != player.team_id
        if moved:
            team = Team.get_or_none(Team.id == team_id)
            if team is None:
                raise BadRequestError("Team not found")
            player.team = team
            player.season = team.season_id

        jersey = changes.get('jersey_number', player.jersey_number)
        if jersey and ('jersey_number' in changes or moved):
            _check_jersey(team_id, jersey, exclude_id=player.id)

        with db.atomic():
            for field, value in changes.items():
                setattr(player, field, value)
            player.save()

        log.info("player_updated", player_id=player.id, fields=sorted(req.model_fields_set))
        return PlayerResp(data=player_out(Player.get_by_id(player.id)))

    @staticmethod
    async def remove_player(player_id: int) -> None:
        player = _get_player(player_id)
        if not player.is_active:
            raise BadRequestError("Player is already removed from their team")

        player.is_active = False
        player.is_captain = False
        player.save()
        log.info("player_removed", player_id=player.id, team_id=player.team_id)
