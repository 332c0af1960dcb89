from typing import Dict, List, Optional

from core.errors import BadRequestError, ForbiddenError, NotFoundError
from core.logging import get_logger
from db.models import Availability, Game, Player, Team, User
from schemas.availability import (
    AvailabilityOut,
    AvailabilityResp,
    AvailabilityUpdateReq,
    GameAvailabilityOut,
    GameAvailabilityResp,
    MyAvailabilityResp,
    MyGameAvailabilityOut,
    PlayerAvailabilityOut,
)
from services.channels import is_roster_member, is_team_manager
from services.views import team_summary
from utils.constants import AVAILABILITY_STATUSES
from utils.dates import league_today, utcnow

log = get_logger("availability")

CLOSED_GAME_STATUSES = ('final', 'cancelled')


def _get_game(game_id: int) -> Game:
    game = Game.get_or_none(Game.id == game_id)
    if game is None:
        raise NotFoundError("Game", game_id)
    return game


def _game_spot(game: Game, user: User) -> Optional[Player]:
    return (
        Player.active_for_user(user.id)
        .where(Player.team.in_([game.home_team_id, game.away_team_id]))
        .first()
    )


def _viewing_team(game: Game, user: User, team_id: Optional[int]) -> int:
    if team_id is not None:
        if not game.involves_team(team_id):
            raise BadRequestError("Team is not playing in this game")
        team = Team.get_by_id(team_id)
        if not (user.is_admin or is_team_manager(user, team) or is_roster_member(user, team_id)):
            raise ForbiddenError("You can only view availability for your own team")
        return team_id

    spot = _game_spot(game, user)
    if spot is not None:
        return spot.team_id
    for side_team in (game.home_team, game.away_team):
        if is_team_manager(user, side_team):
            return side_team.id
    if user.is_admin:
        raise BadRequestError("teamId is required")
    raise ForbiddenError("You are not on a team playing in this game")


class AvailabilityService:

    @staticmethod
    async def team_availability(game_id: int, user: User, team_id: Optional[int] = None) -> GameAvailabilityResp:
        game = _get_game(game_id)
        team_id = _viewing_team(game, user, team_id)

        players = (
            Player.select(Player, User)
            .join(User)
            .where((Player.team == team_id) & (Player.is_active == True))  # noqa: E712
            .order_by(User.full_name)
        )
        responses: Dict[int, Availability] = {
            a.player_id: a for a in Availability.select().where(Availability.game == game.id)
        }

        rows: List[PlayerAvailabilityOut] = []
        summary = {status: 0 for status in AVAILABILITY_STATUSES}
        for player in players:
            response = responses.get(player.id)
            status = response.status if response else 'no_response'
            summary[status] += 1
            rows.append(PlayerAvailabilityOut(
                player_id=player.id,
                user_id=player.user_id,
                full_name=player.user.full_name,
                jersey_number=player.jersey_number,
                primary_position=player.primary_position,
                status=status,
                note=response.note if response else None,
                responded_at=response.responded_at if response else None,
            ))

        return GameAvailabilityResp(data=GameAvailabilityOut(
            game_id=game.id,
            team_id=team_id,
            players=rows,
            summary=summary,
        ))

    @staticmethod
    async def set_availability(game_id: int, user: User, req: AvailabilityUpdateReq) -> AvailabilityResp:
        game = _get_game(game_id)
        spot = _game_spot(game, user)
        if spot is None:
            raise ForbiddenError("You must be on a team playing in this game to set availability")
        if game.status in CLOSED_GAME_STATUSES:
            raise BadRequestError("Availability cannot be changed for a game that is final or cancelled")

        record, _ = Availability.get_or_create(game=game.id, player=spot.id)
        record.status = req.status
        record.note = req.note
        record.responded_at = utcnow()
        record.save()

        log.info("availability_set", game_id=game.id, player_id=spot.id, status=req.status)
        return AvailabilityResp(data=AvailabilityOut(
            game_id=game.id,
            player_id=spot.id,
            status=record.status,
            note=record.note,
            responded_at=record.responded_at,
        ))

    @staticmethod
    async def my_availability(user: User) -> MyAvailabilityResp:
        spots = {p.team_id: p for p in Player.active_for_user(user.id)}
        if not spots:
            return MyAvailabilityResp(data=[])

        team_ids = list(spots)
        games = list(
            Game.select()
            .where(
                (Game.home_team.in_(team_ids) | Game.away_team.in_(team_ids))
                & (Game.game_date >= league_today())
                & (Game.status.not_in(CLOSED_GAME_STATUSES))
            )
            .order_by(Game.game_date, Game.game_time)
        )
        player_ids = [p.id for p in spots.values()]
        responses = {
            (a.game_id, a.player_id): a
            for a in Availability.select().where(
                (Availability.game.in_([g.id for g in games])) & (Availability.player.in_(player_ids))
            )
        } if games else {}

        out = []
        for game in games:
            is_home = game.home_team_id in spots
            team_id = game.home_team_id if is_home else game.away_team_id
            response = responses.get((game.id, spots[team_id].id))
            out.append(MyGameAvailabilityOut(
                game_id=game.id,
                game_date=game.game_date,
                game_time=game.game_time,
                location_name=game.location_name,
                status=game.status,
                team_id=team_id,
                opponent=team_summary(game.away_team if is_home else game.home_team),
                is_home=is_home,
                availability_status=response.status if response else 'no_response',
                note=response.note if response else None,
                responded_at=response.responded_at if response else None,
            ))
        return MyAvailabilityResp(data=out)
