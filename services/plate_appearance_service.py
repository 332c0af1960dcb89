from collections import defaultdict
from typing import Dict, List, Optional

from core.errors import BadRequestError, NotFoundError, ValidationFailedError
from core.logging import get_logger
from db.base import db
from db.models import BattingStats, Game, PlateAppearance, Player, PlayerGameTotals, User
from schemas.plate_appearance import (
    GamePlateAppearancesOut,
    GamePlateAppearancesResp,
    PlateAppearanceOut,
    PlateAppearanceSummaryOut,
    PlateAppearanceSummaryResp,
    PlayerPlateAppearancesOut,
    PlayerPlateAppearancesReq,
    PlayerPlateAppearancesResp,
    TeamPlateAppearancesReq,
)
from services.scorebook import compute_stats_from_pas, validate_plate_appearances
from utils.sanitize import sanitize_string

log = get_logger("plate_appearances")

SIDES = ('home', 'away')


def _get_game(game_id: int) -> Game:
    game = Game.get_or_none(Game.id == game_id)
    if game is None:
        raise NotFoundError("Game", game_id)
    return game


def _get_game_player(game: Game, player_id: int) -> Player:
    player = (
        Player.select(Player, User)
        .join(User)
        .where(Player.id == player_id)
        .first()
    )
    if player is None:
        raise NotFoundError("Player", player_id)
    if not game.involves_team(player.team_id):
        raise BadRequestError("Player is not on either team in this game")
    return player


def _side_team_id(game: Game, side: Optional[str]) -> Optional[int]:
    if side is None:
        return None
    if side not in SIDES:
        raise ValidationFailedError({'team': ['Team must be "home" or "away"']})
    return game.team_for_side(side)


def _player_out(game: Game, player: Player, pas: List[PlateAppearance],
                totals: Optional[PlayerGameTotals]) -> PlayerPlateAppearancesOut:
    rows = [pa.__data__ for pa in pas]
    return PlayerPlateAppearancesOut(
        game_id=game.id,
        player_id=player.id,
        player_name=player.user.full_name,
        team_id=player.team_id,
        plate_appearances=[PlateAppearanceOut.model_validate(pa) for pa in pas],
        runs=totals.runs if totals else 0,
        rbis=totals.rbis if totals else 0,
        stolen_bases=totals.stolen_bases if totals else 0,
        caught_stealing=totals.caught_stealing if totals else 0,
        computed=compute_stats_from_pas(rows),
    )


def _clear_player(game: Game, player: Player) -> None:
    PlateAppearance.delete().where((PlateAppearance.game == game.id) & (PlateAppearance.player == player.id)).execute()
    PlayerGameTotals.delete().where((PlayerGameTotals.game == game.id) & (PlayerGameTotals.player == player.id)).execute()
    BattingStats.delete().where((BattingStats.game == game.id) & (BattingStats.player == player.id)).execute()


def _write_player(game: Game, player: Player, req: PlayerPlateAppearancesReq) -> None:
    """Replace one player's plate appearances, totals and derived batting line."""
    _clear_player(game, player)

    rows = []
    for index, pa in enumerate(req.plate_appearances, start=1):
        rows.append(PlateAppearance.create(
            game=game.id,
            player=player.id,
            team=player.team_id,
            pa_number=pa.pa_number or index,
            result_type=pa.result_type,
            result_subtype=pa.result_subtype,
            notation=(pa.notation or "").strip() or pa.result_subtype,
            rbi_on_play=pa.rbi_on_play,
            run_scored=pa.run_scored,
            notes=sanitize_string(pa.notes) or None,
        ))

    PlayerGameTotals.create(
        game=game.id,
        player=player.id,
        team=player.team_id,
        runs=req.runs,
        rbis=req.rbis,
        stolen_bases=req.stolen_bases,
        caught_stealing=req.caught_stealing,
    )

    computed = compute_stats_from_pas([row.__data__ for row in rows])
    BattingStats.create(
        game=game.id,
        player=player.id,
        team=player.team_id,
        plate_appearances=computed.plate_appearances,
        at_bats=computed.at_bats,
        runs=req.runs,
        hits=computed.hits,
        doubles=computed.doubles,
        triples=computed.triples,
        home_runs=computed.home_runs,
        rbis=req.rbis,
        walks=computed.walks,
        strikeouts=computed.strikeouts,
        stolen_bases=req.stolen_bases,
        caught_stealing=req.caught_stealing,
        hit_by_pitch=computed.hit_by_pitch,
        sacrifice_flies=computed.sacrifice_flies,
        sacrifice_bunts=computed.sacrifice_bunts,
    )


def _validation_errors(req: PlayerPlateAppearancesReq) -> List[str]:
    return validate_plate_appearances([pa.model_dump() for pa in req.plate_appearances])


class PlateAppearanceService:

    @staticmethod
    async def list_for_game(game_id: int, side: Optional[str] = None) -> GamePlateAppearancesResp:
        game = _get_game(game_id)
        team_id = _side_team_id(game, side)

        pas_query = PlateAppearance.select().where(PlateAppearance.game == game.id)
        totals_query = PlayerGameTotals.select().where(PlayerGameTotals.game == game.id)
        if team_id is not None:
            pas_query = pas_query.where(PlateAppearance.team == team_id)
            totals_query = totals_query.where(PlayerGameTotals.team == team_id)

        by_player: Dict[int, List[PlateAppearance]] = defaultdict(list)
        for pa in pas_query.order_by(PlateAppearance.player, PlateAppearance.pa_number):
            by_player[pa.player_id].append(pa)
        totals = {t.player_id: t for t in totals_query}

        player_ids = set(by_player) | set(totals)
        players = (
            Player.select(Player, User).join(User).where(Player.id.in_(list(player_ids)))
            if player_ids else []
        )

        out = [_player_out(game, p, by_player.get(p.id, []), totals.get(p.id)) for p in players]
        out.sort(key=lambda p: (p.team_id, p.player_name))
        return GamePlateAppearancesResp(data=GamePlateAppearancesOut(game_id=game.id, team=side, players=out))

    @staticmethod
    async def summary(game_id: int) -> PlateAppearanceSummaryResp:
        game = _get_game(game_id)

        counts = {}
        for side in SIDES:
            team_id = game.team_for_side(side)
            pas = PlateAppearance.select().where((PlateAppearance.game == game.id) & (PlateAppearance.team == team_id))
            counts[side] = (
                pas.select(PlateAppearance.player).distinct().count(),
                pas.count(),
            )

        return PlateAppearanceSummaryResp(data=PlateAppearanceSummaryOut(
            game_id=game.id,
            home_player_count=counts['home'][0],
            away_player_count=counts['away'][0],
            home_total_pas=counts['home'][1],
            away_total_pas=counts['away'][1],
            is_complete=counts['home'][1] > 0 and counts['away'][1] > 0,
        ))

    @staticmethod
    async def get_for_player(game_id: int, player_id: int) -> PlayerPlateAppearancesResp:
        game = _get_game(game_id)
        player = _get_game_player(game, player_id)

        pas = list(
            PlateAppearance.select()
            .where((PlateAppearance.game == game.id) & (PlateAppearance.player == player.id))
            .order_by(PlateAppearance.pa_number)
        )
        totals = PlayerGameTotals.get_or_none(
            (PlayerGameTotals.game == game.id) & (PlayerGameTotals.player == player.id)
        )
        return PlayerPlateAppearancesResp(data=_player_out(game, player, pas, totals))

    @staticmethod
    async def save_for_player(game_id: int, player_id: int, req: PlayerPlateAppearancesReq) -> PlayerPlateAppearancesResp:
        game = _get_game(game_id)
        player = _get_game_player(game, player_id)

        errors = _validation_errors(req)
        if errors:
            raise ValidationFailedError({'plateAppearances': errors}, "Invalid plate appearances")

        with db.atomic():
            _write_player(game, player, req)

        log.info("plate_appearances_saved", game_id=game.id, player_id=player.id, count=len(req.plate_appearances))
        return await PlateAppearanceService.get_for_player(game.id, player.id)

    @staticmethod
    async def save_for_team(game_id: int, side: str, req: TeamPlateAppearancesReq) -> GamePlateAppearancesResp:
        game = _get_game(game_id)
        team_id = _side_team_id(game, side)

        players = []
        errors = {}
        for entry in req.players:
            player = _get_game_player(game, entry.player_id)
            if player.team_id != team_id:
                raise BadRequestError(f"Player {entry.player_id} is not on the {side} team")
            entry_errors = _validation_errors(entry)
            if entry_errors:
                errors[f"player{entry.player_id}"] = entry_errors
            players.append((player, entry))

        if errors:
            raise ValidationFailedError(errors, "Invalid plate appearances")

        with db.atomic():
            for model in (PlateAppearance, PlayerGameTotals, BattingStats):
                model.delete().where((model.game == game.id) & (model.team == team_id)).execute()
            for player, entry in players:
                _write_player(game, player, entry)

        log.info("team_plate_appearances_saved", game_id=game.id, side=side, players=len(players))
        return await PlateAppearanceService.list_for_game(game.id, side)

    @staticmethod
    async def delete_for_player(game_id: int, player_id: int) -> None:
        game = _get_game(game_id)
        player = _get_game_player(game, player_id)

        with db.atomic():
            _clear_player(game, player)
        log.info("plate_appearances_deleted", game_id=game.id, player_id=player.id)
