from typing import Any, Dict, List, Type

from pydantic import ValidationError

from core.errors import BadRequestError, NotFoundError, ValidationFailedError
from core.logging import get_logger
from db.base import db
from db.models import BattingStats, Game, PitchingStats, Player, User
from schemas.common import BaseRequest
from schemas.game_stats import (
    BattingLineIn,
    BattingLineOut,
    BattingSidesOut,
    GameStatsOut,
    GameStatsResp,
    GameStatsSummaryOut,
    PitchingLineIn,
    PitchingLineOut,
    PitchingSidesOut,
    SaveGameStatsOut,
    SaveGameStatsReq,
    SaveGameStatsResp,
)

log = get_logger("game_stats")


def _line_rule_errors(line: BaseRequest) -> Dict[str, str]:
    errors = {}
    if isinstance(line, BattingLineIn):
        if line.hits > line.at_bats:
            errors['hits'] = "Hits cannot exceed at-bats"
        elif line.doubles + line.triples + line.home_runs > line.hits:
            errors['hits'] = "Doubles, triples and home runs cannot exceed hits"
    elif isinstance(line, PitchingLineIn):
        if line.earned_runs > line.runs_allowed:
            errors['earnedRuns'] = "Earned runs cannot exceed runs allowed"
    return errors


def validate_stat_lines(raw_lines: List[Dict[str, Any]], model: Type[BaseRequest]) -> List[BaseRequest]:
    """Validate each stat line, collecting errors keyed as stats[i].field."""
    lines = []
    errors: Dict[str, List[str]] = {}

    for index, raw in enumerate(raw_lines):
        prefix = f"stats[{index}]"
        try:
            line = model.model_validate(raw)
        except ValidationError as exc:
            for err in exc.errors():
                loc = ".".join(str(part) for part in err.get("loc", ())) or "line"
                message = err.get("msg", "Invalid value").replace("Value error, ", "")
                errors.setdefault(f"{prefix}.{loc}", []).append(message)
            continue

        for field, message in _line_rule_errors(line).items():
            errors.setdefault(f"{prefix}.{field}", []).append(message)
        lines.append(line)

    if errors:
        raise ValidationFailedError(errors)
    return lines


def _batting_out(row: BattingStats) -> BattingLineOut:
    return BattingLineOut.model_validate({
        **row.__data__,
        'game_id': row.game_id,
        'player_id': row.player_id,
        'team_id': row.team_id,
        'player_name': row.player.user.full_name,
    })


def _pitching_out(row: PitchingStats) -> PitchingLineOut:
    return PitchingLineOut.model_validate({
        **row.__data__,
        'game_id': row.game_id,
        'player_id': row.player_id,
        'team_id': row.team_id,
        'player_name': row.player.user.full_name,
        'innings_pitched': float(row.innings_pitched or 0),
    })


def _lines(model, game: Game, team_id: int):
    return (
        model.select(model, Player, User)
        .join(Player)
        .join(User)
        .where((model.game == game.id) & (model.team == team_id))
        .order_by(model.id)
    )


def _summary(game: Game) -> GameStatsSummaryOut:
    def count(model, team_id):
        return model.select().where((model.game == game.id) & (model.team == team_id)).count()

    counts = {
        'home_batting_count': count(BattingStats, game.home_team_id),
        'away_batting_count': count(BattingStats, game.away_team_id),
        'home_pitching_count': count(PitchingStats, game.home_team_id),
        'away_pitching_count': count(PitchingStats, game.away_team_id),
    }
    return GameStatsSummaryOut(**counts, is_complete=all(counts.values()))


class GameStatsService:

    @staticmethod
    async def get_game_stats(game_id: int) -> GameStatsResp:
        game = Game.get_or_none(Game.id == game_id)
        if game is None:
            raise NotFoundError("Game", game_id)

        batting = BattingSidesOut(
            home=[_batting_out(r) for r in _lines(BattingStats, game, game.home_team_id)],
            away=[_batting_out(r) for r in _lines(BattingStats, game, game.away_team_id)],
        )
        pitching = PitchingSidesOut(
            home=[_pitching_out(r) for r in _lines(PitchingStats, game, game.home_team_id)],
            away=[_pitching_out(r) for r in _lines(PitchingStats, game, game.away_team_id)],
        )
        return GameStatsResp(data=GameStatsOut(
            game_id=game.id,
            batting=batting,
            pitching=pitching,
            summary=_summary(game),
        ))

    @staticmethod
    async def save_game_stats(game_id: int, req: SaveGameStatsReq) -> SaveGameStatsResp:
        game = Game.get_or_none(Game.id == game_id)
        if game is None:
            raise NotFoundError("Game", game_id)

        team_id = game.team_for_side(req.team)
        line_model = BattingLineIn if req.type == 'batting' else PitchingLineIn
        row_model = BattingStats if req.type == 'batting' else PitchingStats

        lines = validate_stat_lines(req.stats, line_model)

        player_ids = [line.player_id for line in lines]
        if len(set(player_ids)) != len(player_ids):
            raise BadRequestError("Each player can only appear once per stat type")
        on_team = {
            p.id for p in Player.select(Player.id).where((Player.id.in_(player_ids)) & (Player.team == team_id))
        } if player_ids else set()
        missing = [pid for pid in player_ids if pid not in on_team]
        if missing:
            raise BadRequestError(f"Players not on the {req.team} team: {', '.join(str(m) for m in missing)}")

        with db.atomic():
            row_model.delete().where((row_model.game == game.id) & (row_model.team == team_id)).execute()
            for line in lines:
                values = line.model_dump(exclude={'player_id'})
                row_model.create(game=game.id, player=line.player_id, team=team_id, **values)

        log.info("game_stats_saved", game_id=game.id, type=req.type, team=req.team, count=len(lines))
        return SaveGameStatsResp(data=SaveGameStatsOut(
            message=f"{req.type} stats saved successfully for {req.team} team",
            saved_count=len(lines),
            summary=_summary(game),
        ))
