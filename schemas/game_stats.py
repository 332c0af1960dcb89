from decimal import Decimal
from typing import Annotated, Any, Dict, List, Literal, Optional

from pydantic import Field, field_validator

from utils.constants import PITCHING_DECISIONS
from .common import BaseRequest, BaseResponse, CamelModel

Count = Annotated[int, Field(ge=0)]

# ------------------------------- Game Stats Models ------------------------------- #

#                          ------- Incoming -------                           #

class BattingLineIn(BaseRequest):
    player_id: int
    batting_order: Optional[int] = Field(None, ge=1, le=20)
    plate_appearances: Count = 0
    at_bats: Count = 0
    runs: Count = 0
    hits: Count = 0
    doubles: Count = 0
    triples: Count = 0
    home_runs: Count = 0
    rbis: Count = 0
    walks: Count = 0
    strikeouts: Count = 0
    stolen_bases: Count = 0
    caught_stealing: Count = 0
    hit_by_pitch: Count = 0
    sacrifice_flies: Count = 0
    sacrifice_bunts: Count = 0


class PitchingLineIn(BaseRequest):
    player_id: int
    innings_pitched: Decimal = Field(Decimal("0"), ge=0, max_digits=4, decimal_places=1)
    hits_allowed: Count = 0
    runs_allowed: Count = 0
    earned_runs: Count = 0
    walks_allowed: Count = 0
    strikeouts: Count = 0
    home_runs_allowed: Count = 0
    pitches_thrown: Optional[int] = Field(None, ge=0)
    decision: Optional[str] = None

    @field_validator("innings_pitched")
    @classmethod
    def baseball_notation(cls, v):
        if (v * 10) % 10 > 2:
            raise ValueError("Innings pitched must end in .0, .1 or .2")
        return v

    @field_validator("decision")
    @classmethod
    def valid_decision(cls, v):
        if v is not None and v not in PITCHING_DECISIONS:
            raise ValueError(f"Decision must be one of: {', '.join(PITCHING_DECISIONS)}")
        return v


class SaveGameStatsReq(BaseRequest):
    type: Literal["batting", "pitching"]
    team: Literal["home", "away"]
    # Each line is validated by GameStatsService
    stats: List[Dict[str, Any]] = Field(default_factory=list)

#                          ------- Outgoing -------                           #

class BattingLineOut(CamelModel):
    id: int
    game_id: int
    player_id: int
    player_name: str
    team_id: int
    batting_order: Optional[int] = None
    plate_appearances: int
    at_bats: int
    runs: int
    hits: int
    doubles: int
    triples: int
    home_runs: int
    rbis: int
    walks: int
    strikeouts: int
    stolen_bases: int
    caught_stealing: int
    hit_by_pitch: int
    sacrifice_flies: int
    sacrifice_bunts: int


class PitchingLineOut(CamelModel):
    id: int
    game_id: int
    player_id: int
    player_name: str
    team_id: int
    innings_pitched: float
    hits_allowed: int
    runs_allowed: int
    earned_runs: int
    walks_allowed: int
    strikeouts: int
    home_runs_allowed: int
    pitches_thrown: Optional[int] = None
    decision: Optional[str] = None


class BattingSidesOut(CamelModel):
    home: List[BattingLineOut] = Field(default_factory=list)
    away: List[BattingLineOut] = Field(default_factory=list)


class PitchingSidesOut(CamelModel):
    home: List[PitchingLineOut] = Field(default_factory=list)
    away: List[PitchingLineOut] = Field(default_factory=list)


class GameStatsSummaryOut(CamelModel):
    home_batting_count: int
    away_batting_count: int
    home_pitching_count: int
    away_pitching_count: int
    is_complete: bool


class GameStatsOut(CamelModel):
    game_id: int
    batting: BattingSidesOut
    pitching: PitchingSidesOut
    summary: GameStatsSummaryOut


class SaveGameStatsOut(CamelModel):
    message: str
    saved_count: int
    summary: GameStatsSummaryOut


class GameStatsResp(BaseResponse):
    data: GameStatsOut


class SaveGameStatsResp(BaseResponse):
    data: SaveGameStatsOut
