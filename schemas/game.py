from datetime import date, datetime, time
from typing import List, Literal, Optional

from pydantic import Field, field_validator, model_validator

from utils.constants import GAME_STATUSES, MAX_INNING, MAX_OUTS
from .common import BaseRequest, BaseResponse, CamelModel, Pagination
from .team import TeamSummaryOut

# ------------------------------- Game Models ------------------------------- #

#                          ------- Shared -------                           #

class GameOut(CamelModel):
    id: int
    season_id: int
    game_number: Optional[int] = None
    home_team_id: int
    away_team_id: int
    game_date: date
    game_time: time
    timezone: str
    location_name: Optional[str] = None
    location_address: Optional[str] = None
    status: str
    home_score: int
    away_score: int
    current_inning: Optional[int] = None
    current_inning_half: Optional[str] = None
    outs: Optional[int] = None
    home_inning_scores: List[int] = Field(default_factory=list)
    away_inning_scores: List[int] = Field(default_factory=list)
    notes: Optional[str] = None
    started_at: Optional[datetime] = None
    ended_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
    home_team: TeamSummaryOut
    away_team: TeamSummaryOut


class AdminGameOut(GameOut):
    stats_status: Literal["complete", "partial", "missing"]


class GameStateOut(CamelModel):
    id: int
    status: str
    home_score: int
    away_score: int
    current_inning: Optional[int] = None
    current_inning_half: Optional[str] = None
    outs: Optional[int] = None
    home_inning_scores: List[int] = Field(default_factory=list)
    away_inning_scores: List[int] = Field(default_factory=list)
    is_extra_innings: bool
    notes: Optional[str] = None
    started_at: Optional[datetime] = None
    ended_at: Optional[datetime] = None
    updated_at: datetime

#                          ------- Incoming: live scoring -------                           #

class StartGameReq(BaseRequest):
    status: Literal["warmup", "in_progress"] = "in_progress"


class RecordScoreReq(BaseRequest):
    runs: int = Field(ge=0, le=99)


class RecordOutReq(BaseRequest):
    count: int = Field(1, ge=1, le=MAX_OUTS)


class AdvanceInningReq(BaseRequest):
    force_inning: Optional[int] = Field(None, ge=1, le=MAX_INNING)
    force_half: Optional[Literal["top", "bottom"]] = None


class EndGameReq(BaseRequest):
    status: Literal["final", "suspended", "postponed", "cancelled"] = "final"
    notes: Optional[str] = Field(None, max_length=500)


class UpdateGameStateReq(BaseRequest):
    current_inning: Optional[int] = Field(None, ge=1, le=MAX_INNING)
    current_inning_half: Optional[Literal["top", "bottom"]] = None
    outs: Optional[int] = Field(None, ge=0, le=MAX_OUTS)
    home_score: Optional[int] = Field(None, ge=0)
    away_score: Optional[int] = Field(None, ge=0)
    home_inning_scores: Optional[List[int]] = None
    away_inning_scores: Optional[List[int]] = None
    notes: Optional[str] = Field(None, max_length=500)

    @field_validator("home_inning_scores", "away_inning_scores")
    @classmethod
    def non_negative_innings(cls, v):
        if v is not None and any(runs < 0 for runs in v):
            raise ValueError("Inning scores must be non-negative")
        return v

    @field_validator("home_score", "away_score")
    @classmethod
    def scores_not_null(cls, v):
        if v is None:
            raise ValueError("Score must be a non-negative number")
        return v

    @model_validator(mode="after")
    def has_changes(self):
        if not self.model_fields_set:
            raise ValueError("At least one field must be provided")
        return self

#                          ------- Incoming: admin -------                           #

class GameCreateIn(BaseRequest):
    # Required fields are checked in AdminGameService
    season_id: Optional[int] = None
    game_number: Optional[int] = None
    home_team_id: Optional[int] = None
    away_team_id: Optional[int] = None
    game_date: Optional[str] = None
    game_time: Optional[str] = None
    timezone: Optional[str] = Field(None, max_length=50)
    location_name: Optional[str] = Field(None, max_length=200)
    location_address: Optional[str] = Field(None, max_length=500)
    notes: Optional[str] = None


class AdminGameCreateReq(GameCreateIn):
    games: Optional[List[GameCreateIn]] = None


class AdminGameUpdateReq(BaseRequest):
    home_team_id: Optional[int] = None
    away_team_id: Optional[int] = None
    game_date: Optional[str] = None
    game_time: Optional[str] = None
    timezone: Optional[str] = Field(None, max_length=50)
    location_name: Optional[str] = Field(None, max_length=200)
    location_address: Optional[str] = Field(None, max_length=500)
    status: Optional[str] = None
    home_score: Optional[int] = None
    away_score: Optional[int] = None
    notes: Optional[str] = None

    @field_validator("status")
    @classmethod
    def valid_status(cls, v):
        if v is not None and v not in GAME_STATUSES:
            raise ValueError(f"Status must be one of: {', '.join(GAME_STATUSES)}")
        return v

    @field_validator("home_score")
    @classmethod
    def home_non_negative(cls, v):
        if v is None or v < 0:
            raise ValueError("Home score must be a non-negative number")
        return v

    @field_validator("away_score")
    @classmethod
    def away_non_negative(cls, v):
        if v is None or v < 0:
            raise ValueError("Away score must be a non-negative number")
        return v

    @field_validator("timezone")
    @classmethod
    def timezone_present(cls, v):
        if v is None or not v.strip():
            raise ValueError("Timezone cannot be empty")
        return v.strip()


class CancelGameReq(BaseRequest):
    reason: Optional[str] = Field(None, max_length=500)


class PostponeGameReq(BaseRequest):
    reason: Optional[str] = Field(None, max_length=500)
    reschedule_date: Optional[date] = None
    reschedule_time: Optional[str] = Field(None, pattern=r"^\d{2}:\d{2}(:\d{2})?$")

#                          ------- Outgoing -------                           #

class GameResp(BaseResponse):
    data: GameOut


class GameListResp(BaseResponse):
    data: List[GameOut] = Field(default_factory=list)
    pagination: Pagination


class AdminGameResp(BaseResponse):
    data: AdminGameOut


class AdminGameListResp(BaseResponse):
    data: List[AdminGameOut] = Field(default_factory=list)
    pagination: Pagination


class GameSeriesOut(CamelModel):
    message: str
    games: List[GameOut] = Field(default_factory=list)


class GameSeriesResp(BaseResponse):
    data: GameSeriesOut


class LiveGamesOut(CamelModel):
    games: List[GameOut] = Field(default_factory=list)
    count: int
    timestamp: datetime


class LiveGamesResp(BaseResponse):
    data: LiveGamesOut


class ScoringActionOut(CamelModel):
    action: Literal["start", "score", "out", "advance", "end", "update"]
    previous_state: GameStateOut
    new_state: GameStateOut
    auto_advanced: Optional[bool] = None


class ScoringActionResp(BaseResponse):
    data: ScoringActionOut


class GameStateResp(BaseResponse):
    data: GameStateOut


class GameActionOut(CamelModel):
    game: GameOut
    action: Literal["cancelled", "postponed", "rescheduled"]
    message: str


class GameActionResp(BaseResponse):
    data: GameActionOut
