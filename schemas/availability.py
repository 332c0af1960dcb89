from datetime import date, datetime, time
from typing import Dict, List, Optional

from pydantic import Field, field_validator

from utils.constants import AVAILABILITY_STATUSES
from utils.sanitize import sanitize_string
from .common import BaseRequest, BaseResponse, CamelModel
from .team import TeamSummaryOut


class AvailabilityUpdateReq(BaseRequest):
    status: str
    note: Optional[str] = Field(None, max_length=500)

    @field_validator("status")
    @classmethod
    def valid_status(cls, v):
        # no_response is only ever the default
        allowed = [s for s in AVAILABILITY_STATUSES if s != "no_response"]
        if v not in allowed:
            raise ValueError(f"Status must be one of: {', '.join(allowed)}")
        return v

    @field_validator("note")
    @classmethod
    def clean_note(cls, v):
        return sanitize_string(v) or None


class PlayerAvailabilityOut(CamelModel):
    player_id: int
    user_id: int
    full_name: str
    jersey_number: Optional[str] = None
    primary_position: str
    status: str
    note: Optional[str] = None
    responded_at: Optional[datetime] = None


class GameAvailabilityOut(CamelModel):
    game_id: int
    team_id: int
    players: List[PlayerAvailabilityOut] = Field(default_factory=list)
    summary: Dict[str, int]


class AvailabilityOut(CamelModel):
    game_id: int
    player_id: int
    status: str
    note: Optional[str] = None
    responded_at: Optional[datetime] = None


class MyGameAvailabilityOut(CamelModel):
    game_id: int
    game_date: date
    game_time: time
    location_name: Optional[str] = None
    status: str
    team_id: int
    opponent: TeamSummaryOut
    is_home: bool
    availability_status: str
    note: Optional[str] = None
    responded_at: Optional[datetime] = None


class GameAvailabilityResp(BaseResponse):
    data: GameAvailabilityOut


class AvailabilityResp(BaseResponse):
    data: AvailabilityOut


class MyAvailabilityResp(BaseResponse):
    data: List[MyGameAvailabilityOut] = Field(default_factory=list)
