from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from utils.constants import BATTING_SIDES, FIELD_POSITIONS, THROWING_ARMS
from .common import BaseRequest, BaseResponse, CamelModel
from .team import TeamSummaryOut


def _one_of(value: Optional[str], allowed, field: str) -> Optional[str]:
    if value is not None and value not in allowed:
        raise ValueError(f"{field} must be one of: {', '.join(allowed)}")
    return value

# ------------------------------- Roster Player Models ------------------------------- #

#                          ------- Incoming -------                           #

class PlayerAssignReq(BaseRequest):
    user_id: int
    team_id: int
    season_id: Optional[int] = None
    jersey_number: str = Field(min_length=1, max_length=3)
    primary_position: str = "UTIL"
    secondary_position: Optional[str] = None
    bats: str = "R"
    throws: str = "R"
    is_captain: bool = False

    @field_validator("primary_position", "secondary_position")
    @classmethod
    def valid_position(cls, v, info):
        return _one_of(v, FIELD_POSITIONS, info.field_name)

    @field_validator("bats")
    @classmethod
    def valid_bats(cls, v):
        return _one_of(v, BATTING_SIDES, "bats")

    @field_validator("throws")
    @classmethod
    def valid_throws(cls, v):
        return _one_of(v, THROWING_ARMS, "throws")


class PlayerUpdateReq(BaseRequest):
    team_id: Optional[int] = None
    jersey_number: Optional[str] = Field(None, min_length=1, max_length=3)
    primary_position: Optional[str] = None
    secondary_position: Optional[str] = None
    bats: Optional[str] = None
    throws: Optional[str] = None
    is_captain: Optional[bool] = None
    is_active: Optional[bool] = None

    @field_validator("primary_position", "secondary_position")
    @classmethod
    def valid_position(cls, v, info):
        return _one_of(v, FIELD_POSITIONS, info.field_name)

    @field_validator("bats")
    @classmethod
    def valid_bats(cls, v):
        return _one_of(v, BATTING_SIDES, "bats")

    @field_validator("throws")
    @classmethod
    def valid_throws(cls, v):
        return _one_of(v, THROWING_ARMS, "throws")

#                          ------- Outgoing -------                           #

class PlayerUserOut(CamelModel):
    id: int
    full_name: str
    email: str
    avatar_url: Optional[str] = None
    role: str


class PlayerOut(CamelModel):
    id: int
    user_id: int
    team_id: int
    season_id: int
    jersey_number: Optional[str] = None
    primary_position: str
    secondary_position: Optional[str] = None
    bats: str
    throws: str
    is_active: bool
    is_captain: bool
    joined_at: datetime
    user: PlayerUserOut
    team: TeamSummaryOut


class PlayerResp(BaseResponse):
    data: PlayerOut
