import re
from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from .common import BaseRequest, BaseResponse, CamelModel
from .user import AuthorOut

HEX_COLOR = re.compile(r"^#([A-Fa-f0-9]{6}|[A-Fa-f0-9]{3})$")


def _check_abbreviation(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    v = v.strip().upper()
    if len(v) < 2 or len(v) > 4:
        raise ValueError("Abbreviation must be 2-4 characters")
    return v


def _check_color(v: Optional[str], example: str, label: str) -> Optional[str]:
    if v and not HEX_COLOR.match(v):
        raise ValueError(f"{label} color must be a valid hex color (e.g., {example})")
    return v or None

# ------------------------------- Team Models ------------------------------- #

#                          ------- Incoming -------                           #

class TeamCreateReq(BaseRequest):
    name: Optional[str] = Field(None, validate_default=True)
    abbreviation: Optional[str] = Field(None, validate_default=True)
    primary_color: Optional[str] = None
    secondary_color: Optional[str] = None
    logo_url: Optional[str] = Field(None, max_length=500)
    manager_id: Optional[int] = None
    season_id: Optional[int] = None
    is_active: bool = True

    @field_validator("name")
    @classmethod
    def name_required(cls, v):
        if not v:
            raise ValueError("Team name is required")
        if len(v) > 100:
            raise ValueError("Team name must be 100 characters or less")
        return v

    @field_validator("abbreviation")
    @classmethod
    def abbreviation_length(cls, v):
        if not v:
            raise ValueError("Team abbreviation is required")
        return _check_abbreviation(v)

    @field_validator("primary_color")
    @classmethod
    def primary_hex(cls, v):
        return _check_color(v, "#FF0000", "Primary")

    @field_validator("secondary_color")
    @classmethod
    def secondary_hex(cls, v):
        return _check_color(v, "#0000FF", "Secondary")


class TeamUpdateReq(BaseRequest):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    abbreviation: Optional[str] = None
    primary_color: Optional[str] = None
    secondary_color: Optional[str] = None
    logo_url: Optional[str] = Field(None, max_length=500)
    manager_id: Optional[int] = None
    is_active: Optional[bool] = None

    @field_validator("abbreviation")
    @classmethod
    def abbreviation_length(cls, v):
        return _check_abbreviation(v)

    @field_validator("primary_color")
    @classmethod
    def primary_hex(cls, v):
        return _check_color(v, "#FF0000", "Primary")

    @field_validator("secondary_color")
    @classmethod
    def secondary_hex(cls, v):
        return _check_color(v, "#0000FF", "Secondary")

#                          ------- Outgoing -------                           #

class TeamSummaryOut(CamelModel):
    id: int
    name: str
    abbreviation: str
    logo_url: Optional[str] = None
    primary_color: Optional[str] = None
    secondary_color: Optional[str] = None


class TeamOut(TeamSummaryOut):
    season_id: int
    manager_id: Optional[int] = None
    wins: int
    losses: int
    ties: int
    games_played: int
    runs_scored: int
    runs_allowed: int
    is_active: bool
    created_at: datetime


class TeamDetailOut(TeamOut):
    manager: Optional[AuthorOut] = None
    run_differential: int
    win_pct: float


class AdminTeamOut(TeamOut):
    manager: Optional[AuthorOut] = None
    roster_count: int


class RosterEntryOut(CamelModel):
    player_id: int
    user_id: int
    full_name: str
    avatar_url: Optional[str] = None
    jersey_number: Optional[str] = None
    primary_position: str
    secondary_position: Optional[str] = None
    bats: str
    throws: str
    is_captain: bool
    joined_at: datetime


class RosterOut(CamelModel):
    team: TeamSummaryOut
    players: List[RosterEntryOut] = Field(default_factory=list)
    count: int


class TeamResp(BaseResponse):
    data: TeamOut


class TeamDetailResp(BaseResponse):
    data: TeamDetailOut


class AdminTeamResp(BaseResponse):
    data: AdminTeamOut


class TeamListResp(BaseResponse):
    data: List[TeamOut] = Field(default_factory=list)


class AdminTeamListResp(BaseResponse):
    data: List[AdminTeamOut] = Field(default_factory=list)


class RosterResp(BaseResponse):
    data: RosterOut
