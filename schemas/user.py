from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from utils.constants import USER_ROLES
from .common import BaseRequest, BaseResponse, CamelModel, Pagination

# ------------------------------- User Models ------------------------------- #

#                          ------- Shared -------                           #

class AuthorOut(CamelModel):
    id: int
    full_name: str
    avatar_url: Optional[str] = None


class UserOut(CamelModel):
    id: int
    email: str
    full_name: str
    phone: Optional[str] = None
    avatar_url: Optional[str] = None
    role: str
    is_active: bool
    email_verified: bool
    last_login_at: Optional[datetime] = None
    created_at: datetime


class TeamMembershipOut(CamelModel):
    player_id: int
    team_id: int
    team_name: str
    team_abbreviation: str
    season_id: int
    jersey_number: Optional[str] = None
    primary_position: str
    is_captain: bool


class ProfileOut(UserOut):
    teams: List[TeamMembershipOut] = Field(default_factory=list)
    managed_team_ids: List[int] = Field(default_factory=list)


class TeamStatusOut(CamelModel):
    has_team: bool
    team_id: Optional[int] = None
    team_name: Optional[str] = None


class AdminUserOut(UserOut):
    team_id: Optional[int] = None
    team_name: Optional[str] = None
    player_id: Optional[int] = None

#                          ------- Incoming -------                           #

class ProfileUpdateReq(BaseRequest):
    full_name: Optional[str] = Field(None, min_length=2, max_length=100)
    phone: Optional[str] = Field(None, max_length=30)
    avatar_url: Optional[str] = Field(None, max_length=500)


class AdminUserUpdateReq(BaseRequest):
    role: Optional[str] = None
    is_active: Optional[bool] = None

    @field_validator("role")
    @classmethod
    def valid_role(cls, v):
        if v is not None and v not in USER_ROLES:
            raise ValueError(f"Role must be one of: {', '.join(USER_ROLES)}")
        return v

#                          ------- Outgoing -------                           #

class UserResp(BaseResponse):
    data: UserOut


class ProfileResp(BaseResponse):
    data: ProfileOut


class TeamStatusResp(BaseResponse):
    data: TeamStatusOut


class AdminUserResp(BaseResponse):
    data: AdminUserOut


class AdminUserListResp(BaseResponse):
    data: List[AdminUserOut] = Field(default_factory=list)
    pagination: Pagination
