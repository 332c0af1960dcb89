from datetime import date, datetime
from typing import List, Optional

from pydantic import Field, model_validator

from .common import BaseRequest, BaseResponse, CamelModel, Pagination

# ------------------------------- Season Models ------------------------------- #

#                          ------- Incoming -------                           #

class SeasonCreateReq(BaseRequest):
    name: str = Field(min_length=1, max_length=100)
    year: int = Field(ge=2000, le=2100)
    start_date: date
    end_date: date
    is_active: bool = False
    registration_open: bool = False

    @model_validator(mode="after")
    def dates_in_order(self):
        if self.end_date <= self.start_date:
            raise ValueError("End date must be after start date")
        return self


class SeasonUpdateReq(BaseRequest):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    year: Optional[int] = Field(None, ge=2000, le=2100)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    is_active: Optional[bool] = None
    registration_open: Optional[bool] = None

    @model_validator(mode="after")
    def has_changes(self):
        if not self.model_fields_set:
            raise ValueError("At least one field must be provided")
        if self.start_date and self.end_date and self.end_date <= self.start_date:
            raise ValueError("End date must be after start date")
        return self

#                          ------- Outgoing -------                           #

class SeasonOut(CamelModel):
    id: int
    name: str
    year: int
    start_date: date
    end_date: date
    is_active: bool
    registration_open: bool
    created_at: datetime
    updated_at: datetime


class SeasonStatsOut(CamelModel):
    games_played: int
    games_scheduled: int
    teams_count: int
    players_count: int


class SeasonTeamOut(CamelModel):
    id: int
    name: str
    abbreviation: str
    primary_color: Optional[str] = None
    wins: int
    losses: int
    ties: int


class MonthOverviewOut(CamelModel):
    month: str
    games_count: int
    completed_count: int


class SeasonDetailOut(SeasonOut):
    stats: SeasonStatsOut
    teams: List[SeasonTeamOut] = Field(default_factory=list)
    schedule_overview: List[MonthOverviewOut] = Field(default_factory=list)


class SeasonResp(BaseResponse):
    data: SeasonOut


class SeasonDetailResp(BaseResponse):
    data: SeasonDetailOut


class SeasonListResp(BaseResponse):
    data: List[SeasonOut] = Field(default_factory=list)
    pagination: Pagination
