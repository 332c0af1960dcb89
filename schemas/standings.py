from datetime import datetime
from typing import List, Optional

from pydantic import Field

from .common import BaseResponse, CamelModel


class StandingsRow(CamelModel):
    rank: int
    team_id: int
    team_name: str
    abbreviation: str
    primary_color: Optional[str] = None
    wins: int
    losses: int
    ties: int
    games_played: int
    win_pct: float
    runs_scored: int
    runs_allowed: int
    run_differential: int
    games_behind: float


class StandingsOut(CamelModel):
    standings: List[StandingsRow] = Field(default_factory=list)
    season_id: Optional[int] = None
    season_name: Optional[str] = None
    as_of: datetime


class StandingsResp(BaseResponse):
    data: StandingsOut
