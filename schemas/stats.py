from typing import List

from pydantic import Field

from .common import BaseResponse, CamelModel, Pagination

# ------------------------------- Season Stats Models ------------------------------- #

class BattingRow(CamelModel):
    player_id: int
    player_name: str
    team_id: int
    team_name: str
    team_abbr: str
    games: int
    plate_appearances: int
    at_bats: int
    runs: int
    hits: int
    doubles: int
    triples: int
    home_runs: int
    rbi: int
    walks: int
    strikeouts: int
    stolen_bases: int
    caught_stealing: int
    hit_by_pitch: int
    sacrifice_flies: int
    avg: float
    obp: float
    slg: float
    ops: float


class PitchingRow(CamelModel):
    player_id: int
    player_name: str
    team_id: int
    team_name: str
    team_abbr: str
    games: int
    innings_pitched: float
    wins: int
    losses: int
    saves: int
    hits_allowed: int
    runs_allowed: int
    earned_runs: int
    walks_allowed: int
    strikeouts: int
    home_runs_allowed: int
    era: float
    whip: float
    k_per9: float = Field(alias="kPer9")


class LeaderEntry(CamelModel):
    rank: int
    player_id: int
    player_name: str
    team_id: int
    team_abbr: str
    value: float


class BattingLeadersOut(CamelModel):
    avg: List[LeaderEntry] = Field(default_factory=list)
    home_runs: List[LeaderEntry] = Field(default_factory=list)
    rbi: List[LeaderEntry] = Field(default_factory=list)
    hits: List[LeaderEntry] = Field(default_factory=list)
    stolen_bases: List[LeaderEntry] = Field(default_factory=list)


class PitchingLeadersOut(CamelModel):
    era: List[LeaderEntry] = Field(default_factory=list)
    wins: List[LeaderEntry] = Field(default_factory=list)
    strikeouts: List[LeaderEntry] = Field(default_factory=list)
    saves: List[LeaderEntry] = Field(default_factory=list)
    whip: List[LeaderEntry] = Field(default_factory=list)


class BattingStatsResp(BaseResponse):
    data: List[BattingRow] = Field(default_factory=list)
    pagination: Pagination


class PitchingStatsResp(BaseResponse):
    data: List[PitchingRow] = Field(default_factory=list)
    pagination: Pagination


class BattingLeadersResp(BaseResponse):
    data: BattingLeadersOut


class PitchingLeadersResp(BaseResponse):
    data: PitchingLeadersOut
