from datetime import datetime
from typing import List, Optional

from pydantic import Field

from .common import BaseRequest, BaseResponse, CamelModel

# ------------------------------- Plate Appearance Models ------------------------------- #

#                          ------- Shared -------                           #

class ComputedBattingStats(CamelModel):
    """Batting line derived from a player's plate appearances."""
    plate_appearances: int = 0
    at_bats: int = 0
    hits: int = 0
    singles: int = 0
    doubles: int = 0
    triples: int = 0
    home_runs: int = 0
    walks: int = 0
    intentional_walks: int = 0
    hit_by_pitch: int = 0
    strikeouts: int = 0
    sacrifice_flies: int = 0
    sacrifice_bunts: int = 0
    ground_into_double_plays: int = 0

#                          ------- Incoming -------                           #

class PlateAppearanceIn(BaseRequest):
    # Type, subtype, notation and RBI rules live in services.scorebook
    pa_number: Optional[int] = None
    result_type: Optional[str] = None
    result_subtype: Optional[str] = None
    notation: str = Field("", max_length=20)
    rbi_on_play: int = 0
    run_scored: bool = False
    notes: Optional[str] = Field(None, max_length=500)


class PlayerPlateAppearancesReq(BaseRequest):
    plate_appearances: List[PlateAppearanceIn] = Field(default_factory=list)
    runs: int = Field(0, ge=0)
    rbis: int = Field(0, ge=0)
    stolen_bases: int = Field(0, ge=0)
    caught_stealing: int = Field(0, ge=0)


class TeamPlayerPlateAppearancesIn(PlayerPlateAppearancesReq):
    player_id: int


class TeamPlateAppearancesReq(BaseRequest):
    players: List[TeamPlayerPlateAppearancesIn] = Field(default_factory=list)

#                          ------- Outgoing -------                           #

class PlateAppearanceOut(CamelModel):
    id: int
    pa_number: int
    result_type: str
    result_subtype: str
    notation: str
    rbi_on_play: int
    run_scored: bool
    notes: Optional[str] = None
    created_at: datetime


class PlayerPlateAppearancesOut(CamelModel):
    game_id: int
    player_id: int
    player_name: str
    team_id: int
    plate_appearances: List[PlateAppearanceOut] = Field(default_factory=list)
    runs: int = 0
    rbis: int = 0
    stolen_bases: int = 0
    caught_stealing: int = 0
    computed: ComputedBattingStats


class GamePlateAppearancesOut(CamelModel):
    game_id: int
    team: Optional[str] = None
    players: List[PlayerPlateAppearancesOut] = Field(default_factory=list)


class PlateAppearanceSummaryOut(CamelModel):
    game_id: int
    home_player_count: int
    away_player_count: int
    home_total_pas: int = Field(alias="homeTotalPAs")
    away_total_pas: int = Field(alias="awayTotalPAs")
    is_complete: bool


class PlayerPlateAppearancesResp(BaseResponse):
    data: PlayerPlateAppearancesOut


class GamePlateAppearancesResp(BaseResponse):
    data: GamePlateAppearancesOut


class PlateAppearanceSummaryResp(BaseResponse):
    data: PlateAppearanceSummaryOut
