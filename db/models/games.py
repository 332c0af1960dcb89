from peewee import (
    AutoField,
    CharField,
    DateField,
    DateTimeField,
    ForeignKeyField,
    IntegerField,
    TextField,
    TimeField,
)

from db.base import BaseModel, JSONField
from db.models.seasons import Season
from db.models.teams import Team
from utils.constants import STANDARD_INNINGS
from utils.dates import LEAGUE_TIMEZONE, utcnow


class Game(BaseModel):
    id = AutoField()
    season = ForeignKeyField(Season, backref="games", on_delete="CASCADE")
    game_number = IntegerField(null=True)
    home_team = ForeignKeyField(Team, backref="home_games", on_delete="CASCADE")
    away_team = ForeignKeyField(Team, backref="away_games", on_delete="CASCADE")
    game_date = DateField()
    game_time = TimeField()
    timezone = CharField(max_length=50, default=LEAGUE_TIMEZONE)
    location_name = CharField(max_length=200, null=True)
    location_address = CharField(max_length=500, null=True)
    status = CharField(max_length=20, default="scheduled")
    home_score = IntegerField(default=0)
    away_score = IntegerField(default=0)
    current_inning = IntegerField(null=True)
    current_inning_half = CharField(max_length=6, null=True)
    outs = IntegerField(null=True)
    home_inning_scores = JSONField(default=list)
    away_inning_scores = JSONField(default=list)
    notes = TextField(null=True)
    started_at = DateTimeField(null=True)
    ended_at = DateTimeField(null=True)
    created_at = DateTimeField(default=utcnow)
    updated_at = DateTimeField(default=utcnow)

    class Meta:
        table_name = "games"
        indexes = (
            (("season", "game_date"), False),
        )

    def __repr__(self):
        return f"<Game(id={self.id}, {self.away_team_id}@{self.home_team_id}, date={self.game_date}, status='{self.status}')>"

    @property
    def is_extra_innings(self) -> bool:
        return (self.current_inning or 1) > STANDARD_INNINGS

    def involves_team(self, team_id: int) -> bool:
        return team_id in (self.home_team_id, self.away_team_id)

    def side_of(self, team_id: int):
        if team_id == self.home_team_id:
            return "home"
        if team_id == self.away_team_id:
            return "away"
        return None

    def team_for_side(self, side: str) -> int:
        return self.home_team_id if side == "home" else self.away_team_id

    def save(self, *args, **kwargs):
        self.updated_at = utcnow()
        return super().save(*args, **kwargs)
