from peewee import (
    AutoField,
    CharField,
    DateTimeField,
    DecimalField,
    ForeignKeyField,
    IntegerField,
)

from db.base import BaseModel
from db.models.games import Game
from db.models.players import Player
from db.models.teams import Team
from utils.dates import utcnow


class BattingStats(BaseModel):
    id = AutoField()
    game = ForeignKeyField(Game, backref="batting_stats", on_delete="CASCADE")
    player = ForeignKeyField(Player, backref="batting_stats", on_delete="CASCADE")
    team = ForeignKeyField(Team, backref="batting_stats", on_delete="CASCADE")
    batting_order = IntegerField(null=True)
    plate_appearances = IntegerField(default=0)
    at_bats = IntegerField(default=0)
    runs = IntegerField(default=0)
    hits = IntegerField(default=0)
    doubles = IntegerField(default=0)
    triples = IntegerField(default=0)
    home_runs = IntegerField(default=0)
    rbis = IntegerField(default=0)
    walks = IntegerField(default=0)
    strikeouts = IntegerField(default=0)
    stolen_bases = IntegerField(default=0)
    caught_stealing = IntegerField(default=0)
    hit_by_pitch = IntegerField(default=0)
    sacrifice_flies = IntegerField(default=0)
    sacrifice_bunts = IntegerField(default=0)
    created_at = DateTimeField(default=utcnow)

    class Meta:
        table_name = "batting_stats"
        indexes = (
            (("game", "player"), True),
        )


class PitchingStats(BaseModel):
    id = AutoField()
    game = ForeignKeyField(Game, backref="pitching_stats", on_delete="CASCADE")
    player = ForeignKeyField(Player, backref="pitching_stats", on_delete="CASCADE")
    team = ForeignKeyField(Team, backref="pitching_stats", on_delete="CASCADE")
    # Baseball notation: 6.1 is six and one-third innings
    innings_pitched = DecimalField(max_digits=4, decimal_places=1, default=0)
    hits_allowed = IntegerField(default=0)
    runs_allowed = IntegerField(default=0)
    earned_runs = IntegerField(default=0)
    walks_allowed = IntegerField(default=0)
    strikeouts = IntegerField(default=0)
    home_runs_allowed = IntegerField(default=0)
    pitches_thrown = IntegerField(null=True)
    decision = CharField(max_length=2, null=True)
    created_at = DateTimeField(default=utcnow)

    class Meta:
        table_name = "pitching_stats"
        indexes = (
            (("game", "player"), True),
        )
