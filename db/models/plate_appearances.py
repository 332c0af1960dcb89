from peewee import AutoField, BooleanField, CharField, DateTimeField, ForeignKeyField, IntegerField

from db.base import BaseModel
from db.models.games import Game
from db.models.players import Player
from db.models.teams import Team
from utils.dates import utcnow


class PlateAppearance(BaseModel):
    id = AutoField()
    game = ForeignKeyField(Game, backref="plate_appearances", on_delete="CASCADE")
    player = ForeignKeyField(Player, backref="plate_appearances", on_delete="CASCADE")
    team = ForeignKeyField(Team, backref="plate_appearances", on_delete="CASCADE")
    pa_number = IntegerField()
    result_type = CharField(max_length=10)
    result_subtype = CharField(max_length=4)
    notation = CharField(max_length=20, default="")
    rbi_on_play = IntegerField(default=0)
    run_scored = BooleanField(default=False)
    notes = CharField(max_length=500, null=True)
    created_at = DateTimeField(default=utcnow)

    class Meta:
        table_name = "plate_appearances"
        indexes = (
            (("game", "player", "pa_number"), True),
        )


class PlayerGameTotals(BaseModel):
    """Per-game batting extras recorded alongside a player's plate appearances."""

    id = AutoField()
    game = ForeignKeyField(Game, backref="player_totals", on_delete="CASCADE")
    player = ForeignKeyField(Player, backref="game_totals", on_delete="CASCADE")
    team = ForeignKeyField(Team, backref="player_totals", on_delete="CASCADE")
    runs = IntegerField(default=0)
    rbis = IntegerField(default=0)
    stolen_bases = IntegerField(default=0)
    caught_stealing = IntegerField(default=0)
    updated_at = DateTimeField(default=utcnow)

    class Meta:
        table_name = "player_game_totals"
        indexes = (
            (("game", "player"), True),
        )
