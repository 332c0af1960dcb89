from peewee import AutoField, CharField, DateTimeField, ForeignKeyField

from db.base import BaseModel
from db.models.games import Game
from db.models.players import Player
from utils.dates import utcnow


class Availability(BaseModel):
    id = AutoField()
    game = ForeignKeyField(Game, backref="availability", on_delete="CASCADE")
    player = ForeignKeyField(Player, backref="availability", on_delete="CASCADE")
    status = CharField(max_length=20, default="no_response")
    note = CharField(max_length=500, null=True)
    responded_at = DateTimeField(null=True)
    created_at = DateTimeField(default=utcnow)

    class Meta:
        table_name = "availability"
        indexes = (
            (("game", "player"), True),
        )
