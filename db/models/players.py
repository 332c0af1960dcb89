from peewee import AutoField, BooleanField, CharField, DateTimeField, ForeignKeyField

from db.base import BaseModel
from db.models.seasons import Season
from db.models.teams import Team
from db.models.users import User
from utils.dates import utcnow


class Player(BaseModel):
    """A user's roster spot on one team for one season."""

    id = AutoField()
    user = ForeignKeyField(User, backref="roster_spots", on_delete="CASCADE")
    team = ForeignKeyField(Team, backref="players", on_delete="CASCADE")
    season = ForeignKeyField(Season, backref="players", on_delete="CASCADE")
    jersey_number = CharField(max_length=3, null=True)
    primary_position = CharField(max_length=4, default="UTIL")
    secondary_position = CharField(max_length=4, null=True)
    bats = CharField(max_length=1, default="R")
    throws = CharField(max_length=1, default="R")
    is_active = BooleanField(default=True)
    is_captain = BooleanField(default=False)
    joined_at = DateTimeField(default=utcnow)
    updated_at = DateTimeField(default=utcnow)

    class Meta:
        table_name = "players"

    def __repr__(self):
        return f"<Player(id={self.id}, user_id={self.user_id}, team_id={self.team_id}, jersey='{self.jersey_number}')>"

    @classmethod
    def active_for_user(cls, user_id: int, team_id: int = None):
        query = cls.select().where((cls.user == user_id) & (cls.is_active == True))  # noqa: E712
        if team_id is not None:
            query = query.where(cls.team == team_id)
        return query

    def save(self, *args, **kwargs):
        self.updated_at = utcnow()
        return super().save(*args, **kwargs)
