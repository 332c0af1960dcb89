from peewee import AutoField, BooleanField, CharField, DateTimeField, ForeignKeyField, IntegerField

from db.base import BaseModel
from db.models.seasons import Season
from db.models.users import User
from utils.dates import utcnow


class Team(BaseModel):
    id = AutoField()
    season = ForeignKeyField(Season, backref="teams", on_delete="CASCADE")
    name = CharField(max_length=100)
    abbreviation = CharField(max_length=5)
    logo_url = CharField(max_length=500, null=True)
    primary_color = CharField(max_length=7, null=True)
    secondary_color = CharField(max_length=7, null=True)
    manager = ForeignKeyField(User, backref="managed_teams", null=True, on_delete="SET NULL")
    wins = IntegerField(default=0)
    losses = IntegerField(default=0)
    ties = IntegerField(default=0)
    runs_scored = IntegerField(default=0)
    runs_allowed = IntegerField(default=0)
    is_active = BooleanField(default=True)
    created_at = DateTimeField(default=utcnow)
    updated_at = DateTimeField(default=utcnow)

    class Meta:
        table_name = "teams"
        indexes = (
            (("season", "name"), True),
        )

    def __repr__(self):
        return f"<Team(id={self.id}, name='{self.name}', abbreviation='{self.abbreviation}')>"

    @property
    def games_played(self) -> int:
        return self.wins + self.losses + self.ties

    def save(self, *args, **kwargs):
        self.updated_at = utcnow()
        return super().save(*args, **kwargs)
