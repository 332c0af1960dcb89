from peewee import AutoField, BooleanField, CharField, DateTimeField, ForeignKeyField, IntegerField, TextField

from db.base import BaseModel
from db.models.seasons import Season
from db.models.users import User
from utils.dates import utcnow


class Announcement(BaseModel):
    id = AutoField()
    author = ForeignKeyField(User, backref="announcements", on_delete="CASCADE")
    season = ForeignKeyField(Season, backref="announcements", null=True, on_delete="SET NULL")
    title = CharField(max_length=200)
    content = TextField()
    is_published = BooleanField(default=False)
    published_at = DateTimeField(null=True)
    is_pinned = BooleanField(default=False)
    priority = IntegerField(default=1)
    expires_at = DateTimeField(null=True)
    created_at = DateTimeField(default=utcnow)
    updated_at = DateTimeField(default=utcnow)

    class Meta:
        table_name = "announcements"

    def save(self, *args, **kwargs):
        self.updated_at = utcnow()
        return super().save(*args, **kwargs)
