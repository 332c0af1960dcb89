from peewee import AutoField, BooleanField, CharField, DateTimeField, ForeignKeyField, TextField

from db.base import BaseModel
from db.models.teams import Team
from db.models.users import User
from utils.constants import CHANNEL_GENERAL
from utils.dates import utcnow


class Message(BaseModel):
    id = AutoField()
    team = ForeignKeyField(Team, backref="messages", on_delete="CASCADE")
    author = ForeignKeyField(User, backref="messages", on_delete="CASCADE")
    channel = CharField(max_length=20, default=CHANNEL_GENERAL)
    content = TextField()
    reply_to = ForeignKeyField("self", backref="replies", null=True, on_delete="SET NULL")
    is_pinned = BooleanField(default=False)
    pinned_at = DateTimeField(null=True)
    pinned_by = ForeignKeyField(User, backref="pinned_messages", null=True, on_delete="SET NULL")
    is_edited = BooleanField(default=False)
    edited_at = DateTimeField(null=True)
    is_deleted = BooleanField(default=False)
    deleted_at = DateTimeField(null=True)
    created_at = DateTimeField(default=utcnow)

    class Meta:
        table_name = "messages"
        indexes = (
            (("team", "channel", "created_at"), False),
        )

    def __repr__(self):
        return f"<Message(id={self.id}, team_id={self.team_id}, channel='{self.channel}')>"


class ChannelRead(BaseModel):
    """The last time a user looked at a team channel."""

    id = AutoField()
    user = ForeignKeyField(User, backref="channel_reads", on_delete="CASCADE")
    team = ForeignKeyField(Team, backref="channel_reads", on_delete="CASCADE")
    channel = CharField(max_length=20)
    last_read_at = DateTimeField(default=utcnow)

    class Meta:
        table_name = "channel_reads"
        indexes = (
            (("user", "team", "channel"), True),
        )
