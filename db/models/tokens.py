from peewee import AutoField, CharField, DateTimeField, ForeignKeyField

from db.base import BaseModel
from db.models.users import User
from utils.dates import utcnow


class _OneTimeToken(BaseModel):
    id = AutoField()
    user = ForeignKeyField(User, on_delete="CASCADE")
    token_hash = CharField(max_length=64, unique=True)  # sha256 hex of the emailed token
    expires_at = DateTimeField()
    used_at = DateTimeField(null=True)
    created_at = DateTimeField(default=utcnow)

    @classmethod
    def find_valid(cls, token_hash: str):
        return (
            cls.select()
            .where(
                (cls.token_hash == token_hash)
                & (cls.used_at.is_null())
                & (cls.expires_at > utcnow())
            )
            .first()
        )

    @classmethod
    def invalidate_for_user(cls, user_id: int) -> int:
        return (
            cls.update(used_at=utcnow())
            .where((cls.user == user_id) & (cls.used_at.is_null()))
            .execute()
        )

    @classmethod
    def purge_stale(cls) -> int:
        return cls.delete().where((cls.expires_at < utcnow()) | (cls.used_at.is_null(False))).execute()


class PasswordResetToken(_OneTimeToken):
    class Meta:
        table_name = "password_reset_tokens"


class EmailVerificationToken(_OneTimeToken):
    class Meta:
        table_name = "email_verification_tokens"
