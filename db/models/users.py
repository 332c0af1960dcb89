from peewee import AutoField, BooleanField, CharField, DateTimeField

from db.base import BaseModel
from utils.constants import ADMIN_ROLES, ROLE_PLAYER
from utils.dates import utcnow


class User(BaseModel):
    id = AutoField()
    email = CharField(max_length=255, unique=True)  # stored lower-case
    password_hash = CharField(max_length=255)
    full_name = CharField(max_length=100)
    phone = CharField(max_length=30, null=True)
    avatar_url = CharField(max_length=500, null=True)
    role = CharField(max_length=20, default=ROLE_PLAYER)
    is_active = BooleanField(default=True)
    email_verified = BooleanField(default=False)
    email_verified_at = DateTimeField(null=True)
    last_login_at = DateTimeField(null=True)
    created_at = DateTimeField(default=utcnow)
    updated_at = DateTimeField(default=utcnow)

    class Meta:
        table_name = "users"

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"

    @property
    def is_admin(self) -> bool:
        return self.role in ADMIN_ROLES

    @classmethod
    def get_by_email(cls, email: str):
        return cls.select().where(cls.email == email.strip().lower()).first()

    def save(self, *args, **kwargs):
        self.updated_at = utcnow()
        return super().save(*args, **kwargs)
