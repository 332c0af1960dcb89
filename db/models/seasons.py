from peewee import AutoField, BooleanField, CharField, DateField, DateTimeField, IntegerField

from db.base import BaseModel
from utils.dates import utcnow


class Season(BaseModel):
    id = AutoField()
    name = CharField(max_length=100)
    year = IntegerField()
    start_date = DateField()
    end_date = DateField()
    is_active = BooleanField(default=False)
    registration_open = BooleanField(default=False)
    created_at = DateTimeField(default=utcnow)
    updated_at = DateTimeField(default=utcnow)

    class Meta:
        table_name = "seasons"

    def __repr__(self):
        return f"<Season(id={self.id}, name='{self.name}', active={self.is_active})>"

    @classmethod
    def get_active(cls):
        return cls.select().where(cls.is_active == True).order_by(cls.year.desc()).first()  # noqa: E712

    def save(self, *args, **kwargs):
        self.updated_at = utcnow()
        return super().save(*args, **kwargs)
