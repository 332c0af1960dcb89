import json

from peewee import DatabaseProxy, Model, TextField
from playhouse.db_url import connect
from playhouse.pool import PooledPostgresqlDatabase

from core.logging import get_logger
from core.settings import settings

log = get_logger("db")


def create_database(database_url=None):
    """Build the peewee database from settings (or an explicit db_url)."""
    url = database_url or settings.database_url
    if url:
        return connect(url)
    return PooledPostgresqlDatabase(
        settings.db_name,
        user=settings.db_user,
        password=settings.db_password,
        host=settings.db_host,
        port=settings.db_port,
        max_connections=settings.db_max_connections,
        stale_timeout=300,
        timeout=10,
    )


db = DatabaseProxy()
db.initialize(create_database())


class BaseModel(Model):
    class Meta:
        database = db


class JSONField(TextField):
    """Stores a JSON document in a text column."""

    def db_value(self, value):
        if value is None:
            return None
        return json.dumps(value)

    def python_value(self, value):
        if value is None:
            return None
        return json.loads(value)


# Function to initialize database connection
def init_db():
    """Initialize database connection and create tables if they don't exist."""
    db.connect(reuse_if_open=True)

    from db.models import ALL_MODELS

    db.create_tables(ALL_MODELS, safe=True)
    log.info("tables_ready", count=len(ALL_MODELS))


# Function to close database connection
def close_db():
    """Close database connection."""
    if not db.is_closed():
        db.close()
        log.info("database_connection_closed")
