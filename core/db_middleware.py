from peewee import InterfaceError, OperationalError
from starlette.middleware.base import BaseHTTPMiddleware

from core.logging import get_logger
from db.base import db

log = get_logger("db")


class DatabaseMiddleware(BaseHTTPMiddleware):
    """Hold one connection for the lifetime of a request, then hand it back to the pool."""

    async def dispatch(self, request, call_next):
        try:
            opened_here = db.connect(reuse_if_open=True)
        except (OperationalError, InterfaceError) as e:
            # Routes that touch the database fail with DATABASE_ERROR; health still answers
            log.error("database_connect_failed", path=request.url.path, error=str(e))
            opened_here = False

        try:
            return await call_next(request)
        finally:
            if opened_here and not db.is_closed():
                db.close()
