from datetime import date, datetime, time, timezone
from typing import Optional, Union

import pytz

LEAGUE_TIMEZONE = "America/New_York"


def utcnow() -> datetime:
    """Naive UTC now. All timestamps are stored naive-UTC."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def league_today() -> date:
    return datetime.now(pytz.timezone(LEAGUE_TIMEZONE)).date()


def iso(value: Optional[Union[datetime, date, time]]) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.isoformat() + ("Z" if value.tzinfo is None else "")
    return value.isoformat()


def parse_date(value: str) -> date:
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_time(value: str) -> time:
    """Accepts HH:MM or HH:MM:SS."""
    if len(value) == 5:
        value = f"{value}:00"
    return datetime.strptime(value, "%H:%M:%S").time()
