"""
Shared fixtures.

The database settings are read when db.base is first imported, so the
environment is pointed at a throwaway SQLite file before any project import.
"""

import os
import tempfile
from datetime import date, time

_fd, _db_path = tempfile.mkstemp(prefix="cnebl_test_", suffix=".db")
os.close(_fd)
os.environ["DATABASE_URL"] = f"sqlite:///{_db_path}"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["DEVELOPMENT_MODE"] = "true"
os.environ["ENVIRONMENT"] = "test"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from core.security import create_access_token, hash_password  # noqa: E402
from db.base import db  # noqa: E402
from db.models import ALL_MODELS, Game, Player, Season, Team, User  # noqa: E402
from main import app  # noqa: E402

PASSWORD = "Sup3r$ecret!"
PASSWORD_HASH = hash_password(PASSWORD)


@pytest.fixture(autouse=True)
def database():
    db.connect(reuse_if_open=True)
    db.drop_tables(list(reversed(ALL_MODELS)), safe=True)
    db.create_tables(ALL_MODELS)
    yield db
    if not db.is_closed():
        db.close()


def pytest_sessionfinish(session, exitstatus):
    try:
        os.unlink(_db_path)
    except OSError:
        pass


@pytest.fixture
def client():
    # No lifespan: tables are managed by the database fixture
    return TestClient(app)


@pytest.fixture
def password():
    return PASSWORD


@pytest.fixture
def make_user():
    counter = {"n": 0}

    def _make(role="player", name=None, email=None, **kwargs):
        counter["n"] += 1
        n = counter["n"]
        return User.create(
            email=email or f"{role}{n}@example.com",
            password_hash=PASSWORD_HASH,
            full_name=name or f"{role.title()} {n}",
            role=role,
            **kwargs,
        )

    return _make


@pytest.fixture
def auth_headers():
    def _headers(user):
        return {"Authorization": f"Bearer {create_access_token(user)}"}

    return _headers


@pytest.fixture
def admin(make_user):
    return make_user("admin", name="Alex Admin")


@pytest.fixture
def commissioner(make_user):
    return make_user("commissioner", name="Casey Commish")


@pytest.fixture
def manager(make_user):
    return make_user("manager", name="Morgan Manager")


@pytest.fixture
def season():
    return Season.create(
        name="2026 Summer",
        year=2026,
        start_date=date(2026, 5, 1),
        end_date=date(2026, 9, 30),
        is_active=True,
    )


@pytest.fixture
def home_team(season, manager):
    return Team.create(season=season, name="Rays", abbreviation="RAY", primary_color="#092C5C", manager=manager)


@pytest.fixture
def away_team(season):
    return Team.create(season=season, name="Pirates", abbreviation="PIR", primary_color="#FDB827")


@pytest.fixture
def game(season, home_team, away_team):
    return Game.create(
        season=season,
        home_team=home_team,
        away_team=away_team,
        game_date=date(2026, 6, 14),
        game_time=time(18, 30),
        location_name="Riverside Park",
    )


@pytest.fixture
def make_player(make_user):
    def _make(team, user=None, jersey="7", **kwargs):
        user = user or make_user("player")
        return Player.create(user=user, team=team, season=team.season_id, jersey_number=jersey, **kwargs)

    return _make
