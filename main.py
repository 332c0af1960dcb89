from fastapi import APIRouter, FastAPI
from slowapi.errors import RateLimitExceeded

from api.v1.admin import announcements as admin_announcements
from api.v1.admin import games as admin_games
from api.v1.admin import players as admin_players
from api.v1.admin import seasons as admin_seasons
from api.v1.admin import teams as admin_teams
from api.v1.admin import users as admin_users
from api.v1.internal import auth, availability, game_stats, messages, plate_appearances, scoring, users
from api.v1.public import announcements, games, health, seasons, standings, stats, teams
from core.correlation_middleware import CorrelationMiddleware
from core.db_middleware import DatabaseMiddleware
from core.errors import register_exception_handlers
from core.logging import get_logger, setup_logging
from core.middleware import setup_middleware
from core.rate_limit import limiter, rate_limit_exceeded_handler
from core.settings import settings
from db.base import close_db, init_db


async def lifespan(app: FastAPI):
    # Setup structured logging first
    setup_logging(
        log_level=settings.log_level,
        json_format=settings.log_format == "json",
        service_name=settings.service_name,
    )
    log = get_logger()
    log.info("application_starting", service=settings.service_name, environment=settings.environment)

    # Initialize database
    init_db()
    log.info("database_initialized")

    yield

    # Close database connection
    close_db()
    log.info("application_stopped")


app = FastAPI(
    title="CNEBL API",
    description="Standings, schedules, rosters, team chat and league administration for the CNEBL",
    version=settings.version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=[
        {"name": "Standings", "description": "League table"},
        {"name": "Games", "description": "Schedule, results and live games"},
        {"name": "Live scoring", "description": "In-game scoring for managers"},
        {"name": "Scorebook", "description": "Plate-appearance scorebook"},
        {"name": "Stats", "description": "Season batting and pitching statistics"},
        {"name": "Team chat", "description": "Team channels (members only)"},
    ],
)

register_exception_handlers(app)

# Add rate limiter
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

# Add middlewares (order matters - first added = innermost)
app.add_middleware(DatabaseMiddleware)
app.add_middleware(CorrelationMiddleware)
setup_middleware(app)

# Public routes
api = APIRouter(prefix="/api")
api.include_router(health.router)
api.include_router(standings.router)
api.include_router(stats.router)
api.include_router(games.router)
api.include_router(teams.router)
api.include_router(seasons.router)
api.include_router(announcements.router)

# Signed-in routes
api.include_router(auth.router)
api.include_router(users.router)
api.include_router(messages.router)
api.include_router(scoring.router)
api.include_router(plate_appearances.router)
api.include_router(game_stats.router)
api.include_router(availability.router)

# Admin routes
admin = APIRouter(prefix="/admin")
admin.include_router(admin_games.router)
admin.include_router(admin_teams.router)
admin.include_router(admin_players.router)
admin.include_router(admin_users.router)
admin.include_router(admin_seasons.router)
admin.include_router(admin_announcements.router)
api.include_router(admin)

app.include_router(api)


@app.get("/")
async def root():
    return {"message": "CNEBL API"}


# Wake up server
@app.get("/ping")
async def ping():
    return {"message": "Pong!"}
