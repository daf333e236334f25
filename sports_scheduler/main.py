"""Sports Scheduler API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map SchedulerError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sports_scheduler.api.error_handlers import register_error_handlers
from sports_scheduler.api.routes import admin, health, player, sessions, sports, users
from sports_scheduler.config import get_settings
from sports_scheduler.infrastructure import database
from sports_scheduler.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("Sports Scheduler API started")
    yield
    if database.db_manager:
        await database.db_manager.dispose()
    logger.info("Sports Scheduler API shutting down")


app = FastAPI(
    title="Sports Scheduler API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(users.router)
app.include_router(sports.router)
app.include_router(sessions.router)
app.include_router(player.router)
app.include_router(admin.router)

register_error_handlers(app)
