"""Chickquita API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map failures → the Error envelope (api/error_handlers.py)
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from chickquita.api.error_handlers import register_error_handlers
from chickquita.api.routes import coops, daily_records, flocks, health, purchases
from chickquita.config import get_settings
from chickquita.infrastructure import database
from chickquita.infrastructure.observability import setup_logging

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
    logger.info("Chickquita API started")
    yield
    if database.db_manager:
        await database.db_manager.dispose()
    logger.info("Chickquita API shutting down")


app = FastAPI(
    title="Chickquita API", version="1.0.0", lifespan=lifespan,
)

# CORS origins come from settings
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes (explicit registration)
app.include_router(health.router)
app.include_router(coops.router)
app.include_router(flocks.router)
app.include_router(daily_records.router)
app.include_router(purchases.router)

register_error_handlers(app)
