"""SpeechKarma API - FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map SpeechKarmaError -> {"error": {...}} envelopes
    - CORS configured from settings (not hardcoded)
    - Logging and the database are initialized on startup via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern
    - Error handlers live in api/error_handlers.py to keep this module small
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from speechkarma.api.error_handlers import register_error_handlers
from speechkarma.api.routes import auth, health, parties, politicians, profiles, statements
from speechkarma.config import get_settings
from speechkarma.infrastructure.database import init_db
from speechkarma.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info(
        f"SpeechKarma API started (AI summary "
        f"{'enabled' if settings.use_ai_summary else 'disabled'})",
    )
    yield
    logger.info("SpeechKarma API shutting down")


app = FastAPI(title="SpeechKarma API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(parties.router)
app.include_router(politicians.router)
app.include_router(statements.router)
app.include_router(profiles.router)

register_error_handlers(app)
