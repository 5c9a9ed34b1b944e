"""FastAPI application factory and lifespan management."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from jobly.config import settings
from jobly.db.engine import create_db_engine, create_session_factory
from jobly.logging_config import configure_logging

# Configure logging at import time
configure_logging(log_level=settings.log_level, json_output=not settings.local_mode)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application startup and shutdown resources."""
    db_url = settings.effective_database_url
    engine = create_db_engine(db_url)

    # Local SQLite runs without migrations
    if db_url.startswith("sqlite"):
        from jobly.db.base import Base
        import jobly.db.models  # noqa: F401  register all ORM models

        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("SQLite tables created (local mode)")

    app.state.db_engine = engine
    app.state.db_session_factory = create_session_factory(engine)

    logger.info("Jobly API started (db=%s)", engine.dialect.name)
    yield

    await engine.dispose()
    logger.info("Jobly API shutdown complete")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Jobly API",
        version="1.0.0",
        description="Job board records: companies and the jobs they post.",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Order matters: last added = first executed
    from jobly.api.middleware.auth import AuthMiddleware
    from jobly.api.middleware.trace_id import TraceIdMiddleware
    app.add_middleware(AuthMiddleware)
    app.add_middleware(TraceIdMiddleware)

    from jobly.errors.handlers import register_exception_handlers
    register_exception_handlers(app)

    from jobly.api.router import api_router
    app.include_router(api_router)

    return app


app = create_app()
