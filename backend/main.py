from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.responses import JSONResponse

from sqlalchemy import text
from sqlalchemy.exc import OperationalError as SAOperationalError

from api.router import api_router
from core.bootstrap import bootstrap_database
from core.config import settings
from core.database import DatabaseUnavailableError, ENGINE, is_transient_db_connectivity_error
from core.logging import setup_logging


logger = logging.getLogger(__name__)


def _database_unavailable_response() -> JSONResponse:
    return JSONResponse(
        status_code=503,
        content={
            "code": "DATABASE_UNAVAILABLE",
            "message": "Database temporarily unavailable. Please retry.",
        },
    )


@asynccontextmanager
async def lifespan(_: FastAPI):
    if settings.bootstrap_on_startup:
        bootstrap_database()
    yield


def create_app() -> FastAPI:
    setup_logging(
        environment=settings.environment,
        level=settings.log_level,
        log_dir=settings.log_directory(),
    )
    is_production = settings.environment == "production"
    app = FastAPI(
        title="School Timetable API",
        version="0.1.0",
        docs_url=None if is_production else "/docs",
        redoc_url=None if is_production else "/redoc",
        openapi_url=None if is_production else "/openapi.json",
        lifespan=lifespan,
    )

    @app.exception_handler(DatabaseUnavailableError)
    def _db_unavailable(_request, exc: DatabaseUnavailableError):
        logger.warning("Database unavailable (503)", exc_info=exc)
        return _database_unavailable_response()

    @app.exception_handler(SAOperationalError)
    def _sqlalchemy_operational_error(_request, exc: SAOperationalError):
        if is_transient_db_connectivity_error(exc):
            logger.warning("Database transient connectivity error (503)", exc_info=exc)
            return _database_unavailable_response()
        logger.error("Database operation failed", exc_info=exc)
        return JSONResponse(
            status_code=500,
            content={
                "code": "DATABASE_ERROR",
                "message": "Database operation failed.",
            },
        )

    allow_origins = [settings.frontend_origin]
    allow_origin_regex = None
    if not is_production:
        # Dev-friendly: allow the configured origin and any localhost port.
        allow_origins.extend(["http://localhost:5173", "http://127.0.0.1:5173"])
        allow_origin_regex = r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$"

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_origin_regex=allow_origin_regex,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    def health() -> dict:
        # Always respond; reflect DB availability without crashing.
        db_status = "ok"
        try:
            with ENGINE.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SAOperationalError:
            db_status = "down"

        return {"app": "ok", "database": db_status}

    app.include_router(api_router, prefix="/api")
    return app


app = create_app()
