"""FastAPI application for the property appraisal records API."""
from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response

from .core.config import settings
from .core.errors import register_exception_handlers
from .db.session import Database
from .routers import assessments, improvements, neighborhoods, owners, properties, reports, sales

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Open the database handle on startup and dispose of it on shutdown."""

    database = Database.from_settings(settings)
    app.state.database = database
    logger.info("Database engine initialised (%s)", settings.app_env)
    try:
        yield
    finally:
        await database.dispose()
        logger.info("Database engine disposed")


app = FastAPI(title="Property Appraisal API", version="0.1.0", lifespan=lifespan)

if settings.cors_allow_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

register_exception_handlers(app)

app.include_router(properties.router, prefix="/api/properties", tags=["properties"])
app.include_router(owners.router, prefix="/api/owners", tags=["owners"])
app.include_router(neighborhoods.router, prefix="/api/neighborhoods", tags=["neighborhoods"])
app.include_router(sales.router, prefix="/api/sales", tags=["sales"])
app.include_router(assessments.router, prefix="/api/assessments", tags=["assessments"])
app.include_router(improvements.router, prefix="/api/improvements", tags=["improvements"])
app.include_router(reports.router, prefix="/api", tags=["reports"])


@app.get("/api/health", tags=["meta"])
async def health() -> dict[str, str]:
    """Simple liveness probe."""

    return {"status": "ok"}


@app.head("/api/health", tags=["meta"])
async def health_head() -> Response:
    """Allow HEAD for uptime monitors that only need the status code."""

    return Response(status_code=200)
