"""
CreditWise - Main Application Entry Point

An Alternative Credit Score service that evaluates informal-economy
workers from their income and expense history.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from creditwise import __version__
from creditwise.core.config import settings
from creditwise.core.logging import setup_logging
from creditwise.core.metrics import get_metrics, get_metrics_content_type
from creditwise.infrastructure.database import db_manager
from creditwise.presentation.api import api_router
from creditwise.presentation.middleware import (
    LoggingMiddleware,
    RequestContextMiddleware,
    error_handler_middleware,
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    Handles startup and shutdown events:
    - Set up logging
    - Initialize database connection pool and tables
    - Clean up on shutdown
    """
    setup_logging()
    db_manager.init()
    await db_manager.create_tables()

    logger = structlog.get_logger(__name__)
    logger.info("application_started", service=settings.app_name, version=__version__)

    yield

    await db_manager.close()
    logger.info("application_stopped")


app = FastAPI(
    title="CreditWise",
    description="Alternative Credit Score Service",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(LoggingMiddleware)
app.add_middleware(RequestContextMiddleware)

error_handler_middleware(app)

app.include_router(api_router)


@app.get("/metrics", include_in_schema=False)
async def metrics() -> Response:
    """Prometheus metrics endpoint."""
    return Response(
        content=get_metrics(),
        media_type=get_metrics_content_type(),
    )


@app.get("/", include_in_schema=False)
async def root():
    """Redirect to API documentation."""

    return RedirectResponse(url="/docs")
