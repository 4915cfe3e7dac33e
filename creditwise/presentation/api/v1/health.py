"""Health check endpoint for service monitoring."""

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from creditwise import __version__
from creditwise.core.config import settings
from creditwise.infrastructure.database import get_db_session

logger = structlog.get_logger(__name__)

health_router = APIRouter()


class HealthResponse(BaseModel):
    status: str
    service: str
    version: str
    database: str


@health_router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health Check",
    description="Reports service status and whether the report store is reachable.",
)
async def health_check(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> HealthResponse:
    try:
        await session.execute(text("SELECT 1"))
        database = "ok"
    except SQLAlchemyError as e:
        logger.warning("health_database_unreachable", error=str(e))
        database = "unreachable"

    return HealthResponse(
        status="healthy" if database == "ok" else "degraded",
        service=settings.app_name,
        version=__version__,
        database=database,
    )
