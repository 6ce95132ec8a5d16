from datetime import datetime, timezone
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Dict
from eventboard.core.logging import logger
from eventboard.db import repositories as repo
from eventboard.db.init_db import get_db
from eventboard.schemas import DatabaseHealth, InitStatus

router = APIRouter(tags=["health"])


@router.get("/health", response_model=Dict[str, str])
async def health_check():
    """Liveness check, does not touch the database."""
    return {"status": "healthy"}


@router.get("/health/db", response_model=DatabaseHealth)
async def database_health(session: AsyncSession = Depends(get_db)):
    """Check the connection and report row counts for both tables."""
    try:
        events_count = await repo.count_events(session)
        users_count = await repo.count_users(session)
    except SQLAlchemyError:
        logger.exception("Database health check failed")
        raise HTTPException(status_code=500, detail="Database check failed")

    return DatabaseHealth(
        status="success",
        events_count=events_count,
        users_count=users_count,
        timestamp=datetime.now(timezone.utc),
    )


@router.get("/init", response_model=InitStatus)
async def init_database(session: AsyncSession = Depends(get_db)):
    """Force the lazy bootstrap; it has already run by the time this body executes."""
    return InitStatus(message="Database initialized", status="ready")
