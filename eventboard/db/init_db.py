"""
Lazy, one-time database bootstrap.

The first request that needs the database creates the tables, seeds the
default administrator and, optionally, a handful of sample events. The flag
is process-wide and only flips after a successful run, so a failed bootstrap
is retried by the next request.
"""
import asyncio
from datetime import date, time
from fastapi import Depends
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from eventboard.core.config import settings
from eventboard.core.logging import logger
from eventboard.db.session import Base, get_session
from eventboard.db.models import Event, EventStatus
from eventboard.db import repositories as repo

_initialized = False
_init_lock = asyncio.Lock()

SAMPLE_EVENTS = [
    {
        "title": "Acampamento de Verão",
        "description": "Acampamento anual de verão para todos os grupos",
        "event_date": date(2024, 1, 15),
        "event_time": time(9, 0),
        "status": EventStatus.realizado,
        "location": "Sede do Grupo Escoteiro Pirabeiraba",
    },
    {
        "title": "Reunião Semanal",
        "description": "Reunião semanal do grupo escoteiro",
        "event_date": date(2024, 12, 20),
        "event_time": time(19, 0),
        "status": EventStatus.andamento,
        "location": "Sede do Grupo Escoteiro Pirabeiraba",
    },
    {
        "title": "Caminhada Ecológica",
        "description": "Atividade de conscientização ambiental",
        "event_date": date(2024, 12, 25),
        "event_time": time(8, 0),
        "status": EventStatus.andamento,
        "location": "Parque Municipal de Pirabeiraba",
    },
    {
        "title": "Festival de Talentos",
        "description": "Apresentação dos talentos dos escoteiros",
        "event_date": date(2024, 11, 10),
        "event_time": time(15, 0),
        "status": EventStatus.cancelado,
        "location": "Escola Municipal de Pirabeiraba",
    },
]


def is_initialized() -> bool:
    return _initialized


def _create_tables(sync_session) -> None:
    Base.metadata.create_all(bind=sync_session.connection())


async def _seed_default_admin(session: AsyncSession) -> None:
    email = settings.default_admin_login
    if await repo.get_user_by_email(session, email) is not None:
        return
    try:
        await repo.create_user(
            session,
            name=settings.DEFAULT_ADMIN_NAME,
            email=email,
            password=settings.DEFAULT_ADMIN_PASSWORD,
        )
    except IntegrityError:
        # Another process seeded it between the lookup and the insert.
        await session.rollback()
        if await repo.get_user_by_email(session, email) is None:
            raise
        logger.info(f"Default administrator {email} already created elsewhere")
        return
    logger.info(f"Default administrator {email} created")


async def initialize_database(session: AsyncSession) -> None:
    """Create tables and seed bootstrap data unless already done in this process."""
    global _initialized
    if _initialized:
        return

    async with _init_lock:
        # Concurrent first requests queue here; only the first one does the work.
        if _initialized:
            return

        logger.info("Starting database initialization")
        try:
            await session.run_sync(_create_tables)
            await session.commit()

            await _seed_default_admin(session)

            if settings.SEED_SAMPLE_EVENTS and await repo.count_events(session) == 0:
                session.add_all([Event(**data) for data in SAMPLE_EVENTS])
                await session.commit()
                logger.info(f"Inserted {len(SAMPLE_EVENTS)} sample events")
        except Exception:
            await session.rollback()
            logger.exception("Database initialization failed")
            raise

        _initialized = True
        logger.info("Database initialization completed")


async def get_db(session: AsyncSession = Depends(get_session)) -> AsyncSession:
    """Request-scoped session that triggers the lazy bootstrap first."""
    await initialize_database(session)
    return session
