"""
Repository layer for database operations.

Async query functions for the User and Event tables. Every statement goes
through SQLAlchemy so values are always bound parameters.
"""
from sqlalchemy import select, update, func
from sqlalchemy.ext.asyncio import AsyncSession
from eventboard.db.models.user import User
from eventboard.db.models.event import Event, EventStatus
from eventboard.core.security import hash_password
from typing import Optional, List
from datetime import date


async def create_user(db: AsyncSession, name: str, email: str, password: str) -> User:
    """
    Create a new user with hashed password.

    Args:
        db: Database session
        name: Display name
        email: Unique login e-mail
        password: Plain-text password, hashed before storage

    Returns:
        Created User object
    """
    user = User(email=email, password=hash_password(password), name=name)
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
    q = select(User).where(User.email == email)
    res = await db.execute(q)
    return res.scalars().first()


async def get_user(db: AsyncSession, user_id: int) -> Optional[User]:
    q = select(User).where(User.id == user_id)
    res = await db.execute(q)
    return res.scalars().first()


async def list_users(db: AsyncSession) -> List[User]:
    """Users newest first."""
    q = select(User).order_by(User.created_at.desc(), User.id.desc())
    res = await db.execute(q)
    return list(res.scalars().all())


async def count_users(db: AsyncSession) -> int:
    res = await db.execute(select(func.count(User.id)))
    return res.scalar() or 0


async def reset_user_credentials(db: AsyncSession, user: User, name: str, password: str) -> User:
    """Overwrite a user's name and password hash in a single commit."""
    user.name = name
    user.password = hash_password(password)
    await db.commit()
    await db.refresh(user)
    return user


async def delete_user(db: AsyncSession, user: User) -> None:
    await db.delete(user)
    await db.commit()


async def create_event(db: AsyncSession, **fields) -> Event:
    ev = Event(**fields)
    db.add(ev)
    await db.commit()
    await db.refresh(ev)
    return ev


async def get_event(db: AsyncSession, event_id: int) -> Optional[Event]:
    q = select(Event).where(Event.id == event_id)
    res = await db.execute(q)
    return res.scalars().first()


async def list_events(
    db: AsyncSession,
    limit: int = 8,
    offset: int = 0,
    status: Optional[EventStatus] = None,
) -> List[Event]:
    """
    List events, latest date and time first.

    Rows are re-read into already loaded instances because bulk status
    updates bypass the session's identity map.
    """
    q = select(Event).order_by(Event.event_date.desc(), Event.event_time.desc(), Event.id.desc())
    if status:
        q = q.where(Event.status == status)
    q = q.limit(limit).offset(offset).execution_options(populate_existing=True)

    res = await db.execute(q)
    return list(res.scalars().all())


async def count_events(db: AsyncSession, status: Optional[EventStatus] = None) -> int:
    """Count events matching the same filter as list_events."""
    q = select(func.count(Event.id))
    if status:
        q = q.where(Event.status == status)
    res = await db.execute(q)
    return res.scalar() or 0


async def update_event(db: AsyncSession, ev: Event, **fields) -> Event:
    for key, value in fields.items():
        setattr(ev, key, value)
    await db.commit()
    await db.refresh(ev)
    return ev


async def delete_event(db: AsyncSession, ev: Event) -> None:
    await db.delete(ev)
    await db.commit()


async def mark_past_events_done(db: AsyncSession, today: date) -> int:
    """
    Move every ``andamento`` event dated before ``today`` to ``realizado``.

    Returns:
        Number of events updated
    """
    q = (
        update(Event)
        .where(Event.event_date < today, Event.status == EventStatus.andamento)
        .values(status=EventStatus.realizado, updated_at=func.now())
        .execution_options(synchronize_session=False)
    )
    res = await db.execute(q)
    await db.commit()
    return res.rowcount or 0
