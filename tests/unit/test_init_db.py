"""
Unit tests for the lazy database bootstrap.
"""
import asyncio
import pytest

from eventboard.core.config import settings
from eventboard.db import init_db
from eventboard.db.models import User
from eventboard.db.repositories import get_user_by_email, count_users, count_events


@pytest.mark.unit
@pytest.mark.asyncio
class TestInitializeDatabase:

    async def test_seeds_default_admin_once(self, db_session, monkeypatch):
        monkeypatch.setattr(init_db, "_initialized", False)

        await init_db.initialize_database(db_session)

        admin = await get_user_by_email(db_session, settings.DEFAULT_ADMIN_EMAIL)
        assert admin is not None
        assert admin.name == settings.DEFAULT_ADMIN_NAME
        assert init_db.is_initialized() is True

        # A second call is a no-op, even after the admin is gone
        await db_session.delete(admin)
        await db_session.commit()
        await init_db.initialize_database(db_session)
        assert await count_users(db_session) == 0

    async def test_existing_admin_is_kept(self, db_session, monkeypatch):
        monkeypatch.setattr(init_db, "_initialized", False)
        monkeypatch.setattr(settings, "DEFAULT_ADMIN_EMAIL", "admin@example.com")

        db_session.add(User(email="admin@example.com", password="x", name="Existing"))
        await db_session.commit()

        await init_db.initialize_database(db_session)

        assert await count_users(db_session) == 1
        assert (await get_user_by_email(db_session, "admin@example.com")).name == "Existing"

    async def test_sample_events_only_when_enabled(self, db_session, monkeypatch):
        monkeypatch.setattr(init_db, "_initialized", False)
        monkeypatch.setattr(settings, "SEED_SAMPLE_EVENTS", False)
        await init_db.initialize_database(db_session)
        assert await count_events(db_session) == 0

        monkeypatch.setattr(init_db, "_initialized", False)
        monkeypatch.setattr(settings, "SEED_SAMPLE_EVENTS", True)
        await init_db.initialize_database(db_session)
        assert await count_events(db_session) == len(init_db.SAMPLE_EVENTS)

    async def test_concurrent_first_calls_seed_one_admin(self, db_session, session_factory, monkeypatch):
        monkeypatch.setattr(init_db, "_initialized", False)
        monkeypatch.setattr(init_db, "_init_lock", asyncio.Lock())

        async with session_factory() as first, session_factory() as second:
            await asyncio.gather(
                init_db.initialize_database(first),
                init_db.initialize_database(second),
            )

        assert init_db.is_initialized() is True
        assert await count_users(db_session) == 1

    async def test_admin_inserted_elsewhere_is_tolerated(self, db_session, monkeypatch):
        monkeypatch.setattr(init_db, "_initialized", False)
        monkeypatch.setattr(settings, "DEFAULT_ADMIN_EMAIL", "admin@example.com")
        db_session.add(User(email="admin@example.com", password="x", name="Other Worker"))
        await db_session.commit()

        # The first lookup misses, as if the row landed right after it.
        lookups = []
        real_lookup = init_db.repo.get_user_by_email

        async def racing_lookup(session, email):
            lookups.append(email)
            if len(lookups) == 1:
                return None
            return await real_lookup(session, email)

        monkeypatch.setattr(init_db.repo, "get_user_by_email", racing_lookup)

        await init_db.initialize_database(db_session)

        assert init_db.is_initialized() is True
        assert len(lookups) == 2
        assert await count_users(db_session) == 1
        assert (await get_user_by_email(db_session, "admin@example.com")).name == "Other Worker"

    async def test_configured_email_is_stored_lower_case(self, db_session, monkeypatch):
        monkeypatch.setattr(init_db, "_initialized", False)
        monkeypatch.setattr(settings, "DEFAULT_ADMIN_EMAIL", "Admin@Example.COM")

        await init_db.initialize_database(db_session)

        assert await get_user_by_email(db_session, "admin@example.com") is not None
        assert await count_users(db_session) == 1
