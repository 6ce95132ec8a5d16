"""Database models package."""
from eventboard.db.models.user import User
from eventboard.db.models.event import Event, EventStatus

__all__ = ["User", "Event", "EventStatus"]
