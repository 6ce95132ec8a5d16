import math
import re
from datetime import date, datetime, time
from typing import Callable, Optional
from zoneinfo import ZoneInfo
from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from eventboard.core.config import settings
from eventboard.core.logging import logger
from eventboard.db.models.event import Event, EventStatus
from eventboard.db import repositories as repo
from eventboard.schemas import EventPayload, EventListResponse, EventOut, PaginationMetadata

MAX_TITLE_LENGTH = 255
MAX_IMAGE_LENGTH = 200_000
MAX_DESCRIPTION_LENGTH = 1000

DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
TIME_RE = re.compile(r"^(\d{2}):(\d{2})(?::(\d{2}))?$")


def local_today() -> date:
    """Current date in the organization's timezone."""
    return datetime.now(ZoneInfo(settings.TIMEZONE)).date()


def parse_event_date(value: str) -> Optional[date]:
    """Parse a strict YYYY-MM-DD date, returning None if malformed or not a real day."""
    if not value or not DATE_RE.match(value):
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def parse_event_time(value: str, allow_seconds: bool = False) -> Optional[time]:
    """Parse HH:MM (optionally HH:MM:SS), returning None if out of range."""
    match = TIME_RE.match(value or "")
    if not match:
        return None
    hours, minutes, seconds = match.groups()
    if seconds is not None and not allow_seconds:
        return None
    if int(hours) > 23 or int(minutes) > 59 or int(seconds or 0) > 59:
        return None
    return time(int(hours), int(minutes))


def _bad_request(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


def validate_event_payload(payload: EventPayload, allow_seconds: bool = False) -> dict:
    """
    Check an event body and convert it to column values.

    Rules are applied in a fixed order and the first failure wins.

    Raises:
        HTTPException: 400 describing the first invalid field
    """
    title = (payload.title or "").strip()
    location = (payload.location or "").strip()

    if not title:
        raise _bad_request("Title is required")
    if len(title) > MAX_TITLE_LENGTH:
        raise _bad_request(f"Title too long. Maximum {MAX_TITLE_LENGTH} characters.")
    if not payload.event_date:
        raise _bad_request("Date is required")
    if not payload.event_time:
        raise _bad_request("Time is required")
    if not location:
        raise _bad_request("Location is required")

    event_date = parse_event_date(payload.event_date)
    if event_date is None:
        raise _bad_request("Invalid date. Use the format YYYY-MM-DD")

    event_time = parse_event_time(payload.event_time, allow_seconds=allow_seconds)
    if event_time is None:
        raise _bad_request("Invalid time. Use the format HH:MM")

    image_url = payload.image_url or ""
    if image_url:
        if not image_url.startswith("data:image/"):
            raise _bad_request("Image must be sent as a data:image/ URI")
        if len(image_url) > MAX_IMAGE_LENGTH:
            raise _bad_request("Image too large. Try a smaller image.")

    description = (payload.description or "").strip()
    if len(description) > MAX_DESCRIPTION_LENGTH:
        raise _bad_request(f"Description too long. Maximum {MAX_DESCRIPTION_LENGTH} characters.")

    return {
        "title": title,
        "description": description,
        "event_date": event_date,
        "event_time": event_time,
        "image_url": image_url,
        "location": location,
    }


class EventService:
    def __init__(self, session: AsyncSession, today: Callable[[], date] = local_today):
        self.session = session
        self.today = today

    async def _get_or_404(self, event_id: int) -> Event:
        ev = await repo.get_event(self.session, event_id)
        if not ev:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Event not found")
        return ev

    async def refresh_statuses(self) -> int:
        updated = await repo.mark_past_events_done(self.session, self.today())
        if updated:
            logger.info(f"Marked {updated} past event(s) as realizado")
        return updated

    async def list_events(self, page: int, limit: int, status_filter: Optional[EventStatus]) -> EventListResponse:
        """
        One page of events plus pagination metadata.

        Past ``andamento`` events are moved to ``realizado`` before reading.
        """
        await self.refresh_statuses()

        offset = (page - 1) * limit
        total = await repo.count_events(self.session, status=status_filter)
        events = await repo.list_events(self.session, limit=limit, offset=offset, status=status_filter)

        total_pages = math.ceil(total / limit)
        return EventListResponse(
            events=[EventOut.model_validate(ev) for ev in events],
            pagination=PaginationMetadata(
                page=page,
                limit=limit,
                total=total,
                total_pages=total_pages,
                has_next=page < total_pages,
                has_prev=page > 1,
            ),
        )

    async def get_event(self, event_id: int) -> Event:
        return await self._get_or_404(event_id)

    async def create_event(self, payload: EventPayload) -> Event:
        fields = validate_event_payload(payload)
        ev = await repo.create_event(self.session, status=EventStatus.andamento, **fields)
        logger.info(f"Event {ev.id} created")
        return ev

    async def update_event(self, event_id: int, payload: EventPayload) -> Event:
        fields = validate_event_payload(payload, allow_seconds=True)
        ev = await self._get_or_404(event_id)
        ev = await repo.update_event(
            self.session,
            ev,
            status=payload.status or EventStatus.andamento,
            **fields,
        )
        logger.info(f"Event {ev.id} updated")
        return ev

    async def delete_event(self, event_id: int) -> None:
        ev = await self._get_or_404(event_id)
        await repo.delete_event(self.session, ev)
        logger.info(f"Event {event_id} deleted")
