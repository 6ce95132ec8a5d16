from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
from eventboard.schemas import (
    EventPayload, EventOut, EventListResponse, EventStatus, InviteOut, InviteStyle, MessageResponse,
)
from eventboard.db.init_db import get_db
from eventboard.services.event_service import EventService
from eventboard.services.invite_service import render_invite
from eventboard.auth import get_current_user

router = APIRouter(prefix="/events", tags=["events"])

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 8


def get_event_service(session: AsyncSession = Depends(get_db)) -> EventService:
    return EventService(session)


@router.get("", response_model=EventListResponse)
async def list_events(
    page: int = Query(DEFAULT_PAGE, ge=1, description="Page number (1-indexed)"),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=100, description="Number of events per page"),
    status_filter: Optional[EventStatus] = Query(None, alias="status", description="Filter by status"),
    event_service: EventService = Depends(get_event_service)
):
    """
    List events, latest first.

    Reading the list also closes out past events: anything still
    ``andamento`` with a date before today becomes ``realizado``.
    """
    return await event_service.list_events(page=page, limit=limit, status_filter=status_filter)


@router.post("", response_model=EventOut, status_code=status.HTTP_201_CREATED)
async def create_event(
    payload: EventPayload,
    user=Depends(get_current_user),
    event_service: EventService = Depends(get_event_service)
):
    return await event_service.create_event(payload)


@router.get("/{event_id}", response_model=EventOut)
async def get_event(
    event_id: int,
    event_service: EventService = Depends(get_event_service)
):
    return await event_service.get_event(event_id)


@router.get("/{event_id}/invite", response_model=InviteOut)
async def get_event_invite(
    event_id: int,
    style: InviteStyle = Query(InviteStyle.full, description="Invitation template"),
    event_service: EventService = Depends(get_event_service)
):
    """Ready-to-share invitation text for messaging apps."""
    ev = await event_service.get_event(event_id)
    return InviteOut(event_id=ev.id, style=style, text=render_invite(ev, style))


@router.put("/{event_id}", response_model=EventOut)
async def update_event(
    event_id: int,
    payload: EventPayload,
    user=Depends(get_current_user),
    event_service: EventService = Depends(get_event_service)
):
    return await event_service.update_event(event_id, payload)


@router.delete("/{event_id}", response_model=MessageResponse)
async def delete_event(
    event_id: int,
    user=Depends(get_current_user),
    event_service: EventService = Depends(get_event_service)
):
    await event_service.delete_event(event_id)
    return MessageResponse(message="Event deleted")
