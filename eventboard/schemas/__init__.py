from pydantic import BaseModel, EmailStr, field_serializer
from typing import Optional, List
from datetime import date, time, datetime
from enum import Enum
from eventboard.db.models.event import EventStatus


class InviteStyle(str, Enum):
    full = "full"
    simple = "simple"
    whatsapp = "whatsapp"


class MessageResponse(BaseModel):
    message: str


class LoginRequest(BaseModel):
    """Credentials are checked in the service so missing fields get a readable 400."""
    email: Optional[str] = None
    password: Optional[str] = None


class UserOut(BaseModel):
    id: int
    email: str
    name: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class LoginResponse(BaseModel):
    message: str
    user: UserOut


class SessionStatus(BaseModel):
    authenticated: bool
    user_id: int
    user: UserOut


class AdminSecretRequest(BaseModel):
    secret_password: Optional[str] = None


class AdminUserCreate(AdminSecretRequest):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    password: Optional[str] = None


class EventPayload(BaseModel):
    """Body of event create/update. Field rules live in EventService."""
    title: Optional[str] = None
    description: Optional[str] = None
    event_date: Optional[str] = None
    event_time: Optional[str] = None
    image_url: Optional[str] = None
    location: Optional[str] = None
    status: Optional[EventStatus] = None


class EventOut(BaseModel):
    id: int
    title: str
    description: Optional[str]
    event_date: date
    event_time: time
    status: EventStatus
    image_url: Optional[str]
    location: Optional[str]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

    @field_serializer("event_date")
    def serialize_event_date(self, value: date) -> str:
        return value.isoformat()

    @field_serializer("event_time")
    def serialize_event_time(self, value: time) -> str:
        return value.strftime("%H:%M")


class PaginationMetadata(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool


class EventListResponse(BaseModel):
    events: List[EventOut]
    pagination: PaginationMetadata


class InviteOut(BaseModel):
    event_id: int
    style: InviteStyle
    text: str


class InitStatus(BaseModel):
    message: str
    status: str


class DatabaseHealth(BaseModel):
    status: str
    events_count: int
    users_count: int
    timestamp: datetime
