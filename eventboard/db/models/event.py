from sqlalchemy import Column, Integer, String, Text, Date, Time, DateTime, func, Enum, Index
from eventboard.db.session import Base
import enum


class EventStatus(str, enum.Enum):
    """Lifecycle of an event. Only ``cancelado`` is ever set by hand."""
    andamento = "andamento"
    realizado = "realizado"
    cancelado = "cancelado"


class Event(Base):
    __tablename__ = "events"
    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    event_date = Column(Date, nullable=False)
    event_time = Column(Time, nullable=False)
    status = Column(
        Enum(EventStatus, native_enum=False, length=50),
        default=EventStatus.andamento,
        server_default=EventStatus.andamento.value,
        nullable=False,
    )
    image_url = Column(Text, nullable=True)
    location = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index('idx_event_date_time', 'event_date', 'event_time'),
        Index('idx_event_status', 'status'),
    )
