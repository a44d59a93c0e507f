"""SongRequest ORM model — one booking inside an Event's queue."""
import uuid
import enum
from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, Enum as SAEnum
from sqlalchemy.orm import relationship
from karaoke.database import Base, server_timestamp


class RequestStatus(str, enum.Enum):
    waiting = "WAITING"
    next = "NEXT"
    on_stage = "ON_STAGE"


# Statuses at most one request per event may hold.
EXCLUSIVE_STATUSES = (RequestStatus.next, RequestStatus.on_stage)


class SongRequest(Base):
    __tablename__ = "song_requests"

    request_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    event_id = Column(String(36), ForeignKey("events.event_id", ondelete="CASCADE"), nullable=False, index=True)
    nickname = Column(String(100), nullable=False)
    song_title = Column(String(255), nullable=False)
    key_shift = Column(Integer, nullable=False, default=0)
    status = Column(
        SAEnum(RequestStatus, values_callable=lambda members: [m.value for m in members]),
        nullable=False,
        default=RequestStatus.waiting,
    )
    created_at = Column(DateTime(timezone=True), nullable=False, default=server_timestamp, index=True)
    created_by = Column(String(20), nullable=True)  # "admin" for operator inserts

    event = relationship("Event", back_populates="requests")
