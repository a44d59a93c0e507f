"""Event ORM model — one karaoke night addressed by its join code."""
import uuid
from sqlalchemy import Column, String, Boolean, DateTime, Float, Integer
from sqlalchemy.orm import relationship
from karaoke.database import Base, server_timestamp


class Event(Base):
    __tablename__ = "events"

    event_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(150), nullable=False)
    join_code = Column(String(12), nullable=False, index=True)
    is_active = Column(Boolean, nullable=False, default=True)
    accepting_requests = Column(Boolean, nullable=True, default=True)  # NULL reads as open
    song_minutes_avg = Column(Float, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=server_timestamp)
    queue_version = Column(Integer, nullable=False, default=0)  # bumped by every status change

    requests = relationship(
        "SongRequest",
        back_populates="event",
        cascade="all, delete-orphan",
        order_by="SongRequest.created_at",
    )

    @property
    def is_accepting(self) -> bool:
        return self.accepting_requests is not False
