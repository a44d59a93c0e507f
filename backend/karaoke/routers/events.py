"""Operator event routes — delegates to event_registry for the gate and cascade rules."""
import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from karaoke.database import get_db
from karaoke.dependencies import require_operator
from karaoke.schemas.event import EventCreate, EventOut, EventDeleted
from karaoke.schemas.queue import OperatorQueueView
from karaoke.services import event_registry, queue_projection

logger = logging.getLogger(__name__)
router = APIRouter(dependencies=[Depends(require_operator)])


@router.post("/", response_model=EventOut, status_code=status.HTTP_201_CREATED)
def create_event(payload: EventCreate, db: Session = Depends(get_db)):
    """Create a new event with a fresh join code, open for submissions."""
    return event_registry.create_event(db, name=payload.name, song_minutes_avg=payload.song_minutes_avg)


@router.get("/", response_model=list[EventOut])
def list_events(db: Session = Depends(get_db)):
    """Event history, newest first."""
    return event_registry.list_events(db)


@router.get("/{event_id}", response_model=EventOut)
def get_event(event_id: str, db: Session = Depends(get_db)):
    return event_registry.get_event(db, event_id)


@router.post("/{event_id}/toggle-accepting", response_model=EventOut)
def toggle_accepting(event_id: str, db: Session = Depends(get_db)):
    """Open or close the event to attendee submissions."""
    return event_registry.toggle_accepting(db, event_id)


@router.delete("/{event_id}", response_model=EventDeleted)
def delete_event(event_id: str, db: Session = Depends(get_db)):
    """Delete the event together with every request in its queue."""
    removed = event_registry.delete_event(db, event_id)
    return EventDeleted(event_id=event_id, requests_deleted=removed)


@router.get("/{event_id}/queue", response_model=OperatorQueueView)
def operator_queue(event_id: str, db: Session = Depends(get_db)):
    """Queue as seen from the booth, including who inserted each request."""
    event = event_registry.get_event(db, event_id)
    return queue_projection.operator_view(db, event)
