"""Event registry — creation, join codes, the submission gate, cascade delete."""
import logging
import secrets
import string
from typing import Optional

from sqlalchemy.orm import Session

from karaoke.config import settings
from karaoke.models.event import Event
from karaoke.models.song_request import SongRequest
from karaoke.services.errors import JoinCodesExhausted, NotFound
from karaoke.services.queue_notifier import notifier
from karaoke.services.store import commit

logger = logging.getLogger(__name__)

JOIN_CODE_ALPHABET = string.ascii_uppercase + string.digits


def generate_join_code(length: Optional[int] = None) -> str:
    """Random uppercase alphanumeric code, easy to type from a QR poster."""
    length = length or settings.JOIN_CODE_LENGTH
    return "".join(secrets.choice(JOIN_CODE_ALPHABET) for _ in range(length))


def _code_in_use(db: Session, code: str) -> bool:
    return (
        db.query(Event.event_id)
        .filter(Event.join_code == code, Event.is_active.is_(True))
        .first()
        is not None
    )


def _draw_unused_code(db: Session) -> str:
    for _ in range(settings.JOIN_CODE_ATTEMPTS):
        code = generate_join_code()
        if not _code_in_use(db, code):
            return code
        logger.warning("Join code %s already used by an active event, drawing again", code)
    raise JoinCodesExhausted()


def create_event(db: Session, name: str, song_minutes_avg: Optional[float] = None) -> Event:
    """Create an open, active event with a fresh join code."""
    event = Event(
        name=name.strip(),
        join_code=_draw_unused_code(db),
        is_active=True,
        accepting_requests=True,
        song_minutes_avg=song_minutes_avg if song_minutes_avg is not None else settings.DEFAULT_SONG_MINUTES,
    )
    db.add(event)
    commit(db, "create event")
    db.refresh(event)
    logger.info("Created event '%s' (%s) with join code %s", event.name, event.event_id, event.join_code)
    return event


def get_event(db: Session, event_id: str) -> Event:
    event = db.query(Event).filter(Event.event_id == event_id).first()
    if not event:
        raise NotFound("Event not found")
    return event


def list_events(db: Session) -> list[Event]:
    """Event history, newest first."""
    return db.query(Event).order_by(Event.created_at.desc()).all()


def find_event_by_code(db: Session, code: str) -> Event:
    """Resolve a join code to its active event.

    Codes are not guaranteed unique across history; if several active events
    share one, the first row returned wins.
    """
    normalized = (code or "").strip().upper()
    event = (
        db.query(Event)
        .filter(Event.join_code == normalized, Event.is_active.is_(True))
        .first()
    )
    if not event:
        raise NotFound(f"No active event with code '{normalized}'")
    return event


def toggle_accepting(db: Session, event_id: str) -> Event:
    """Flip the submission gate."""
    event = get_event(db, event_id)
    event.accepting_requests = not event.is_accepting
    commit(db, "toggle accepting requests")
    db.refresh(event)
    logger.info(
        "Event %s is now %s requests",
        event_id, "accepting" if event.is_accepting else "refusing",
    )
    notifier.publish(event_id)
    return event


def delete_event(db: Session, event_id: str) -> int:
    """Delete an event and all of its requests; returns how many requests went.

    Requests are removed in batches of ``DELETE_BATCH_SIZE`` (one commit per
    batch) before the event row itself is deleted.
    """
    event = get_event(db, event_id)
    removed = 0
    while True:
        batch = (
            db.query(SongRequest)
            .filter(SongRequest.event_id == event_id)
            .order_by(SongRequest.created_at)
            .limit(settings.DELETE_BATCH_SIZE)
            .all()
        )
        if not batch:
            break
        for req in batch:
            db.delete(req)
        commit(db, "delete event requests")
        removed += len(batch)
        logger.debug("Deleted %d requests of event %s", len(batch), event_id)

    db.delete(event)
    commit(db, "delete event")
    logger.info("Deleted event %s and %d requests", event_id, removed)
    notifier.publish(event_id)
    return removed
