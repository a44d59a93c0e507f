"""Request intake — appends validated song requests to an event's queue."""
import logging
from typing import Optional

from sqlalchemy.orm import Session

from karaoke.config import settings
from karaoke.models.event import Event
from karaoke.models.song_request import SongRequest, RequestStatus
from karaoke.services.errors import RequestValidationFailed, SubmissionsClosed
from karaoke.services.queue_notifier import notifier
from karaoke.services.store import commit

logger = logging.getLogger(__name__)

OPERATOR_MARKER = "admin"


def _append(db: Session, event: Event, nickname: str, song_title: str, key_shift: int,
            created_by: Optional[str]) -> SongRequest:
    req = SongRequest(
        event_id=event.event_id,
        nickname=nickname,
        song_title=song_title,
        key_shift=key_shift,
        status=RequestStatus.waiting,
        created_by=created_by,
    )
    db.add(req)
    commit(db, "append song request")
    db.refresh(req)
    logger.info(
        "Queued '%s' for %s in event %s (request %s)",
        song_title, nickname, event.event_id, req.request_id,
    )
    notifier.publish(event.event_id)
    return req


def submit_request(db: Session, event: Event, nickname: str, song_title: str, key_shift: int = 0) -> SongRequest:
    """Attendee submission, subject to the event's gate.

    The gate is checked before the fields, so a closed event answers
    ``SubmissionsClosed`` whatever the payload. ``key_shift`` range is the
    caller's input surface concern and is stored as given.
    """
    if not event.is_accepting:
        logger.warning("Rejected submission to event %s: submissions closed", event.event_id)
        raise SubmissionsClosed()

    nickname = (nickname or "").strip()
    song_title = (song_title or "").strip()
    if not nickname:
        raise RequestValidationFailed("Nickname must not be empty")
    if not song_title:
        raise RequestValidationFailed("Song title must not be empty")

    return _append(db, event, nickname, song_title, key_shift, created_by=None)


def insert_operator_request(db: Session, event: Event, song_title: str, nickname: Optional[str] = None,
                            key_shift: int = 0) -> SongRequest:
    """Operator insert: bypasses the gate, blank nickname becomes the booth name."""
    song_title = (song_title or "").strip()
    if not song_title:
        raise RequestValidationFailed("Song title must not be empty")
    nickname = (nickname or "").strip() or settings.OPERATOR_NICKNAME
    return _append(db, event, nickname, song_title, key_shift, created_by=OPERATOR_MARKER)
