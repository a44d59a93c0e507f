"""Queue state machine — status transitions and removals for song requests.

Invariants kept after every commit, per event:
- at most one request ON_STAGE
- at most one request NEXT
- arrival order (``created_at``) is never touched by a transition

A promotion into an exclusive status and the demotion of its previous
holder(s) are written in the same commit.
"""
import logging
from typing import NamedTuple, Optional

from sqlalchemy.orm import Session

from karaoke.models.event import Event
from karaoke.models.song_request import SongRequest, RequestStatus, EXCLUSIVE_STATUSES
from karaoke.services.errors import NotFound
from karaoke.services.queue_notifier import notifier
from karaoke.services.store import commit

logger = logging.getLogger(__name__)


class Transition(NamedTuple):
    request: SongRequest
    demoted_ids: list[str]


def _lock_event(db: Session, event_id: str) -> None:
    """Take the event's write lock for the rest of the transaction.

    Writing the event row first makes a second status change on the same
    event wait for this commit before it reads the current holders. An
    UPDATE locks on SQLite as well as on PostgreSQL, unlike FOR UPDATE.
    """
    touched = (
        db.query(Event)
        .filter(Event.event_id == event_id)
        .update({Event.queue_version: Event.queue_version + 1}, synchronize_session=False)
    )
    if not touched:
        raise NotFound("Event not found")


def _get_request(db: Session, event_id: str, request_id: str) -> SongRequest:
    req = (
        db.query(SongRequest)
        .filter(SongRequest.event_id == event_id, SongRequest.request_id == request_id)
        .first()
    )
    if not req:
        raise NotFound("Request not found in this event")
    return req


def set_status(db: Session, event_id: Optional[str], request_id: str,
               new_status: RequestStatus) -> Optional[Transition]:
    """Move a request to ``new_status``, demoting the current holder if needed.

    Without an event id there is nothing to act on: the call is a no-op and
    returns ``None``.
    """
    if not event_id:
        logger.warning("Status change for request %s ignored: no active event", request_id)
        return None

    new_status = RequestStatus(new_status)
    try:
        _lock_event(db, event_id)
        target = _get_request(db, event_id, request_id)
    except NotFound:
        db.rollback()
        raise

    demoted: list[str] = []
    if new_status in EXCLUSIVE_STATUSES:
        holders = (
            db.query(SongRequest)
            .filter(
                SongRequest.event_id == event_id,
                SongRequest.status == new_status,
                SongRequest.request_id != request_id,
            )
            .all()
        )
        for holder in holders:
            holder.status = RequestStatus.waiting
            demoted.append(holder.request_id)

    previous = target.status
    target.status = new_status
    commit(db, "change request status")
    db.refresh(target)

    logger.info(
        "Request %s in event %s: %s -> %s (demoted: %s)",
        request_id, event_id, previous.value, new_status.value, demoted or "none",
    )
    notifier.publish(event_id)
    return Transition(request=target, demoted_ids=demoted)


def delete_request(db: Session, event_id: str, request_id: str) -> None:
    """Remove a single request, whatever its status."""
    req = _get_request(db, event_id, request_id)
    db.delete(req)
    commit(db, "delete request")
    logger.info("Deleted request %s from event %s", request_id, event_id)
    notifier.publish(event_id)


def delete_requests(db: Session, event_id: str, request_ids: list[str]) -> int:
    """Remove several requests in one commit; all of them or none.

    Every id must belong to ``event_id``, otherwise nothing is deleted.
    """
    wanted = set(request_ids)
    if not wanted:
        return 0

    found = (
        db.query(SongRequest)
        .filter(SongRequest.event_id == event_id, SongRequest.request_id.in_(wanted))
        .all()
    )
    missing = wanted - {r.request_id for r in found}
    if missing:
        raise NotFound(f"Requests not found in this event: {', '.join(sorted(missing))}")

    for req in found:
        db.delete(req)
    commit(db, "bulk delete requests")
    logger.info("Bulk deleted %d requests from event %s", len(found), event_id)
    notifier.publish(event_id)
    return len(found)
