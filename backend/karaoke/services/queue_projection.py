"""Queue projection — view-ready rows derived from one snapshot of a queue.

Everything here is recomputed from scratch on each call; nothing is cached
between snapshots, so it is safe to run on every change notification.
"""
from typing import Any, Optional, Sequence

from sqlalchemy.orm import Session

from karaoke.models.event import Event
from karaoke.models.song_request import SongRequest, RequestStatus
from karaoke.services.wait_estimator import estimate_wait_minutes, resolve_song_minutes

STATUS_LABELS = {
    RequestStatus.waiting: "In attesa",
    RequestStatus.next: "Prossimo",
    RequestStatus.on_stage: "Sul palco",
}


def load_queue(db: Session, event_id: str) -> list[SongRequest]:
    """Read an event's requests in arrival order with a single query."""
    return (
        db.query(SongRequest)
        .filter(SongRequest.event_id == event_id)
        .order_by(SongRequest.created_at.asc())
        .all()
    )


def project_queue(event: Event, requests: Sequence[SongRequest]) -> list[dict[str, Any]]:
    """One row per request: 1-based arrival position, label and wait estimate."""
    avg = resolve_song_minutes(event.song_minutes_avg)
    rows = []
    for idx, req in enumerate(requests):
        status = RequestStatus(req.status)
        rows.append({
            "position": idx + 1,
            "request_id": req.request_id,
            "nickname": req.nickname,
            "song_title": req.song_title,
            "key_shift": req.key_shift,
            "status": status.value,
            "status_label": STATUS_LABELS[status],
            "wait_minutes": estimate_wait_minutes(requests, idx, avg),
        })
    return rows


def _view(event: Event, rows: list[dict[str, Any]]) -> dict[str, Any]:
    return {
        "event_id": event.event_id,
        "event_name": event.name,
        "join_code": event.join_code,
        "accepting_requests": event.is_accepting,
        "song_minutes_avg": resolve_song_minutes(event.song_minutes_avg),
        "rows": rows,
    }


def public_view(db: Session, event: Event) -> dict[str, Any]:
    """Full, unfiltered queue as shown on the public screen."""
    return _view(event, project_queue(event, load_queue(db, event.event_id)))


def operator_view(db: Session, event: Event) -> dict[str, Any]:
    """Public rows plus who inserted each request and when."""
    requests = load_queue(db, event.event_id)
    rows = project_queue(event, requests)
    for row, req in zip(rows, requests):
        row["created_by"] = req.created_by
        row["created_at"] = req.created_at
    return _view(event, rows)


def locate_receipt(
    event: Event,
    requests: Sequence[SongRequest],
    request_id: Optional[str] = None,
    nickname: Optional[str] = None,
    song_title: Optional[str] = None,
) -> dict[str, Any]:
    """Find the submitter's row: by id first, else the latest nickname+title match.

    The fallback covers a request id lost across navigation. It is
    approximate: with duplicate nickname/title pairs the most recent one is
    reported.
    """
    nickname = (nickname or "").strip()
    song_title = (song_title or "").strip()
    index = -1
    matched_by = None
    if request_id:
        index = next((i for i, r in enumerate(requests) if r.request_id == request_id), -1)
        if index != -1:
            matched_by = "request_id"

    if index == -1 and nickname and song_title:
        for i, r in enumerate(requests):
            if r.nickname == nickname and r.song_title == song_title:
                index = i
        if index != -1:
            matched_by = "nickname_song"

    if index == -1:
        return {"found": False, "request_id": None, "position": None, "status": None,
                "wait_minutes": None, "matched_by": None}

    req = requests[index]
    return {
        "found": True,
        "request_id": req.request_id,
        "nickname": req.nickname,
        "song_title": req.song_title,
        "position": index + 1,
        "status": RequestStatus(req.status).value,
        "wait_minutes": estimate_wait_minutes(requests, index, event.song_minutes_avg),
        "matched_by": matched_by,
    }


def receipt_view(db: Session, event: Event, request_id: Optional[str] = None,
                 nickname: Optional[str] = None, song_title: Optional[str] = None) -> dict[str, Any]:
    receipt = locate_receipt(event, load_queue(db, event.event_id), request_id, nickname, song_title)
    receipt.update({"event_name": event.name, "join_code": event.join_code})
    receipt.setdefault("nickname", nickname)
    receipt.setdefault("song_title", song_title)
    return receipt
