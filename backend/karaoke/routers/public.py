"""Public routes addressed by join code: queue screen, submission, receipt, live feed."""
import asyncio
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, WebSocket, status
from starlette.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from karaoke.database import get_db
from karaoke.dependencies import accepting_event
from karaoke.models.event import Event
from karaoke.schemas.queue import QueueView, ReceiptView
from karaoke.schemas.song_request import SongRequestSubmit, SubmissionReceipt
from karaoke.services import event_registry, queue_projection, request_intake
from karaoke.services.errors import NotFound
from karaoke.services.queue_notifier import notifier

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/queue", response_model=QueueView)
def public_queue(event_code: str = Query(..., alias="eventCode"), db: Session = Depends(get_db)):
    """Every request of the event with its position, label and estimated wait."""
    event = event_registry.find_event_by_code(db, event_code)
    return queue_projection.public_view(db, event)


@router.post("/submit", response_model=SubmissionReceipt, status_code=status.HTTP_201_CREATED)
def submit(payload: SongRequestSubmit, event: Event = Depends(accepting_event), db: Session = Depends(get_db)):
    """Attendee booking. The response carries what the confirmation view needs."""
    req = request_intake.submit_request(
        db, event,
        nickname=payload.nickname,
        song_title=payload.song_title,
        key_shift=payload.key_shift,
    )
    return SubmissionReceipt(
        event_code=event.join_code,
        nickname=req.nickname,
        song_title=req.song_title,
        request_id=req.request_id,
    )


@router.get("/receipt", response_model=ReceiptView)
def receipt(
    event_code: str = Query(..., alias="eventCode"),
    request_id: Optional[str] = Query(None, alias="requestId"),
    nickname: Optional[str] = Query(None),
    song_title: Optional[str] = Query(None, alias="songTitle"),
    db: Session = Depends(get_db),
):
    """Position and wait for a submitter, by request id or nickname+title."""
    event = event_registry.find_event_by_code(db, event_code)
    return queue_projection.receipt_view(db, event, request_id, nickname, song_title)


def _snapshot(db: Session, event_id: str) -> Optional[dict]:
    # End the previous read so the snapshot sees every commit made since.
    db.rollback()
    event = db.get(Event, event_id)
    if event is None:
        return None
    return QueueView.model_validate(queue_projection.public_view(db, event)).model_dump(mode="json")


@router.websocket("/queue/live")
async def live_queue(websocket: WebSocket, event_code: str = Query(..., alias="eventCode"),
                     db: Session = Depends(get_db)):
    """Push the public queue on connect and again after every change."""
    try:
        event = await run_in_threadpool(event_registry.find_event_by_code, db, event_code)
    except NotFound as exc:
        await websocket.close(code=4404, reason=exc.detail)
        return
    event_id = event.event_id

    await websocket.accept()
    loop = asyncio.get_running_loop()
    changes: asyncio.Queue = asyncio.Queue()
    unsubscribe = notifier.subscribe(
        event_id, lambda changed_id: loop.call_soon_threadsafe(changes.put_nowait, changed_id)
    )
    logger.info("Live viewer attached to event %s", event_id)

    receive = asyncio.ensure_future(websocket.receive())
    try:
        pending_change = True
        while True:
            if pending_change:
                view = await run_in_threadpool(_snapshot, db, event_id)
                if view is None:
                    await websocket.close(code=4410, reason="Event deleted")
                    break
                await websocket.send_json(view)

            change = asyncio.ensure_future(changes.get())
            done, _ = await asyncio.wait({receive, change}, return_when=asyncio.FIRST_COMPLETED)
            if receive in done:
                if receive.result()["type"] == "websocket.disconnect":
                    change.cancel()
                    break
                receive = asyncio.ensure_future(websocket.receive())
            pending_change = change in done
            if not pending_change:
                change.cancel()
    finally:
        receive.cancel()
        unsubscribe()
        logger.info("Live viewer detached from event %s", event_id)
