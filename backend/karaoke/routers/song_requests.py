"""Operator routes acting on the requests of one event's queue."""
import logging
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from karaoke.database import get_db
from karaoke.dependencies import require_operator
from karaoke.schemas.song_request import (
    OperatorSongRequest, SongRequestOut, StatusUpdate, StatusTransitionOut, BulkDelete, BulkDeleteOut,
)
from karaoke.services import event_registry, queue_state, request_intake

logger = logging.getLogger(__name__)
router = APIRouter(dependencies=[Depends(require_operator)])


@router.post("/", response_model=SongRequestOut, status_code=status.HTTP_201_CREATED)
def insert_request(event_id: str, payload: OperatorSongRequest, db: Session = Depends(get_db)):
    """Insert a song from the booth; allowed even while submissions are closed."""
    event = event_registry.get_event(db, event_id)
    return request_intake.insert_operator_request(
        db, event,
        song_title=payload.song_title,
        nickname=payload.nickname,
        key_shift=payload.key_shift,
    )


@router.put("/{request_id}/status", response_model=StatusTransitionOut)
def set_status(event_id: str, request_id: str, payload: StatusUpdate, db: Session = Depends(get_db)):
    """Move a request between WAITING, NEXT and ON_STAGE."""
    transition = queue_state.set_status(db, event_id, request_id, payload.status)
    return StatusTransitionOut(
        request=SongRequestOut.model_validate(transition.request),
        demoted_ids=transition.demoted_ids,
    )


@router.delete("/{request_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_request(event_id: str, request_id: str, db: Session = Depends(get_db)):
    queue_state.delete_request(db, event_id, request_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/bulk-delete", response_model=BulkDeleteOut)
def bulk_delete(event_id: str, payload: BulkDelete, db: Session = Depends(get_db)):
    """Delete the selected requests together, or none of them."""
    deleted = queue_state.delete_requests(db, event_id, payload.request_ids)
    return BulkDeleteOut(deleted=deleted)
