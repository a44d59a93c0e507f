"""Shared FastAPI dependencies."""
import logging
import secrets
from typing import Optional

from fastapi import Depends, Header, Query
from sqlalchemy.orm import Session

from karaoke.config import settings
from karaoke.database import get_db
from karaoke.models.event import Event
from karaoke.services import event_registry
from karaoke.services.errors import OperatorRequired, SubmissionsClosed

logger = logging.getLogger(__name__)


def require_operator(x_operator_token: Optional[str] = Header(None)) -> None:
    """Gate for the operator surface.

    The identity provider hands operators a shared token; this only checks
    that it was presented. An empty ``OPERATOR_TOKEN`` keeps the surface shut.
    """
    expected = settings.OPERATOR_TOKEN
    if not expected or not x_operator_token or not secrets.compare_digest(x_operator_token, expected):
        logger.warning("Rejected operator call: missing or invalid operator token")
        raise OperatorRequired()


def accepting_event(event_code: str = Query(..., alias="eventCode"), db: Session = Depends(get_db)) -> Event:
    """Resolve the join code and check the submission gate.

    Dependencies are solved before the request body is validated, so a closed
    event answers ``SubmissionsClosed`` whatever the payload contains.
    """
    event = event_registry.find_event_by_code(db, event_code)
    if not event.is_accepting:
        logger.warning("Rejected submission to event %s: submissions closed", event.event_id)
        raise SubmissionsClosed()
    return event
