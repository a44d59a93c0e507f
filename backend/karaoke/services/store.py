"""Commit helper shared by every queue write."""
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from karaoke.services.errors import StoreUnavailable

logger = logging.getLogger(__name__)


def commit(db: Session, action: str) -> None:
    """Commit the session as one atomic batch.

    On failure the session is rolled back, so no half-applied batch is ever
    visible, and ``StoreUnavailable`` is raised. No retry is attempted.
    """
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Store commit failed while trying to %s", action)
        raise StoreUnavailable()
