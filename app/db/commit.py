"""Commit helpers that translate database constraint violations."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from app.core.exceptions import ConflictError

logger = logging.getLogger(__name__)


def commit_or_conflict(session: Session, conflict: ConflictError) -> None:
    """Commit the session, mapping unique/check violations to ``conflict``.

    Concurrent "check, then insert" sequences are settled by the database's
    unique indexes; a violation on commit is reported exactly like the
    application's own pre-check would have reported it.
    """
    try:
        session.commit()
    except IntegrityError as e:
        session.rollback()
        logger.info("Integrity violation on commit: %s", e.orig)
        raise conflict from e
