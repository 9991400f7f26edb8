import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.exceptions import BackendError

logger = logging.getLogger(__name__)


def commit(db: Session, operation: str, conflict_message: str = None) -> None:
    """Commit or roll back and raise BackendError; nothing is retried."""
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.error("%s failed: %s", operation, e.orig)
        raise BackendError(conflict_message or f"{operation} failed: {e.orig}", operation=operation) from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("%s failed: %s", operation, e)
        raise BackendError(f"{operation} failed", operation=operation) from e
