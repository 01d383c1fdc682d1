from contextlib import contextmanager
from typing import Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
import logging

from shortlink.core.errors import StoreFailure, UniquenessViolation
from shortlink.db.Models.models import URLItem, utcnow

logger = logging.getLogger(__name__)


@contextmanager
def _store_errors(db: Session, operation: str):
    try:
        yield
    except IntegrityError:
        raise
    except SQLAlchemyError as e:
        db.rollback()
        logger.debug("Rolled back %s after store error: %s", operation, e)
        raise StoreFailure(f"{operation} failed") from e


def find_by_url(db: Session, original_url: str) -> Optional[URLItem]:
    with _store_errors(db, "find_by_url"):
        return db.query(URLItem).filter(URLItem.original_url == original_url).first()


def find_by_code_or_alias(db: Session, key: str) -> Optional[URLItem]:
    """Alias wins over short code if both somehow match different rows."""
    with _store_errors(db, "find_by_code_or_alias"):
        by_alias = db.query(URLItem).filter(URLItem.alias == key).first()
        if by_alias:
            return by_alias
        return db.query(URLItem).filter(URLItem.short_code == key).first()


def insert(db: Session, original_url: str, short_code: str, alias: Optional[str]) -> URLItem:
    db_url = URLItem(original_url=original_url, short_code=short_code, alias=alias)
    with _store_errors(db, "insert"):
        try:
            db.add(db_url)
            db.commit()
            db.refresh(db_url)
            return db_url
        except IntegrityError as e:
            db.rollback()
            logger.info(
                "Unique constraint hit inserting short_code=%s alias=%s original=%s: %s",
                short_code, alias, original_url[:50], e.orig if hasattr(e, "orig") else e
            )
            raise UniquenessViolation(str(e)) from e


def increment_access(db: Session, url_id: int) -> int:
    """Single UPDATE statement, so concurrent increments never lose a count."""
    with _store_errors(db, "increment_access"):
        updated = db.query(URLItem).filter(URLItem.id == url_id).update({
            URLItem.access_count: URLItem.access_count + 1,
            URLItem.last_accessed_at: utcnow()
        }, synchronize_session=False)
        db.commit()
        return updated
