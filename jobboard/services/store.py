from __future__ import annotations
import logging
from typing import Callable, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..errors import ConflictError, StoreError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def read(db: Session, what: str, fn: Callable[[], T]) -> T:
    try:
        return fn()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("[store] %s failed: %s", what, e)
        raise StoreError(f"{what} failed") from e


def commit(db: Session, what: str) -> None:
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.info("[store] %s rejected by constraint: %s", what, e.orig)
        raise ConflictError(f"{what} conflicts with existing data") from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("[store] %s failed: %s", what, e)
        raise StoreError(f"{what} failed") from e
