# =========================================================
# ATOMIC READ-CHECK-WRITE
#
# Every stock-affecting event runs through run_atomic:
# - reads (with row locks), checks and writes happen inside
#   one transaction
# - commit only if the work function returns normally
# - any failure rolls back everything
# =========================================================

import logging
from typing import Callable, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import BizViewError, StoreError

logger = logging.getLogger("app")

T = TypeVar("T")


def run_atomic(db: Session, work: Callable[[Session], T]) -> T:
    try:
        result = work(db)
        db.commit()

    except BizViewError as e:
        db.rollback()
        logger.warning(f"Transaction aborted: {e.message}")
        raise

    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Transaction failed in store: {str(e)}")
        raise StoreError("Unable to complete the operation. Please try again.")

    return result


def lock_one(db: Session, model, *criteria):
    """SELECT ... FOR UPDATE on a single row, None when missing."""
    return (
        db.query(model)
        .filter(*criteria)
        .with_for_update()
        .first()
    )


def lock_many(db: Session, model, *criteria):
    # Deterministic lock order keeps concurrent events from deadlocking
    return (
        db.query(model)
        .filter(*criteria)
        .order_by(model.id)
        .with_for_update()
        .all()
    )
