import logging
from typing import Any, TypeVar

from sqlalchemy.orm import Session

from profitlens.db import Base

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=Base)


class EntityStore:
    """
    Generic record store over one SQLAlchemy session.

    Every entity type exposes the same five operations; filters are plain
    column equality. Writes are flushed but never committed here: the caller
    (the workspace) owns the transaction so a multi-step command commits once.
    Store errors propagate unchanged.
    """

    def __init__(self, db: Session):
        self.db = db

    def list(self, model: type[M], order_by: str | None = None, **filters: Any) -> list[M]:
        q = self.db.query(model)
        for col, val in filters.items():
            q = q.filter(getattr(model, col) == val)
        if order_by:
            q = q.order_by(getattr(model, order_by).asc())
        return q.all()

    def get(self, model: type[M], id: str) -> M | None:
        return self.db.get(model, id)

    def insert(self, model: type[M], record: dict) -> M:
        # keep only real model columns (avoids passing unknown fields)
        allowed = set(model.__table__.columns.keys())
        row = model(**{k: v for k, v in record.items() if k in allowed})
        self.db.add(row)
        self.db.flush()
        logger.debug("insert %s id=%s", model.__tablename__, row.id)
        return row

    def update(self, model: type[M], id: str, fields: dict) -> M | None:
        row = self.db.get(model, id)
        if row is None:
            return None
        allowed = set(model.__table__.columns.keys()) - {"id"}
        for k, v in fields.items():
            if k in allowed:
                setattr(row, k, v)
        self.db.flush()
        return row

    def delete(self, model: type[M], id: str) -> bool:
        row = self.db.get(model, id)
        if row is None:
            return False
        self.db.delete(row)
        self.db.flush()
        return True

    def delete_where(self, model: type[M], **filters: Any) -> int:
        q = self.db.query(model)
        for col, val in filters.items():
            q = q.filter(getattr(model, col) == val)
        n = q.delete(synchronize_session=False)
        self.db.flush()
        return n

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()
