"""
Catalog Repository

The persistence gateway used by every catalog workflow.

Each method opens its own short-lived Session from the session factory and
closes it before returning, so several methods can run at the same time in
different threads (see services/aggregate.py). Records are returned
detached; pass loader options (selectinload(...)) for any relationship the
caller will read.

Errors are not caught here: a failing query or commit raises SQLAlchemyError
to the caller unchanged.

Usage:
    repo = CatalogRepository(SessionLocal)

    book = repo.get(Book, 1, selectinload(Book.author))
    copies = repo.find(BookInstance, BookInstance.book_id == 1)
    available = repo.count(BookInstance, BookInstance.status == "Available")
"""

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any, TypeVar

from sqlalchemy import func, inspect, select
from sqlalchemy.orm import Session, sessionmaker

from catalog.database import Base

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


class CatalogRepository:
    """Find, count, insert, replace and remove catalog records."""

    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------
    def get(self, model: type[ModelT], record_id: int, *options: Any) -> ModelT | None:
        """Find a record by primary key, or None."""
        stmt = select(model).where(model.id == record_id)
        if options:
            stmt = stmt.options(*options)
        with self._session_factory() as session:
            return session.execute(stmt).scalar_one_or_none()

    def find(
        self,
        model: type[ModelT],
        *criteria: Any,
        options: Iterable[Any] = (),
        order_by: Iterable[Any] = (),
    ) -> list[ModelT]:
        """Find every record matching all criteria."""
        stmt = select(model).where(*criteria).options(*options).order_by(*order_by)
        with self._session_factory() as session:
            return list(session.execute(stmt).scalars().all())

    def count(self, model: type[ModelT], *criteria: Any) -> int:
        """Count records matching all criteria."""
        stmt = select(func.count()).select_from(model).where(*criteria)
        with self._session_factory() as session:
            return session.execute(stmt).scalar() or 0

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------
    def insert(self, model: type[ModelT], values: Mapping[str, Any]) -> int:
        """Create a record and return the id the database assigned to it."""
        with self._session_factory() as session:
            record = model()
            self._assign(session, record, values)
            session.add(record)
            session.commit()
            logger.debug(f"Inserted {model.__name__} id={record.id}")
            return record.id

    def replace(
        self,
        model: type[ModelT],
        record_id: int,
        values: Mapping[str, Any],
    ) -> ModelT | None:
        """
        Overwrite the given fields of an existing record, keeping its id.

        Returns:
            The updated record, or None if no record has that id
        """
        with self._session_factory() as session:
            record = session.get(model, record_id)
            if record is None:
                return None
            self._assign(session, record, values)
            session.commit()
            logger.debug(f"Replaced {model.__name__} id={record_id}")
            return record

    def remove(self, model: type[ModelT], record_id: int) -> bool:
        """
        Delete a record.

        Returns:
            True if a record was deleted, False if none had that id
        """
        with self._session_factory() as session:
            record = session.get(model, record_id)
            if record is None:
                return False
            session.delete(record)
            session.commit()
            logger.debug(f"Removed {model.__name__} id={record_id}")
            return True

    @staticmethod
    def _assign(session: Session, record: Base, values: Mapping[str, Any]) -> None:
        """
        Copy values onto a record.

        A list relationship (Book.genres) is given as a sequence of ids and
        replaced by the rows with those ids; ids without a row are dropped.
        """
        relationships = inspect(type(record)).relationships
        for key, value in values.items():
            if key in relationships and relationships[key].uselist:
                target = relationships[key].mapper.class_
                ids: Sequence[int] = list(value)
                value = list(
                    session.execute(select(target).where(target.id.in_(ids))).scalars().all()
                ) if ids else []
            setattr(record, key, value)
