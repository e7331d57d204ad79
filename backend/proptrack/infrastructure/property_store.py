"""Property Store: SQLAlchemy adapter implementing the PropertyRepository protocol.

Invariants:
    - insert_unique raises DuplicateKeyError only for a primary-key collision
    - Every other SQLAlchemy failure leaves as StoreError (operation name attached),
      after the session is rolled back
    - Lookups, updates and deletes report absence as None/False, never as an error
    - Listing order is insertion order (created_at, then id)

Design Decisions:
    - Duplicate detection maps each driver's native unique-violation signal:
      SQLSTATE 23505 (asyncpg/PostgreSQL), "UNIQUE constraint failed" (SQLite)
    - Search is token OR substring match over SEARCHABLE_FIELDS; relevance
      ranking is left out on purpose (results stay in insertion order)
    - Unknown keys in an insert record are dropped, matching a strict document schema
    - StoreError messages carry the driver message only (driver_message); the
      statement and its bound parameters go to the log, never into the error
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

from sqlalchemy import delete, or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from proptrack.core.errors import DuplicateKeyError, ErrorContext, StoreError
from proptrack.core.group_records import group_by_attribute
from proptrack.models.property import (
    Property as PropertyModel, GROUPABLE_FIELDS, SEARCHABLE_FIELDS,
    WRITABLE_FIELDS,
)

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION_SQLSTATE = "23505"
SQLITE_UNIQUE_MESSAGE = "UNIQUE constraint failed"


def is_duplicate_key(exc: IntegrityError) -> bool:
    """True when the integrity error is a unique-key violation."""
    orig = exc.orig
    for attr in ("sqlstate", "pgcode"):
        if getattr(orig, attr, None) == UNIQUE_VIOLATION_SQLSTATE:
            return True
    return SQLITE_UNIQUE_MESSAGE in str(orig)


def driver_message(exc: SQLAlchemyError) -> str:
    """The DBAPI error text without the SQL statement or bound parameters."""
    orig = getattr(exc, "orig", None)
    if orig is not None:
        return str(orig)
    return type(exc).__name__


def build_search_clause(search_term: str):
    """OR of case-insensitive substring matches, one per (token, field) pair."""
    return or_(*(
        getattr(PropertyModel, field).icontains(token, autoescape=True)
        for token in search_term.split()
        for field in SEARCHABLE_FIELDS
    ))


class PropertyStore:
    """Persistence for property records over one AsyncSession."""

    def __init__(self, db: AsyncSession):
        self._db = db

    @asynccontextmanager
    async def _translate_errors(
        self, operation: str, context: ErrorContext | None = None,
    ) -> AsyncGenerator[None, None]:
        try:
            yield
        except SQLAlchemyError as e:
            await self._db.rollback()
            logger.error(
                f"Store {operation} failed: {e}",
                extra={"operation": operation},
            )
            raise StoreError(driver_message(e), operation, context) from e

    async def find_many(self, search_term: str | None = None) -> list[PropertyModel]:
        query = select(PropertyModel).order_by(
            PropertyModel.created_at, PropertyModel.id,
        )
        if search_term and search_term.strip():
            query = query.where(build_search_clause(search_term))
        async with self._translate_errors(
            "find", ErrorContext(search_term=search_term),
        ):
            result = await self._db.execute(query)
            return list(result.scalars().all())

    async def find_by_id(self, property_id: str) -> PropertyModel | None:
        async with self._translate_errors(
            "find_by_id", ErrorContext(property_id=property_id),
        ):
            return await self._db.get(PropertyModel, property_id)

    async def insert_unique(self, record: dict[str, Any]) -> PropertyModel:
        """Insert a full record (id included); collisions raise DuplicateKeyError."""
        property_id = record["id"]
        model = PropertyModel(
            id=property_id,
            **{k: v for k, v in record.items() if k in WRITABLE_FIELDS},
        )
        self._db.add(model)
        try:
            await self._db.commit()
            await self._db.refresh(model)
        except IntegrityError as e:
            await self._db.rollback()
            if is_duplicate_key(e):
                raise DuplicateKeyError(property_id) from e
            logger.error(
                f"Insert rejected by constraint: {e.orig}",
                extra={"operation": "insert", "property_id": property_id},
            )
            raise StoreError(
                driver_message(e), "insert", ErrorContext(property_id=property_id),
            ) from e
        except SQLAlchemyError as e:
            await self._db.rollback()
            logger.error(
                f"Insert failed: {e}",
                extra={"operation": "insert", "property_id": property_id},
            )
            raise StoreError(
                driver_message(e), "insert", ErrorContext(property_id=property_id),
            ) from e
        return model

    async def update_field(
        self, property_id: str, field: str, value: object,
    ) -> PropertyModel | None:
        """Set one writable column; None when the id is absent."""
        context = ErrorContext(property_id=property_id)
        if field not in WRITABLE_FIELDS:
            raise StoreError(f"field '{field}' is not writable", "update", context)
        async with self._translate_errors("update", context):
            model = await self._db.get(PropertyModel, property_id)
            if model is None:
                return None
            setattr(model, field, value)
            await self._db.commit()
            await self._db.refresh(model)
            return model

    async def delete_by_id(self, property_id: str) -> bool:
        async with self._translate_errors(
            "delete", ErrorContext(property_id=property_id),
        ):
            result = await self._db.execute(
                delete(PropertyModel).where(PropertyModel.id == property_id),
            )
            await self._db.commit()
            return result.rowcount > 0

    async def group_by(self, field: str) -> dict[str, list[PropertyModel]]:
        """Bucket every record by its value of `field`."""
        if field not in GROUPABLE_FIELDS:
            raise StoreError(f"cannot group by '{field}'", "group")
        return group_by_attribute(await self.find_many(), field)
