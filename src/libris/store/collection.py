"""
Collection-scoped CRUD over one ORM model.

Every call opens its own session and commits before returning, so each
operation is atomic on its own and nothing is shared between calls.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from contextlib import AbstractAsyncContextManager
from typing import Any, Generic, TypeVar
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..dbmodels import Base
from ..logging import get_logger
from .predicates import Sort, Where, as_predicate, column

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=Base)
SessionFactory = Callable[[], AbstractAsyncContextManager[AsyncSession]]

IMMUTABLE_FIELDS = frozenset({"id", "created_at"})


def coerce_id(record_id: str | UUID | None) -> UUID | None:
    """Parse an identifier; anything that is not a UUID cannot match a record."""
    if record_id is None or isinstance(record_id, UUID):
        return record_id
    try:
        return UUID(str(record_id))
    except ValueError:
        return None


class Collection(Generic[ModelT]):
    """Find, insert, update and delete records of a single model."""

    def __init__(self, model: type[ModelT], session_factory: SessionFactory | None = None):
        self.model = model
        self._session_factory = session_factory

    @property
    def name(self) -> str:
        return self.model.__tablename__

    def _session(self) -> AbstractAsyncContextManager[AsyncSession]:
        if self._session_factory is not None:
            return self._session_factory()
        # Resolved per call so tests can re-point the shared engine
        from ..database.connection import get_async_session

        return get_async_session()

    async def find_by_id(self, record_id: str | UUID | None) -> ModelT | None:
        pk = coerce_id(record_id)
        if pk is None:
            return None
        async with self._session() as session:
            return await session.get(self.model, pk)

    async def find_one(self, where: Where) -> ModelT | None:
        stmt = select(self.model)
        predicate = as_predicate(where)
        if predicate is not None:
            stmt = stmt.where(predicate.compile(self.model))
        async with self._session() as session:
            result = await session.execute(stmt.limit(1))
            return result.scalars().first()

    async def find(self, where: Where = None, order_by: Sort | None = None) -> list[ModelT]:
        stmt = select(self.model)
        predicate = as_predicate(where)
        if predicate is not None:
            stmt = stmt.where(predicate.compile(self.model))
        if order_by is not None:
            # id breaks ties so equal sort keys still come back in a stable order
            tiebreak = Sort("id", descending=order_by.descending)
            stmt = stmt.order_by(order_by.compile(self.model), tiebreak.compile(self.model))
        async with self._session() as session:
            result = await session.execute(stmt)
            return list(result.scalars().all())

    async def insert(self, record: Mapping[str, Any]) -> ModelT:
        for field in record:
            column(self.model, field)
        obj = self.model(**record)
        async with self._session() as session:
            session.add(obj)
            await session.flush()
            await session.refresh(obj)
        logger.debug("Record inserted", collection=self.name, record_id=str(obj.id))
        return obj

    async def update_by_id(
        self, record_id: str | UUID | None, patch: Mapping[str, Any]
    ) -> ModelT | None:
        pk = coerce_id(record_id)
        if pk is None:
            return None
        async with self._session() as session:
            obj = await session.get(self.model, pk)
            if obj is None:
                return None
            for field, value in patch.items():
                if field in IMMUTABLE_FIELDS:
                    continue
                column(self.model, field)
                setattr(obj, field, value)
            await session.flush()
            await session.refresh(obj)
        logger.debug("Record updated", collection=self.name, record_id=str(pk), fields=list(patch))
        return obj

    async def delete_by_id(self, record_id: str | UUID | None) -> ModelT | None:
        pk = coerce_id(record_id)
        if pk is None:
            return None
        async with self._session() as session:
            obj = await session.get(self.model, pk)
            if obj is None:
                return None
            await session.delete(obj)
        logger.debug("Record deleted", collection=self.name, record_id=str(pk))
        return obj
