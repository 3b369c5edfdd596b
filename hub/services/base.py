"""Generic CRUD service over one table.

Subclasses set ``model``, ``entity_name``, the default sort, and the
columns searched by :meth:`EntityService.search`. The AsyncSession is passed
per call; services flush but never commit, so the caller owns the unit of
work.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Mapping, Sequence
from typing import Any, ClassVar, Generic, TypeVar

from sqlalchemy import Select, delete, func, or_, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from hub.models.base import Base
from hub.models.enums import FilterOperator, SortDirection
from hub.schemas.common import Filter
from hub.services.errors import ConflictError, NotFoundError, RemoteFailureError, ValidationError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


class EntityService(Generic[ModelT]):
    """create / get_by_id / list / update / delete / search for one model."""

    model: ClassVar[type[Any]]
    entity_name: ClassVar[str]
    default_sort_field: ClassVar[str] = "created_at"
    default_sort_direction: ClassVar[SortDirection] = SortDirection.DESC
    search_fields: ClassVar[tuple[str, ...]] = ()

    # ── Helpers ──────────────────────────────────────────────────────

    def _fail(self, action: str, exc: Exception) -> RemoteFailureError:
        logger.exception("Error %s %s", action, self.entity_name)
        return RemoteFailureError(f"Failed to {action} {self.entity_name}: {exc}")

    def _conflict(self, action: str, exc: IntegrityError) -> ConflictError:
        logger.warning("Conflict on %s %s: %s", action, self.entity_name, exc.orig)
        return ConflictError(f"Cannot {action} {self.entity_name}: conflicting value")

    def _column(self, field: str) -> Any:
        if field not in self.model.column_names():
            msg = f"Unknown {self.entity_name} field: {field}"
            raise ValidationError(msg)
        return getattr(self.model, field)

    def _where(self, query: Select[Any], flt: Filter) -> Select[Any]:
        column = self._column(flt.field)
        op = FilterOperator(flt.op)
        if op is FilterOperator.EQ:
            return query.where(column.is_(None) if flt.value is None else column == flt.value)
        if op is FilterOperator.NE:
            return query.where(column.isnot(None) if flt.value is None else column != flt.value)
        if op is FilterOperator.LT:
            return query.where(column < flt.value)
        if op is FilterOperator.LE:
            return query.where(column <= flt.value)
        if op is FilterOperator.GT:
            return query.where(column > flt.value)
        if op is FilterOperator.GE:
            return query.where(column >= flt.value)
        if op is FilterOperator.IN:
            if not isinstance(flt.value, (list, tuple, set)):
                msg = f"Filter 'in' on {flt.field} needs a list value"
                raise ValidationError(msg)
            return query.where(column.in_(list(flt.value)))
        # ARRAY_CONTAINS
        return query.where(column.any(flt.value))

    def build_list_query(
        self,
        filters: Sequence[Filter] | None = None,
        sort_field: str | None = None,
        sort_direction: SortDirection | str | None = None,
        limit: int | None = None,
    ) -> Select[Any]:
        """Translate filters, sort and limit into a SELECT. Raises ValidationError."""
        query = select(self.model)
        for flt in filters or ():
            query = self._where(query, flt)

        sort_column = self._column(sort_field or self.default_sort_field)
        direction = SortDirection(sort_direction or self.default_sort_direction)
        query = query.order_by(
            sort_column.asc() if direction is SortDirection.ASC else sort_column.desc()
        )
        if limit:
            query = query.limit(limit)
        return query

    def prepare_create(self, data: Mapping[str, Any]) -> dict[str, Any]:
        """Hook for derived fields on insert."""
        return dict(data)

    async def prepare_update(
        self, db: AsyncSession, record_id: uuid.UUID, data: Mapping[str, Any]
    ) -> dict[str, Any]:
        """Hook for derived fields on update."""
        return dict(data)

    # ── CRUD ─────────────────────────────────────────────────────────

    async def create(self, db: AsyncSession, data: Mapping[str, Any]) -> uuid.UUID:
        """Insert a record and return its id."""
        values = self.prepare_create(data)
        record = self.model(**values)
        try:
            db.add(record)
            await db.flush()
        except IntegrityError as exc:
            raise self._conflict("create", exc) from exc
        except SQLAlchemyError as exc:
            raise self._fail("create", exc) from exc
        logger.info("%s created: id=%s", self.entity_name, record.id)
        return record.id

    async def get_by_id(self, db: AsyncSession, record_id: uuid.UUID) -> ModelT | None:
        try:
            return await db.get(self.model, record_id)
        except SQLAlchemyError as exc:
            raise self._fail("get", exc) from exc

    async def get_or_raise(self, db: AsyncSession, record_id: uuid.UUID) -> ModelT:
        record = await self.get_by_id(db, record_id)
        if record is None:
            raise NotFoundError(self.entity_name, record_id)
        return record

    async def list(
        self,
        db: AsyncSession,
        filters: Sequence[Filter] | None = None,
        sort_field: str | None = None,
        sort_direction: SortDirection | str | None = None,
        limit: int | None = None,
    ) -> list[ModelT]:
        """Filtered, sorted list. Unknown fields raise ValidationError."""
        query = self.build_list_query(filters, sort_field, sort_direction, limit)
        try:
            result = await db.execute(query)
        except SQLAlchemyError as exc:
            raise self._fail("list", exc) from exc
        return list(result.scalars().all())

    async def update(
        self, db: AsyncSession, record_id: uuid.UUID, data: Mapping[str, Any]
    ) -> None:
        """Write only the given fields. Raises NotFoundError when absent."""
        values = await self.prepare_update(db, record_id, data)
        if not values:
            await self.get_or_raise(db, record_id)
            return
        for field, value in values.items():
            self._column(field)
            if value is None and not self.model.__table__.columns[field].nullable:
                msg = f"{self.entity_name} {field} cannot be cleared"
                raise ValidationError(msg)
        try:
            result = await db.execute(
                update(self.model).where(self.model.id == record_id).values(**values)
            )
        except IntegrityError as exc:
            raise self._conflict("update", exc) from exc
        except SQLAlchemyError as exc:
            raise self._fail("update", exc) from exc
        if result.rowcount == 0:
            raise NotFoundError(self.entity_name, record_id)
        logger.info("%s updated: id=%s fields=%s", self.entity_name, record_id, sorted(values))

    async def delete(self, db: AsyncSession, record_id: uuid.UUID) -> None:
        """Hard delete. Raises NotFoundError when absent."""
        try:
            result = await db.execute(delete(self.model).where(self.model.id == record_id))
        except SQLAlchemyError as exc:
            raise self._fail("delete", exc) from exc
        if result.rowcount == 0:
            raise NotFoundError(self.entity_name, record_id)
        logger.info("%s deleted: id=%s", self.entity_name, record_id)

    async def search(
        self, db: AsyncSession, term: str, max_results: int = 10
    ) -> list[ModelT]:
        """Case-insensitive substring match on ``search_fields``."""
        if not self.search_fields:
            msg = f"{self.entity_name} records are not searchable"
            raise ValidationError(msg)
        pattern = f"%{term.strip().lower()}%"
        query = (
            select(self.model)
            .where(or_(*(func.lower(self._column(f)).like(pattern) for f in self.search_fields)))
            .order_by(self._column(self.default_sort_field))
            .limit(max_results)
        )
        try:
            result = await db.execute(query)
        except SQLAlchemyError as exc:
            raise self._fail("search", exc) from exc
        return list(result.scalars().all())
