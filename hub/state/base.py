"""State containers for an interactive front end.

Each store wraps one service and keeps the last known list, the selected
record, and loading / submitting flags with their errors. Every operation
runs in its own unit of work from the injected session factory.

Reads record failures on the store and return normally; writes record
failures and re-raise so the caller can react. After a successful write the
local list is patched instead of reloaded.
"""

from __future__ import annotations

import contextlib
import logging
import uuid
from collections.abc import AsyncGenerator, Mapping, Sequence
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from hub.db.engine import session_scope
from hub.models.enums import SortDirection
from hub.schemas.common import Filter
from hub.services.base import EntityService
from hub.services.errors import HubError

logger = logging.getLogger(__name__)

ReadT = TypeVar("ReadT", bound=BaseModel)

# Failures a store records instead of letting them escape a read
STORE_ERRORS = (HubError, SQLAlchemyError)


class BaseStore:
    """Flag bookkeeping shared by all stores."""

    label: ClassVar[str] = "records"

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    def _session(self) -> contextlib.AbstractAsyncContextManager[AsyncSession]:
        return session_scope(self._session_factory)

    @contextlib.asynccontextmanager
    async def _track(self, flag: str, error_attr: str, action: str) -> AsyncGenerator[None, None]:
        """Raise ``flag`` for the duration; store any exception in ``error_attr``."""
        setattr(self, flag, True)
        setattr(self, error_attr, None)
        try:
            yield
        except Exception as exc:
            logger.error("Error %s %s: %s", action, self.label, exc)
            setattr(self, error_attr, exc)
            raise
        finally:
            setattr(self, flag, False)


class EntityStore(BaseStore, Generic[ReadT]):
    """List/selection state over an :class:`EntityService`."""

    read_schema: ClassVar[type[BaseModel]]

    def __init__(
        self,
        service: EntityService[Any],
        session_factory: async_sessionmaker[AsyncSession],
    ) -> None:
        super().__init__(session_factory)
        self.service = service
        self.items: list[ReadT] = []
        self.selected: ReadT | None = None
        self.loading = False
        self.loading_selected = False
        self.submitting = False
        self.error: Exception | None = None
        self.selected_error: Exception | None = None
        self.submit_error: Exception | None = None

    def _to_read(self, record: Any) -> ReadT:
        return self.read_schema.model_validate(record)  # type: ignore[return-value]

    def _replace(self, record_id: uuid.UUID, replacement: ReadT | None) -> None:
        if replacement is None:
            return
        self.items = [replacement if item.id == record_id else item for item in self.items]  # type: ignore[attr-defined]
        if self.selected is not None and self.selected.id == record_id:  # type: ignore[attr-defined]
            self.selected = replacement

    # ── Reads ────────────────────────────────────────────────────────

    async def fetch_all(
        self,
        filters: Sequence[Filter] | None = None,
        sort_field: str | None = None,
        sort_direction: SortDirection | str | None = None,
        limit: int | None = None,
    ) -> None:
        with contextlib.suppress(*STORE_ERRORS):
            async with self._track("loading", "error", "fetching"), self._session() as db:
                records = await self.service.list(db, filters, sort_field, sort_direction, limit)
                self.items = [self._to_read(r) for r in records]

    async def fetch_by_id(self, record_id: uuid.UUID) -> None:
        with contextlib.suppress(*STORE_ERRORS):
            async with self._track("loading_selected", "selected_error", "fetching one of"), self._session() as db:
                record = await self.service.get_by_id(db, record_id)
                self.selected = self._to_read(record) if record is not None else None

    async def search(self, term: str, max_results: int = 10) -> None:
        with contextlib.suppress(*STORE_ERRORS):
            async with self._track("loading", "error", "searching"), self._session() as db:
                records = await self.service.search(db, term, max_results)
                self.items = [self._to_read(r) for r in records]

    def clear_selected(self) -> None:
        self.selected = None
        self.selected_error = None

    def filtered(self, **criteria: Any) -> list[ReadT]:
        """Items whose attributes equal every non-None criterion."""
        wanted = {k: v for k, v in criteria.items() if v is not None}
        return [
            item for item in self.items
            if all(getattr(item, k, None) == v for k, v in wanted.items())
        ]

    # ── Writes ───────────────────────────────────────────────────────

    async def create(self, data: BaseModel | Mapping[str, Any]) -> uuid.UUID:
        """Create, then append the stored record to ``items``."""
        async with self._track("submitting", "submit_error", "creating"):
            payload = data.model_dump() if isinstance(data, BaseModel) else data
            async with self._session() as db:
                record_id = await self.service.create(db, payload)
            async with self._session() as db:
                record = await self.service.get_by_id(db, record_id)
            if record is not None:
                self.items = [*self.items, self._to_read(record)]
            return record_id

    async def update(self, record_id: uuid.UUID, data: BaseModel | Mapping[str, Any]) -> None:
        """Update, refetch, and swap the fresh record into ``items`` and ``selected``."""
        async with self._track("submitting", "submit_error", "updating"):
            payload = data.model_dump(exclude_unset=True) if isinstance(data, BaseModel) else data
            async with self._session() as db:
                await self.service.update(db, record_id, payload)
            async with self._session() as db:
                record = await self.service.get_by_id(db, record_id)
            self._replace(record_id, self._to_read(record) if record is not None else None)

    async def delete(self, record_id: uuid.UUID) -> None:
        """Delete, drop from ``items``, and clear ``selected`` if it was this record."""
        async with self._track("submitting", "submit_error", "deleting"):
            async with self._session() as db:
                await self.service.delete(db, record_id)
            if self.selected is not None and self.selected.id == record_id:  # type: ignore[attr-defined]
                self.selected = None
            self.items = [item for item in self.items if item.id != record_id]  # type: ignore[attr-defined]
