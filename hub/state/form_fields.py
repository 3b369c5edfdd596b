"""Form field state with optimistic update and delete."""

from __future__ import annotations

import contextlib
import logging
import uuid

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from hub.schemas.form_field import FieldValueIn, FieldValueRead
from hub.services.errors import ValidationError
from hub.services.form_fields import FormFieldsService
from hub.state.base import STORE_ERRORS, BaseStore

logger = logging.getLogger(__name__)


class FormFieldStore(BaseStore):
    """Values of one field type at a time."""

    label = "field values"

    def __init__(
        self,
        service: FormFieldsService,
        session_factory: async_sessionmaker[AsyncSession],
    ) -> None:
        super().__init__(session_factory)
        self.service = service
        self.field_values: list[FieldValueRead] = []
        self.loading = False
        self.submitting = False
        self.error: Exception | None = None
        self.submit_error: Exception | None = None

    async def fetch(self, field_type: str) -> None:
        with contextlib.suppress(*STORE_ERRORS):
            async with self._track("loading", "error", f"fetching {field_type}"), self._session() as db:
                rows = await self.service.get_field_values(db, field_type)
                self.field_values = [FieldValueRead.model_validate(r) for r in rows]

    async def add(self, field_type: str, field_value: FieldValueIn) -> uuid.UUID:
        async with self._track("submitting", "submit_error", f"adding {field_type}"):
            async with self._session() as db:
                new_id = await self.service.add_field_value(db, field_type, field_value)
        await self.fetch(field_type)
        return new_id

    async def update(
        self,
        field_type: str,
        field_value: FieldValueIn,
        original: FieldValueRead | None = None,
    ) -> None:
        """Show the edit immediately when ``original`` is given; restore it on failure."""
        if original is not None:
            edited = original.model_copy(
                update=field_value.model_dump(exclude={"id"}, exclude_none=True)
            )
            self.field_values = [edited if v.id == field_value.id else v for v in self.field_values]
        try:
            async with self._track("submitting", "submit_error", f"updating {field_type}"):
                async with self._session() as db:
                    await self.service.update_field_value(db, field_type, field_value)
        except Exception:
            if original is not None:
                self.field_values = [
                    original if v.id == field_value.id else v for v in self.field_values
                ]
            raise
        await self.fetch(field_type)

    async def delete(self, field_type: str, field_value: FieldValueRead) -> None:
        """Remove locally first; reload from the store whatever the outcome."""
        if field_value.id is None:
            msg = "Field value ID is required for deletion"
            raise ValidationError(msg)
        self.field_values = [v for v in self.field_values if v.id != field_value.id]
        try:
            async with self._track("submitting", "submit_error", f"deleting {field_type}"):
                async with self._session() as db:
                    await self.service.delete_field_value(db, field_type, field_value.id)
        finally:
            await self.fetch(field_type)
