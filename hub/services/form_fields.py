"""Form field service — dropdown options grouped by field type.

Each field type (``industries``, ``contactRoles``, ``quoteStatuses`` ...)
owns an ordered list of values. ``value`` is unique within a type; a
duplicate on add or update raises ConflictError.
"""

from __future__ import annotations

import logging
import uuid

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from hub.models.form_field import FieldValue, FormFieldType
from hub.schemas.form_field import FieldValueIn
from hub.services.errors import (
    ConflictError,
    HubError,
    NotFoundError,
    RemoteFailureError,
    ValidationError,
)

logger = logging.getLogger(__name__)


class FormFieldsService:
    """CRUD over ``form_field_types`` and ``form_field_values``."""

    def _fail(self, action: str, field_type: str, exc: Exception) -> RemoteFailureError:
        logger.exception("Error %s %s field values", action, field_type)
        return RemoteFailureError(f"Failed to {action} {field_type} field values: {exc}")

    async def _value_taken(
        self,
        db: AsyncSession,
        field_type: str,
        value: str,
        exclude_id: uuid.UUID | None = None,
    ) -> bool:
        query = select(FieldValue.id).where(
            FieldValue.field_type == field_type, FieldValue.value == value
        )
        if exclude_id is not None:
            query = query.where(FieldValue.id != exclude_id)
        result = await db.execute(query.limit(1))
        return result.scalar_one_or_none() is not None

    async def _ensure_field_type(self, db: AsyncSession, field_type: str) -> None:
        result = await db.execute(
            select(FormFieldType.id).where(FormFieldType.name == field_type)
        )
        if result.scalar_one_or_none() is None:
            db.add(FormFieldType(name=field_type))
            await db.flush()

    # ── Values ───────────────────────────────────────────────────────

    async def get_field_values(self, db: AsyncSession, field_type: str) -> list[FieldValue]:
        """All values of a type ordered by ``order`` then ``label``."""
        try:
            result = await db.execute(
                select(FieldValue)
                .where(FieldValue.field_type == field_type)
                .order_by(FieldValue.order.asc(), FieldValue.label.asc())
            )
        except SQLAlchemyError as exc:
            raise self._fail("fetch", field_type, exc) from exc
        return list(result.scalars().all())

    async def get_field_value(
        self, db: AsyncSession, field_type: str, value_id: uuid.UUID
    ) -> FieldValue:
        """Raises NotFoundError when the value is missing or belongs to another type."""
        try:
            record = await db.get(FieldValue, value_id)
        except SQLAlchemyError as exc:
            raise self._fail("fetch", field_type, exc) from exc
        if record is None or record.field_type != field_type:
            raise NotFoundError(f"{field_type} field value", value_id)
        return record

    async def add_field_value(
        self, db: AsyncSession, field_type: str, field_value: FieldValueIn
    ) -> uuid.UUID:
        """Insert a value at the end of the list unless an order is given.

        The field type is created on first use.
        """
        try:
            if await self._value_taken(db, field_type, field_value.value):
                msg = f'A field value with value "{field_value.value}" already exists in {field_type}'
                raise ConflictError(msg)

            result = await db.execute(
                select(func.max(FieldValue.order)).where(FieldValue.field_type == field_type)
            )
            max_order = result.scalar() or 0

            await self._ensure_field_type(db, field_type)
            record = FieldValue(
                field_type=field_type,
                value=field_value.value,
                label=field_value.label,
                order=field_value.order if field_value.order is not None else max_order + 1,
                is_default=field_value.is_default,
                is_active=True if field_value.is_active is None else field_value.is_active,
                extra=field_value.metadata,
            )
            db.add(record)
            await db.flush()
        except HubError:
            raise
        except IntegrityError as exc:
            msg = f'A field value with value "{field_value.value}" already exists in {field_type}'
            raise ConflictError(msg) from exc
        except SQLAlchemyError as exc:
            raise self._fail("add", field_type, exc) from exc

        logger.info("Field value added: %s=%s id=%s", field_type, field_value.value, record.id)
        return record.id

    async def update_field_value(
        self, db: AsyncSession, field_type: str, field_value: FieldValueIn
    ) -> None:
        """Overwrite a value. ``field_value.id`` is required."""
        if field_value.id is None:
            msg = "Field value ID is required for update"
            raise ValidationError(msg)

        values = field_value.model_dump(exclude={"id", "metadata"}, exclude_unset=True)
        if "metadata" in field_value.model_fields_set:
            values["extra"] = field_value.metadata
        if values.get("order") is None:
            values.pop("order", None)
        if values.get("is_active") is None:
            values.pop("is_active", None)

        try:
            if await self._value_taken(db, field_type, field_value.value, exclude_id=field_value.id):
                msg = (
                    f'Another field value with value "{field_value.value}" '
                    f"already exists in {field_type}"
                )
                raise ConflictError(msg)
            result = await db.execute(
                update(FieldValue)
                .where(FieldValue.id == field_value.id, FieldValue.field_type == field_type)
                .values(**values)
            )
        except HubError:
            raise
        except SQLAlchemyError as exc:
            raise self._fail("update", field_type, exc) from exc

        if result.rowcount == 0:
            raise NotFoundError(f"{field_type} field value", field_value.id)
        logger.info("Field value updated: %s id=%s", field_type, field_value.id)

    async def delete_field_value(
        self, db: AsyncSession, field_type: str, value_id: uuid.UUID
    ) -> None:
        try:
            result = await db.execute(
                delete(FieldValue).where(
                    FieldValue.id == value_id, FieldValue.field_type == field_type
                )
            )
        except SQLAlchemyError as exc:
            raise self._fail("delete", field_type, exc) from exc
        if result.rowcount == 0:
            raise NotFoundError(f"{field_type} field value", value_id)
        logger.info("Field value deleted: %s id=%s", field_type, value_id)

    # ── Types ────────────────────────────────────────────────────────

    async def get_field_types(self, db: AsyncSession) -> list[str]:
        try:
            result = await db.execute(select(FormFieldType.name).order_by(FormFieldType.name))
        except SQLAlchemyError as exc:
            logger.exception("Error fetching field types")
            raise RemoteFailureError(f"Failed to fetch field types: {exc}") from exc
        return list(result.scalars().all())

    async def create_field_type(self, db: AsyncSession, field_type: str) -> None:
        """Create a field type; an existing one is left untouched."""
        try:
            await self._ensure_field_type(db, field_type)
        except SQLAlchemyError as exc:
            logger.exception("Error creating field type %s", field_type)
            raise RemoteFailureError(f"Failed to create field type: {exc}") from exc
        logger.info("Field type ensured: %s", field_type)
