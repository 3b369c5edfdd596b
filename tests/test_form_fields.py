"""Tests for the form field service.

Covers:
- Ordered value listing
- Add: duplicate rejection, order assignment, field type auto-creation
- Update: id required, duplicate check excluding self, missing value
- Delete and type management
"""

from __future__ import annotations

import uuid
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import IntegrityError, OperationalError

from hub.models.form_field import FieldValue, FormFieldType
from hub.schemas.form_field import FieldValueIn, FieldValueRead
from hub.services.errors import ConflictError, NotFoundError, RemoteFailureError, ValidationError
from hub.services.form_fields import FormFieldsService

# ── Helpers ──────────────────────────────────────────────────────────


def _sql(stmt) -> str:
    return str(stmt.compile(dialect=postgresql.dialect()))


def _scalar_result(value) -> MagicMock:
    result = MagicMock()
    result.scalar_one_or_none.return_value = value
    result.scalar.return_value = value
    return result


def _rowcount(n: int) -> MagicMock:
    result = MagicMock()
    result.rowcount = n
    return result


def _make_db() -> AsyncMock:
    db = AsyncMock()
    db.add = MagicMock()
    return db


# ── Listing ──────────────────────────────────────────────────────────


class TestGetFieldValues:
    @pytest.mark.asyncio()
    async def test_ordered_by_order_then_label(self):
        db = _make_db()
        result = MagicMock()
        result.scalars.return_value.all.return_value = []
        db.execute.return_value = result
        await FormFieldsService().get_field_values(db, "industries")
        sql = _sql(db.execute.await_args.args[0])
        assert 'ORDER BY form_field_values."order" ASC, form_field_values.label ASC' in sql

    @pytest.mark.asyncio()
    async def test_wrong_type_is_not_found(self):
        db = _make_db()
        db.get.return_value = SimpleNamespace(field_type="contactRoles")
        with pytest.raises(NotFoundError):
            await FormFieldsService().get_field_value(db, "industries", uuid.uuid4())

    @pytest.mark.asyncio()
    async def test_database_error(self):
        db = _make_db()
        db.execute.side_effect = OperationalError("SELECT", {}, Exception("down"))
        with pytest.raises(RemoteFailureError, match="industries"):
            await FormFieldsService().get_field_values(db, "industries")


# ── Add ──────────────────────────────────────────────────────────────


class TestAddFieldValue:
    @pytest.mark.asyncio()
    async def test_duplicate_value(self):
        db = _make_db()
        db.execute.return_value = _scalar_result(uuid.uuid4())
        with pytest.raises(ConflictError, match='"retail" already exists in industries'):
            await FormFieldsService().add_field_value(
                db, "industries", FieldValueIn(value="retail", label="Retail")
            )
        db.add.assert_not_called()

    @pytest.mark.asyncio()
    async def test_appends_after_max_order(self):
        """Order = max + 1, active by default, field type created on first use."""
        db = _make_db()
        db.execute.side_effect = [
            _scalar_result(None),  # duplicate check
            _scalar_result(3),  # max(order)
            _scalar_result(None),  # field type lookup
        ]
        await FormFieldsService().add_field_value(
            db, "industries", FieldValueIn(value="retail", label="Retail", metadata={"icon": "shop"})
        )
        added = [c.args[0] for c in db.add.call_args_list]
        assert isinstance(added[0], FormFieldType)
        assert added[0].name == "industries"
        value = added[1]
        assert isinstance(value, FieldValue)
        assert value.order == 4
        assert value.is_active is True
        assert value.extra == {"icon": "shop"}

    @pytest.mark.asyncio()
    async def test_first_value_and_explicit_order(self):
        db = _make_db()
        db.execute.side_effect = [
            _scalar_result(None),
            _scalar_result(None),
            _scalar_result(uuid.uuid4()),  # type already exists
        ]
        await FormFieldsService().add_field_value(
            db, "industries", FieldValueIn(value="mining", label="Mining", order=10, is_active=False)
        )
        value = db.add.call_args.args[0]
        assert value.order == 10
        assert value.is_active is False

    @pytest.mark.asyncio()
    async def test_unique_race_is_conflict(self):
        db = _make_db()
        db.execute.side_effect = [_scalar_result(None), _scalar_result(0), _scalar_result(uuid.uuid4())]
        db.flush.side_effect = IntegrityError("INSERT", {}, Exception("uq_form_field_values_value"))
        with pytest.raises(ConflictError):
            await FormFieldsService().add_field_value(
                db, "industries", FieldValueIn(value="retail", label="Retail")
            )


# ── Update / delete ──────────────────────────────────────────────────


class TestUpdateFieldValue:
    @pytest.mark.asyncio()
    async def test_id_required(self):
        with pytest.raises(ValidationError, match="ID is required"):
            await FormFieldsService().update_field_value(
                _make_db(), "industries", FieldValueIn(value="retail", label="Retail")
            )

    @pytest.mark.asyncio()
    async def test_duplicate_excluding_self(self):
        db = _make_db()
        db.execute.return_value = _scalar_result(uuid.uuid4())
        with pytest.raises(ConflictError, match="Another field value"):
            await FormFieldsService().update_field_value(
                db, "industries", FieldValueIn(id=uuid.uuid4(), value="retail", label="Retail")
            )
        assert "form_field_values.id != " in _sql(db.execute.await_args.args[0])

    @pytest.mark.asyncio()
    async def test_writes_given_fields(self):
        value_id = uuid.uuid4()
        db = _make_db()
        db.execute.side_effect = [_scalar_result(None), _rowcount(1)]
        await FormFieldsService().update_field_value(
            db,
            "industries",
            FieldValueIn(id=value_id, value="retail", label="Retail & Trade", metadata={"a": 1}),
        )
        params = db.execute.await_args.args[0].compile().params
        assert params["label"] == "Retail & Trade"
        assert {"a": 1} in params.values()
        assert "order" not in params

    @pytest.mark.asyncio()
    async def test_missing_value(self):
        db = _make_db()
        db.execute.side_effect = [_scalar_result(None), _rowcount(0)]
        with pytest.raises(NotFoundError):
            await FormFieldsService().update_field_value(
                db, "industries", FieldValueIn(id=uuid.uuid4(), value="retail", label="Retail")
            )


class TestDeleteAndTypes:
    @pytest.mark.asyncio()
    async def test_delete_missing(self):
        db = _make_db()
        db.execute.return_value = _rowcount(0)
        with pytest.raises(NotFoundError):
            await FormFieldsService().delete_field_value(db, "industries", uuid.uuid4())

    @pytest.mark.asyncio()
    async def test_field_types(self):
        db = _make_db()
        result = MagicMock()
        result.scalars.return_value.all.return_value = ["contactRoles", "industries"]
        db.execute.return_value = result
        assert await FormFieldsService().get_field_types(db) == ["contactRoles", "industries"]

    @pytest.mark.asyncio()
    async def test_create_existing_type_is_noop(self):
        db = _make_db()
        db.execute.return_value = _scalar_result(uuid.uuid4())
        await FormFieldsService().create_field_type(db, "industries")
        db.add.assert_not_called()


class TestFieldValueRead:
    def test_metadata_from_extra_column(self):
        row = SimpleNamespace(
            id=uuid.uuid4(),
            field_type="industries",
            value="retail",
            label="Retail",
            order=1,
            is_default=False,
            is_active=True,
            extra={"icon": "shop"},
        )
        assert FieldValueRead.model_validate(row).metadata == {"icon": "shop"}
