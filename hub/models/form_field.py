"""Form field models — configurable dropdown options grouped by field type."""

from __future__ import annotations

from typing import Any

from sqlalchemy import Boolean, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from hub.models.base import Base, RecordMixin


class FormFieldType(RecordMixin, Base):
    """A named group of options, e.g. ``industries`` or ``contactRoles``."""

    __tablename__ = "form_field_types"

    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)

    def __repr__(self) -> str:
        return f"<FormFieldType {self.name}>"


class FieldValue(RecordMixin, Base):
    """One selectable option of a field type."""

    __tablename__ = "form_field_values"
    __table_args__ = (UniqueConstraint("field_type", "value", name="uq_form_field_values_value"),)

    field_type: Mapped[str] = mapped_column(
        String(100),
        ForeignKey("form_field_types.name", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    value: Mapped[str] = mapped_column(String(200), nullable=False)
    label: Mapped[str] = mapped_column(String(200), nullable=False)
    order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_default: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    # "metadata" is reserved on declarative classes
    extra: Mapped[dict[str, Any] | None] = mapped_column("metadata", JSONB)

    def __repr__(self) -> str:
        return f"<FieldValue {self.field_type}:{self.value}>"
