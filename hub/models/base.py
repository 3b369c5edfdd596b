"""SQLAlchemy declarative base and the shared record mixin.

Every collection row carries a surrogate UUID and server-generated
``created_at`` / ``updated_at`` timestamps, mirroring the document store the
hub was designed around.
"""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import DateTime, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Declarative base for all hub records."""

    pass


class RecordMixin:
    """Surrogate id plus creation/update timestamps.

    Timestamps are set by PostgreSQL; ``updated_at`` is refreshed on every
    UPDATE issued through the ORM or a Core ``update()`` statement.
    """

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        server_default=func.gen_random_uuid(),
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    @classmethod
    def column_names(cls) -> frozenset[str]:
        """Names usable in filters and sort clauses."""
        return frozenset(c.key for c in cls.__table__.columns)  # type: ignore[attr-defined]
