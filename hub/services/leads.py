"""Lead service — leads carry an embedded contact person and linked contact ids."""

from __future__ import annotations

import uuid
from collections.abc import Mapping
from typing import Any

from sqlalchemy import func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from hub.models.enums import FilterOperator, SortDirection
from hub.models.lead import Lead
from hub.schemas.common import Filter
from hub.services.base import EntityService


def _drop_unset(values: Mapping[str, Any]) -> dict[str, Any]:
    """Remove None entries, including inside the contact person document."""
    cleaned = {k: v for k, v in values.items() if v is not None}
    person = cleaned.get("contact_person")
    if isinstance(person, Mapping):
        cleaned["contact_person"] = {k: v for k, v in person.items() if v is not None}
    return cleaned


class LeadService(EntityService[Lead]):
    """Manages leads in the ``leads`` table."""

    model = Lead
    entity_name = "lead"
    default_sort_field = "created_at"
    default_sort_direction = SortDirection.DESC

    def prepare_create(self, data: Mapping[str, Any]) -> dict[str, Any]:
        values = _drop_unset(data)
        if "status" in values:
            values["status"] = getattr(values["status"], "value", values["status"])
        values["contact_ids"] = [str(cid) for cid in values.get("contact_ids", [])]
        return values

    async def prepare_update(
        self, db: AsyncSession, record_id: uuid.UUID, data: Mapping[str, Any]
    ) -> dict[str, Any]:
        values = dict(data)
        if values.get("status") is not None:
            values["status"] = getattr(values["status"], "value", values["status"])
        if isinstance(values.get("contact_person"), Mapping):
            values["contact_person"] = _drop_unset(values["contact_person"])
        return values

    async def search(self, db: AsyncSession, term: str, max_results: int = 10) -> list[Lead]:
        """Match contact person name or email, organisation name, status or source."""
        pattern = f"%{term.strip().lower()}%"
        person = Lead.contact_person
        query = (
            select(Lead)
            .where(
                or_(
                    func.lower(person["full_name"].astext).like(pattern),
                    func.lower(person["email"].astext).like(pattern),
                    func.lower(Lead.organisation_name).like(pattern),
                    func.lower(Lead.status).like(pattern),
                    func.lower(Lead.source).like(pattern),
                )
            )
            .order_by(Lead.created_at.desc())
            .limit(max_results)
        )
        try:
            result = await db.execute(query)
        except SQLAlchemyError as exc:
            raise self._fail("search", exc) from exc
        return list(result.scalars().all())

    async def list_by_organisation(
        self, db: AsyncSession, organisation_id: uuid.UUID
    ) -> list[Lead]:
        return await self.list(db, [Filter(field="organisation_id", value=organisation_id)])

    async def list_by_contact(self, db: AsyncSession, contact_id: uuid.UUID) -> list[Lead]:
        return await self.list(
            db,
            [Filter(field="contact_ids", op=FilterOperator.ARRAY_CONTAINS, value=str(contact_id))],
        )
