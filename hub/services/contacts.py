"""Contact service — keeps ``full_name`` in step with first and last name."""

from __future__ import annotations

import uuid
from collections.abc import Mapping
from typing import Any, ClassVar

from sqlalchemy.ext.asyncio import AsyncSession

from hub.models.contact import Contact
from hub.models.enums import SortDirection
from hub.services.base import EntityService


def compose_full_name(first_name: str | None, last_name: str | None) -> str:
    return f"{first_name or ''} {last_name or ''}".strip()


class ContactService(EntityService[Contact]):
    """Manages contacts in the ``contacts`` table."""

    model = Contact
    entity_name = "contact"
    default_sort_field = "full_name"
    default_sort_direction = SortDirection.ASC
    search_fields: ClassVar[tuple[str, ...]] = ("full_name", "email")

    def prepare_create(self, data: Mapping[str, Any]) -> dict[str, Any]:
        values = dict(data)
        values["full_name"] = compose_full_name(values.get("first_name"), values.get("last_name"))
        return values

    async def prepare_update(
        self, db: AsyncSession, record_id: uuid.UUID, data: Mapping[str, Any]
    ) -> dict[str, Any]:
        """Recompute ``full_name`` when either name part is written.

        The missing part is read from the stored contact.
        """
        values = dict(data)
        values.pop("full_name", None)
        if "first_name" in values or "last_name" in values:
            current = await self.get_or_raise(db, record_id)
            first_name = values.get("first_name", current.first_name) or current.first_name
            last_name = values.get("last_name", current.last_name)
            values["full_name"] = compose_full_name(first_name, last_name)
        return values
