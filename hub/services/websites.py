"""Website service."""

from __future__ import annotations

import uuid
from typing import ClassVar

from sqlalchemy.ext.asyncio import AsyncSession

from hub.models.enums import SortDirection
from hub.models.website import Website
from hub.schemas.common import Filter
from hub.services.base import EntityService


class WebsiteService(EntityService[Website]):
    """Manages websites in the ``websites`` table."""

    model = Website
    entity_name = "website"
    default_sort_field = "domain"
    default_sort_direction = SortDirection.ASC
    search_fields: ClassVar[tuple[str, ...]] = ("domain",)

    async def list_by_organisation(
        self, db: AsyncSession, organisation_id: uuid.UUID
    ) -> list[Website]:
        return await self.list(db, [Filter(field="organisation_id", value=organisation_id)])
