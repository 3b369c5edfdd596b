"""Organisation service."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, ClassVar

from hub.models.enums import SortDirection
from hub.models.organisation import Organisation
from hub.services.base import EntityService


class OrganisationService(EntityService[Organisation]):
    """Manages organisations in the ``organisations`` table."""

    model = Organisation
    entity_name = "organisation"
    default_sort_field = "organisation_name"
    default_sort_direction = SortDirection.ASC
    search_fields: ClassVar[tuple[str, ...]] = ("organisation_name",)

    def prepare_create(self, data: Mapping[str, Any]) -> dict[str, Any]:
        values = dict(data)
        values["organisation_name"] = str(values.get("organisation_name", "")).strip()
        return values
