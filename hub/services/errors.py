"""Error taxonomy shared by services, state containers and the API."""

from __future__ import annotations


class HubError(Exception):
    """Base class for all hub errors."""


class NotFoundError(HubError):
    """The requested record does not exist."""

    def __init__(self, entity: str, record_id: object) -> None:
        self.entity = entity
        self.record_id = record_id
        super().__init__(f"{entity} {record_id} not found")


class ConflictError(HubError):
    """A write collides with an existing record (duplicate value, lost race)."""


class ValidationError(HubError):
    """Input rejected before reaching the store."""


class RemoteFailureError(HubError):
    """The database failed; the original exception is chained as ``__cause__``."""
