"""Entity services — one class per collection, plus linking and the container."""

from hub.services.container import HubServices
from hub.services.errors import (
    ConflictError,
    HubError,
    NotFoundError,
    RemoteFailureError,
    ValidationError,
)

__all__ = [
    "HubServices",
    "HubError",
    "NotFoundError",
    "ConflictError",
    "ValidationError",
    "RemoteFailureError",
]
