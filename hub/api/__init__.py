"""JSON API — routers under ``/api`` and HubError → HTTP status mapping."""

from hub.api.errors import register_error_handlers
from hub.api.routers import api_router

__all__ = ["api_router", "register_error_handlers"]
