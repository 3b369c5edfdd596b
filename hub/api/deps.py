"""Request-scoped dependencies for the API routers."""

from __future__ import annotations

from fastapi import Request

from hub.db.engine import get_session
from hub.services.container import HubServices

__all__ = ["get_services", "get_session"]


def get_services(request: Request) -> HubServices:
    """The service container built in the application lifespan."""
    return request.app.state.services
