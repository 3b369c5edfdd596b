"""Shared list/search/get/create/update/delete routes for entity routers.

Annotations here are evaluated eagerly: FastAPI reads the body and response
types from the closures, which refer to the factory's arguments.
"""
# ruff: noqa: B008

import uuid
from typing import Any

from fastapi import APIRouter, Depends, Query, Response, status
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from hub.api.deps import get_services, get_session
from hub.models.enums import SortDirection
from hub.schemas.common import CreatedResponse, ListQuery
from hub.services.base import EntityService
from hub.services.container import HubServices


def add_crud_routes(
    router: APIRouter,
    service_name: str,
    create_schema: type[BaseModel],
    update_schema: type[BaseModel],
    read_schema: type[BaseModel],
) -> APIRouter:
    """Attach the standard routes. Call after any static sub-paths are declared."""

    def service_of(services: HubServices) -> EntityService[Any]:
        return getattr(services, service_name)

    @router.get("", response_model=list[read_schema])  # type: ignore[valid-type]
    async def list_records(
        sort_field: str | None = Query(None),
        sort_direction: SortDirection | None = Query(None),
        limit: int | None = Query(None, ge=1, le=1000),
        db: AsyncSession = Depends(get_session),
        services: HubServices = Depends(get_services),
    ) -> Any:
        return await service_of(services).list(db, None, sort_field, sort_direction, limit)

    @router.post("/query", response_model=list[read_schema])  # type: ignore[valid-type]
    async def query_records(
        body: ListQuery,
        db: AsyncSession = Depends(get_session),
        services: HubServices = Depends(get_services),
    ) -> Any:
        return await service_of(services).list(
            db, body.filters, body.sort_field, body.sort_direction, body.limit
        )

    @router.get("/search", response_model=list[read_schema])  # type: ignore[valid-type]
    async def search_records(
        q: str = Query(..., min_length=1),
        limit: int = Query(10, ge=1, le=100),
        db: AsyncSession = Depends(get_session),
        services: HubServices = Depends(get_services),
    ) -> Any:
        return await service_of(services).search(db, q, limit)

    @router.get("/{record_id}", response_model=read_schema)
    async def get_record(
        record_id: uuid.UUID,
        db: AsyncSession = Depends(get_session),
        services: HubServices = Depends(get_services),
    ) -> Any:
        return await service_of(services).get_or_raise(db, record_id)

    @router.post("", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
    async def create_record(
        body: create_schema,  # type: ignore[valid-type]
        db: AsyncSession = Depends(get_session),
        services: HubServices = Depends(get_services),
    ) -> CreatedResponse:
        record_id = await service_of(services).create(db, body.model_dump())
        return CreatedResponse(id=record_id)

    @router.patch("/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def update_record(
        record_id: uuid.UUID,
        body: update_schema,  # type: ignore[valid-type]
        db: AsyncSession = Depends(get_session),
        services: HubServices = Depends(get_services),
    ) -> Response:
        await service_of(services).update(db, record_id, body.model_dump(exclude_unset=True))
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @router.delete("/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_record(
        record_id: uuid.UUID,
        db: AsyncSession = Depends(get_session),
        services: HubServices = Depends(get_services),
    ) -> Response:
        await service_of(services).delete(db, record_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return router
