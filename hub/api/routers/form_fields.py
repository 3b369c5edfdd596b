"""Form field routes — field types and their ordered values."""
# ruff: noqa: B008

from __future__ import annotations

import uuid
from typing import Any

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from hub.api.deps import get_services, get_session
from hub.schemas.common import CreatedResponse
from hub.schemas.form_field import FieldTypeCreate, FieldValueIn, FieldValueRead
from hub.services.container import HubServices

router = APIRouter(prefix="/form-fields", tags=["form-fields"])


@router.get("/types")
async def list_field_types(
    db: AsyncSession = Depends(get_session),
    services: HubServices = Depends(get_services),
) -> list[str]:
    return await services.form_fields.get_field_types(db)


@router.post("/types", status_code=status.HTTP_201_CREATED)
async def create_field_type(
    body: FieldTypeCreate,
    db: AsyncSession = Depends(get_session),
    services: HubServices = Depends(get_services),
) -> dict[str, str]:
    await services.form_fields.create_field_type(db, body.name)
    return {"name": body.name}


@router.get("/{field_type}/values", response_model=list[FieldValueRead])
async def list_field_values(
    field_type: str,
    db: AsyncSession = Depends(get_session),
    services: HubServices = Depends(get_services),
) -> Any:
    return await services.form_fields.get_field_values(db, field_type)


@router.get("/{field_type}/values/{value_id}", response_model=FieldValueRead)
async def get_field_value(
    field_type: str,
    value_id: uuid.UUID,
    db: AsyncSession = Depends(get_session),
    services: HubServices = Depends(get_services),
) -> Any:
    return await services.form_fields.get_field_value(db, field_type, value_id)


@router.post(
    "/{field_type}/values", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED
)
async def add_field_value(
    field_type: str,
    body: FieldValueIn,
    db: AsyncSession = Depends(get_session),
    services: HubServices = Depends(get_services),
) -> CreatedResponse:
    value_id = await services.form_fields.add_field_value(db, field_type, body)
    return CreatedResponse(id=value_id)


@router.put("/{field_type}/values/{value_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_field_value(
    field_type: str,
    value_id: uuid.UUID,
    body: FieldValueIn,
    db: AsyncSession = Depends(get_session),
    services: HubServices = Depends(get_services),
) -> Response:
    await services.form_fields.update_field_value(
        db, field_type, body.model_copy(update={"id": value_id})
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{field_type}/values/{value_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_field_value(
    field_type: str,
    value_id: uuid.UUID,
    db: AsyncSession = Depends(get_session),
    services: HubServices = Depends(get_services),
) -> Response:
    await services.form_fields.delete_field_value(db, field_type, value_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
