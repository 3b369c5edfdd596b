from fastapi import APIRouter

from hub.api.routers import (
    contacts,
    form_fields,
    leads,
    organisation_contacts,
    organisations,
    quotes,
    websites,
)

api_router = APIRouter(prefix="/api")
for _module in (
    quotes,
    contacts,
    organisations,
    websites,
    leads,
    organisation_contacts,
    form_fields,
):
    api_router.include_router(_module.router)
