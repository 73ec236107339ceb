"""Event Category Routes — create a category, list the form presets.

Invariants:
    - POST returns 201 with a success marker only; all failures are ServiceErrors
      rendered by api/error_handlers.py
    - POST hands the raw body to the service: body types are checked after identity
      and quota, so FastAPI never answers 422 ahead of 401/400
    - Routes hold no business logic
"""

from fastapi import APIRouter, Depends, Request, status

from event_categories.api.dependencies import get_category_service, get_current_user_id
from event_categories.core.category_options import category_options
from event_categories.core.domain_types import UserId
from event_categories.schemas.category import (
    CategoryCreatedResponse,
    CategoryOptionsResponse,
    EventCategoryCreate,
)
from event_categories.services.create_category import CategoryCreationService

router = APIRouter(prefix="/api/v1/categories", tags=["categories"])

# Body is read manually; keep it documented in the OpenAPI schema
_CREATE_REQUEST_BODY = {
    "requestBody": {
        "required": True,
        "content": {
            "application/json": {"schema": EventCategoryCreate.model_json_schema()},
        },
    },
}


@router.post(
    "", response_model=CategoryCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    openapi_extra=_CREATE_REQUEST_BODY,
)
async def create_event_category(
    request: Request,
    user_id: UserId | None = Depends(get_current_user_id),
    service: CategoryCreationService = Depends(get_category_service),
):
    """Create a new event category for the calling user."""
    await service.create_category(user_id, await request.body())
    return CategoryCreatedResponse()


@router.get("/options", response_model=CategoryOptionsResponse)
async def list_category_options():
    """Preset colors and emojis offered by the creation form."""
    return category_options()
