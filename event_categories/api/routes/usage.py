"""Usage Route — category usage against the caller's plan ceiling.

Invariants:
    - Read-only; same auth and error rules as category creation
"""

from fastapi import APIRouter, Depends

from event_categories.api.dependencies import get_category_store, get_current_user_id
from event_categories.config import get_quota_config
from event_categories.core.domain_types import UserId
from event_categories.infrastructure.category_store import SqlCategoryStore
from event_categories.schemas.category import CategoryUsageResponse
from event_categories.services.category_usage import get_category_usage

router = APIRouter(prefix="/api/v1/project", tags=["usage"])


@router.get("/usage", response_model=CategoryUsageResponse)
async def read_category_usage(
    user_id: UserId | None = Depends(get_current_user_id),
    store: SqlCategoryStore = Depends(get_category_store),
):
    """Categories used vs. allowed for the caller's plan."""
    usage = await get_category_usage(store, get_quota_config(), user_id)
    return CategoryUsageResponse(
        plan=usage.plan,
        categories_used=usage.categories_used,
        categories_limit=usage.categories_limit,
        at_limit=usage.at_limit,
    )
