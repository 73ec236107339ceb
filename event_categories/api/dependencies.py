"""Route Dependencies — wire settings, DB session and adapters into services.

Invariants:
    - One SqlCategoryStore per request, bound to that request's AsyncSession
    - Identity resolution never raises; absence is handled by the services
"""

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from event_categories.config import get_quota_config, get_settings
from event_categories.core.domain_types import UserId
from event_categories.infrastructure.category_store import SqlCategoryStore
from event_categories.infrastructure.database import get_db
from event_categories.infrastructure.identity import BearerTokenIdentityProvider
from event_categories.services.create_category import CategoryCreationService


def get_identity_provider() -> BearerTokenIdentityProvider:
    settings = get_settings()
    return BearerTokenIdentityProvider(
        settings.auth_jwt_secret,
        algorithm=settings.auth_jwt_algorithm,
        user_claim=settings.auth_user_claim,
    )


def get_current_user_id(
    authorization: str | None = Header(None),
    provider: BearerTokenIdentityProvider = Depends(get_identity_provider),
) -> UserId | None:
    """Caller's user id, or None when the request is anonymous."""
    return provider.resolve(authorization)


def get_category_store(db: AsyncSession = Depends(get_db)) -> SqlCategoryStore:
    return SqlCategoryStore(db)


def get_category_service(
    store: SqlCategoryStore = Depends(get_category_store),
) -> CategoryCreationService:
    return CategoryCreationService(store, get_quota_config())
