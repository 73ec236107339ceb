"""SQL Category Store — SQLAlchemy implementation of the CategoryStore protocol.

Invariants:
    - All three calls share the caller's AsyncSession, i.e. one transaction per request
    - get_user_plan locks the user row (SELECT ... FOR UPDATE) so concurrent creators
      for the same user serialize between the quota read and the insert
    - insert_category commits; IntegrityError becomes DuplicateCategoryNameError
    - Connection/driver failures become StoreUnavailableError

Design Decisions:
    - Row lock over a count constraint: the ceiling depends on the plan, which a static
      DB constraint cannot express. SQLite ignores FOR UPDATE (tests are single-writer)
    - The (name, user_id) unique constraint is the only one an insert for an existing
      user can trip, so any IntegrityError is reported as a duplicate name
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from event_categories.core.domain_types import UserId
from event_categories.core.errors import (
    DuplicateCategoryNameError, ErrorContext, StoreUnavailableError,
)
from event_categories.core.validate_category import NormalizedCategory
from event_categories.models.event_category import EventCategory
from event_categories.models.user import User

logger = logging.getLogger(__name__)


class SqlCategoryStore:
    """Category persistence backed by the request's DB session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_user_plan(self, user_id: UserId) -> str | None:
        try:
            result = await self.db.execute(
                select(User.plan).where(User.id == user_id).with_for_update(),
            )
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Plan lookup failed: {e}", extra={"user_id": user_id})
            raise StoreUnavailableError("Could not read user plan", "query")
        return result.scalar_one_or_none()

    async def count_categories(self, user_id: UserId) -> int:
        try:
            result = await self.db.execute(
                select(func.count())
                .select_from(EventCategory)
                .where(EventCategory.user_id == user_id),
            )
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Category count failed: {e}", extra={"user_id": user_id})
            raise StoreUnavailableError("Could not count categories", "query")
        return result.scalar_one()

    async def insert_category(
        self, user_id: UserId, category: NormalizedCategory,
    ) -> None:
        self.db.add(EventCategory(
            name=category.name,
            color=category.color,
            emoji=category.emoji,
            user_id=user_id,
        ))
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.info(
                f"Duplicate category name rejected: {e.orig}",
                extra={"user_id": user_id},
            )
            raise DuplicateCategoryNameError(
                category.name, ErrorContext(user_id=user_id),
            )
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Category insert failed: {e}", extra={"user_id": user_id})
            raise StoreUnavailableError("Could not save category", "commit")
