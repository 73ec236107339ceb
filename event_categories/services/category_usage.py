"""Category Usage — how many categories the caller has and how many their plan allows.

Invariants:
    - Read-only: never inserts or modifies categories
    - Same identity and missing-user rules as category creation
    - at_limit is true exactly when check_quota would deny the next creation
    - An unrecognized stored plan is logged with its value before InvalidPlanError leaves
"""

import logging
from dataclasses import dataclass

from event_categories.core.domain_types import Plan, QuotaDecision, UserId
from event_categories.core.enforce_quota import QuotaConfig, check_quota, parse_plan
from event_categories.core.errors import InvalidPlanError, UnauthenticatedError
from event_categories.core.repository_protocols import CategoryStore
from event_categories.services.create_category import load_usage_context

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CategoryUsage:
    plan: Plan
    categories_used: int
    categories_limit: int
    at_limit: bool


async def get_category_usage(
    store: CategoryStore, quota: QuotaConfig, identity: UserId | None,
) -> CategoryUsage:
    if identity is None:
        raise UnauthenticatedError()

    raw_plan, count = await load_usage_context(store, identity)
    try:
        plan = parse_plan(raw_plan)
    except InvalidPlanError as e:
        e.context.user_id = identity
        logger.error(
            f"Unrecognized plan for user: {raw_plan!r}",
            extra={"user_id": identity, "plan": str(raw_plan)},
        )
        raise
    decision = check_quota(plan, count, quota)

    return CategoryUsage(
        plan=plan,
        categories_used=count,
        categories_limit=quota.limit_for(plan),
        at_limit=decision is not QuotaDecision.ADMIT,
    )
