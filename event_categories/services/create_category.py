"""Category Creation — orchestrates identity, quota gate, validation and persistence.

Invariants:
    - Steps run in a fixed order: identity -> load plan/count -> quota -> parse body ->
      validate -> insert
    - The request body is coerced only after identity and quota: an anonymous caller
      gets UnauthenticatedError and a caller at quota gets QuotaExceededError whatever
      they sent
    - Nothing is written unless every earlier step passed
    - Only ServiceError subclasses leave create_category(); any other store failure is
      converted to StoreUnavailableError
    - No retries: validation and quota failures are definitional, store failures are
      reported and left to the caller

Design Decisions:
    - Impureim sandwich: async store reads, pure check_quota/validate_category, async insert
    - Missing user record is an explicit deny (UserNotProvisionedError), never a default plan
    - The check-then-act gap between count and insert is closed by the store
      (SqlCategoryStore locks the user row), not here
"""

import logging
from typing import Any, Awaitable, TypeVar

from pydantic import ValidationError

from event_categories.core.domain_types import QuotaDecision, UserId
from event_categories.core.enforce_quota import QuotaConfig, check_quota
from event_categories.core.errors import (
    CategoryValidationError,
    ErrorContext,
    InvalidPlanError,
    QuotaExceededError,
    ServiceError,
    StoreUnavailableError,
    UnauthenticatedError,
    UserNotProvisionedError,
)
from event_categories.core.repository_protocols import CategoryStore
from event_categories.core.validate_category import (
    EmojiValidator,
    NameValidator,
    NormalizedCategory,
    is_single_emoji,
    validate_category,
    validate_category_name,
)
from event_categories.schemas.category import EventCategoryCreate

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Request body as received: raw JSON bytes/str, an already decoded object, or a model
RawPayload = EventCategoryCreate | dict[str, Any] | bytes | str | None


class CategoryCreationService:
    """Creates event categories for the calling user under their plan quota."""

    def __init__(
        self,
        store: CategoryStore,
        quota: QuotaConfig,
        name_validator: NameValidator = validate_category_name,
        emoji_validator: EmojiValidator = is_single_emoji,
    ):
        self.store = store
        self.quota = quota
        self.name_validator = name_validator
        self.emoji_validator = emoji_validator

    async def create_category(
        self, identity: UserId | None, payload: RawPayload,
    ) -> NormalizedCategory:
        """Create one category or raise the ServiceError explaining why not."""
        if identity is None:
            raise UnauthenticatedError()

        plan, count = await load_usage_context(self.store, identity)

        try:
            decision = check_quota(plan, count, self.quota)
        except InvalidPlanError as e:
            e.context.user_id = identity
            logger.error(
                f"Unrecognized plan for user: {plan!r}",
                extra={"user_id": identity, "plan": str(plan)},
            )
            raise

        if decision is not QuotaDecision.ADMIT:
            logger.info(
                "Category quota reached",
                extra={"user_id": identity, "decision": decision.value},
            )
            raise QuotaExceededError(decision, ErrorContext(user_id=identity))

        body = parse_category_payload(payload)
        category = validate_category(
            body.name,
            body.color,
            body.emoji,
            name_validator=self.name_validator,
            emoji_validator=self.emoji_validator,
        )

        await call_store(
            self.store.insert_category(identity, category), "insert",
        )
        logger.info(
            f"Event category '{category.name}' created",
            extra={"user_id": identity},
        )
        return category


def parse_category_payload(raw: RawPayload) -> EventCategoryCreate:
    """Coerce a request body into EventCategoryCreate.

    An empty body is treated as {} so the missing name is reported by the validator.
    Malformed JSON or a wrongly typed field raises CategoryValidationError naming the
    first offending field ("body" when the document itself is unusable).
    """
    if isinstance(raw, EventCategoryCreate):
        return raw
    if not raw:
        return EventCategoryCreate()
    try:
        if isinstance(raw, (bytes, str)):
            return EventCategoryCreate.model_validate_json(raw)
        return EventCategoryCreate.model_validate(raw)
    except ValidationError as e:
        first = e.errors()[0]
        field = str(first["loc"][0]) if first["loc"] else "body"
        raise CategoryValidationError(field, first["msg"])


async def load_usage_context(
    store: CategoryStore, identity: UserId,
) -> tuple[str, int]:
    """Read (raw plan, category count). Missing user -> UserNotProvisionedError."""
    plan = await call_store(store.get_user_plan(identity), "plan lookup")
    if plan is None:
        logger.warning("No user record for identity", extra={"user_id": identity})
        raise UserNotProvisionedError(identity)
    count = await call_store(store.count_categories(identity), "count")
    return plan, count


async def call_store(call: Awaitable[T], operation: str) -> T:
    """Await a store call, letting ServiceErrors through and wrapping anything else."""
    try:
        return await call
    except ServiceError:
        raise
    except Exception as e:
        logger.error(f"Store {operation} failed: {e}", exc_info=True)
        raise StoreUnavailableError("Store call failed", operation) from e
