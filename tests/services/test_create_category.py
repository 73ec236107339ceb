"""Category Creation Service — orchestration order, error kinds, and the quota race.

Invariants:
    - identity -> plan/count -> quota -> validate -> insert, first failure wins
    - Nothing is stored on any failure
    - Store failures surface as StoreUnavailableError, domain errors pass through

Design Decisions:
    - Uses the unlocked FakeCategoryStore: the concurrency test documents that the
      service alone is check-then-act; the SQL store closes the gap with a row lock
"""

import asyncio

import pytest

from event_categories.core.domain_types import QuotaDecision, UserId
from event_categories.core.enforce_quota import PlanQuota, QuotaConfig
from event_categories.core.errors import (
    CategoryValidationError,
    DuplicateCategoryNameError,
    InvalidPlanError,
    QuotaExceededError,
    StoreUnavailableError,
    UnauthenticatedError,
    UserNotProvisionedError,
)
from event_categories.core.validate_category import NormalizedCategory
from event_categories.schemas.category import EventCategoryCreate
from event_categories.services.create_category import CategoryCreationService

QUOTA = QuotaConfig(free=PlanQuota(3), pro=PlanQuota(10))
USER = UserId("user_1")
SIGNUP = EventCategoryCreate(name="signup", color="#FF6B6B", emoji="\U0001F389")


def _seed(store, plan: str, existing: int, user_id: str = USER) -> None:
    store.plans[user_id] = plan
    for i in range(existing):
        store.rows.append((user_id, NormalizedCategory(f"existing-{i}", 0)))


@pytest.fixture
def service(fake_store):
    return CategoryCreationService(fake_store, QUOTA)


# ─── Happy path ──────────────────────────────────────────────────

async def test_free_user_under_limit_creates_category(service, fake_store):
    _seed(fake_store, "FREE", existing=2)

    category = await service.create_category(USER, SIGNUP)

    assert category == NormalizedCategory("signup", 16739179, "\U0001F389")
    assert fake_store.owned_by(USER)[-1] == category
    assert len(fake_store.owned_by(USER)) == 3


async def test_emoji_is_optional(service, fake_store):
    _seed(fake_store, "PRO", existing=0)

    category = await service.create_category(
        USER, EventCategoryCreate(name="sale", color="#2ecc71"),
    )

    assert category.emoji is None
    assert category.color == 0x2ECC71


# ─── Identity ────────────────────────────────────────────────────

async def test_no_identity_is_unauthenticated(service, fake_store):
    with pytest.raises(UnauthenticatedError):
        await service.create_category(None, SIGNUP)


async def test_no_identity_wins_over_bad_payload(service, fake_store):
    with pytest.raises(UnauthenticatedError):
        await service.create_category(None, EventCategoryCreate(name="", color="blue"))
    assert fake_store.rows == []


async def test_missing_user_record_is_denied(service, fake_store):
    with pytest.raises(UserNotProvisionedError) as exc_info:
        await service.create_category(USER, SIGNUP)
    assert exc_info.value.context.user_id == USER
    assert fake_store.rows == []


# ─── Quota gate ──────────────────────────────────────────────────

async def test_free_limit_reached(service, fake_store):
    _seed(fake_store, "FREE", existing=3)

    with pytest.raises(QuotaExceededError) as exc_info:
        await service.create_category(USER, SIGNUP)

    assert exc_info.value.decision is QuotaDecision.DENY_FREE_LIMIT_REACHED
    assert "upgrade to PRO" in exc_info.value.message
    assert len(fake_store.owned_by(USER)) == 3


async def test_pro_limit_reached(service, fake_store):
    _seed(fake_store, "PRO", existing=10)

    with pytest.raises(QuotaExceededError) as exc_info:
        await service.create_category(USER, SIGNUP)

    assert exc_info.value.decision is QuotaDecision.DENY_PRO_LIMIT_REACHED
    assert "remove categories" in exc_info.value.message


async def test_quota_checked_before_validation(service, fake_store):
    _seed(fake_store, "FREE", existing=3)

    with pytest.raises(QuotaExceededError):
        await service.create_category(USER, EventCategoryCreate(name="x", color="blue"))


# ─── Raw body ────────────────────────────────────────────────────

async def test_raw_json_body_is_accepted(service, fake_store):
    _seed(fake_store, "FREE", existing=0)

    category = await service.create_category(
        USER, b'{"name": "signup", "color": "#FF6B6B"}',
    )

    assert category == NormalizedCategory("signup", 16739179)


async def test_no_identity_wins_over_unparseable_body(service, fake_store):
    with pytest.raises(UnauthenticatedError):
        await service.create_category(None, b"{not json")


async def test_quota_checked_before_body_types(service, fake_store):
    _seed(fake_store, "FREE", existing=3)

    with pytest.raises(QuotaExceededError):
        await service.create_category(USER, {"name": 1, "color": 2})


async def test_mistyped_field_is_invalid_for_that_field(service, fake_store):
    _seed(fake_store, "FREE", existing=0)

    with pytest.raises(CategoryValidationError) as exc_info:
        await service.create_category(USER, {"name": "x", "color": ["#FF6B6B"]})

    assert exc_info.value.field == "color"
    assert fake_store.rows == []


async def test_malformed_json_is_invalid_body(service, fake_store):
    _seed(fake_store, "FREE", existing=0)

    with pytest.raises(CategoryValidationError) as exc_info:
        await service.create_category(USER, b"{not json")

    assert exc_info.value.field == "body"


async def test_empty_body_reports_missing_name(service, fake_store):
    _seed(fake_store, "FREE", existing=0)

    with pytest.raises(CategoryValidationError) as exc_info:
        await service.create_category(USER, b"")

    assert exc_info.value.field == "name"


async def test_unknown_plan_is_fatal_and_stores_nothing(service, fake_store):
    _seed(fake_store, "ENTERPRISE", existing=0)

    with pytest.raises(InvalidPlanError) as exc_info:
        await service.create_category(USER, SIGNUP)

    assert exc_info.value.context.user_id == USER
    assert fake_store.rows == []


async def test_other_users_categories_do_not_count(service, fake_store):
    _seed(fake_store, "FREE", existing=3, user_id="someone_else")
    _seed(fake_store, "FREE", existing=0)

    await service.create_category(USER, SIGNUP)

    assert len(fake_store.owned_by(USER)) == 1


# ─── Validation ──────────────────────────────────────────────────

async def test_bad_color_is_invalid(service, fake_store):
    _seed(fake_store, "FREE", existing=0)

    with pytest.raises(CategoryValidationError) as exc_info:
        await service.create_category(USER, EventCategoryCreate(name="x", color="blue"))

    assert exc_info.value.field == "color"
    assert fake_store.rows == []


async def test_injected_name_validator_is_used(fake_store):
    _seed(fake_store, "FREE", existing=0)
    service = CategoryCreationService(
        fake_store, QUOTA, name_validator=lambda name: "nope",
    )

    with pytest.raises(CategoryValidationError) as exc_info:
        await service.create_category(USER, SIGNUP)
    assert exc_info.value.field == "name"
    assert exc_info.value.message == "nope"


# ─── Persistence ─────────────────────────────────────────────────

async def test_duplicate_name_passes_through(service, fake_store):
    _seed(fake_store, "PRO", existing=0)
    await service.create_category(USER, SIGNUP)

    with pytest.raises(DuplicateCategoryNameError):
        await service.create_category(USER, SIGNUP)
    assert len(fake_store.owned_by(USER)) == 1


@pytest.mark.parametrize("operation", [
    "get_user_plan", "count_categories", "insert_category",
])
async def test_raw_store_failure_becomes_store_unavailable(service, fake_store, operation):
    _seed(fake_store, "FREE", existing=0)
    fake_store.failures[operation] = ConnectionError("db down")

    with pytest.raises(StoreUnavailableError) as exc_info:
        await service.create_category(USER, SIGNUP)
    assert isinstance(exc_info.value.__cause__, ConnectionError)


async def test_store_unavailable_from_adapter_is_not_rewrapped(service, fake_store):
    _seed(fake_store, "FREE", existing=0)
    original = StoreUnavailableError("Could not count categories", "query")
    fake_store.failures["count_categories"] = original

    with pytest.raises(StoreUnavailableError) as exc_info:
        await service.create_category(USER, SIGNUP)
    assert exc_info.value is original


# ─── Concurrency ─────────────────────────────────────────────────

async def test_unlocked_store_lets_concurrent_requests_overshoot(service, fake_store):
    """Check-then-act: both requests read count=2 before either inserts.

    SqlCategoryStore prevents this on PostgreSQL by locking the user row
    for the whole request transaction.
    """
    _seed(fake_store, "FREE", existing=2)
    fake_store.yield_after_count = True

    await asyncio.gather(
        service.create_category(USER, EventCategoryCreate(name="a", color="#FF6B6B")),
        service.create_category(USER, EventCategoryCreate(name="b", color="#FF6B6B")),
    )

    assert len(fake_store.owned_by(USER)) == QUOTA.free.max_event_categories + 1


async def test_sequential_requests_respect_ceiling(service, fake_store):
    _seed(fake_store, "FREE", existing=2)

    await service.create_category(USER, EventCategoryCreate(name="a", color="#FF6B6B"))
    with pytest.raises(QuotaExceededError):
        await service.create_category(USER, EventCategoryCreate(name="b", color="#FF6B6B"))
