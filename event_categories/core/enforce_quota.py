"""Quota Enforcement — pure admit/deny decision keyed by subscription plan.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no globals
    - count >= ceiling never admits; count < ceiling always admits
    - FREE never yields DENY_PRO_LIMIT_REACHED and vice versa
    - Plan values outside {FREE, PRO} raise InvalidPlanError (never admitted, never denied)

Design Decisions:
    - QuotaConfig injected per call instead of module constants: tests pick their own ceilings
    - Raw strings accepted at the boundary: the plan column is a string, so the
      unknown-plan case is handled here rather than assumed away
"""

from dataclasses import dataclass, field

from event_categories.core.domain_types import Plan, QuotaDecision
from event_categories.core.errors import InvalidPlanError


DEFAULT_FREE_MAX_EVENT_CATEGORIES: int = 3
DEFAULT_PRO_MAX_EVENT_CATEGORIES: int = 10


@dataclass(frozen=True)
class PlanQuota:
    """Ceilings for a single plan."""
    max_event_categories: int


@dataclass(frozen=True)
class QuotaConfig:
    """Per-plan ceilings, loaded once at startup."""
    free: PlanQuota = field(
        default_factory=lambda: PlanQuota(DEFAULT_FREE_MAX_EVENT_CATEGORIES),
    )
    pro: PlanQuota = field(
        default_factory=lambda: PlanQuota(DEFAULT_PRO_MAX_EVENT_CATEGORIES),
    )

    def limit_for(self, plan: Plan | str) -> int:
        """Category ceiling for the given plan."""
        if parse_plan(plan) is Plan.PRO:
            return self.pro.max_event_categories
        return self.free.max_event_categories


def parse_plan(value: Plan | str | None) -> Plan:
    """Coerce a stored plan value into Plan, or raise InvalidPlanError."""
    if isinstance(value, Plan):
        return value
    try:
        return Plan(value)
    except ValueError:
        raise InvalidPlanError(value)


def check_quota(
    plan: Plan | str, current_count: int, quota: QuotaConfig,
) -> QuotaDecision:
    """Decide whether one more category fits under the plan ceiling."""
    plan = parse_plan(plan)

    if plan is Plan.PRO and current_count >= quota.pro.max_event_categories:
        return QuotaDecision.DENY_PRO_LIMIT_REACHED

    if plan is Plan.FREE and current_count >= quota.free.max_event_categories:
        return QuotaDecision.DENY_FREE_LIMIT_REACHED

    return QuotaDecision.ADMIT
