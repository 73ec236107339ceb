"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId wraps the external identity string — never pass bare str in domain logic
    - Plan is a closed enumeration: FREE and PRO only
    - QuotaDecision keeps which ceiling was hit (the two deny messages differ)

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders and compare equal to DB strings
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", str)


# ─── Value Types ─────────────────────────────────────────────────

ColorValue = NewType("ColorValue", int)   # 0..0xFFFFFF


# ─── Enums ───────────────────────────────────────────────────────

class Plan(str, Enum):
    """Subscription tiers — maps to the `users.plan` column."""
    FREE = "FREE"
    PRO = "PRO"


class QuotaDecision(str, Enum):
    """Outcome of the quota gate."""
    ADMIT = "admit"
    DENY_FREE_LIMIT_REACHED = "deny_free_limit_reached"
    DENY_PRO_LIMIT_REACHED = "deny_pro_limit_reached"


class CategoryField(str, Enum):
    """Payload fields in validation order."""
    NAME = "name"
    COLOR = "color"
    EMOJI = "emoji"
