"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: boundary methods are async because implementations do IO,
      but the quota and validation functions that consume their results are never async —
      the service orchestrates the async calls around the pure logic
    - get_user_plan returns the raw stored string: parsing into Plan (and rejecting
      unknown values) happens in core/enforce_quota.py
"""

from typing import Protocol

from event_categories.core.domain_types import UserId
from event_categories.core.validate_category import NormalizedCategory


class CategoryStore(Protocol):
    """Contract for category persistence — implemented by shell."""
    async def get_user_plan(self, user_id: UserId) -> str | None: ...
    async def count_categories(self, user_id: UserId) -> int: ...
    async def insert_category(
        self, user_id: UserId, category: NormalizedCategory,
    ) -> None: ...


class IdentityProvider(Protocol):
    """Contract for resolving the caller — implemented by shell."""
    def resolve(self, authorization: str | None) -> UserId | None: ...
