"""User ORM — owner of event categories and source of the subscription plan.

Invariants:
    - id is the external identity provider's user id (string primary key)
    - plan is stored as a string; core/enforce_quota.py parses it into Plan
    - categories cascade-delete with their owner

Design Decisions:
    - String plan column over DB enum: unknown values stay representable so they
      can be surfaced as InvalidPlanError instead of failing at load time
"""

from datetime import datetime, timezone

from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship

from event_categories.core.domain_types import Plan
from event_categories.db.base import Base


class User(Base):
    """User entity — read-only from the category service's point of view."""
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    email: Mapped[str | None] = mapped_column(String(320), nullable=True)
    plan: Mapped[str] = mapped_column(
        String(10), nullable=False, default=Plan.FREE.value,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    event_categories: Mapped[list["EventCategory"]] = relationship(
        "EventCategory", back_populates="user",
        cascade="all, delete-orphan",
    )
