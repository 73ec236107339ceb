"""EventCategory ORM — persists a user-defined label for classifying tracked events.

Invariants:
    - Always belongs to a User (user_id FK)
    - (name, user_id) is unique — the store is the source of truth for duplicates
    - color is the 24-bit RGB integer (0..0xFFFFFF), not the hex string
    - emoji is NULL when none was chosen
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    String, Integer, DateTime, ForeignKey, UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from event_categories.core.validate_category import (
    MAX_CATEGORY_NAME_LENGTH, MAX_EMOJI_LENGTH,
)
from event_categories.db.base import Base


class EventCategory(Base):
    """Event category entity — name, color and emoji owned by one user."""
    __tablename__ = "event_categories"
    __table_args__ = (
        UniqueConstraint("name", "user_id", name="uq_event_categories_name_user"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(
        String(MAX_CATEGORY_NAME_LENGTH), nullable=False,
    )
    color: Mapped[int] = mapped_column(Integer, nullable=False)
    emoji: Mapped[str | None] = mapped_column(
        String(MAX_EMOJI_LENGTH), nullable=True,
    )
    user_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("users.id", ondelete="CASCADE"), nullable=False,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    user: Mapped["User"] = relationship(
        "User", back_populates="event_categories",
    )
