"""Category Schemas — Pydantic models for the category API boundary.

Invariants:
    - EventCategoryCreate checks only JSON types: field rules (name format, hex color,
      emoji) live in core/validate_category.py
    - The create route does not bind it; the service coerces the raw body after the
      identity and quota steps
    - Missing name/color arrive as "" and are reported by the core validator per field

Design Decisions:
    - extra="ignore": a client-supplied user_id is dropped, ownership comes from identity
"""

from pydantic import BaseModel, ConfigDict

from event_categories.core.domain_types import Plan


class EventCategoryCreate(BaseModel):
    """Create-category request body."""
    model_config = ConfigDict(extra="ignore")

    name: str = ""
    color: str = ""
    emoji: str | None = None


class CategoryCreatedResponse(BaseModel):
    """Success marker for category creation."""
    status: str = "created"
    message: str = "Category created successfully"


class CategoryUsageResponse(BaseModel):
    """Current usage against the plan ceiling."""
    plan: Plan
    categories_used: int
    categories_limit: int
    at_limit: bool


class EmojiOptionResponse(BaseModel):
    emoji: str
    label: str


class CategoryOptionsResponse(BaseModel):
    """Preset colors and emojis for the creation form."""
    colors: list[str]
    emojis: list[EmojiOptionResponse]
