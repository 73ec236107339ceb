"""Category Schemas — request body shape only; field rules live in the core."""

import pytest
from pydantic import ValidationError

from event_categories.core.domain_types import Plan
from event_categories.schemas.category import (
    CategoryCreatedResponse, CategoryUsageResponse, EventCategoryCreate,
)


def test_missing_fields_default_to_empty_strings():
    body = EventCategoryCreate()
    assert body.name == ""
    assert body.color == ""
    assert body.emoji is None


def test_format_is_not_checked_at_schema_level():
    body = EventCategoryCreate(name="not valid!", color="blue")
    assert body.color == "blue"


def test_client_supplied_user_id_is_dropped():
    body = EventCategoryCreate.model_validate(
        {"name": "x", "color": "#FF6B6B", "userId": "someone_else"},
    )
    assert "userId" not in body.model_dump()


def test_wrong_json_type_is_rejected():
    with pytest.raises(ValidationError):
        EventCategoryCreate.model_validate({"name": 123, "color": "#FF6B6B"})


def test_created_response_marker():
    assert CategoryCreatedResponse().model_dump() == {
        "status": "created",
        "message": "Category created successfully",
    }


def test_usage_response_serializes_plan_as_string():
    usage = CategoryUsageResponse(
        plan=Plan.PRO, categories_used=1, categories_limit=10, at_limit=False,
    )
    assert usage.model_dump(mode="json")["plan"] == "PRO"
