"""Root conftest — shared test configuration."""

import os

# Must be set before event_categories.config is imported (settings are cached)
os.environ.setdefault(
    "AUTH_JWT_SECRET", "test-secret-key-that-is-at-least-32-bytes",
)
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("FREE_MAX_EVENT_CATEGORIES", "3")
os.environ.setdefault("PRO_MAX_EVENT_CATEGORIES", "10")
