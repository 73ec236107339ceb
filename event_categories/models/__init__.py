"""ORM Models — SQLAlchemy declarative models for users and event categories.

Invariants:
    - All models inherit from Base (db/base.py)
    - User is the aggregate root; categories scoped by user_id

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from event_categories.models.user import User  # noqa: F401
from event_categories.models.event_category import EventCategory  # noqa: F401
