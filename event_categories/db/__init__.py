"""Database Package — SQLAlchemy declarative Base shared by all ORM models.

Invariants:
    - All sessions are async (AsyncSession), created by infrastructure/database.py

Design Decisions:
    - asyncpg driver for PostgreSQL, aiosqlite in tests
"""
