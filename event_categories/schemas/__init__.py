"""API Schemas — Pydantic request/response models.

Invariants:
    - Schemas validate shape and types only; business rules live in core/
"""
