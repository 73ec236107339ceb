"""Services Layer — async orchestration around the pure core.

Invariants:
    - Services talk to IO only through core/repository_protocols.py
    - Services raise ServiceError subclasses; the API layer renders them
"""
