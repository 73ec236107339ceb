"""Infrastructure Layer — database sessions, category store, identity resolution, logging.

Invariants:
    - Every IO adapter here satisfies a Protocol from core/repository_protocols.py
    - Driver exceptions are translated to core/errors.py types before leaving this layer
"""
