"""Infrastructure Layer — database session management, storage, and logging.

Invariants:
    - Only this layer (and api/) touches SQLAlchemy sessions directly
    - Storage failures surface as StorageError subclasses (core/errors.py)

Design Decisions:
    - Repository implementations live here, protocols live in core
"""
