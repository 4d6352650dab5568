"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate shape at the system boundary; business rules live in core/
    - Domain types from core/ used for enum fields in responses

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
