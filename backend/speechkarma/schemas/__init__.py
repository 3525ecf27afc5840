"""Pydantic Schemas - request validation for API endpoints.

Invariants:
    - Schemas validate at the system boundary (request bodies)
    - Failures surface as 400 VALIDATION_ERROR via the global handler

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
    - Responses are shaped by api/presenters.py so timestamps share one format
"""
