"""Pydantic Schemas — request validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (user input) and nowhere deeper
    - Unknown keys are ignored, so id/createdAt can never be supplied by a caller

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence (ADR: DDD boundary)
"""
