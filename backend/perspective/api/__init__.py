"""API Layer — FastAPI routes, error translation and the REST interface lifecycle.

Invariants:
    - Routes registered explicitly in the app factory (no auto-discovery)
    - All endpoints return JSON except /ping (text) and DELETE (empty body)

Design Decisions:
    - Thin routes delegate to services
"""
