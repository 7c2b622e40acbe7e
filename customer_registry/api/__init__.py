"""API Layer — FastAPI routes, use-case wiring and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return structured JSON responses

Design Decisions:
    - Thin routes delegate to use cases; status codes derived from OperationResult category
"""
