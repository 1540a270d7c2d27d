"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at the system boundary (form input, API responses)
    - Response models never expose password hashes or salts

Design Decisions:
    - Separate from core records: schemas are API contracts, records are domain state
"""
