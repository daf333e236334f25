"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate syntax at the system boundary (lengths, ranges, formats)
    - Services re-validate past-ness, ownership and capacity regardless
"""
