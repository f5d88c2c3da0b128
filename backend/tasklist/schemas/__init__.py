"""Pydantic Schemas: request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (user input, API responses)
    - Field rules delegate to core/validation.py so schemas and services agree

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
