"""Pydantic Schemas — request validation and response shapes for API endpoints.

Invariants:
    - Request schemas normalize input (trim, lowercase email) before it reaches a store
    - Response schemas describe exactly what the envelope's data field carries

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence (ADR: DDD boundary)
"""
