"""Core Layer — error taxonomy, rate limiting and store contracts; no IO, no DB.

Invariants:
    - No module in core/ imports from api/, infrastructure/, repositories/ or db/
    - Only schemas/ (pure Pydantic models) may be imported, for Protocol signatures

Design Decisions:
    - Functional core separated from imperative shell (ADR: impureim sandwich)
"""
