"""API Layer — request pipeline, validation, error handlers and routes.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints answer with the {success, data | error} envelope
      (rate-limit rejections excepted)

Design Decisions:
    - Thin routes delegate to stores (ADR: impureim sandwich)
"""
