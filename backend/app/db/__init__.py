"""Database Metadata — SQLAlchemy declarative Base shared by the ORM models.

Invariants:
    - Metadata is used to build the schema (alembic, test fixtures), not to query
    - Runtime queries go through infrastructure/database.py with parameterized SQL
"""
