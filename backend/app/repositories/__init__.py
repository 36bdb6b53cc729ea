"""Repositories — typed stores over parameterized SQL, one module per table plus maintenance.

Invariants:
    - Stores receive the Database handle explicitly; no module-level pool
    - Only the uniqueness violation on subscribers.email is classified (CONFLICT);
      every other failure propagates unchanged to the terminal error handler
"""
