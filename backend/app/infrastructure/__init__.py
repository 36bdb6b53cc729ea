"""Infrastructure Layer — database pool, connection-string resolution, logging.

Invariants:
    - Infrastructure never imports from api/ or repositories/
    - Startup IO (remote fetch, connectivity retries) is fatal on failure

Design Decisions:
    - Resilient wrappers over raw clients (ADR: single responsibility)
"""
