"""Database Pool — shared async connection pool with startup retries and a single query entry point.

Invariants:
    - Every query goes through sqlalchemy.text() with named bind parameters;
      caller-supplied values are never interpolated into SQL
    - Each query() call runs in its own transaction and commits on success
    - connect() either verifies the store or raises DatabaseUnavailableError
    - Errors on idle connections are logged by pool events and never crash the process

Design Decisions:
    - Explicit Database handle created by the app factory and injected via app.state
      (ADR: no global import side effects, init/shutdown owned by the lifespan)
    - pool_pre_ping + pool_recycle: stale connections are replaced on checkout
    - Query errors propagate unchanged: only the stores know which ones are domain errors
"""

import asyncio
import logging
from typing import Any, Mapping, Sequence

from sqlalchemy import event, text
from sqlalchemy.engine import RowMapping, URL, make_url
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION_SQLSTATE = "23505"
_LIBPQ_ONLY_OPTIONS = ("sslmode", "channel_binding")
_POSTGRES_SCHEMES = ("postgres", "postgresql")


class DatabaseUnavailableError(RuntimeError):
    """The store could not be reached within the configured retries."""


def normalize_database_url(url: str | URL) -> tuple[URL, bool]:
    """Return an asyncpg-ready URL and whether SSL was requested.

    libpq options such as sslmode are not understood by asyncpg, so they are
    stripped from the query string and reported through the flag instead.
    """
    parsed = make_url(url)
    # postgres:// is a libpq alias that SQLAlchemy has no dialect for
    if parsed.drivername.split("+", 1)[0] not in _POSTGRES_SCHEMES:
        return parsed, False
    sslmode = parsed.query.get("sslmode")
    ssl_required = sslmode not in (None, "disable", "allow", "prefer")
    parsed = parsed.difference_update_query(_LIBPQ_ONLY_OPTIONS)
    return parsed.set(drivername="postgresql+asyncpg"), ssl_required


def is_unique_violation(exc: IntegrityError) -> bool:
    """True when the store rejected a write because of a unique constraint."""
    orig = exc.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code is not None:
        return code == UNIQUE_VIOLATION_SQLSTATE
    return "UNIQUE constraint failed" in str(orig)


class Database:
    """Owns the engine (and its pool) for the lifetime of the process."""

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        event.listen(engine.sync_engine, "connect", _on_connect)
        event.listen(engine.sync_engine, "invalidate", _on_invalidate)

    @classmethod
    def from_url(
        cls,
        url: str | URL,
        *,
        pool_size: int = 10,
        pool_timeout: float = 10.0,
        statement_timeout_ms: int | None = 30_000,
    ) -> "Database":
        parsed, ssl_required = normalize_database_url(url)
        kwargs: dict[str, Any] = {"pool_pre_ping": True, "pool_recycle": 3600}
        if parsed.get_backend_name() == "postgresql":
            connect_args: dict[str, Any] = {"timeout": pool_timeout}
            if statement_timeout_ms:
                connect_args["server_settings"] = {
                    "statement_timeout": str(statement_timeout_ms),
                }
            if ssl_required:
                connect_args["ssl"] = "require"
            kwargs.update(
                pool_size=pool_size,
                max_overflow=0,
                pool_timeout=pool_timeout,
                connect_args=connect_args,
            )
        return cls(create_async_engine(parsed, **kwargs))

    @property
    def dialect_name(self) -> str:
        return self.engine.dialect.name

    async def connect(
        self, retries: int = 3, delay: float = 1.0, backoff: float = 1.0,
    ) -> None:
        """Verify connectivity, retrying before giving up."""
        wait = delay
        for attempt in range(1, retries + 1):
            try:
                async with self.engine.connect() as conn:
                    await conn.execute(text("SELECT 1"))
                logger.info(
                    "Database connection verified", extra={"attempt": attempt},
                )
                return
            except (SQLAlchemyError, OSError) as e:
                logger.warning(
                    f"Database connection attempt {attempt}/{retries} failed: {e}",
                    extra={"attempt": attempt},
                )
                if attempt < retries:
                    await asyncio.sleep(wait)
                    wait *= backoff
        raise DatabaseUnavailableError(
            f"Failed to connect to database after {retries} attempts",
        )

    async def query(
        self, sql: str, params: Mapping[str, Any] | None = None,
    ) -> Sequence[RowMapping]:
        """Run one parameterized statement and return its rows (if any)."""
        async with self.engine.begin() as conn:
            result = await conn.execute(text(sql), dict(params or {}))
            if not result.returns_rows:
                return []
            return result.mappings().all()

    async def health_check(self) -> bool:
        """Check database connectivity (for the health endpoint)."""
        try:
            await self.query("SELECT 1")
            return True
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()
        logger.info("Database pool closed")


def _on_connect(dbapi_connection, connection_record) -> None:
    logger.debug("Database connection established")


def _on_invalidate(dbapi_connection, connection_record, exception) -> None:
    if exception is not None:
        logger.warning(f"Database connection invalidated: {exception}")
