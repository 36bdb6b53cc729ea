"""Connection String Resolver — direct DATABASE_URL or a one-time fetch from the Neon API.

Invariants:
    - DATABASE_URL always wins when present (no network call)
    - The remote fetch happens once per process, before the pool is built
    - Failures are logged and raised; the caller treats them as fatal to startup
"""

import logging

import httpx

from app.config import Settings

logger = logging.getLogger(__name__)


class ConnectionStringError(RuntimeError):
    """No usable database connection string could be obtained."""


async def resolve_database_url(
    settings: Settings, client: httpx.AsyncClient | None = None,
) -> str:
    """Return the connection string the pool should use."""
    if settings.database_url:
        return settings.database_url
    if not (settings.neon_api_key and settings.neon_project_id):
        raise ConnectionStringError("No valid database configuration provided")

    url = (
        f"{settings.neon_api_base_url.rstrip('/')}"
        f"/projects/{settings.neon_project_id}/connection_string"
    )
    headers = {
        "Authorization": f"Bearer {settings.neon_api_key}",
        "Content-Type": "application/json",
    }
    owns_client = client is None
    client = client or httpx.AsyncClient(timeout=settings.database_pool_timeout)
    try:
        response = await client.get(url, headers=headers)
        response.raise_for_status()
        connection_string = response.json().get("connection_string")
    except (httpx.HTTPError, ValueError) as e:
        logger.error(f"Failed to fetch connection string from Neon API: {e}")
        raise ConnectionStringError(f"Neon API error: {e}") from e
    finally:
        if owns_client:
            await client.aclose()

    if not connection_string:
        raise ConnectionStringError("Neon API response has no connection_string")
    logger.info("Connection string fetched from Neon API")
    return connection_string
