"""Process Entry Point — binds the listener with uvicorn.

uvicorn owns signal handling: SIGINT/SIGTERM trigger the lifespan shutdown,
which disposes the database pool.
"""

import uvicorn

from app.config import get_settings
from app.main import create_app


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_config=None,
        proxy_headers=False,
    )


if __name__ == "__main__":
    main()
