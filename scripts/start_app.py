#!/usr/bin/env python3
"""Run the API under uvicorn with Logfire configured first.

Storage is connected during application startup, so an unreachable
REDIS_URL is logged here and stops the process.
"""

import sys

import logfire
import uvicorn

from skylogin.config import Settings
from skylogin.util.logging import setup_logging
from skylogin.util.observability import configure_logfire


def main() -> int:
    settings = Settings()
    configure_logfire(settings)
    setup_logging(settings)

    logfire.info(
        "Starting skylogin",
        client_id=f"{settings.api.base_url}/client-metadata.json",
        storage_backend=settings.storage_backend,
    )

    try:
        uvicorn.run(
            "skylogin.interface.api.app:create_app",
            factory=True,
            host="0.0.0.0",
            port=settings.port,
            log_level="debug" if settings.debug else "info",
            proxy_headers=True,
        )
    except Exception as e:
        logfire.error(
            "Application startup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise

    return 0


if __name__ == "__main__":
    sys.exit(main())
