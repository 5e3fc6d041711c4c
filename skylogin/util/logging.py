"""Standard library logging setup."""

import logging
import sys

import logfire

from skylogin.config import Settings

# Driver loggers that are chatty at INFO
QUIET_LOGGERS = ("aiosqlite", "redis", "uvicorn.access")


def setup_logging(settings: Settings) -> None:
    """Route ``logging`` records to stdout and to Logfire.

    Route and config modules use ``logging.getLogger(__name__)``; storage
    code uses logfire directly. Both end up in the same place.

    Args:
        settings: Application settings
    """
    level = logging.DEBUG if settings.debug else logging.INFO

    stdout = logging.StreamHandler(sys.stdout)
    stdout.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    logging.basicConfig(
        level=level,
        handlers=[stdout, logfire.LogfireLoggingHandler()],
        force=True,
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    # SQL echo only in debug
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.debug else logging.WARNING
    )

    logging.getLogger(__name__).info(
        f"Logging configured: level={logging.getLevelName(level)}, "
        f"storage={settings.storage_backend}"
    )
