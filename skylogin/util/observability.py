"""Logfire setup and library instrumentation.

Storage code logs through ``logfire`` directly:

    logfire.info("Session revoked", did=did)

    with logfire.span("storage.initialize", backend="redis"):
        ...

Token material (access and refresh tokens, OAuth codes) must never be
passed as an attribute.
"""

from typing import Any

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from skylogin.config import Settings

# redis-py is instrumented process-wide, so only once
_redis_instrumented = False


def _should_send(settings: Settings) -> bool:
    """Explicit OBSERVABILITY__SEND_TO_LOGFIRE wins, then token presence."""
    observability = settings.observability
    if observability.send_to_logfire is not None:
        return observability.send_to_logfire
    return bool(observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire once at process start.

    Without a token everything stays on the console.

    Args:
        settings: Application settings
    """
    send_to_logfire = _should_send(settings)

    logfire.configure(
        service_name="skylogin",
        service_version="0.1.0",
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        token=settings.observability.logfire_token,
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    )

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        storage_backend=settings.storage_backend,
        base_url=settings.api.base_url,
    )


def _request_attributes(request: Any, attributes: dict[str, Any]) -> dict[str, Any]:
    # OAuth callbacks carry code and state in the query string; keep the path only
    result = {**attributes}
    url = getattr(request, "url", None)
    if url is not None:
        result["path"] = url.path
    return result


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every request, without headers or query strings.

    Args:
        app: FastAPI application instance
    """
    logfire.instrument_fastapi(
        app,
        capture_headers=False,
        request_attributes_mapper=_request_attributes,
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace statements issued by the SQLite backend's engine."""
    logfire.instrument_sqlalchemy(engine=engine.sync_engine)


def instrument_redis() -> None:
    """Trace redis-py commands without their arguments (they hold tokens)."""
    global _redis_instrumented
    if _redis_instrumented:
        return
    logfire.instrument_redis(capture_statement=False)
    _redis_instrumented = True
