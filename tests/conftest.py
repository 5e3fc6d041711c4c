"""Test configuration and fixtures."""

import logfire
import pytest

# Keep telemetry local and quiet during tests
logfire.configure(send_to_logfire=False, console=False)


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch):
    """Tests never pick up a developer's REDIS_URL or PUBLIC_URL."""
    monkeypatch.delenv("REDIS_URL", raising=False)
    monkeypatch.delenv("PUBLIC_URL", raising=False)
