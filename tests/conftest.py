"""Shared test fixtures."""

import pytest


@pytest.fixture(autouse=False)
def _no_turso(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure tests use local file, not remote Turso."""
    monkeypatch.setattr("pendulum_runner.config.settings.turso_database_url", "")
