"""Tests for Settings configuration model."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from pendulum_runner.config import Settings


class TestDefaults:
    def test_default_database_path(self):
        s = Settings()
        assert s.database_path == Path("data/pendulum_runner.db")

    def test_turso_disabled_by_default(self):
        s = Settings()
        assert s.turso_database_url == ""

    def test_default_timezone(self):
        s = Settings()
        assert s.scheduler_timezone == "UTC"

    def test_default_sweep_interval(self):
        s = Settings()
        assert s.sweep_interval_seconds == 60

    def test_default_http_timeout(self):
        s = Settings()
        assert s.http_timeout_seconds == 30.0

    def test_default_log_level(self):
        s = Settings()
        assert s.log_level == "INFO"


class TestValidation:
    def test_sweep_interval_must_be_positive(self):
        with pytest.raises(ValidationError):
            Settings(sweep_interval_seconds=0)

    def test_http_timeout_must_be_positive(self):
        with pytest.raises(ValidationError):
            Settings(http_timeout_seconds=-1)

    def test_explicit_values(self):
        s = Settings(scheduler_timezone="Europe/Lisbon", sweep_interval_seconds=5)
        assert s.scheduler_timezone == "Europe/Lisbon"
        assert s.sweep_interval_seconds == 5


def test_env_ignored_under_pytest(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    assert Settings().log_level == "INFO"


class TestLogLevel:
    def test_normalised_to_upper(self):
        assert Settings(log_level=" debug ").log_level == "DEBUG"

    def test_unknown_level_rejected(self):
        with pytest.raises(ValidationError, match="LOG_LEVEL"):
            Settings(log_level="VERBOSE")
