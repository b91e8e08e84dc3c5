"""Tests for Settings and logging helpers."""

import pytest
from pydantic import ValidationError

from factom_monitor.config import Settings, get_settings
from factom_monitor.config.logging import filter_sensitive_data


class TestSettings:
    def test_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.factomd_url == "https://api.factomd.net/v2"
        assert settings.poll_interval == 1.0
        assert settings.retry_strategy == "constant"
        assert settings.retry_interval == 0.05
        assert settings.retry_multiplier == 1.5
        assert settings.retry_max == 15.0
        assert settings.minute_buffer_size == 25
        assert settings.error_buffer_size == 6

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("FACTOMD_MONITOR_FACTOMD_URL", "http://localhost:8088/v2")
        monkeypatch.setenv("FACTOMD_MONITOR_POLL_INTERVAL", "0.25")

        settings = Settings(_env_file=None)

        assert settings.factomd_url == "http://localhost:8088/v2"
        assert settings.poll_interval == 0.25

    @pytest.mark.parametrize("field", ["poll_interval", "request_timeout"])
    def test_intervals_must_be_positive(self, field):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, **{field: 0})

    def test_retry_max_below_retry_interval_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, retry_interval=2.0, retry_max=1.0)

    def test_unknown_strategy_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, retry_strategy="fibonacci")

    def test_get_settings_is_cached(self):
        get_settings.cache_clear()
        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()


class TestSensitiveDataFilter:
    def test_redacts_nested_keys(self):
        event = {"event": "x", "token": "abc", "request": {"Authorization": "Basic zzz", "url": "u"}}

        filtered = filter_sensitive_data(None, "info", event)

        assert filtered["token"] == "[REDACTED]"
        assert filtered["request"] == {"Authorization": "[REDACTED]", "url": "u"}
        assert filtered["event"] == "x"
