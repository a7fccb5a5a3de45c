"""Tests for Sentry setup."""

from unittest.mock import patch

import pytest

from jsonwebdb import __version__
from jsonwebdb.core.monitoring import setup_sentry


@pytest.mark.unit
class TestSetupSentry:
    def test_no_dsn_skips_init(self):
        with patch("jsonwebdb.core.monitoring.sentry_sdk.init") as init:
            assert setup_sentry() is False
        init.assert_not_called()

    def test_explicit_dsn(self):
        with patch("jsonwebdb.core.monitoring.sentry_sdk.init") as init:
            assert setup_sentry("https://key@sentry.test/1", environment="ci") is True
        kwargs = init.call_args.kwargs
        assert kwargs["dsn"] == "https://key@sentry.test/1"
        assert kwargs["environment"] == "ci"
        assert kwargs["release"] == __version__
        assert kwargs["send_default_pii"] is False

    def test_dsn_from_env(self, monkeypatch):
        monkeypatch.setenv("SENTRY_DSN", "https://env@sentry.test/2")
        with patch("jsonwebdb.core.monitoring.sentry_sdk.init") as init:
            assert setup_sentry() is True
        assert init.call_args.kwargs["dsn"] == "https://env@sentry.test/2"
