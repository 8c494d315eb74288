"""
Tests for environment overrides in stockdata.config.settings
"""
import importlib
import logging

import pytest

from conftest import FakeSession
from stockdata.config import settings
from stockdata.data import StockDataFetcher


@pytest.fixture
def reload_settings(monkeypatch):
    """Reload settings after env changes; restore the original values afterwards"""
    yield lambda: importlib.reload(settings)
    monkeypatch.undo()
    importlib.reload(settings)


class TestSettingsOverrides:
    """STOCKDATA_* environment variables"""

    def test_base_url_override_used_by_default_fetcher(self, monkeypatch, reload_settings):
        """Test that STOCKDATA_BASE_URL becomes the default endpoint"""
        monkeypatch.setenv("STOCKDATA_BASE_URL", "http://mirror.example.com/table.csv")
        reload_settings()

        session = FakeSession()
        StockDataFetcher(session=session).fetch("AAPL", 1, 1, 2015)

        assert session.calls[0].startswith("http://mirror.example.com/table.csv?s=AAPL&")

    def test_timeout_override(self, monkeypatch, reload_settings):
        """Test that STOCKDATA_TIMEOUT becomes the default timeout"""
        monkeypatch.setenv("STOCKDATA_TIMEOUT", "12.5")
        reload_settings()

        session = FakeSession()
        StockDataFetcher(session=session).fetch("AAPL", 1, 1, 2015)

        assert settings.DATA_FETCH_CONFIG["timeout"] == 12.5
        assert session.timeouts == [12.5]

    def test_invalid_timeout_falls_back(self, monkeypatch, reload_settings, caplog):
        """Test that a non-numeric STOCKDATA_TIMEOUT keeps the default and warns"""
        monkeypatch.setenv("STOCKDATA_TIMEOUT", "soon")
        with caplog.at_level(logging.WARNING, logger="stockdata.config.settings"):
            reload_settings()

        assert settings.DATA_FETCH_CONFIG["timeout"] == 30.0
        assert "STOCKDATA_TIMEOUT" in caplog.text

    def test_defaults_without_env(self, monkeypatch, reload_settings):
        """Test the built-in defaults"""
        monkeypatch.delenv("STOCKDATA_BASE_URL", raising=False)
        monkeypatch.delenv("STOCKDATA_TIMEOUT", raising=False)
        reload_settings()

        assert settings.DATA_FETCH_CONFIG["base_url"] == "http://real-chart.finance.yahoo.com/table.csv"
        assert settings.DATA_FETCH_CONFIG["timeout"] == 30.0
