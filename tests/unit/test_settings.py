"""
Unit Tests - Configuration
"""
import pytest
from pydantic import ValidationError

from src.config import AnalyticsSettings, DatabaseSettings, Settings


class TestSettings:
    """Tests for environment-driven settings"""

    def test_defaults(self, test_settings):
        assert test_settings.app_env == "testing"
        assert test_settings.database.database == "ecom"
        assert test_settings.analytics.default_page_size == 10
        assert not test_settings.is_production

    def test_database_from_environment(self, monkeypatch):
        monkeypatch.setenv("MONGO_URI", "mongodb://db.internal:27017/shop")
        monkeypatch.setenv("MONGO_DATABASE", "shop")
        monkeypatch.setenv("MONGO_TIMEOUT_MS", "2500")

        db = DatabaseSettings()

        assert db.uri == "mongodb://db.internal:27017/shop"
        assert db.database == "shop"
        assert db.timeout_ms == 2500

    def test_page_size_from_environment(self, monkeypatch):
        monkeypatch.setenv("ANALYTICS_DEFAULT_PAGE_SIZE", "25")

        assert AnalyticsSettings().default_page_size == 25

    def test_page_size_must_be_positive(self, monkeypatch):
        monkeypatch.setenv("ANALYTICS_DEFAULT_PAGE_SIZE", "0")

        with pytest.raises(ValidationError):
            AnalyticsSettings()

    def test_environment_is_validated(self):
        with pytest.raises(ValidationError):
            Settings(app_env="moon")

    def test_environment_is_normalized(self):
        settings = Settings(app_env="Production")

        assert settings.app_env == "production"
        assert settings.is_production
