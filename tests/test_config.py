"""
Tests for Application Settings
"""

import pytest
from pydantic import ValidationError

from catalog.config import Settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)
        monkeypatch.delenv("DEBUG", raising=False)

        settings = Settings(_env_file=None)

        assert settings.app_name == "Local Library"
        assert settings.port == 3000
        assert settings.database_url == "sqlite:///./locallibrary.db"
        assert settings.is_sqlite
        assert not settings.is_production

    def test_environment_variables_override(self, monkeypatch):
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("DATABASE_URL", "postgresql://library@localhost/locallibrary")

        settings = Settings(_env_file=None)

        assert settings.port == 8080
        assert not settings.is_sqlite

    def test_log_level_is_uppercased(self):
        assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_level="LOUD")

    def test_environment_validated(self):
        assert Settings(_env_file=None, environment="Production").is_production

        with pytest.raises(ValidationError):
            Settings(_env_file=None, environment="qa")
