"""
Tests for settings parsing and startup configuration checks.
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from rural_properties.config import PLACEHOLDER_JWT_SECRET, Settings, validate_startup_configuration
from rural_properties.utils.exceptions import ConfigurationError

STRONG_SECRET = "a-sufficiently-long-secret-key-for-tests-0123"


def make_settings(**overrides) -> Settings:
    values = {
        "project_id": "rural-properties",
        "database_url": "sqlite+aiosqlite:///:memory:",
        "jwt_secret_key": STRONG_SECRET,
        "environment": "production",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class TestSettings:

    def test_database_url_gets_async_driver(self):
        assert make_settings(database_url="postgresql://u:p@db:5432/rural").database_url == "postgresql+asyncpg://u:p@db:5432/rural"
        assert make_settings(database_url="sqlite:///./local.db").database_url == "sqlite+aiosqlite:///./local.db"

    def test_short_jwt_secret_rejected(self):
        with pytest.raises(PydanticValidationError):
            make_settings(jwt_secret_key="too-short")

    def test_unknown_environment_rejected(self):
        with pytest.raises(PydanticValidationError):
            make_settings(environment="moon")

    def test_maps_mode(self):
        assert make_settings(maps_api_key=None).maps_mode == "static"
        assert make_settings(maps_api_key="maps-key").maps_mode == "interactive"

    def test_environment_flags(self):
        settings = make_settings()
        assert settings.is_production
        assert not settings.is_development
        assert make_settings(environment="staging", testing=True).is_testing


class TestStartupConfiguration:

    def test_complete_configuration_passes(self):
        validate_startup_configuration(make_settings())

    def test_missing_project_id(self):
        with pytest.raises(ConfigurationError) as exc_info:
            validate_startup_configuration(make_settings(project_id=None))
        assert exc_info.value.missing == ["PROJECT_ID"]

    def test_placeholder_secret_outside_development(self):
        with pytest.raises(ConfigurationError) as exc_info:
            validate_startup_configuration(make_settings(project_id="", jwt_secret_key=PLACEHOLDER_JWT_SECRET))
        assert exc_info.value.missing == ["PROJECT_ID", "JWT_SECRET_KEY"]

    def test_placeholder_secret_allowed_in_development(self):
        validate_startup_configuration(make_settings(environment="development", jwt_secret_key=PLACEHOLDER_JWT_SECRET))
