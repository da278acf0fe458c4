from pathlib import Path

import pytest
from pydantic import ValidationError

from fare_service.settings import (
    DEFAULT_RATE_TABLE_PATH,
    APISettings,
    CORSSettings,
    FareSettings,
    LoggingSettings,
    Settings,
    get_settings,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "FARE_RATE_TABLE_PATH",
        "LOG_LEVEL",
        "LOG_FORMAT",
        "LOG_ENVIRONMENT",
        "API_HOST",
        "API_PORT",
        "CORS_ORIGINS",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.mark.unit
class TestFareSettings:
    def test_defaults_to_packaged_rate_table(self):
        settings = FareSettings()
        assert settings.rate_table_path == DEFAULT_RATE_TABLE_PATH
        assert settings.rate_table_path.name == "rate_table.json"

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("FARE_RATE_TABLE_PATH", "/etc/fares/rates.json")

        settings = FareSettings()
        assert settings.rate_table_path == Path("/etc/fares/rates.json")


@pytest.mark.unit
class TestLoggingSettings:
    def test_defaults(self):
        settings = LoggingSettings()
        assert settings.level == "INFO"
        assert settings.format == "text"
        assert settings.environment == "development"

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("LOG_FORMAT", "json")

        settings = LoggingSettings()
        assert settings.level == "DEBUG"
        assert settings.format == "json"

    def test_validation(self):
        with pytest.raises(ValidationError):
            LoggingSettings(level="VERBOSE")

        with pytest.raises(ValidationError):
            LoggingSettings(format="xml")


@pytest.mark.unit
class TestAPISettings:
    def test_defaults(self):
        settings = APISettings()
        assert settings.host == "0.0.0.0"
        assert settings.port == 8000

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("API_PORT", "9100")
        assert APISettings().port == 9100

    def test_port_range(self):
        with pytest.raises(ValidationError):
            APISettings(port=0)

        with pytest.raises(ValidationError):
            APISettings(port=70000)


@pytest.mark.unit
class TestCORSSettings:
    def test_origin_list(self):
        settings = CORSSettings(origins="https://app.example.com, http://localhost:3000,")

        assert settings.origin_list == ["https://app.example.com", "http://localhost:3000"]


@pytest.mark.unit
class TestSettings:
    def test_nested_defaults(self):
        settings = get_settings()

        assert isinstance(settings, Settings)
        assert settings.fare.rate_table_path == DEFAULT_RATE_TABLE_PATH
        assert settings.logging.level == "INFO"
        assert settings.api.port == 8000

    def test_nested_sections_read_their_prefixes(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "WARNING")
        monkeypatch.setenv("API_PORT", "8081")

        settings = get_settings()
        assert settings.logging.level == "WARNING"
        assert settings.api.port == 8081
