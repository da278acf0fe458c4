import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from fare_service.api import create_app
from fare_service.rates import RateTableProvider
from fare_service.settings import CORSSettings, Settings


@pytest.fixture
def api_settings() -> Settings:
    return Settings(cors=CORSSettings(origins="http://localhost:3000"))


@pytest.fixture
def test_app(rate_provider: RateTableProvider, api_settings: Settings) -> FastAPI:
    """App backed by the in-memory fixture rate table."""
    return create_app(rate_provider, api_settings)


@pytest.fixture
def test_client(test_app: FastAPI) -> TestClient:
    with TestClient(test_app) as client:
        yield client


@pytest.fixture
def file_backed_client(rate_table_file, api_settings: Settings) -> TestClient:
    """Client whose rate table can be reloaded from a temporary file."""
    app = create_app(RateTableProvider.from_file(rate_table_file), api_settings)
    with TestClient(app) as client:
        yield client
