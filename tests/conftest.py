import pytest
import httpx
from fastapi.testclient import TestClient
from unittest.mock import AsyncMock, MagicMock

from app.core.config import PeliasConfig
from app.core.errors import ClientResult
from app.main import app
from app.routers.geo import get_pelias_client
from app.schemas.pelias import PeliasFeatureCollection
from app.services.pelias_client import PeliasClient, build_http_client


TEST_BASE_URL = "https://pelias.test/v1"
TEST_API_KEY = "test-key"


def make_feature(lon: float, lat: float, **properties) -> dict:
    """Pelias-style GeoJSON feature; geometry is [lon, lat] as Pelias returns it."""
    return {
        "type": "Feature",
        "geometry": {"type": "Point", "coordinates": [lon, lat]},
        "properties": properties,
    }


def make_collection(*features: dict) -> dict:
    return {"type": "FeatureCollection", "features": list(features)}


def ok_result(*features: dict) -> ClientResult:
    """Successful client result wrapping the given raw features."""
    return ClientResult.success(PeliasFeatureCollection.model_validate(make_collection(*features)))


@pytest.fixture
def pelias_config():
    return PeliasConfig(base_url=TEST_BASE_URL, api_key=TEST_API_KEY, timeout_seconds=5)


@pytest.fixture(scope="function")
def mock_pelias():
    """PeliasClient stand-in whose operations are AsyncMocks returning empty collections."""
    mock = MagicMock(spec=PeliasClient)
    mock.geocode = AsyncMock(return_value=ok_result())
    mock.reverse_geocode = AsyncMock(return_value=ok_result())
    mock.search = AsyncMock(return_value=ok_result())
    mock.autocomplete = AsyncMock(return_value=ok_result())
    return mock


@pytest.fixture(scope="function")
def client(mock_pelias):
    """Create a test client with the Pelias client dependency overridden."""
    app.dependency_overrides[get_pelias_client] = lambda: mock_pelias
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def recorded_requests():
    return []


@pytest.fixture(scope="function")
def transport_client(pelias_config, recorded_requests):
    """
    Test client backed by a real PeliasClient over a mock transport.

    Every outbound request is appended to recorded_requests and answered with
    an empty feature collection.
    """
    def handler(request: httpx.Request) -> httpx.Response:
        recorded_requests.append(request)
        return httpx.Response(200, json=make_collection())

    pelias = PeliasClient(
        pelias_config,
        http_client=build_http_client(pelias_config, transport=httpx.MockTransport(handler)),
    )
    app.dependency_overrides[get_pelias_client] = lambda: pelias
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()
