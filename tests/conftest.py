import pytest

from rest_client.client import RestClient
from tests.fixtures.request_execution.transport import (
    FakeTransportEngine,
    json_transport_response,
)


@pytest.fixture
def fake_transport() -> FakeTransportEngine:
    return FakeTransportEngine(json_transport_response())


@pytest.fixture
def client(fake_transport: FakeTransportEngine) -> RestClient:
    return RestClient("http://example.com/", transport=fake_transport)
