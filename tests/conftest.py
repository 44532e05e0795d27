import httpx
import pytest

from fastapi import FastAPI
from fastapi.testclient import TestClient

from fetchgate import FetchGate
from fetchgate.config import ConfigManager
from fetchgate.variants import default_variants


class UpstreamRecorder:
    """Stands in for the upstream origin and remembers what it was asked for."""

    def __init__(self, handler):
        self.handler = handler
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)


@pytest.fixture
def make_client():
    def factory(handler, **kwargs):
        upstream = UpstreamRecorder(handler)
        fetchgate = FetchGate(transport=httpx.MockTransport(upstream), **kwargs)
        app = FastAPI()
        fetchgate.to_fastapi(app)
        return TestClient(app), upstream

    return factory


@pytest.fixture
def variants():
    return default_variants(ConfigManager())


@pytest.fixture
def anyio_backend():
    return 'asyncio'
