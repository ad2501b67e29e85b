import httpx
import pytest
from fastapi.testclient import TestClient
from backend.app.core.config import Settings
from backend.app.main import create_app

ACCOUNT = "acc-123"
TOKEN = "secret-token"


class FakeStream:
    """Stands in for the Stream API; records every outbound request."""

    def __init__(self):
        self.requests = []
        self.responses = []

    def reply(self, status_code=200, **kwargs):
        self.responses.append(httpx.Response(status_code, **kwargs))

    def fail(self, exc):
        self.responses.append(exc)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.responses:
            raise AssertionError(f"unexpected upstream call: {request.method} {request.url}")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    @property
    def transport(self):
        return httpx.MockTransport(self.handler)


def make_settings(**overrides):
    values = {"CLOUDFLARE_ACCOUNT_ID": ACCOUNT, "CLOUDFLARE_API_TOKEN": TOKEN}
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def upstream():
    return FakeStream()


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def app(settings, upstream):
    return create_app(settings, transport=upstream.transport)


@pytest.fixture
def client(app):
    return TestClient(app, raise_server_exceptions=False)
