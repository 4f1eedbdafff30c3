"""Shared fixtures: sample payloads and a fake upstream HTTP service."""
import json
from pathlib import Path

import httpx
import pytest

from zana.transport import create_http_client

FIXTURES_DIR = Path(__file__).parent / "fixtures"


class FakeUpstream:
    """Answers requests by URL path and records every request received."""

    def __init__(self):
        self.routes = {}
        self.requests = []

    def add(self, path, status=200, json_body=None, text=None, headers=None):
        self.routes[path] = (status, json_body, text, headers)

    def redirect(self, path, location, status=302):
        self.add(path, status=status, headers={"Location": location})

    def fail(self, path, error):
        self.routes[path] = error

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(request.url.path)
        if route is None:
            return httpx.Response(404, text="not found")
        if isinstance(route, Exception):
            raise route

        status, json_body, text, headers = route
        if json_body is not None:
            return httpx.Response(status, json=json_body, headers=headers)
        return httpx.Response(status, text=text or "", headers=headers)

    def client(self) -> httpx.AsyncClient:
        return create_http_client(transport=httpx.MockTransport(self.handler))

    def calls(self, path) -> int:
        return sum(1 for request in self.requests if request.url.path == path)


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture
def sample():
    """Load a JSON payload from tests/fixtures."""
    def load(name):
        with open(FIXTURES_DIR / name, encoding="utf-8") as f:
            return json.load(f)
    return load
