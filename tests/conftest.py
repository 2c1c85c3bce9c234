"""Shared test fixtures."""

import copy
import json
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from hetzner_tools.config import HetznerConfig
from hetzner_tools.connectors import HetznerConnector
from hetzner_tools.logging import reset_logging
from hetzner_tools.tools import create_registry

SERVER = {
    "id": 42,
    "name": "my-app",
    "status": "running",
    "public_net": {
        "ipv4": {"ip": "203.0.113.10", "blocked": False},
        "ipv6": {"ip": "2001:db8::/64", "blocked": False},
    },
    "server_type": {
        "id": 1,
        "name": "cx22",
        "description": "CX22",
        "cores": 2,
        "memory": 4.0,
        "disk": 40,
    },
    "datacenter": {
        "id": 4,
        "name": "fsn1-dc14",
        "description": "Falkenstein 1 virtual DC 14",
        "location": {
            "id": 1,
            "name": "fsn1",
            "city": "Falkenstein",
            "country": "DE",
        },
    },
    "image": {
        "id": 161547269,
        "name": "ubuntu-24.04",
        "description": "Ubuntu 24.04",
        "os_flavor": "ubuntu",
        "os_version": "24.04",
    },
    "labels": {},
    "created": "2024-01-15T10:30:00+00:00",
    "rescue_enabled": False,
}

ACTION = {
    "id": 7,
    "command": "create_server",
    "status": "running",
    "progress": 0,
    "started": "2024-01-15T10:30:00+00:00",
    "finished": None,
    "error": None,
}

SSH_KEY = {
    "id": 5,
    "name": "laptop",
    "fingerprint": "b7:2f:30:a0:2f:6c:58:6c:21:04:58:61:ba:06:3b:2f",
    "public_key": "ssh-ed25519 AAAAC3NzaC1lZDI1NTE5AAAAIGq9 user@laptop",
    "labels": {},
    "created": "2024-01-10T08:00:00+00:00",
}

SERVER_TYPE = {
    "id": 1,
    "name": "cx22",
    "description": "CX22",
    "cores": 2,
    "memory": 4.0,
    "disk": 40,
    "prices": [
        {
            "location": "fsn1",
            "price_hourly": {"net": "0.0060", "gross": "0.0071"},
            "price_monthly": {"net": "3.79", "gross": "4.51"},
        }
    ],
    "storage_type": "local",
    "cpu_type": "shared",
    "architecture": "x86",
}

IMAGE = {
    "id": 161547269,
    "name": "ubuntu-24.04",
    "description": "Ubuntu 24.04",
    "os_flavor": "ubuntu",
    "os_version": "24.04",
    "type": "system",
    "status": "available",
    "architecture": "x86",
}

LOCATION = {
    "id": 1,
    "name": "fsn1",
    "description": "Falkenstein DC Park 1",
    "country": "DE",
    "city": "Falkenstein",
    "latitude": 50.47612,
    "longitude": 12.370071,
    "network_zone": "eu-central",
}


def make(sample: dict[str, Any], **overrides: Any) -> dict[str, Any]:
    """Deep copy of a sample payload with top-level overrides."""
    data = copy.deepcopy(sample)
    data.update(overrides)
    return data


class FakeHetznerAPI:
    """Request handler for httpx.MockTransport.

    Routes are keyed by (method, path) with the /v1 prefix stripped. Each
    route is either a (status, body) pair or a callable taking the request.
    Unrouted requests get a Hetzner-style 404.
    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Any] = {}
        self.requests: list[httpx.Request] = []

    def add(self, method: str, path: str, status: int = 200, json: Any = None) -> None:
        self.routes[(method, path)] = (status, json)

    def add_handler(self, method: str, path: str, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.routes[(method, path)] = handler

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/v1")
        route = self.routes.get((request.method, path))

        if route is None:
            return httpx.Response(
                404,
                json={"error": {"code": "not_found", "message": f"{path} not found"}},
            )
        if callable(route):
            return route(request)

        status, body = route
        if body is None:
            return httpx.Response(status)
        return httpx.Response(status, json=body)

    def body(self, index: int = -1) -> Any:
        """Decoded JSON body of a recorded request."""
        return json.loads(self.requests[index].content)


@pytest.fixture(autouse=True)
def default_logging():
    """Undo any structlog configuration a test performed."""
    reset_logging()
    yield
    reset_logging()


@pytest.fixture
def api():
    return FakeHetznerAPI()


@pytest.fixture
def config():
    return HetznerConfig(api_token="test-token")


@pytest.fixture
def connector(api, config):
    return HetznerConnector(config, transport=httpx.MockTransport(api))


@pytest.fixture
def registry(connector):
    return create_registry(connector)


@pytest.fixture
def no_token(monkeypatch):
    """Process environment without an API token."""
    monkeypatch.delenv("HETZNER_API_TOKEN", raising=False)
