"""Tests for the HTTP bridge."""

import pytest
from conftest import SERVER
from fastapi.testclient import TestClient

from hetzner_tools.app import create_app
from hetzner_tools.config import HetznerConfig
from hetzner_tools.connectors import HetznerConnector
from hetzner_tools.tools import create_registry


@pytest.fixture
def client(config, registry):
    app = create_app(config, registry)
    with TestClient(app) as test_client:
        yield test_client


class TestRoutes:
    """Tests for the bridge routes."""

    def test_health(self, client, api):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["tools"] == 14
        assert data["connector"]["name"] == "hetzner"
        assert data["connector"]["token_configured"] is True
        assert api.requests == []

    def test_list_tools(self, client):
        response = client.get("/tools")

        assert response.status_code == 200
        tools = {tool["name"]: tool for tool in response.json()}
        assert len(tools) == 14
        assert tools["hetzner_reboot_server"]["annotations"]["destructiveHint"] is True
        assert tools["hetzner_create_server"]["input_schema"]["additionalProperties"] is False

    def test_call_tool(self, client, api):
        api.add("GET", "/servers", json={"servers": [SERVER]})

        response = client.post("/tools/hetzner_list_servers", json={})

        assert response.status_code == 200
        data = response.json()
        assert data["is_error"] is False
        assert data["text"].startswith("# Servers")

    def test_call_tool_without_body(self, client, api):
        api.add("GET", "/locations", json={"locations": []})

        response = client.post("/tools/hetzner_list_locations")

        assert response.status_code == 200
        assert response.json() == {"text": "# Available Locations", "is_error": False}

    def test_tool_error_is_reported_in_body(self, client, api):
        response = client.post("/tools/hetzner_create_server", json={"name": "my app", "server_type": "cx22", "image": "ubuntu-24.04"})

        assert response.status_code == 200
        data = response.json()
        assert data["is_error"] is True
        assert data["text"].startswith("Error: Invalid input.")
        assert api.requests == []

    def test_unknown_tool(self, client):
        response = client.post("/tools/hetzner_nope", json={})

        assert response.status_code == 404
        assert response.json()["detail"] == "Unknown tool: hetzner_nope"

    def test_missing_token(self, no_token):
        config = HetznerConfig()
        app = create_app(config, create_registry(HetznerConnector(config)))

        with TestClient(app) as test_client:
            response = test_client.post("/tools/hetzner_list_servers", json={})

        assert response.status_code == 503
        assert "HETZNER_API_TOKEN" in response.json()["detail"]

    def test_default_registry(self, no_token):
        app = create_app(HetznerConfig(api_token="abc"))
        assert len(app.state.registry) == 14
        assert app.state.registry.client.config.api_token == "abc"
