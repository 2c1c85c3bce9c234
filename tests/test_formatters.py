"""Tests for output formatting."""

import json

import pytest
from conftest import ACTION, IMAGE, LOCATION, SERVER, SERVER_TYPE, SSH_KEY, make

from hetzner_tools.formatters import (
    FormatterRegistry,
    ResponseFormat,
    format_action,
    format_created,
    format_entities,
    format_images,
    format_labels,
    format_server,
    format_server_type,
    register_builtin_formatters,
    render_json,
)
from hetzner_tools.models import (
    Action,
    CreateServerResponse,
    Image,
    Location,
    Server,
    ServerType,
    SSHKey,
)


class TestServerBlock:
    """Tests for format_server."""

    def test_fields_in_order(self):
        server = Server.model_validate(SERVER)
        lines = format_server(server).split("\n")

        assert lines[0] == "## my-app (ID: 42)"
        assert lines[1] == "- **Status**: running"
        assert lines[2] == "- **IPv4**: 203.0.113.10"
        assert lines[3] == "- **IPv6**: 2001:db8::/64"
        assert lines[4] == "- **Type**: cx22 (2 cores, 4GB RAM, 40GB disk)"
        assert lines[5] == "- **Location**: Falkenstein, DE (fsn1-dc14)"
        assert lines[6] == "- **Image**: ubuntu-24.04 (ubuntu 24.04)"
        assert lines[7] == f"- **Created**: {format_created(server.created)}"
        assert len(lines) == 8

    def test_no_labels_line_when_empty(self):
        text = format_server(Server.model_validate(SERVER))
        assert "Labels" not in text

    def test_labels_line(self):
        server = Server.model_validate(make(SERVER, labels={"env": "prod"}))
        assert format_server(server).split("\n")[-1] == "- **Labels**: env=prod"

    def test_missing_addresses(self):
        server = Server.model_validate(make(SERVER, public_net={"ipv4": None, "ipv6": None}))
        text = format_server(server)
        assert "- **IPv4**: N/A" in text
        assert "- **IPv6**: N/A" in text

    def test_fractional_memory(self):
        data = make(SERVER)
        data["server_type"]["memory"] = 0.5
        text = format_server(Server.model_validate(data))
        assert "0.5GB RAM" in text

    def test_image_without_name_or_version(self):
        data = make(SERVER, image={"id": 9, "name": None, "description": None, "os_flavor": "debian", "os_version": None})
        text = format_server(Server.model_validate(data))
        assert "- **Image**: N/A (debian)" in text

    def test_no_image(self):
        server = Server.model_validate(make(SERVER, image=None))
        assert "Image" not in format_server(server)


class TestPrimitives:
    """Tests for small formatting helpers."""

    def test_format_labels(self):
        assert format_labels({"env": "prod", "team": "web"}) == "env=prod, team=web"
        assert format_labels({}) == ""

    def test_render_json_keeps_unknown_fields(self):
        server = Server.model_validate(SERVER)
        data = json.loads(render_json([server]))
        assert data[0]["name"] == "my-app"
        assert data[0]["rescue_enabled"] is False

    def test_render_json_plain_data(self):
        assert json.loads(render_json({"a": [1, 2]})) == {"a": [1, 2]}

    def test_server_type_price(self):
        text = format_server_type(ServerType.model_validate(SERVER_TYPE))
        assert "- **CPU**: 2 cores (shared)" in text
        assert "- **Price**: €4.51/month (€0.0071/hour)" in text

    def test_server_type_without_prices(self):
        text = format_server_type(ServerType.model_validate(make(SERVER_TYPE, prices=[])))
        assert "Price" not in text

    def test_action(self):
        action = Action.model_validate(ACTION)
        assert format_action(action) == (
            "- **Action**: create_server (ID: 7)\n"
            "- **Action Status**: running (0%)"
        )

    def test_action_error(self):
        action = Action.model_validate(
            make(ACTION, status="error", error={"code": "action_failed", "message": "boom"})
        )
        assert format_action(action).endswith("- **Error**: boom (action_failed)")


class TestImages:
    """Tests for image grouping."""

    def test_grouped_by_flavor(self):
        images = [
            Image.model_validate(IMAGE),
            Image.model_validate(make(IMAGE, id=2, name="debian-12", description="Debian 12", os_flavor="debian")),
            Image.model_validate(make(IMAGE, id=3, name="ubuntu-22.04", description="Ubuntu 22.04", architecture="arm")),
        ]

        text = format_images(images)

        assert text == (
            "## Ubuntu\n"
            "- **ubuntu-24.04** - Ubuntu 24.04 (x86)\n"
            "- **ubuntu-22.04** - Ubuntu 22.04 (arm)\n"
            "\n"
            "## Debian\n"
            "- **debian-12** - Debian 12 (x86)"
        )

    def test_null_name_and_description(self):
        snapshot = make(IMAGE, id=9, name=None, description=None, type="snapshot")
        text = format_images([Image.model_validate(snapshot)])
        assert text == "## Ubuntu\n- **N/A** - N/A (x86)"

    def test_missing_flavor_grouped_as_other(self):
        text = format_images([Image.model_validate(make(IMAGE, os_flavor=None))])
        assert text.startswith("## Other")


class TestDocuments:
    """Tests for full markdown documents."""

    def test_servers(self):
        text = format_entities([Server.model_validate(SERVER)], "markdown", "servers")
        assert text.startswith("# Servers\n\nFound 1 server(s):\n\n## my-app (ID: 42)")

    def test_no_servers(self):
        text = format_entities([], "markdown", "servers")
        assert text == "No servers found. Use `hetzner_create_server` to create one."

    def test_no_ssh_keys(self):
        text = format_entities([], "markdown", "ssh_keys")
        assert text == "No SSH keys found. Use `hetzner_create_ssh_key` to add one."

    def test_no_images(self):
        text = format_entities([], "markdown", "images")
        assert text == "# Available Images\n\nNo available images found."

    def test_ssh_key_details(self):
        text = format_entities(SSHKey.model_validate(SSH_KEY), "markdown", "ssh_key")
        assert text.startswith("# SSH Key Details\n\n## laptop (ID: 5)")
        assert text.endswith("**Public Key**:\n```\nssh-ed25519 AAAAC3NzaC1lZDI1NTE5AAAAIGq9 user@laptop\n```")

    def test_locations(self):
        text = format_entities([Location.model_validate(LOCATION)], "markdown", "locations")
        assert text == (
            "# Available Locations\n"
            "\n"
            "## fsn1\n"
            "- **City**: Falkenstein, DE\n"
            "- **Description**: Falkenstein DC Park 1\n"
            "- **Network Zone**: eu-central"
        )

    def test_server_created_json_includes_action(self):
        created = CreateServerResponse.model_validate(
            {"server": SERVER, "action": ACTION, "root_password": "s3cret"}
        )
        data = json.loads(format_entities(created, "json", "server_created"))
        assert data["root_password"] == "s3cret"
        assert data["action"]["command"] == "create_server"
        assert data["server"]["id"] == 42


class TestFormatterRegistry:
    """Tests for FormatterRegistry."""

    def test_json_is_generic(self):
        registry = FormatterRegistry()
        assert registry.format({"a": 1}, "json", "anything") == '{\n  "a": 1\n}'

    def test_markdown_needs_registration(self):
        registry = FormatterRegistry()
        with pytest.raises(ValueError, match="No markdown formatter"):
            registry.format([], "markdown", "servers")

    def test_unknown_format(self):
        with pytest.raises(ValueError):
            format_entities([], "xml", "servers")

    def test_register(self):
        registry = FormatterRegistry()
        registry.register("thing", ResponseFormat.MARKDOWN.value, lambda data: "a thing")
        assert registry.format(None, "markdown", "thing") == "a thing"
        assert registry.get("other", "markdown") is None

    @pytest.mark.parametrize(
        "entity",
        [
            "images",
            "locations",
            "server",
            "server_created",
            "server_types",
            "servers",
            "ssh_key",
            "ssh_key_created",
            "ssh_keys",
        ],
    )
    def test_builtin_markdown_renderers(self, entity):
        registry = FormatterRegistry()
        register_builtin_formatters(registry)
        assert registry.get(entity, "markdown") is not None
