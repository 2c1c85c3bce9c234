"""
Formatters - Turn Hetzner entities into tool output text.

Two output formats are supported:
- markdown: narrative blocks, one per entity, fixed field order
- json: structured dump of the entity set (for parsing)

All functions here are pure: no I/O and no mutation of their input.

Example:
    from hetzner_tools.formatters import format_entities

    text = format_entities(servers, "markdown", "servers")
"""

import json
from collections.abc import Callable, Mapping
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel

from .models import (
    Action,
    CreateServerResponse,
    Image,
    Location,
    Server,
    ServerType,
    SSHKey,
)

__all__ = [
    "FormatterRegistry",
    "ResponseFormat",
    "format_action",
    "format_created",
    "format_entities",
    "format_images",
    "format_labels",
    "format_location",
    "format_server",
    "format_server_type",
    "format_ssh_key",
    "formatter_registry",
    "register_builtin_formatters",
    "render_json",
]

Renderer = Callable[[Any], str]

# Placeholder for optional fields the API left null
NOT_AVAILABLE = "N/A"


class ResponseFormat(str, Enum):
    MARKDOWN = "markdown"
    JSON = "json"


# --- Primitives ---


def _jsonable(data: Any) -> Any:
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json")
    if isinstance(data, Mapping):
        return {key: _jsonable(value) for key, value in data.items()}
    if isinstance(data, (list, tuple)):
        return [_jsonable(item) for item in data]
    return data


def render_json(data: Any) -> str:
    """Pretty-printed JSON of models, lists and dicts of models."""
    return json.dumps(_jsonable(data), indent=2, ensure_ascii=False, default=str)


def format_created(value: datetime) -> str:
    """Creation timestamp in the local timezone and locale format."""
    return value.astimezone().strftime("%c")


def format_labels(labels: Mapping[str, str]) -> str:
    """Labels as ``key=value`` pairs, comma separated."""
    return ", ".join(f"{key}={value}" for key, value in labels.items())


def _number(value: float) -> str:
    return f"{value:g}"


# --- Entity blocks ---


def format_server(server: Server) -> str:
    ipv4 = server.public_net.ipv4.ip if server.public_net.ipv4 else NOT_AVAILABLE
    ipv6 = server.public_net.ipv6.ip if server.public_net.ipv6 else NOT_AVAILABLE
    server_type = server.server_type
    datacenter = server.datacenter

    lines = [
        f"## {server.name} (ID: {server.id})",
        f"- **Status**: {server.status.value}",
        f"- **IPv4**: {ipv4}",
        f"- **IPv6**: {ipv6}",
        f"- **Type**: {server_type.name} ({server_type.cores} cores, "
        f"{_number(server_type.memory)}GB RAM, {server_type.disk}GB disk)",
        f"- **Location**: {datacenter.location.city}, {datacenter.location.country} "
        f"({datacenter.name})",
    ]

    if server.image:
        image = server.image
        release = " ".join(part for part in (image.os_flavor, image.os_version) if part)
        lines.append(f"- **Image**: {image.name or NOT_AVAILABLE} ({release})")

    lines.append(f"- **Created**: {format_created(server.created)}")

    if server.labels:
        lines.append(f"- **Labels**: {format_labels(server.labels)}")

    return "\n".join(lines)


def format_ssh_key(key: SSHKey) -> str:
    lines = [
        f"## {key.name} (ID: {key.id})",
        f"- **Fingerprint**: {key.fingerprint}",
        f"- **Created**: {format_created(key.created)}",
    ]
    if key.labels:
        lines.append(f"- **Labels**: {format_labels(key.labels)}")
    return "\n".join(lines)


def format_server_type(server_type: ServerType) -> str:
    lines = [
        f"## {server_type.name}",
        f"- **Description**: {server_type.description}",
        f"- **CPU**: {server_type.cores} cores ({server_type.cpu_type})",
        f"- **Memory**: {_number(server_type.memory)} GB",
        f"- **Disk**: {server_type.disk} GB",
        f"- **Architecture**: {server_type.architecture}",
    ]
    if server_type.prices:
        price = server_type.prices[0]
        lines.append(
            f"- **Price**: €{price.price_monthly.gross}/month "
            f"(€{price.price_hourly.gross}/hour)"
        )
    return "\n".join(lines)


def format_location(location: Location) -> str:
    return "\n".join([
        f"## {location.name}",
        f"- **City**: {location.city}, {location.country}",
        f"- **Description**: {location.description}",
        f"- **Network Zone**: {location.network_zone}",
    ])


def format_images(images: list[Image]) -> str:
    """Images grouped by OS flavor, in first-seen order."""
    by_flavor: dict[str, list[Image]] = {}
    for image in images:
        by_flavor.setdefault(image.os_flavor or "other", []).append(image)

    blocks = []
    for flavor, group in by_flavor.items():
        lines = [f"## {flavor[:1].upper()}{flavor[1:]}"]
        for image in group:
            name = image.name or NOT_AVAILABLE
            description = image.description or NOT_AVAILABLE
            lines.append(f"- **{name}** - {description} ({image.architecture})")
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks)


def format_action(action: Action) -> str:
    lines = [
        f"- **Action**: {action.command} (ID: {action.id})",
        f"- **Action Status**: {action.status} ({action.progress}%)",
    ]
    if action.error:
        lines.append(f"- **Error**: {action.error.message} ({action.error.code})")
    return "\n".join(lines)


# --- Documents ---


def _document(title: str, blocks: list[str], preamble: str | None = None) -> str:
    lines = [f"# {title}", ""]
    if preamble:
        lines.extend([preamble, ""])
    for block in blocks:
        lines.extend([block, ""])
    return "\n".join(lines).rstrip("\n")


def _servers_markdown(servers: list[Server]) -> str:
    if not servers:
        return "No servers found. Use `hetzner_create_server` to create one."
    return _document(
        "Servers",
        [format_server(server) for server in servers],
        f"Found {len(servers)} server(s):",
    )


def _server_markdown(server: Server) -> str:
    return _document("Server Details", [format_server(server)])


def _server_created_markdown(created: CreateServerResponse) -> str:
    lines = ["# Server Created", "", format_server(created.server), ""]

    if created.root_password:
        lines.append(f"**Root Password**: `{created.root_password}`")
        lines.append("")
        lines.append("⚠️ Save this password! It will not be shown again.")
    else:
        lines.append("SSH key authentication is configured. No root password was generated.")

    lines.append("")
    lines.append(format_action(created.action))
    lines.append("")
    lines.append("The server is being provisioned. Use `hetzner_get_server` to check its status.")
    return "\n".join(lines)


def _ssh_keys_markdown(keys: list[SSHKey]) -> str:
    if not keys:
        return "No SSH keys found. Use `hetzner_create_ssh_key` to add one."
    return _document(
        "SSH Keys",
        [format_ssh_key(key) for key in keys],
        f"Found {len(keys)} SSH key(s):",
    )


def _ssh_key_markdown(key: SSHKey) -> str:
    lines = [
        "# SSH Key Details",
        "",
        format_ssh_key(key),
        "",
        "**Public Key**:",
        "```",
        key.public_key,
        "```",
    ]
    return "\n".join(lines)


def _ssh_key_created_markdown(key: SSHKey) -> str:
    return "\n".join([
        "# SSH Key Created",
        "",
        format_ssh_key(key),
        "",
        "You can now use this SSH key when creating servers by specifying its name or ID.",
    ])


def _server_types_markdown(server_types: list[ServerType]) -> str:
    return _document("Available Server Types", [format_server_type(st) for st in server_types])


def _images_markdown(images: list[Image]) -> str:
    if not images:
        return "# Available Images\n\nNo available images found."
    return _document("Available Images", [format_images(images)])


def _locations_markdown(locations: list[Location]) -> str:
    return _document("Available Locations", [format_location(loc) for loc in locations])


# --- Registry ---


class FormatterRegistry:
    """Registry of renderers keyed by (entity, format).

    JSON is handled generically for every entity; markdown renderers are
    registered per entity.

    Example:
        registry = FormatterRegistry()
        registry.register("server", "markdown", render_server)
        text = registry.format(server, "markdown", "server")
    """

    def __init__(self) -> None:
        self._renderers: dict[tuple[str, str], Renderer] = {}

    def register(self, entity: str, format_name: str, renderer: Renderer) -> None:
        self._renderers[(entity, format_name)] = renderer

    def get(self, entity: str, format_name: str) -> Renderer | None:
        renderer = self._renderers.get((entity, format_name))
        if renderer is None and format_name == ResponseFormat.JSON.value:
            return render_json
        return renderer

    def format(self, data: Any, format_name: str, entity: str) -> str:
        """Render data for an entity.

        Raises:
            ValueError: If no renderer matches
        """
        format_name = ResponseFormat(format_name).value
        renderer = self.get(entity, format_name)
        if renderer is None:
            raise ValueError(f"No {format_name} formatter registered for: {entity}")
        return renderer(data)


def register_builtin_formatters(registry: FormatterRegistry) -> None:
    """Register the markdown renderer of every entity."""
    markdown = ResponseFormat.MARKDOWN.value
    registry.register("servers", markdown, _servers_markdown)
    registry.register("server", markdown, _server_markdown)
    registry.register("server_created", markdown, _server_created_markdown)
    registry.register("ssh_keys", markdown, _ssh_keys_markdown)
    registry.register("ssh_key", markdown, _ssh_key_markdown)
    registry.register("ssh_key_created", markdown, _ssh_key_created_markdown)
    registry.register("server_types", markdown, _server_types_markdown)
    registry.register("images", markdown, _images_markdown)
    registry.register("locations", markdown, _locations_markdown)


# Global registry instance
formatter_registry = FormatterRegistry()
register_builtin_formatters(formatter_registry)


def format_entities(data: Any, format_name: str, entity: str) -> str:
    """Convenience function to format data using the global registry."""
    return formatter_registry.format(data, format_name, entity)
