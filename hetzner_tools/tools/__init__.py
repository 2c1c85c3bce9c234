"""
Tools - Hetzner Cloud operations as schema-validated agent tools.

1. Each operation is a Pydantic model (its input schema) with execute()
2. Tools are registered by name in a ToolRegistry bound to one connector
3. Harnesses (MCP, HTTP, CLI) dispatch through ToolRegistry.call()

Example:
    from hetzner_tools.connectors import HetznerConnector
    from hetzner_tools.tools import create_registry

    registry = create_registry(HetznerConnector())
    result = await registry.call("hetzner_list_servers", {"response_format": "json"})
"""

from typing import Any

from .base import Tool, ToolContext, ToolMeta, ToolResult
from .reference import REFERENCE_TOOLS, ListImages, ListLocations, ListServerTypes
from .registry import ToolRegistry
from .servers import (
    SERVER_TOOLS,
    CreateServer,
    DeleteServer,
    GetServer,
    ListServers,
    PowerOffServer,
    PowerOnServer,
    RebootServer,
)
from .ssh_keys import SSH_KEY_TOOLS, CreateSSHKey, DeleteSSHKey, GetSSHKey, ListSSHKeys

__all__ = [
    # Base classes
    "Tool",
    "ToolContext",
    "ToolMeta",
    "ToolResult",
    # Registration
    "ALL_TOOLS",
    "ToolRegistry",
    "create_registry",
    # Tools
    "CreateSSHKey",
    "CreateServer",
    "DeleteSSHKey",
    "DeleteServer",
    "GetSSHKey",
    "GetServer",
    "ListImages",
    "ListLocations",
    "ListSSHKeys",
    "ListServerTypes",
    "ListServers",
    "PowerOffServer",
    "PowerOnServer",
    "RebootServer",
]

ALL_TOOLS: list[type[Tool]] = [*REFERENCE_TOOLS, *SSH_KEY_TOOLS, *SERVER_TOOLS]


def create_registry(client: Any) -> ToolRegistry:
    """Registry with every Hetzner tool bound to the given connector."""
    registry = ToolRegistry(client)
    registry.register_all(ALL_TOOLS)
    return registry
