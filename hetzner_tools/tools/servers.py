"""
Server tools.

Lifecycle operations on Hetzner Cloud servers. Mutating calls return the
provider's action receipt as-is; actions are never polled to completion.

Tools:
- hetzner_list_servers / hetzner_get_server
- hetzner_create_server / hetzner_delete_server
- hetzner_power_on_server / hetzner_power_off_server / hetzner_reboot_server
"""

from typing import Any, ClassVar

from pydantic import Field, StrictInt

from ..connectors import HTTPMethod
from ..formatters import ResponseFormat
from ..models import (
    ActionResponse,
    CreateServerResponse,
    GetServerResponse,
    ListServersResponse,
    SSHKeyRef,
    ssh_key_ref,
)
from .base import FORMAT_DESCRIPTION, Tool, ToolContext

__all__ = [
    "SERVER_TOOLS",
    "CreateServer",
    "DeleteServer",
    "GetServer",
    "ListServers",
    "PowerOffServer",
    "PowerOnServer",
    "RebootServer",
]

SERVER_NAME_PATTERN = r"^[a-zA-Z0-9-]+$"


class ListServers(Tool):
    """List all servers in the project.

    Returns all servers with their:
    - Name and ID
    - Status (running, off, etc.)
    - IP addresses
    - Server type (CPU, RAM, disk)
    - Location
    - Image/OS
    """

    label_selector: str | None = Field(None, description="Filter by label (e.g., 'env=production')")
    response_format: ResponseFormat = Field(ResponseFormat.MARKDOWN, description=FORMAT_DESCRIPTION)

    class Meta:
        name = "hetzner_list_servers"
        title = "List Servers"
        read_only = True
        idempotent = True

    async def execute(self, ctx: ToolContext) -> str:
        params = {}
        if self.label_selector:
            params["label_selector"] = self.label_selector

        data = await ctx.client.request("/servers", params=params)
        servers = ListServersResponse.model_validate(data).servers
        return ctx.formatted(servers, self.response_format.value, "servers")


class GetServer(Tool):
    """Get detailed information about a specific server."""

    id: int = Field(..., gt=0, description="The server ID")
    response_format: ResponseFormat = Field(ResponseFormat.MARKDOWN, description=FORMAT_DESCRIPTION)

    class Meta:
        name = "hetzner_get_server"
        title = "Get Server"
        read_only = True
        idempotent = True

    async def execute(self, ctx: ToolContext) -> str:
        data = await ctx.client.request(f"/servers/{self.id}")
        server = GetServerResponse.model_validate(data).server
        return ctx.formatted(server, self.response_format.value, "server")


class CreateServer(Tool):
    """Create a new server.

    Required parameters:
    - name: Server name (letters, digits, hyphens)
    - server_type: Instance size (e.g., "cx22", "cpx11"). Use hetzner_list_server_types to see options.
    - image: OS image (e.g., "ubuntu-24.04"). Use hetzner_list_images to see options.

    Optional parameters:
    - location: Datacenter (e.g., "fsn1", "nbg1"). Use hetzner_list_locations to see options.
    - ssh_keys: List of SSH key names or IDs for server access
    - labels: Key-value labels for organization

    Returns the new server details including IP address and root password
    (if no SSH keys specified).
    """

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        pattern=SERVER_NAME_PATTERN,
        description="Server name (letters, digits, and hyphens only)",
    )
    server_type: str = Field(..., min_length=1, description="Server type (e.g., 'cx22', 'cpx11')")
    image: str = Field(..., min_length=1, description="OS image name (e.g., 'ubuntu-24.04')")
    location: str | None = Field(None, description="Datacenter location (e.g., 'fsn1', 'nbg1')")
    ssh_keys: list[StrictInt | str] | None = Field(None, description="SSH key names or IDs for access")
    labels: dict[str, str] | None = Field(None, description="Labels as key-value pairs")
    start_after_create: bool = Field(True, description="Start server after creation")
    response_format: ResponseFormat = Field(ResponseFormat.MARKDOWN, description=FORMAT_DESCRIPTION)

    class Meta:
        name = "hetzner_create_server"
        title = "Create Server"

    def ssh_key_refs(self) -> list[SSHKeyRef]:
        return [ssh_key_ref(value) for value in self.ssh_keys or []]

    def request_body(self) -> dict[str, Any]:
        """API request body; absent optionals are omitted."""
        body: dict[str, Any] = {
            "name": self.name,
            "server_type": self.server_type,
            "image": self.image,
            "start_after_create": self.start_after_create,
        }
        if self.location:
            body["location"] = self.location
        refs = self.ssh_key_refs()
        if refs:
            body["ssh_keys"] = [ref.wire() for ref in refs]
        if self.labels:
            body["labels"] = self.labels
        return body

    async def execute(self, ctx: ToolContext) -> str:
        data = await ctx.client.request("/servers", "POST", json=self.request_body())
        created = CreateServerResponse.model_validate(data)
        return ctx.formatted(created, self.response_format.value, "server_created")


class _ServerAction(Tool):
    """Shared shape of the id-in, action-status-out server operations."""

    id: int = Field(..., gt=0, description="The server ID")

    # Endpoint suffix after /servers/{id}, and the phrase used in the reply
    http_method: ClassVar[HTTPMethod] = "POST"
    action_path: ClassVar[str] = ""
    progress_phrase: ClassVar[str] = ""

    async def execute(self, ctx: ToolContext) -> str:
        data = await ctx.client.request(f"/servers/{self.id}{self.action_path}", self.http_method)
        action = ActionResponse.model_validate(data).action
        return f"Server {self.id} {self.progress_phrase}. Action status: {action.status}"


class DeleteServer(_ServerAction):
    """Delete a server permanently.

    ⚠️ This action is irreversible. All data on the server will be lost.
    """

    http_method: ClassVar[HTTPMethod] = "DELETE"
    progress_phrase: ClassVar[str] = "is being deleted"

    class Meta:
        name = "hetzner_delete_server"
        title = "Delete Server"
        destructive = True
        idempotent = True


class PowerOnServer(_ServerAction):
    """Power on a server that is currently off."""

    action_path: ClassVar[str] = "/actions/poweron"
    progress_phrase: ClassVar[str] = "is powering on"

    class Meta:
        name = "hetzner_power_on_server"
        title = "Power On Server"
        idempotent = True


class PowerOffServer(_ServerAction):
    """Power off a server (hard shutdown).

    This is like pulling the power cord. For a graceful shutdown, SSH into
    the server and run 'shutdown'.
    """

    action_path: ClassVar[str] = "/actions/poweroff"
    progress_phrase: ClassVar[str] = "is powering off"

    class Meta:
        name = "hetzner_power_off_server"
        title = "Power Off Server"
        destructive = True
        idempotent = True


class RebootServer(_ServerAction):
    """Reboot a server (hard reset).

    This is like pressing the reset button. For a graceful reboot, SSH into
    the server and run 'reboot'.
    """

    action_path: ClassVar[str] = "/actions/reboot"
    progress_phrase: ClassVar[str] = "is rebooting"

    class Meta:
        name = "hetzner_reboot_server"
        title = "Reboot Server"
        destructive = True
        idempotent = True


SERVER_TOOLS: list[type[Tool]] = [
    ListServers,
    GetServer,
    CreateServer,
    DeleteServer,
    PowerOnServer,
    PowerOffServer,
    RebootServer,
]
