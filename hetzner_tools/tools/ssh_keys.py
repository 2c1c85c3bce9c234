"""
SSH key tools.

Tools:
- hetzner_list_ssh_keys / hetzner_get_ssh_key
- hetzner_create_ssh_key / hetzner_delete_ssh_key
"""

from pydantic import Field

from ..formatters import ResponseFormat
from ..models import ListSSHKeysResponse, SSHKeyResponse
from .base import FORMAT_DESCRIPTION, Tool, ToolContext

__all__ = [
    "SSH_KEY_TOOLS",
    "CreateSSHKey",
    "DeleteSSHKey",
    "GetSSHKey",
    "ListSSHKeys",
]


class ListSSHKeys(Tool):
    """List all SSH keys in the project.

    Returns all SSH public keys that have been added to this project.
    SSH keys are used to authenticate when connecting to servers.
    """

    response_format: ResponseFormat = Field(ResponseFormat.MARKDOWN, description=FORMAT_DESCRIPTION)

    class Meta:
        name = "hetzner_list_ssh_keys"
        title = "List SSH Keys"
        read_only = True
        idempotent = True

    async def execute(self, ctx: ToolContext) -> str:
        data = await ctx.client.request("/ssh_keys")
        keys = ListSSHKeysResponse.model_validate(data).ssh_keys
        return ctx.formatted(keys, self.response_format.value, "ssh_keys")


class GetSSHKey(Tool):
    """Get details of a specific SSH key by ID."""

    id: int = Field(..., gt=0, description="The SSH key ID")
    response_format: ResponseFormat = Field(ResponseFormat.MARKDOWN, description=FORMAT_DESCRIPTION)

    class Meta:
        name = "hetzner_get_ssh_key"
        title = "Get SSH Key"
        read_only = True
        idempotent = True

    async def execute(self, ctx: ToolContext) -> str:
        data = await ctx.client.request(f"/ssh_keys/{self.id}")
        key = SSHKeyResponse.model_validate(data).ssh_key
        return ctx.formatted(key, self.response_format.value, "ssh_key")


class CreateSSHKey(Tool):
    """Add a new SSH public key to the project.

    The SSH key can then be used when creating servers to enable SSH access.

    Args:
      - name: A name for the SSH key (e.g., "my-laptop")
      - public_key: The SSH public key content (starts with "ssh-rsa", "ssh-ed25519", etc.)
      - labels: Optional key-value labels for organization
    """

    name: str = Field(..., min_length=1, max_length=255, description="Name for the SSH key")
    public_key: str = Field(..., min_length=1, description="The SSH public key content")
    labels: dict[str, str] | None = Field(None, description="Optional labels as key-value pairs")
    response_format: ResponseFormat = Field(ResponseFormat.MARKDOWN, description=FORMAT_DESCRIPTION)

    class Meta:
        name = "hetzner_create_ssh_key"
        title = "Create SSH Key"

    async def execute(self, ctx: ToolContext) -> str:
        body = {"name": self.name, "public_key": self.public_key}
        if self.labels:
            body["labels"] = self.labels

        data = await ctx.client.request("/ssh_keys", "POST", json=body)
        key = SSHKeyResponse.model_validate(data).ssh_key
        return ctx.formatted(key, self.response_format.value, "ssh_key_created")


class DeleteSSHKey(Tool):
    """Delete an SSH key from the project.

    This does NOT affect existing servers that were created with this key.
    They will continue to work with the key.
    """

    id: int = Field(..., gt=0, description="The SSH key ID to delete")

    class Meta:
        name = "hetzner_delete_ssh_key"
        title = "Delete SSH Key"
        destructive = True
        idempotent = True

    async def execute(self, ctx: ToolContext) -> str:
        await ctx.client.request(f"/ssh_keys/{self.id}", "DELETE")
        return f"SSH key {self.id} has been deleted."


SSH_KEY_TOOLS: list[type[Tool]] = [
    ListSSHKeys,
    GetSSHKey,
    CreateSSHKey,
    DeleteSSHKey,
]
