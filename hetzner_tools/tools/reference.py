"""
Reference data tools.

Read-only catalog lookups used to pick parameters for hetzner_create_server.
"""

from typing import Literal

from pydantic import Field

from ..formatters import ResponseFormat
from ..models import ListImagesResponse, ListLocationsResponse, ListServerTypesResponse
from .base import FORMAT_DESCRIPTION, Tool, ToolContext

__all__ = [
    "REFERENCE_TOOLS",
    "ListImages",
    "ListLocations",
    "ListServerTypes",
]

DEFAULT_IMAGE_TYPE = "system"


class ListServerTypes(Tool):
    """List all available server types (instance sizes) with their specs and pricing.

    Returns information about available server configurations including:
    - Name (e.g., "cx22", "cpx11")
    - CPU cores and type
    - Memory (GB)
    - Disk size (GB)
    - Hourly and monthly pricing

    Use this to find the right server type when creating a new server.
    """

    response_format: ResponseFormat = Field(ResponseFormat.MARKDOWN, description=FORMAT_DESCRIPTION)

    class Meta:
        name = "hetzner_list_server_types"
        title = "List Server Types"
        read_only = True
        idempotent = True

    async def execute(self, ctx: ToolContext) -> str:
        data = await ctx.client.request("/server_types")
        server_types = ListServerTypesResponse.model_validate(data).server_types
        return ctx.formatted(server_types, self.response_format.value, "server_types")


class ListImages(Tool):
    """List available OS images for creating servers.

    Returns system images (operating systems) like Ubuntu, Debian, CentOS, etc.
    Each image includes:
    - Name (e.g., "ubuntu-24.04")
    - OS flavor and version
    - Architecture (x86 or arm)

    Use this to find the right image when creating a new server.
    """

    type: Literal["system", "snapshot", "backup", "app"] | None = Field(
        None,
        description="Filter by image type. Defaults to 'system' (OS images)",
    )
    response_format: ResponseFormat = Field(ResponseFormat.MARKDOWN, description=FORMAT_DESCRIPTION)

    class Meta:
        name = "hetzner_list_images"
        title = "List Images"
        read_only = True
        idempotent = True

    async def execute(self, ctx: ToolContext) -> str:
        image_type = self.type or DEFAULT_IMAGE_TYPE

        data = await ctx.client.request("/images", params={"type": image_type})
        images = [
            image
            for image in ListImagesResponse.model_validate(data).images
            if image.type == image_type and image.status == "available"
        ]
        return ctx.formatted(images, self.response_format.value, "images")


class ListLocations(Tool):
    """List available datacenter locations.

    Returns all Hetzner datacenter locations where you can create servers:
    - Location code (e.g., "fsn1", "nbg1", "hel1")
    - City and country
    - Network zone

    Use this to choose where to deploy your server.
    """

    response_format: ResponseFormat = Field(ResponseFormat.MARKDOWN, description=FORMAT_DESCRIPTION)

    class Meta:
        name = "hetzner_list_locations"
        title = "List Locations"
        read_only = True
        idempotent = True

    async def execute(self, ctx: ToolContext) -> str:
        data = await ctx.client.request("/locations")
        locations = ListLocationsResponse.model_validate(data).locations
        return ctx.formatted(locations, self.response_format.value, "locations")


REFERENCE_TOOLS: list[type[Tool]] = [
    ListServerTypes,
    ListImages,
    ListLocations,
]
