"""
Hetzner Cloud API models.

Pass-through mirrors of the provider's JSON. Models allow extra fields so a
JSON dump returns everything the API sent, not just the fields named here.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "APIErrorBody",
    "Action",
    "ActionResponse",
    "CreateServerResponse",
    "Datacenter",
    "ErrorDetail",
    "GetServerResponse",
    "Image",
    "ImageSummary",
    "IPAddress",
    "ListImagesResponse",
    "ListLocationsResponse",
    "ListSSHKeysResponse",
    "ListServerTypesResponse",
    "ListServersResponse",
    "Location",
    "LocationSummary",
    "Price",
    "PricePerLocation",
    "PublicNet",
    "SSHKey",
    "SSHKeyById",
    "SSHKeyByName",
    "SSHKeyRef",
    "SSHKeyResponse",
    "Server",
    "ServerStatus",
    "ServerType",
    "ServerTypeSummary",
    "ssh_key_ref",
]


class HetznerModel(BaseModel):
    model_config = ConfigDict(extra="allow")


class ServerStatus(str, Enum):
    RUNNING = "running"
    INITIALIZING = "initializing"
    STARTING = "starting"
    STOPPING = "stopping"
    OFF = "off"
    DELETING = "deleting"
    REBUILDING = "rebuilding"
    MIGRATING = "migrating"
    UNKNOWN = "unknown"


ImageType = Literal["system", "snapshot", "backup", "app"]
ImageStatus = Literal["available", "creating", "unavailable"]


# --- Servers ---


class IPAddress(HetznerModel):
    ip: str


class PublicNet(HetznerModel):
    ipv4: IPAddress | None = None
    ipv6: IPAddress | None = None


class ServerTypeSummary(HetznerModel):
    id: int
    name: str
    description: str = ""
    cores: int
    memory: float
    disk: int


class LocationSummary(HetznerModel):
    id: int
    name: str
    city: str
    country: str


class Datacenter(HetznerModel):
    id: int
    name: str
    description: str = ""
    location: LocationSummary


class ImageSummary(HetznerModel):
    id: int
    name: str | None = None
    description: str | None = None
    os_flavor: str
    os_version: str | None = None


class Server(HetznerModel):
    id: int
    name: str
    status: ServerStatus
    public_net: PublicNet = Field(default_factory=PublicNet)
    server_type: ServerTypeSummary
    datacenter: Datacenter
    image: ImageSummary | None = None
    labels: dict[str, str] = Field(default_factory=dict)
    created: datetime


# --- Reference data ---


class Price(HetznerModel):
    net: str
    gross: str


class PricePerLocation(HetznerModel):
    location: str
    price_hourly: Price
    price_monthly: Price


class ServerType(HetznerModel):
    id: int
    name: str
    description: str = ""
    cores: int
    memory: float
    disk: int
    prices: list[PricePerLocation] = Field(default_factory=list)
    architecture: str
    cpu_type: str


class Image(HetznerModel):
    id: int
    name: str | None = None
    description: str | None = None
    os_flavor: str | None = None
    os_version: str | None = None
    type: ImageType
    status: ImageStatus
    architecture: str


class Location(HetznerModel):
    id: int
    name: str
    description: str = ""
    country: str
    city: str
    latitude: float
    longitude: float
    network_zone: str


# --- SSH keys ---


class SSHKey(HetznerModel):
    id: int
    name: str
    fingerprint: str
    public_key: str
    labels: dict[str, str] = Field(default_factory=dict)
    created: datetime


@dataclass(frozen=True)
class SSHKeyByName:
    name: str

    def wire(self) -> str:
        return self.name


@dataclass(frozen=True)
class SSHKeyById:
    id: int

    def wire(self) -> int:
        return self.id


SSHKeyRef = SSHKeyByName | SSHKeyById


def ssh_key_ref(value: int | str) -> SSHKeyRef:
    """Tag a user-supplied SSH key reference as a name or an id."""
    if isinstance(value, int):
        return SSHKeyById(value)
    return SSHKeyByName(value)


# --- Actions ---


class ErrorDetail(HetznerModel):
    code: str
    message: str


class Action(HetznerModel):
    id: int
    command: str
    status: Literal["running", "success", "error"]
    progress: int = 0
    started: datetime | None = None
    finished: datetime | None = None
    error: ErrorDetail | None = None


# --- Response envelopes ---


class ListServersResponse(HetznerModel):
    servers: list[Server]


class GetServerResponse(HetznerModel):
    server: Server


class CreateServerResponse(HetznerModel):
    server: Server
    action: Action
    root_password: str | None = None


class ActionResponse(HetznerModel):
    action: Action


class ListServerTypesResponse(HetznerModel):
    server_types: list[ServerType]


class ListImagesResponse(HetznerModel):
    images: list[Image]


class ListLocationsResponse(HetznerModel):
    locations: list[Location]


class ListSSHKeysResponse(HetznerModel):
    ssh_keys: list[SSHKey]


class SSHKeyResponse(HetznerModel):
    ssh_key: SSHKey


class APIErrorBody(HetznerModel):
    error: ErrorDetail
