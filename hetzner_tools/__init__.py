"""
Hetzner Tools - Hetzner Cloud servers, SSH keys and reference data as
schema-validated agent tools.

Architecture:
- connectors/: Authenticated transport to the Hetzner Cloud API
- tools/: One Pydantic model per operation, dispatched by a ToolRegistry
- formatters: Markdown and JSON rendering of API entities
- server: MCP stdio harness
- app/: HTTP bridge (FastAPI) exposing the same registry
- cli/: Command line entry point
"""

from . import logging as _logging  # noqa: F401  routes structlog to stderr
from .config import HetznerConfig
from .connectors import HetznerConnector
from .errors import ConfigurationError, HetznerToolsError, UnknownToolError
from .tools import ALL_TOOLS, ToolRegistry, ToolResult, create_registry

__version__ = "1.0.0"

__all__ = [
    "ALL_TOOLS",
    "ConfigurationError",
    "HetznerConfig",
    "HetznerConnector",
    "HetznerToolsError",
    "ToolRegistry",
    "ToolResult",
    "UnknownToolError",
    "__version__",
    "create_registry",
]
