"""
Centralized configuration for Hetzner Tools.

Configuration sources (priority order):
1. Explicit constructor arguments
2. Environment variables
3. Default values

Environment variables:
- HETZNER_API_TOKEN: Bearer token for the Hetzner Cloud API (read at first use)
- HETZNER_TOOLS_LOG_LEVEL: Log level (default: INFO)
- HETZNER_TOOLS_HOST: Bind address for the HTTP bridge (default: 127.0.0.1)
- HETZNER_TOOLS_PORT: Port for the HTTP bridge (default: 9200)
"""

import os
from dataclasses import dataclass

__all__ = [
    "API_BASE_URL",
    "REQUEST_TIMEOUT",
    "TOKEN_ENV_VAR",
    "HetznerConfig",
]

API_BASE_URL = "https://api.hetzner.cloud/v1"
REQUEST_TIMEOUT = 30.0
TOKEN_ENV_VAR = "HETZNER_API_TOKEN"


def _get_env(key: str, default: str) -> str:
    """Get environment variable with HETZNER_TOOLS_ prefix."""
    return os.environ.get(f"HETZNER_TOOLS_{key}", default)


def _get_env_int(key: str, default: int) -> int:
    """Get integer environment variable."""
    return int(_get_env(key, str(default)))


@dataclass(frozen=True)
class HetznerConfig:
    """Immutable tool configuration.

    The API token is resolved at first use, see ``resolve_token``.
    """

    api_token: str | None = None
    base_url: str = API_BASE_URL
    timeout: float = REQUEST_TIMEOUT

    log_level: str = _get_env("LOG_LEVEL", "INFO")

    # HTTP bridge
    host: str = _get_env("HOST", "127.0.0.1")
    port: int = _get_env_int("PORT", 9200)

    def resolve_token(self) -> str | None:
        """Explicit token if given, otherwise the process environment."""
        return self.api_token or os.environ.get(TOKEN_ENV_VAR) or None
