"""
Hetzner Connector - Authenticated transport to the Hetzner Cloud API.

Features:
- One lazily created httpx.AsyncClient per connector instance
- Bearer token authentication, fixed base URL and timeout
- Decoded JSON bodies; non-2xx responses raise httpx.HTTPStatusError
"""

from typing import Any, Literal

import httpx
import structlog

from ..config import TOKEN_ENV_VAR, HetznerConfig
from ..errors import ConfigurationError

__all__ = ["HTTPMethod", "HetznerConnector"]

logger = structlog.get_logger(__name__)

HTTPMethod = Literal["GET", "POST", "PUT", "DELETE"]


class HetznerConnector:
    """Transport client for the Hetzner Cloud API.

    Constructed explicitly and handed to every tool through ToolContext.
    The underlying HTTP client is created on the first request and reused
    until ``close()``.

    Example:
        connector = HetznerConnector(HetznerConfig())
        data = await connector.request("/servers", params={"label_selector": "env=prod"})
        await connector.close()
    """

    def __init__(
        self,
        config: HetznerConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.config = config or HetznerConfig()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def name(self) -> str:
        """Connector identifier."""
        return "hetzner"

    @property
    def connected(self) -> bool:
        """Whether the HTTP client has been created."""
        return self._client is not None

    @property
    def client(self) -> httpx.AsyncClient:
        """Memoized HTTP client.

        Raises:
            ConfigurationError: If no API token is available
        """
        if self._client is None:
            token = self.config.resolve_token()
            if not token:
                raise ConfigurationError(f"{TOKEN_ENV_VAR} environment variable is required")

            self._client = httpx.AsyncClient(
                base_url=self.config.base_url,
                timeout=httpx.Timeout(self.config.timeout),
                headers={
                    "Authorization": f"Bearer {token}",
                    "Content-Type": "application/json",
                    "Accept": "application/json",
                },
                transport=self._transport,
            )
            logger.debug("hetzner_client_created", base_url=self.config.base_url)
        return self._client

    async def request(
        self,
        path: str,
        method: HTTPMethod = "GET",
        json: Any = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Perform one authenticated API call.

        Args:
            path: Endpoint path relative to the base URL (e.g. "/servers/42")
            method: HTTP verb
            json: Optional request body
            params: Optional query parameters

        Returns:
            Decoded JSON body, or None for an empty response

        Raises:
            ConfigurationError: If no API token is available
            httpx.HTTPStatusError: On a non-2xx response
            httpx.TransportError: On timeouts and connection failures
        """
        client = self.client
        response = await client.request(method, path, json=json, params=params or None)

        logger.debug(
            "hetzner_request",
            method=method,
            path=path,
            status=response.status_code,
        )

        response.raise_for_status()

        if not response.content:
            return None
        return response.json()

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def status(self) -> dict[str, Any]:
        """Current connector status."""
        return {
            "name": self.name,
            "base_url": self.config.base_url,
            "connected": self.connected,
            "token_configured": self.config.resolve_token() is not None,
        }
