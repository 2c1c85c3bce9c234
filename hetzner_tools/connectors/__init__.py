"""
Connectors - Transport to external services.

Example:
    from hetzner_tools.connectors import HetznerConnector

    connector = HetznerConnector()
    servers = await connector.request("/servers")
"""

from .hetzner import HetznerConnector, HTTPMethod

__all__ = [
    "HTTPMethod",
    "HetznerConnector",
]
