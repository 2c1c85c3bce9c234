"""
Tool Registry - Name lookup, input validation and dispatch.

The registry is the single entry point harnesses use to run a tool:
- Input is validated against the tool's Pydantic model before any network
  call; a validation failure comes back as an error ToolResult
- The tool runs with a ToolContext holding the shared connector

Example:
    connector = HetznerConnector(config)
    registry = create_registry(connector)

    result = await registry.call("hetzner_get_server", {"id": 42})
    print(result.text)
"""

from collections.abc import Callable
from typing import Any

import structlog
from pydantic import ValidationError

from ..errors import UnknownToolError, handle_api_error
from ..formatters import format_entities
from .base import Tool, ToolContext, ToolResult

__all__ = [
    "ToolRegistry",
]

logger = structlog.get_logger(__name__)


class ToolRegistry:
    """Registry of Tool classes bound to one connector."""

    def __init__(
        self,
        client: Any,
        formatter: Callable[[Any, str, str], str] | None = format_entities,
    ) -> None:
        """Initialize the registry.

        Args:
            client: Connector handed to every tool through ToolContext
            formatter: Formatter function for output formatting
        """
        self._client = client
        self._formatter = formatter
        self._tools: dict[str, type[Tool]] = {}

    @property
    def client(self) -> Any:
        return self._client

    def register(self, tool_cls: type[Tool]) -> None:
        """Register a single tool.

        Raises:
            TypeError: If tool_cls is not a Tool subclass
            ValueError: If a tool with the same name is already registered
        """
        if not (isinstance(tool_cls, type) and issubclass(tool_cls, Tool)):
            raise TypeError(f"{tool_cls} must be a Tool subclass")

        name = tool_cls.get_name()
        if name in self._tools:
            raise ValueError(f"Tool '{name}' already registered")

        self._tools[name] = tool_cls

    def register_all(self, tools: list[type[Tool]]) -> None:
        """Register multiple tools at once."""
        for tool_cls in tools:
            self.register(tool_cls)

    def get(self, name: str) -> type[Tool]:
        """Get tool class by name.

        Raises:
            UnknownToolError: If no tool has this name
        """
        if name not in self._tools:
            raise UnknownToolError(name)
        return self._tools[name]

    def names(self) -> list[str]:
        return list(self._tools)

    def tools(self) -> list[type[Tool]]:
        return list(self._tools.values())

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def describe(self) -> list[dict[str, Any]]:
        """Catalog entry of every tool: name, title, description, schema, hints."""
        return [
            {
                "name": name,
                "title": tool_cls.get_title(),
                "description": tool_cls.get_description(),
                "input_schema": tool_cls.input_schema(),
                "annotations": tool_cls.get_annotations(),
            }
            for name, tool_cls in self._tools.items()
        ]

    def context(self) -> ToolContext:
        return ToolContext(client=self._client, format=self._formatter)

    async def call(self, name: str, arguments: dict[str, Any] | None = None) -> ToolResult:
        """Validate arguments and run a tool.

        Raises:
            UnknownToolError: If no tool has this name
            ConfigurationError: If the API token is missing
        """
        tool_cls = self.get(name)

        try:
            tool = tool_cls.model_validate(arguments or {})
        except ValidationError as e:
            message = handle_api_error(e)
            logger.info("tool_input_rejected", tool=name, error=message)
            return ToolResult(message, is_error=True)

        return await tool.run(self.context())
