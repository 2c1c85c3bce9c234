"""
Tool Base Class - Pydantic-based tool definitions.

Tools are the unit of work exposed to an agent runtime. Each tool:
- Defines its input schema via Pydantic Fields (unknown fields rejected)
- Declares name, title and capability hints in an inner Meta class
- Implements execute() as one call to the Hetzner API plus formatting

Example:
    class GetServer(Tool):
        '''Get detailed information about a specific server.'''
        id: int = Field(..., gt=0, description="The server ID")

        class Meta:
            name = "hetzner_get_server"
            title = "Get Server"
            read_only = True
            idempotent = True

        async def execute(self, ctx: ToolContext) -> str:
            data = await ctx.client.request(f"/servers/{self.id}")
            server = GetServerResponse.model_validate(data).server
            return ctx.formatted(server, "markdown", "server")
"""

import re
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import structlog
from pydantic import BaseModel, ConfigDict, ValidationError

from ..errors import (
    ConfigurationError,
    ErrorCategory,
    classify_error,
    handle_api_error,
    handle_response_error,
)
from ..formatters import render_json

__all__ = [
    "FORMAT_DESCRIPTION",
    "Tool",
    "ToolContext",
    "ToolMeta",
    "ToolResult",
]

logger = structlog.get_logger(__name__)

FORMAT_DESCRIPTION = "Output format: 'markdown' or 'json'"


@dataclass
class ToolContext:
    """Context passed to tool execution.

    Provides access to:
    - client: The Hetzner connector shared by all tools
    - format: Formatter function (data, format, entity) -> text
    """
    client: Any
    format: Callable[[Any, str, str], str] | None = None

    def formatted(self, data: Any, fmt: str, entity: str) -> str:
        """Format data using the registered formatter.

        Falls back to JSON when no formatter is configured.
        """
        if self.format:
            return self.format(data, fmt, entity)
        return render_json(data)


class ToolMeta:
    """Metadata for tool registration and capability hints.

    Define as inner class 'Meta' on Tool subclasses:
        class DeleteServer(Tool):
            class Meta:
                name = "hetzner_delete_server"
                title = "Delete Server"
                destructive = True
                idempotent = True
    """
    name: str | None = None  # Tool name, derived from class name if None
    title: str | None = None  # Human title
    read_only: bool = False  # Does not modify its environment
    destructive: bool = False  # May perform destructive updates
    idempotent: bool = False  # Repeating the call has no additional effect
    open_world: bool = True  # Reaches outside the local system


@dataclass
class ToolResult:
    """Textual result of a tool call.

    Errors are results too, flagged with is_error:
        return ToolResult("Error: Resource not found.", is_error=True)
    """
    text: str
    is_error: bool = False

    @property
    def success(self) -> bool:
        return not self.is_error

    def to_dict(self) -> dict[str, Any]:
        return {"text": self.text, "is_error": self.is_error}


class Tool(BaseModel, ABC):
    """Base class for all tools.

    Subclass and implement execute(). Per-call failures raised from
    execute() are turned into an error ToolResult by run(); a
    ConfigurationError is never caught.
    """

    model_config = ConfigDict(
        extra="forbid",  # Reject unknown fields
        str_strip_whitespace=True,  # Clean string inputs
    )

    # Default Meta - subclasses override with inner class
    class Meta(ToolMeta):
        pass

    @abstractmethod
    async def execute(self, ctx: ToolContext) -> str | ToolResult:
        """Execute the tool logic.

        Args:
            ctx: Tool context with client and formatter

        Returns:
            Output text, or a ToolResult for full control
        """
        ...

    async def run(self, ctx: ToolContext) -> ToolResult:
        """Execute and normalize the outcome into a ToolResult."""
        name = self.get_name()
        logger.info("tool_call", tool=name)

        try:
            result = await self.execute(ctx)
        except ConfigurationError:
            raise
        except ValidationError as e:
            # Input is validated before run(); this is the provider payload
            message = handle_response_error(e)
            category = ErrorCategory.UNKNOWN
        except Exception as e:
            message = handle_api_error(e)
            category = classify_error(e)
        else:
            if isinstance(result, ToolResult):
                return result
            return ToolResult(result)

        logger.warning("tool_failed", tool=name, category=category.value, error=message)
        return ToolResult(message, is_error=True)

    @classmethod
    def get_meta(cls) -> ToolMeta:
        """Get tool metadata, merging with defaults."""
        meta = ToolMeta()
        if hasattr(cls, "Meta"):
            for attr in ("name", "title", "read_only", "destructive", "idempotent", "open_world"):
                if hasattr(cls.Meta, attr):
                    setattr(meta, attr, getattr(cls.Meta, attr))
        return meta

    @classmethod
    def get_name(cls) -> str:
        """Get tool name.

        Uses Meta.name if defined, otherwise snake_cases the class name:
        - PowerOnServer -> power_on_server
        """
        meta = cls.get_meta()
        if meta.name:
            return meta.name
        return re.sub(r"(?<!^)(?=[A-Z])", "_", cls.__name__).lower()

    @classmethod
    def get_title(cls) -> str:
        """Human title, defaults to the first docstring line."""
        meta = cls.get_meta()
        if meta.title:
            return meta.title
        return cls.get_description().split("\n")[0].strip()

    @classmethod
    def get_description(cls) -> str:
        """Get full description from docstring."""
        return (cls.__doc__ or "").strip()

    @classmethod
    def get_annotations(cls) -> dict[str, Any]:
        """Capability hints in agent-runtime naming."""
        meta = cls.get_meta()
        return {
            "readOnlyHint": meta.read_only,
            "destructiveHint": meta.destructive,
            "idempotentHint": meta.idempotent,
            "openWorldHint": meta.open_world,
        }

    @classmethod
    def input_schema(cls) -> dict[str, Any]:
        """Strict JSON schema of the tool's input."""
        schema = cls.model_json_schema()
        schema.pop("title", None)
        schema.pop("description", None)
        return schema
