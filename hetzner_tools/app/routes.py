"""
Routes - Health, tool catalog and tool invocation.

- GET  /health        bridge and connector status
- GET  /tools         every tool with its input schema and hints
- POST /tools/{name}  run a tool; the JSON body is its arguments
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Request

from .. import __version__
from ..errors import ConfigurationError, UnknownToolError
from ..tools import ToolRegistry

__all__ = ["router"]

router = APIRouter()


def get_registry(request: Request) -> ToolRegistry:
    return request.app.state.registry


@router.get("/health", tags=["core"])
async def health(registry: ToolRegistry = Depends(get_registry)) -> dict[str, Any]:
    """Basic health check. Never touches the Hetzner API."""
    return {
        "status": "ok",
        "version": __version__,
        "tools": len(registry),
        "connector": registry.client.status(),
    }


@router.get("/tools", tags=["tools"])
async def list_tools(registry: ToolRegistry = Depends(get_registry)) -> list[dict[str, Any]]:
    return registry.describe()


@router.post("/tools/{name}", tags=["tools"])
async def call_tool(
    name: str,
    arguments: dict[str, Any] | None = Body(None),
    registry: ToolRegistry = Depends(get_registry),
) -> dict[str, Any]:
    """Run a tool.

    Tool failures are reported in the body with ``is_error`` set; only an
    unknown tool name or a missing API token changes the status code.
    """
    try:
        result = await registry.call(name, arguments)
    except UnknownToolError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except ConfigurationError as e:
        raise HTTPException(status_code=503, detail=str(e)) from e
    return result.to_dict()
