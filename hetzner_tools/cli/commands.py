"""
CLI Commands - Handlers for serve, tools and call.
"""

import argparse
import asyncio
import dataclasses
import json
import sys
from typing import Any

import uvicorn

from ..config import TOKEN_ENV_VAR, HetznerConfig
from ..connectors import HetznerConnector
from ..errors import UnknownToolError
from ..tools import ToolRegistry, ToolResult, create_registry

__all__ = ["print_error", "print_missing_token", "run_command"]


def print_error(message: str) -> None:
    """Print error message to stderr."""
    print(f"Error: {message}", file=sys.stderr)


def print_missing_token() -> None:
    """Explain how to obtain an API token."""
    lines = [
        f"ERROR: {TOKEN_ENV_VAR} environment variable is required",
        "",
        "To get an API token:",
        "1. Go to https://console.hetzner.cloud/projects",
        "2. Select your project",
        "3. Go to Security > API Tokens",
        "4. Generate a new token with Read & Write permissions",
    ]
    print("\n".join(lines), file=sys.stderr)


def run_command(command: str, args: argparse.Namespace, config: HetznerConfig) -> int:
    """Run the specified command.

    Args:
        command: Command name
        args: Parsed arguments
        config: Tool configuration

    Returns:
        Exit code
    """
    registry = create_registry(HetznerConnector(config))

    if command == "tools":
        return list_tools(registry)

    # Everything below talks to the Hetzner API
    if not config.resolve_token():
        print_missing_token()
        return 1

    if command == "serve":
        return serve(registry, config, args)
    elif command == "call":
        return call_tool(registry, args.tool, args.arguments)

    print_error(f"Unknown command: {command}")
    return 1


def list_tools(registry: ToolRegistry) -> int:
    for tool_cls in registry.tools():
        hints = tool_cls.get_annotations()
        flags = [
            label
            for label, key in (
                ("read-only", "readOnlyHint"),
                ("destructive", "destructiveHint"),
                ("idempotent", "idempotentHint"),
            )
            if hints[key]
        ]
        suffix = f" [{', '.join(flags)}]" if flags else ""
        print(f"{tool_cls.get_name():<28} {tool_cls.get_title()}{suffix}")
    return 0


def serve(registry: ToolRegistry, config: HetznerConfig, args: argparse.Namespace) -> int:
    if args.transport == "http":
        from ..app import create_app

        overrides = {
            key: value
            for key, value in (("host", args.host), ("port", args.port))
            if value is not None
        }
        config = dataclasses.replace(config, **overrides)
        app = create_app(config, registry)
        uvicorn.run(app, host=config.host, port=config.port, log_level=config.log_level.lower())
        return 0

    from ..server import serve_stdio

    asyncio.run(serve_stdio(registry))
    return 0


def call_tool(registry: ToolRegistry, name: str, raw_arguments: str) -> int:
    """Run one tool and print its text; exit code 1 on a tool error."""
    try:
        arguments = json.loads(raw_arguments)
    except ValueError as e:
        print_error(f"Arguments must be a JSON object: {e}")
        return 2
    if not isinstance(arguments, dict):
        print_error("Arguments must be a JSON object")
        return 2

    try:
        result = asyncio.run(_call(registry, name, arguments))
    except UnknownToolError as e:
        print_error(str(e))
        return 1

    print(result.text)
    return 1 if result.is_error else 0


async def _call(registry: ToolRegistry, name: str, arguments: dict[str, Any]) -> ToolResult:
    try:
        return await registry.call(name, arguments)
    finally:
        await registry.client.close()
