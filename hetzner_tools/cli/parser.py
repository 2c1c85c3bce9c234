"""
CLI Parser - Argument parser for the hetzner-tools command.
"""

import argparse

__all__ = ["create_parser"]

TRANSPORTS = ("stdio", "http")


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="hetzner-tools",
        description="Hetzner Cloud servers, SSH keys and reference data as agent tools",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level (default: HETZNER_TOOLS_LOG_LEVEL or INFO)",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Write logs as JSON lines",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # serve
    serve_parser = subparsers.add_parser("serve", help="Serve the tools to an agent runtime")
    serve_parser.add_argument(
        "-t", "--transport",
        choices=TRANSPORTS,
        default="stdio",
        help="stdio: MCP over stdin/stdout, http: local JSON bridge (default: stdio)",
    )
    serve_parser.add_argument("--host", default=None, help="HTTP bridge bind address")
    serve_parser.add_argument("--port", type=int, default=None, help="HTTP bridge port")

    # tools
    subparsers.add_parser("tools", help="List available tools")

    # call
    call_parser = subparsers.add_parser("call", help="Run one tool and print its output")
    call_parser.add_argument("tool", help="Tool name (e.g. hetzner_list_servers)")
    call_parser.add_argument(
        "arguments",
        nargs="?",
        default="{}",
        help="Tool arguments as a JSON object (default: {})",
    )

    return parser
