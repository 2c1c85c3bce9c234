"""
CLI - Command line entry point for hetzner-tools.

Usage:
    hetzner-tools serve [--transport stdio|http]   Run the MCP server or HTTP bridge
    hetzner-tools tools                            List available tools
    hetzner-tools call <tool> [json]               Run one tool and print its output
"""

from .main import main

__all__ = ["main"]
