"""
Android MCP Server Package
==========================

Provides the Model Context Protocol (MCP) server that exposes Android
devices, emulators and SDK tooling to AI agents and automation tools.

This package enables:
- Listing devices, AVDs, packages and SDK components
- Installing, launching and uninstalling apps
- Moving files, running shell commands, reading logcat
- Creating, starting and stopping emulators

Usage:
    # Run standalone server
    python -m android_mcp.mcp.server

    # Or embed in code
    from android_mcp.mcp import MCPServer
    server = MCPServer()
    await server.run()

Copyright (c) 2025 Hugo José Pinto & Contributors
"""

from .server import DeviceContext, MCPServer, ToolDefinition, ToolResult
from .tools import ALL_TOOLS, get_tool

__all__ = [
    # Server
    "MCPServer",
    "DeviceContext",
    "ToolDefinition",
    "ToolResult",
    # Tools
    "ALL_TOOLS",
    "get_tool",
]
