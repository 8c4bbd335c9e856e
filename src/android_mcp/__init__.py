"""
Android MCP - Android Device and Emulator Tools for AI Agents
=============================================================

This package exposes Android development tooling as Model Context Protocol
(MCP) tools. An agent can list devices and emulators, install and launch
apps, move files, read logs, run shell commands, manage AVDs and install
SDK components.

The heavy lifting is done by the Android SDK command-line tools, which
must be installed separately: adb, avdmanager, emulator and sdkmanager.

Main Components
---------------
- **bridge**: Async clients for adb and the SDK tools
    Parses `adb devices -l`, `pm list packages` and `avdmanager list avd`

- **mcp**: MCP server and tools
    JSON-RPC 2.0 over stdio, one text block per tool result

- **cli**: Command-line interface (android-mcp)
    Runs the server, lists tools, invokes a tool locally

Quick Start
-----------
Run the server for an MCP host:
    $ android-mcp serve

Call a tool from the shell:
    $ android-mcp call android-devices
    $ android-mcp call android-logcat '{"level": "W", "lines": 50}'

Or embed the server:
    >>> import asyncio
    >>> from android_mcp.mcp import MCPServer
    >>> asyncio.run(MCPServer().run())

Copyright (c) 2025 Hugo José Pinto & Contributors
"""

__version__ = "1.0.0"
__author__ = "Hugo José Pinto & Contributors"
