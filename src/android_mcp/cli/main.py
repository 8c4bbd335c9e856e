"""
android-mcp - Command-Line Interface
====================================

This module implements the command-line interface for the Android MCP
server. The usual entry point is `serve`, launched by an MCP host; the
other commands are for inspecting and trying tools by hand.

Usage Examples
--------------
Run the server on stdio (what an MCP host launches):
    $ android-mcp serve

List the available tools:
    $ android-mcp tools
    $ android-mcp tools --schema

Invoke a tool with a JSON argument object:
    $ android-mcp call android-devices
    $ android-mcp call android-shell '{"command": "getprop ro.build.version.release"}'

Use explicit SDK binaries and refuse to guess between devices:
    $ android-mcp --adb ~/Android/Sdk/platform-tools/adb \\
          --device-selection require-explicit serve

Logging goes to stderr; stdout is reserved for JSON-RPC in `serve` and
for tool output in `call`.

Exit Codes
----------
0 - Success
1 - Tool returned an error
2 - Invalid arguments (unknown tool, malformed JSON)
3 - Internal error

Copyright (c) 2025 Hugo José Pinto & Contributors
"""

import asyncio
import json
import logging
import sys
from typing import Optional

import click

from android_mcp import __version__
from android_mcp.cli.errors import ExitCode, handle_cli_exception
from android_mcp.config import DeviceSelection, ServerConfig

# Configure logging
logger = logging.getLogger(__name__)


# =============================================================================
# CLI Context and Utilities
# =============================================================================

class Context:
    """
    Shared context for CLI commands.

    Stores the server configuration built from the global options and the
    verbosity flag.
    """

    def __init__(self) -> None:
        self.config = ServerConfig()
        self.verbose: bool = False

    def setup_logging(self) -> None:
        """Configure logging on stderr based on verbosity."""
        level = logging.DEBUG if self.verbose else logging.INFO
        logging.basicConfig(
            level=level,
            stream=sys.stderr,
            format="%(levelname)s %(name)s: %(message)s" if self.verbose else "%(message)s",
        )

    def create_server(self):
        """Build an MCP server over the configured binaries."""
        from android_mcp.mcp import DeviceContext, MCPServer
        return MCPServer(DeviceContext(self.config))


pass_context = click.make_pass_decorator(Context, ensure=True)


def parse_arguments(text: Optional[str]) -> dict:
    """Parse the JSON argument object given to `call`."""
    if not text:
        return {}
    try:
        value = json.loads(text)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"invalid JSON: {e}", param_hint="ARGUMENTS")
    if not isinstance(value, dict):
        raise click.BadParameter("must be a JSON object", param_hint="ARGUMENTS")
    return value


# =============================================================================
# Main CLI Group
# =============================================================================

@click.group()
@click.option(
    "--adb", "adb_path",
    default="adb",
    show_default=True,
    help="adb binary (name on PATH or absolute path)",
)
@click.option(
    "--avdmanager", "avdmanager_path",
    default="avdmanager",
    show_default=True,
    help="avdmanager binary",
)
@click.option(
    "--emulator", "emulator_path",
    default="emulator",
    show_default=True,
    help="emulator binary",
)
@click.option(
    "--sdkmanager", "sdkmanager_path",
    default="sdkmanager",
    show_default=True,
    help="sdkmanager binary",
)
@click.option(
    "--device-selection",
    type=click.Choice([s.value for s in DeviceSelection]),
    default=DeviceSelection.FIRST.value,
    show_default=True,
    help="What to do when a tool is called without deviceSerial",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Enable debug logging (on stderr)",
)
@click.version_option(version=__version__, prog_name="android-mcp")
@pass_context
def main(
    ctx: Context,
    adb_path: str,
    avdmanager_path: str,
    emulator_path: str,
    sdkmanager_path: str,
    device_selection: str,
    verbose: bool,
) -> None:
    """
    Android device and emulator tools for MCP hosts.

    Requires the Android SDK command-line tools (adb, avdmanager,
    emulator, sdkmanager) on PATH or given explicitly.
    """
    ctx.config.adb_path = adb_path
    ctx.config.avdmanager_path = avdmanager_path
    ctx.config.emulator_path = emulator_path
    ctx.config.sdkmanager_path = sdkmanager_path
    ctx.config.device_selection = DeviceSelection(device_selection)
    ctx.verbose = verbose
    ctx.setup_logging()


# =============================================================================
# Serve Command
# =============================================================================

@main.command()
@pass_context
def serve(ctx: Context) -> None:
    """
    Run the MCP server on stdin/stdout until stdin closes.

    Example:
        android-mcp serve
    """
    try:
        server = ctx.create_server()
        asyncio.run(server.run())
    except KeyboardInterrupt:
        logger.info("interrupted")
    except Exception as e:
        handle_cli_exception(e, verbose=ctx.verbose, error_type="Server")


# =============================================================================
# Tools Command
# =============================================================================

@main.command()
@click.option(
    "--schema", "-s",
    is_flag=True,
    help="Print the JSON input schema of every tool",
)
def tools(schema: bool) -> None:
    """
    List the available tools.

    Example:
        android-mcp tools
        android-mcp tools --schema
    """
    from android_mcp.mcp.tools import ALL_TOOLS

    if schema:
        listing = [
            {
                "name": tool.descriptor.name,
                "description": tool.descriptor.description,
                "inputSchema": tool.descriptor.input_schema,
            }
            for tool in ALL_TOOLS
        ]
        click.echo(json.dumps(listing, indent=2))
        return

    width = max(len(tool.descriptor.name) for tool in ALL_TOOLS)
    for tool in ALL_TOOLS:
        click.echo(f"{tool.descriptor.name:<{width}}  {tool.descriptor.description}")


# =============================================================================
# Call Command
# =============================================================================

@main.command()
@click.argument("name")
@click.argument("arguments", required=False)
@pass_context
def call(ctx: Context, name: str, arguments: Optional[str]) -> None:
    """
    Invoke one tool and print its text result.

    NAME is the tool name (see 'android-mcp tools'). ARGUMENTS is an
    optional JSON object with the tool's arguments.

    Example:
        android-mcp call android-list-packages '{"filter": "google"}'
    """
    from android_mcp.mcp.tools import get_tool

    try:
        handler = get_tool(name)
        if handler is None:
            raise click.BadParameter(
                f"unknown tool '{name}'. Use 'android-mcp tools' to list tools.",
                param_hint="NAME",
            )
        args = parse_arguments(arguments)

        from android_mcp.mcp import DeviceContext
        result = asyncio.run(handler(DeviceContext(ctx.config), args))
    except Exception as e:
        handle_cli_exception(e, verbose=ctx.verbose)

    click.echo(result.text)
    if result.is_error:
        sys.exit(ExitCode.TOOL_ERROR)


if __name__ == "__main__":
    main()
