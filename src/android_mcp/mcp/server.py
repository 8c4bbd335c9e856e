"""
Android MCP Server
==================

Model Context Protocol (MCP) server exposing Android device, emulator and
SDK tooling to AI agents.

This server provides tools for:
- Listing devices, AVDs, packages and SDK components
- Installing, uninstalling and launching apps
- Pushing and pulling files, running shell commands, reading logcat
- Creating, starting and stopping emulators

The server uses JSON-RPC 2.0 over stdio for communication, following
the MCP specification. Each tools/call runs as its own asyncio task so
slow commands do not block other requests, and notifications/cancelled
cancels the matching task (killing any child process it is waiting on).

Architecture:
    MCPServer
        └── DeviceContext
                ├── AdbClient
                ├── AvdManagerClient / EmulatorLauncher
                └── SdkManagerClient
                        └── CommandExecutor

Usage:
    # Run as standalone server
    python -m android_mcp.mcp.server

    # Or programmatically
    server = MCPServer()
    await server.run()

Copyright (c) 2025 Hugo José Pinto & Contributors
"""

import asyncio
import json
import logging
import sys
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional, Set

from android_mcp import __version__
from android_mcp.bridge import (
    AdbClient,
    AvdManagerClient,
    CommandExecutor,
    EmulatorLauncher,
    SdkManagerClient,
)
from android_mcp.config import ServerConfig

logger = logging.getLogger(__name__)


# =============================================================================
# Device Context
# =============================================================================

class DeviceContext:
    """
    Shared collaborators handed to every tool.

    Holds no device, package or AVD state: tools query the external tools
    fresh on every invocation.

    Attributes:
        config: Server configuration
        executor: Process runner shared by all clients
        adb: adb client
        avd_manager: avdmanager client
        emulator: Emulator launcher
        sdk_manager: sdkmanager client
    """

    def __init__(
        self,
        config: Optional[ServerConfig] = None,
        executor: Optional[CommandExecutor] = None,
    ):
        self.config = config or ServerConfig()
        self.executor = executor or CommandExecutor()
        self.adb = AdbClient(self.executor, self.config)
        self.avd_manager = AvdManagerClient(self.executor, self.config)
        self.emulator = EmulatorLauncher(self.executor, self.config)
        self.sdk_manager = SdkManagerClient(self.executor, self.config)


# =============================================================================
# MCP Protocol Types
# =============================================================================

@dataclass
class ToolDefinition:
    """Definition of an MCP tool."""
    name: str
    description: str
    input_schema: Dict[str, Any]


@dataclass
class ToolResult:
    """Result from an MCP tool execution."""
    content: List[Dict[str, Any]]
    is_error: bool = False

    @property
    def text(self) -> str:
        """Text of the (single) content block."""
        return "\n".join(block.get("text", "") for block in self.content)


# =============================================================================
# MCP Server
# =============================================================================

class MCPServer:
    """
    MCP Server for Android development tooling.

    Implements the Model Context Protocol to expose adb, emulator and SDK
    functionality to AI agents and other MCP clients.

    The server communicates via JSON-RPC 2.0 over stdio.

    Attributes:
        context: Collaborators passed to every tool
        tools: Dictionary of registered tools

    Example:
        server = MCPServer()
        await server.run()  # Run until stdin closes
    """

    # Server information
    SERVER_NAME = "android-dev-mcp"
    SERVER_VERSION = __version__
    PROTOCOL_VERSION = "2024-11-05"

    def __init__(self, context: Optional[DeviceContext] = None):
        """Initialize MCP server."""
        self.context = context or DeviceContext()
        self._tools: Dict[str, Callable[..., Awaitable[ToolResult]]] = {}
        self._tool_definitions: Dict[str, ToolDefinition] = {}
        self._in_flight: Dict[Any, asyncio.Task] = {}
        self._anonymous: Set[asyncio.Task] = set()

        # Register all tools
        self._register_tools()

    def _register_tools(self) -> None:
        """Register all available tools."""
        # Import tool implementations
        from .tools.registry import ALL_TOOLS

        for handler in ALL_TOOLS:
            descriptor = handler.descriptor
            self._register_tool(
                descriptor.name,
                handler,
                descriptor.description,
                descriptor.input_schema,
            )

    def _register_tool(
        self,
        name: str,
        handler: Callable[..., Awaitable[ToolResult]],
        description: str,
        input_schema: Dict[str, Any]
    ) -> None:
        """
        Register a tool with the server.

        Args:
            name: Tool name
            handler: Async function to handle tool calls
            description: Human-readable description
            input_schema: JSON Schema for tool input
        """
        if name in self._tools:
            raise ValueError(f"Tool registered twice: {name}")
        self._tools[name] = handler
        self._tool_definitions[name] = ToolDefinition(
            name=name,
            description=description,
            input_schema=input_schema
        )

    @property
    def tool_names(self) -> List[str]:
        return list(self._tool_definitions)

    # =========================================================================
    # MCP Protocol Methods
    # =========================================================================

    async def handle_initialize(
        self,
        params: Dict[str, Any]
    ) -> Dict[str, Any]:
        """
        Handle initialize request.

        Returns server capabilities and info.
        """
        client = (params or {}).get("clientInfo", {})
        logger.info(
            "initialize from %s %s",
            client.get("name", "unknown client"),
            client.get("version", ""),
        )
        return {
            "protocolVersion": self.PROTOCOL_VERSION,
            "capabilities": {
                "tools": {}  # We support tools
            },
            "serverInfo": {
                "name": self.SERVER_NAME,
                "version": self.SERVER_VERSION
            }
        }

    async def handle_list_tools(self) -> Dict[str, Any]:
        """
        Handle tools/list request.

        Returns list of available tools.
        """
        tools = []
        for name, defn in self._tool_definitions.items():
            tools.append({
                "name": defn.name,
                "description": defn.description,
                "inputSchema": defn.input_schema
            })
        return {"tools": tools}

    async def handle_call_tool(
        self,
        name: str,
        arguments: Optional[Dict[str, Any]]
    ) -> Dict[str, Any]:
        """
        Handle tools/call request.

        Executes the requested tool and returns results. Tool handlers never
        raise; the except clause only guards against a broken handler.
        """
        if name not in self._tools:
            return {
                "content": [{
                    "type": "text",
                    "text": f"Unknown tool: {name}"
                }],
                "isError": True
            }

        logger.info("tools/call %s", name)
        try:
            handler = self._tools[name]
            result = await handler(self.context, arguments or {})
            return {
                "content": result.content,
                "isError": result.is_error
            }
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.exception("tool %s failed", name)
            return {
                "content": [{
                    "type": "text",
                    "text": f"Tool error: {str(e)}"
                }],
                "isError": True
            }

    def handle_cancelled(self, params: Dict[str, Any]) -> None:
        """Handle notifications/cancelled by cancelling the in-flight call."""
        request_id = (params or {}).get("requestId")
        task = self._in_flight.get(request_id)
        if task is not None and not task.done():
            logger.info("cancelling request %s: %s", request_id, params.get("reason", ""))
            task.cancel()

    # =========================================================================
    # JSON-RPC Processing
    # =========================================================================

    async def process_request(
        self,
        request: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]:
        """
        Process a JSON-RPC request.

        Args:
            request: The JSON-RPC request object

        Returns:
            Response object, or None for notifications
        """
        method = request.get("method", "")
        params = request.get("params") or {}
        request_id = request.get("id")

        # Route to appropriate handler
        try:
            if method == "initialize":
                result = await self.handle_initialize(params)
            elif method == "notifications/initialized":
                # Client acknowledged initialization
                return None
            elif method == "notifications/cancelled":
                self.handle_cancelled(params)
                return None
            elif method == "ping":
                result = {}
            elif method == "tools/list":
                result = await self.handle_list_tools()
            elif method == "tools/call":
                name = params.get("name", "")
                arguments = params.get("arguments", {})
                result = await self.handle_call_tool(name, arguments)
            else:
                error = {
                    "code": -32601,
                    "message": f"Method not found: {method}"
                }
                if request_id is not None:
                    return {
                        "jsonrpc": "2.0",
                        "id": request_id,
                        "error": error
                    }
                return None

            # Build response
            if request_id is not None:
                return {
                    "jsonrpc": "2.0",
                    "id": request_id,
                    "result": result
                }
            return None

        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.exception("error processing %s", method)
            error = {
                "code": -32603,
                "message": f"Internal error: {str(e)}"
            }
            if request_id is not None:
                return {
                    "jsonrpc": "2.0",
                    "id": request_id,
                    "error": error
                }
            return None

    # =========================================================================
    # Server Main Loop
    # =========================================================================

    def _send(self, response: Dict[str, Any]) -> None:
        """Write one JSON-RPC message to stdout."""
        sys.stdout.write(json.dumps(response) + "\n")
        sys.stdout.flush()

    async def _dispatch_call(self, request: Dict[str, Any]) -> None:
        """Run a tools/call request as a task and send its response."""
        try:
            response = await self.process_request(request)
        except asyncio.CancelledError:
            # No response is sent for a cancelled request.
            return
        if response is not None:
            self._send(response)

    def _track(self, request_id: Any, task: asyncio.Task) -> None:
        """
        Remember a running tools/call so it can be cancelled and awaited.

        Calls without an id go into a separate set. A finished task only
        removes its own table entry, so a reused id keeps the newer task.
        """
        if request_id is None:
            self._anonymous.add(task)
            task.add_done_callback(self._anonymous.discard)
            return

        self._in_flight[request_id] = task

        def forget(done: asyncio.Task) -> None:
            if self._in_flight.get(request_id) is done:
                del self._in_flight[request_id]

        task.add_done_callback(forget)

    async def handle_line(self, line: str) -> None:
        """Parse and route one line of input."""
        line = line.strip()
        if not line:
            return

        # Parse JSON-RPC request
        try:
            request = json.loads(line)
        except json.JSONDecodeError:
            self._send({
                "jsonrpc": "2.0",
                "id": None,
                "error": {"code": -32700, "message": "Parse error"}
            })
            return

        if not isinstance(request, dict):
            return

        if request.get("method") == "tools/call":
            self._track(request.get("id"), asyncio.ensure_future(self._dispatch_call(request)))
            return

        response = await self.process_request(request)
        if response is not None:
            self._send(response)

    async def run(self) -> None:
        """
        Run the MCP server.

        Reads JSON-RPC requests from stdin, processes them, and writes
        responses to stdout. Runs until stdin is closed, then waits for
        in-flight tool calls to finish.
        """
        reader = asyncio.StreamReader()
        protocol = asyncio.StreamReaderProtocol(reader)
        await asyncio.get_running_loop().connect_read_pipe(
            lambda: protocol, sys.stdin
        )
        logger.info("%s %s ready on stdio", self.SERVER_NAME, self.SERVER_VERSION)

        while True:
            try:
                # Read a line
                line = await reader.readline()
                if not line:
                    break  # EOF

                await self.handle_line(line.decode('utf-8'))

            except Exception as e:
                # Log error but continue running
                logger.error("Server error: %s", e)

        await self.drain()

    async def drain(self) -> None:
        """Wait for every tools/call still running, with or without an id."""
        pending = [
            task for task in (*self._in_flight.values(), *self._anonymous)
            if not task.done()
        ]
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)


# =============================================================================
# Main Entry Point
# =============================================================================

def main() -> None:
    """Run the MCP server from command line."""
    logging.basicConfig(level=logging.INFO, stream=sys.stderr)
    server = MCPServer()
    asyncio.run(server.run())


if __name__ == "__main__":
    main()
