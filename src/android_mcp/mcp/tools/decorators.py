"""
MCP Tool Decorators
===================

Decorators for reducing boilerplate in tool implementations.

Usage:
    @mcp_tool(ANDROID_SHELL, "Error executing shell command")
    @requires_device()
    async def android_shell(device, context, params) -> ToolResult:
        # params are validated, device is resolved and online
        result = await context.adb.shell(device.serial, params["command"])
        return success_result(...)

The handler produced by @mcp_tool has the signature expected by the
server, `handler(context, args) -> ToolResult`, and carries its
ToolDescriptor as `handler.descriptor`.

Copyright (c) 2025 Hugo José Pinto & Contributors
"""

import asyncio
import functools
import logging
from typing import Any, Callable, Dict, Optional, TypeVar

from android_mcp.errors import AndroidMcpError
from ..server import DeviceContext, ToolResult
from .core import error_result, result_from_error
from .resolver import resolve_device
from .schema import ToolDescriptor

logger = logging.getLogger(__name__)

# Type variable for generic tool functions
F = TypeVar('F', bound=Callable[..., Any])


def mcp_tool(
    descriptor: ToolDescriptor,
    error_prefix: str,
    extract: bool = True,
) -> Callable[[F], F]:
    """
    Decorator that validates arguments and wraps exceptions into results.

    With extract=True the argument bag is validated against the descriptor
    and the tool receives (context, params). With extract=False the raw
    bag is passed through and the tool extracts what it needs itself.

    AndroidMcpError becomes its own message text. Any other exception
    becomes "<error_prefix>: <message>". Either way the server always gets
    a valid ToolResult.
    """
    def decorate(func: F) -> F:
        @functools.wraps(func)
        async def wrapper(context: DeviceContext, args: Optional[Dict[str, Any]]) -> ToolResult:
            try:
                params = descriptor.extract(args) if extract else (args or {})
                return await func(context, params)
            except asyncio.CancelledError:
                raise
            except AndroidMcpError as e:
                logger.info("%s: %s", descriptor.name, e)
                return result_from_error(e)
            except Exception as e:
                logger.exception("%s failed", descriptor.name)
                return error_result(f"{error_prefix}: {e}")

        wrapper.descriptor = descriptor  # type: ignore[attr-defined]
        return wrapper  # type: ignore
    return decorate


def requires_device(emulator_only: bool = False, start_server: bool = False) -> Callable[[F], F]:
    """
    Decorator that resolves the target device and passes it to the tool.

    Reads `deviceSerial` from the extracted params and runs the device
    resolver. Resolution failures are raised and reported by @mcp_tool.

    The decorated function signature changes from:
        async def tool(context, params) -> ToolResult
    to:
        async def tool(device, context, params) -> ToolResult
    """
    def decorate(func: F) -> F:
        @functools.wraps(func)
        async def wrapper(context: DeviceContext, params: Dict[str, Any]) -> ToolResult:
            if start_server:
                await context.adb.start_server()
            device = await resolve_device(
                context,
                params.get("deviceSerial"),
                emulator_only=emulator_only,
            )
            return await func(device, context, params)
        return wrapper  # type: ignore
    return decorate
