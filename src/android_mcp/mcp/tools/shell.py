"""
MCP Shell Tools
===============

Tools that run commands in the device shell: arbitrary shell commands and
logcat retrieval.

Copyright (c) 2025 Hugo José Pinto & Contributors
"""

from typing import Any, Dict

from android_mcp.bridge import Device
from ..server import DeviceContext, ToolResult
from .core import success_result
from .decorators import mcp_tool, requires_device
from .formatting import filter_entries, filter_suffix
from .schema import DEVICE_SERIAL, ParameterSpec, ParamType, ToolDescriptor

LOG_LEVELS = ("V", "D", "I", "W", "E", "F")


ANDROID_SHELL = ToolDescriptor(
    name="android-shell",
    description="Execute a shell command on a connected Android device",
    parameters=(
        ParameterSpec(
            "command", ParamType.STRING,
            "Shell command to execute on the Android device",
            required=True,
        ),
        ParameterSpec(
            "deviceSerial", ParamType.STRING,
            "Device serial number (optional, uses first device if not specified)",
        ),
    ),
)

ANDROID_LOGCAT = ToolDescriptor(
    name="android-logcat",
    description="Get logcat output from Android device",
    parameters=(
        DEVICE_SERIAL,
        ParameterSpec(
            "filter", ParamType.STRING,
            "Filter logs by tag or content (optional)",
        ),
        ParameterSpec(
            "level", ParamType.ENUM,
            "Minimum log level (V, D, I, W, E, F) (optional, default: I)",
            default="I",
            allowed_values=LOG_LEVELS,
        ),
        ParameterSpec(
            "lines", ParamType.INTEGER,
            "Number of recent log lines to retrieve (default: 100, max: 1000)",
            default=100,
            minimum=1,
        ),
        ParameterSpec(
            "clear", ParamType.BOOLEAN,
            "Clear logs before retrieving (default: false)",
            default=False,
        ),
    ),
)


@mcp_tool(ANDROID_SHELL, "Error executing shell command")
@requires_device(start_server=True)
async def android_shell(
    device: Device,
    context: DeviceContext,
    params: Dict[str, Any]
) -> ToolResult:
    """
    Run a shell command on the device and return its output.

    Args:
        device: Target device (injected by @requires_device)
        context: Device context
        params: {"command": str, "deviceSerial": str | None}

    Returns:
        ToolResult with the command output; a non-zero exit is an error
    """
    command = params["command"]
    result = await context.adb.shell(device.serial, command)
    result.raise_for_status("Error executing command")

    output = result.stdout.rstrip() or "(no output)"
    return success_result(
        f"Shell command '{command}' executed on device "
        f"{device.serial} ({device.display_model}):\n\n{output}"
    )


@mcp_tool(ANDROID_LOGCAT, "Error getting logcat")
@requires_device()
async def android_logcat(
    device: Device,
    context: DeviceContext,
    params: Dict[str, Any]
) -> ToolResult:
    """
    Dump recent logcat lines at or above a minimum level.

    `lines` is capped at the configured maximum; the effective value is
    reported in the summary. The filter is applied to the dumped lines,
    ignoring case.
    """
    limits = context.config.limits
    lines = min(params["lines"], limits.logcat_max)
    level = params["level"]
    text_filter = params["filter"]

    if params["clear"]:
        cleared = await context.adb.shell(device.serial, "logcat -c")
        cleared.raise_for_status("Error clearing logcat")

    result = await context.adb.shell(device.serial, f"logcat -d -t {lines} '*:{level}'")
    result.raise_for_status("Error getting logcat")

    entries = result.lines
    if not entries:
        return success_result(f"No logcat entries found on device {device.serial}")

    if text_filter:
        entries = filter_entries(entries, text_filter)
        if not entries:
            return success_result(
                f"No logcat entries found matching filter '{text_filter}' "
                f"on device {device.serial}"
            )

    summary = f"Logcat from device {device.serial}{filter_suffix(text_filter)}"
    if params["clear"]:
        summary += " (logs cleared)"
    summary += f" (level: {level}, lines: {lines})"
    return success_result(f"{summary}:\n\n" + "\n".join(entries))
