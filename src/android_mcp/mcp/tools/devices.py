"""
MCP Device Tools
================

Tools for enumerating connected devices and emulators.

Copyright (c) 2025 Hugo José Pinto & Contributors
"""

from typing import Any, Dict

from android_mcp.bridge import Device
from android_mcp.errors import NoDevicesError
from ..server import DeviceContext, ToolResult
from .core import success_result
from .decorators import mcp_tool
from .formatting import numbered_list
from .schema import ToolDescriptor


ANDROID_DEVICES = ToolDescriptor(
    name="android-devices",
    description="List connected Android devices and emulators",
)

ANDROID_DEVICES_LIST = ToolDescriptor(
    name="android-devices-list",
    description="List all connected Android devices and emulators",
)


def describe_device(device: Device) -> str:
    """One-line summary: serial, product, model, emulator flag and non-online state."""
    text = f"Serial: {device.serial}"
    if device.product:
        text += f", Product: {device.product}"
    if device.model:
        text += f", Model: {device.model}"
    if device.is_emulator:
        text += " (Emulator)"
    if not device.is_online:
        text += f" [{device.raw_state or device.state.value}]"
    return text


@mcp_tool(ANDROID_DEVICES, "Error listing Android devices")
async def android_devices(
    context: DeviceContext,
    params: Dict[str, Any]
) -> ToolResult:
    """
    List connected devices with product and model details.

    Returns:
        ToolResult with a numbered device list, or setup guidance when
        nothing is connected
    """
    devices = await context.adb.list_devices()
    if not devices:
        raise NoDevicesError()

    listing = numbered_list(describe_device(d) for d in devices)
    return success_result(f"Found {len(devices)} Android device(s):\n\n{listing}")


@mcp_tool(ANDROID_DEVICES_LIST, "Error listing Android devices")
async def android_devices_list(
    context: DeviceContext,
    params: Dict[str, Any]
) -> ToolResult:
    """
    Start the adb daemon if needed, then list devices with their state.
    """
    await context.adb.start_server()
    devices = await context.adb.list_devices()

    lines = ["Connected Android Devices:"]
    if not devices:
        lines.append("No devices connected.")
        lines.append(NoDevicesError.REMEDIATION)
    for device in devices:
        state = device.raw_state or device.state.value
        lines.append(f"- {device.serial} ({state}) - {device.display_model}")
    return success_result("\n".join(lines))
