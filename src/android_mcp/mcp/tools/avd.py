"""
MCP AVD Tools
=============

Tools for listing, creating, starting and stopping Android Virtual
Devices.

Starting an AVD is fire-and-forget: the emulator process is spawned and
the tool returns at once with a submitted job. The emulator becomes an
online device only when a later enumeration sees it.

Copyright (c) 2025 Hugo José Pinto & Contributors
"""

from typing import Any, Dict

from android_mcp.bridge import Device, VirtualDevice
from android_mcp.errors import AlreadyExistsError, NotFoundError
from ..server import DeviceContext, ToolResult
from .core import success_result
from .decorators import mcp_tool, requires_device
from .formatting import numbered_list
from .schema import ParameterSpec, ParamType, ToolDescriptor

SDK_HINT = "Please ensure Android SDK tools are installed and in PATH."


ANDROID_LIST_AVDS = ToolDescriptor(
    name="android-list-avds",
    description="List available Android Virtual Devices (AVDs)",
)

ANDROID_CREATE_AVD = ToolDescriptor(
    name="android-create-avd",
    description="Create a new Android Virtual Device (AVD)",
    parameters=(
        ParameterSpec(
            "name", ParamType.STRING,
            "Name for the new AVD",
            required=True,
        ),
        ParameterSpec(
            "package", ParamType.STRING,
            "System image package (e.g., 'system-images;android-33;google_apis;x86_64')",
            required=True,
        ),
        ParameterSpec(
            "device", ParamType.STRING,
            "Device definition (optional, defaults to 'pixel')",
        ),
        ParameterSpec(
            "force", ParamType.BOOLEAN,
            "Force creation if AVD already exists (default: false)",
            default=False,
        ),
    ),
)

ANDROID_START_AVD = ToolDescriptor(
    name="android-start-avd",
    description="Start an Android Virtual Device (AVD)",
    parameters=(
        ParameterSpec(
            "name", ParamType.STRING,
            "Name of the AVD to start",
            required=True,
        ),
        ParameterSpec(
            "noWindow", ParamType.BOOLEAN,
            "Start AVD without graphical window (headless mode, default: false)",
            default=False,
        ),
        ParameterSpec(
            "wipeData", ParamType.BOOLEAN,
            "Wipe user data before starting (default: false)",
            default=False,
        ),
    ),
)

ANDROID_STOP_AVD = ToolDescriptor(
    name="android-stop-avd",
    description="Stop a running Android Virtual Device (AVD)",
    parameters=(
        ParameterSpec(
            "deviceSerial", ParamType.STRING,
            "Device serial number of the AVD to stop (optional, stops first emulator if not specified)",
        ),
        ParameterSpec(
            "force", ParamType.BOOLEAN,
            "Force stop the AVD (default: false)",
            default=False,
        ),
    ),
)


def describe_avd(avd: VirtualDevice) -> str:
    text = f"Name: {avd.name}"
    if avd.target:
        text += f", Target: {avd.target}"
    if avd.device:
        text += f", Device: {avd.device}"
    if avd.based_on:
        text += f", Based on: {avd.based_on}"
    return text


@mcp_tool(ANDROID_LIST_AVDS, "Error listing AVDs")
async def android_list_avds(
    context: DeviceContext,
    params: Dict[str, Any]
) -> ToolResult:
    """List AVD definitions known to avdmanager."""
    avds = await context.avd_manager.list_avds()
    if not avds:
        return success_result(
            "No Android Virtual Devices (AVDs) found. You can create AVDs using:\n"
            "- Android Studio AVD Manager\n"
            "- Command line: avdmanager create avd -n <name> -k <systemImage>"
        )
    listing = numbered_list(describe_avd(avd) for avd in avds)
    return success_result(f"Found {len(avds)} Android Virtual Device(s):\n\n{listing}")


@mcp_tool(ANDROID_CREATE_AVD, "Error creating AVD")
async def android_create_avd(
    context: DeviceContext,
    params: Dict[str, Any]
) -> ToolResult:
    """
    Create an AVD from a system image package.

    An existing AVD with the same name (ignoring case) is only replaced
    when force is set.
    """
    name = params["name"]
    package = params["package"]
    device = params["device"] or context.config.default_avd_device
    force = params["force"]

    if not force and await context.avd_manager.find_avd(name) is not None:
        raise AlreadyExistsError(
            "AVD",
            name,
            f"Error: AVD '{name}' already exists. Use force=true to overwrite.",
        )

    result = await context.avd_manager.create_avd(name, package, device, force=force)
    result.raise_for_status(f"Failed to create AVD '{name}'", hint=SDK_HINT)
    return success_result(
        f"Successfully created AVD '{name}' with package '{package}' and device '{device}'"
    )


@mcp_tool(ANDROID_START_AVD, "Error starting AVD")
async def android_start_avd(
    context: DeviceContext,
    params: Dict[str, Any]
) -> ToolResult:
    """
    Launch the emulator for an AVD without waiting for it to boot.

    Returns:
        ToolResult describing the submitted launch
    """
    name = params["name"]
    avd = await context.avd_manager.find_avd(name)
    if avd is None:
        raise NotFoundError(
            "AVD",
            name,
            f"Error: AVD '{name}' not found. Use android-list-avds to see available AVDs.",
        )

    job = await context.emulator.start(
        avd.name,
        no_window=params["noWindow"],
        wipe_data=params["wipeData"],
    )

    options = []
    if params["noWindow"]:
        options.append("headless mode")
    if params["wipeData"]:
        options.append("wiped data")
    options_text = f" ({', '.join(options)})" if options else ""

    return success_result(
        f"Start of AVD '{job.avd_name}' {job.state}{options_text}, emulator pid {job.pid}. "
        f"It may take a few moments to fully boot; use android-devices to check "
        f"when it is online."
    )


@mcp_tool(ANDROID_STOP_AVD, "Error stopping AVD")
@requires_device(emulator_only=True)
async def android_stop_avd(
    device: Device,
    context: DeviceContext,
    params: Dict[str, Any]
) -> ToolResult:
    """
    Stop a running emulator.

    force kills the emulator through its console (`adb emu kill`);
    otherwise the guest is asked to power off (`reboot -p`). The adb
    connection drops during power-off, so that command's exit status is
    not checked.
    """
    if params["force"]:
        result = await context.adb.emu_kill(device.serial)
        result.raise_for_status(f"Failed to stop AVD {device.serial}")
    else:
        await context.adb.shell(device.serial, "reboot -p")
    return success_result(f"Successfully stopped AVD {device.serial}")
