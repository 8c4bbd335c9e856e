"""
MCP File Transfer Tools
=======================

Tools for copying files between the local system and a device.

Copyright (c) 2025 Hugo José Pinto & Contributors
"""

import posixpath
from pathlib import Path
from typing import Any, Dict

from android_mcp.bridge import Device
from android_mcp.errors import ExternalToolFailure, NotFoundError
from ..server import DeviceContext, ToolResult
from .core import success_result
from .decorators import mcp_tool, requires_device
from .schema import DEVICE_SERIAL, ParameterSpec, ParamType, ToolDescriptor


ANDROID_PUSH_FILE = ToolDescriptor(
    name="android-push-file",
    description="Push a file from local system to Android device",
    parameters=(
        ParameterSpec(
            "localPath", ParamType.STRING,
            "Local file path to push",
            required=True,
        ),
        ParameterSpec(
            "remotePath", ParamType.STRING,
            "Remote path on device (e.g., '/sdcard/myfile.txt')",
            required=True,
        ),
        DEVICE_SERIAL,
    ),
)

ANDROID_PULL_FILE = ToolDescriptor(
    name="android-pull-file",
    description="Pull a file from Android device to local system",
    parameters=(
        ParameterSpec(
            "remotePath", ParamType.STRING,
            "Remote file path on device (e.g., '/sdcard/myfile.txt')",
            required=True,
        ),
        ParameterSpec(
            "localPath", ParamType.STRING,
            "Local path to save the file",
            required=True,
        ),
        DEVICE_SERIAL,
    ),
)


@mcp_tool(ANDROID_PUSH_FILE, "Error pushing file")
async def android_push_file(
    context: DeviceContext,
    params: Dict[str, Any]
) -> ToolResult:
    """
    Push a local file to the device.

    The local file is checked before any device is contacted.
    """
    local = Path(params["localPath"]).expanduser()
    if not local.is_file():
        raise NotFoundError(
            "file",
            params["localPath"],
            f"Error: Local file '{params['localPath']}' not found",
        )
    return await _push_to_device(context, params)


@requires_device()
async def _push_to_device(
    device: Device,
    context: DeviceContext,
    params: Dict[str, Any]
) -> ToolResult:
    local = Path(params["localPath"]).expanduser()
    remote = params["remotePath"]

    result = await context.adb.push(device.serial, str(local), remote)
    result.raise_for_status(f"Failed to push file to device {device.serial}")

    return success_result(
        f"Successfully pushed '{params['localPath']}' ({local.stat().st_size} bytes) "
        f"to '{remote}' on device {device.serial}"
    )


@mcp_tool(ANDROID_PULL_FILE, "Error pulling file")
@requires_device()
async def android_pull_file(
    device: Device,
    context: DeviceContext,
    params: Dict[str, Any]
) -> ToolResult:
    """
    Pull a file from the device.

    The remote file is probed with `test -f` first. Missing parent
    directories of the destination are created; when the destination is an
    existing directory the remote file name is appended.
    """
    remote = params["remotePath"]
    if not await context.adb.file_exists(device.serial, remote):
        raise NotFoundError(
            "file",
            remote,
            f"Error: Remote file '{remote}' not found on device {device.serial}",
        )

    local = Path(params["localPath"]).expanduser()
    if local.is_dir():
        local = local / posixpath.basename(remote.rstrip("/"))
    local.parent.mkdir(parents=True, exist_ok=True)

    result = await context.adb.pull(device.serial, remote, str(local))
    result.raise_for_status(f"Failed to pull file from device {device.serial}")

    if not local.is_file():
        raise ExternalToolFailure(
            f"Failed to pull file from device {device.serial}",
            command=result.args,
            stderr=f"'{local}' was not created",
        )

    return success_result(
        f"Successfully pulled '{remote}' from device {device.serial} "
        f"to '{local}' ({local.stat().st_size} bytes)"
    )
