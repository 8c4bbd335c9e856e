"""
MCP App Tools
=============

Tools for installing, uninstalling, launching and listing application
packages on a device.

Preconditions are checked against fresh state on every call: the APK
must exist locally before adb is contacted, and uninstall/launch look the
package up in a fresh `pm list packages` listing.

Copyright (c) 2025 Hugo José Pinto & Contributors
"""

import shlex
from pathlib import Path
from typing import Any, Dict, Sequence

from android_mcp.bridge import Device
from android_mcp.errors import ExternalToolFailure, NotFoundError
from ..server import DeviceContext, ToolResult
from .core import error_result, success_result
from .decorators import mcp_tool, requires_device
from .formatting import filter_entries, filter_suffix, format_size, paginate, truncation_note
from .schema import DEVICE_SERIAL, ParameterSpec, ParamType, ToolDescriptor


ANDROID_INSTALL_APK = ToolDescriptor(
    name="android-install-apk",
    description="Install an APK file on a connected Android device",
    parameters=(
        ParameterSpec(
            "apkPath", ParamType.STRING,
            "Path to the APK file to install",
            required=True,
        ),
        ParameterSpec(
            "deviceSerial", ParamType.STRING,
            "Device serial number (optional, uses first device if not specified)",
        ),
        ParameterSpec(
            "reinstall", ParamType.BOOLEAN,
            "Reinstall the app, keeping its data (default: false)",
            default=False,
        ),
        ParameterSpec(
            "grantPermissions", ParamType.BOOLEAN,
            "Grant all runtime permissions listed in the manifest (default: false)",
            default=False,
        ),
    ),
)

ANDROID_UNINSTALL_APP = ToolDescriptor(
    name="android-uninstall-app",
    description="Uninstall an app from a connected Android device by package name",
    parameters=(
        ParameterSpec(
            "packageName", ParamType.STRING,
            "Package name of the app to uninstall (e.g., 'com.example.myapp')",
            required=True,
        ),
        DEVICE_SERIAL,
        ParameterSpec(
            "keepData", ParamType.BOOLEAN,
            "Keep app data and cache when uninstalling (default: false)",
            default=False,
        ),
    ),
)

ANDROID_LAUNCH_APP = ToolDescriptor(
    name="android-launch-app",
    description="Launch an app on a connected Android device by package name",
    parameters=(
        ParameterSpec(
            "packageName", ParamType.STRING,
            "Package name of the app to launch (e.g., 'com.android.settings')",
            required=True,
        ),
        ParameterSpec(
            "activityName", ParamType.STRING,
            "Specific activity to launch (optional, launches main activity if not specified)",
        ),
        DEVICE_SERIAL,
    ),
)

ANDROID_LIST_PACKAGES = ToolDescriptor(
    name="android-list-packages",
    description="List installed packages on a connected Android device",
    parameters=(
        ParameterSpec(
            "deviceSerial", ParamType.STRING,
            "Device serial number (optional, will use first available device if not specified)",
        ),
        ParameterSpec(
            "includeUninstalled", ParamType.BOOLEAN,
            "Include uninstalled packages (default: false)",
            default=False,
        ),
        ParameterSpec(
            "filter", ParamType.STRING,
            "Filter packages by name containing this string (optional)",
        ),
    ),
)


def has_marker(text: str, markers: Sequence[str]) -> bool:
    return any(marker in text for marker in markers)


async def require_package(context: DeviceContext, device: Device, package_name: str) -> None:
    """Raise NotFoundError unless the package is installed on the device."""
    packages = await context.adb.list_packages(device.serial)
    if not any(p.name == package_name for p in packages):
        raise NotFoundError(
            "package",
            package_name,
            f"Package '{package_name}' is not installed on device {device.serial}",
        )


# =============================================================================
# Install
# =============================================================================

@mcp_tool(ANDROID_INSTALL_APK, "Error installing APK")
async def android_install_apk(
    context: DeviceContext,
    params: Dict[str, Any]
) -> ToolResult:
    """
    Install an APK.

    The local file is checked before any device is contacted, so a bad
    path is reported even when nothing is connected.
    """
    apk = Path(params["apkPath"]).expanduser()
    if not apk.is_file():
        raise NotFoundError(
            "APK file",
            params["apkPath"],
            f"Error: APK file not found at path: {params['apkPath']}",
        )
    return await _install_on_device(context, params)


@requires_device(start_server=True)
async def _install_on_device(
    device: Device,
    context: DeviceContext,
    params: Dict[str, Any]
) -> ToolResult:
    apk = Path(params["apkPath"]).expanduser()
    result = await context.adb.install(
        device.serial,
        str(apk),
        reinstall=params["reinstall"],
        grant_permissions=params["grantPermissions"],
    )

    markers = context.config.markers.install_failure
    if not result.ok or has_marker(result.output, markers):
        raise ExternalToolFailure(
            f"Failed to install '{apk.name}' on device {device.serial}",
            command=result.args,
            returncode=result.returncode,
            stderr=result.error_text,
        )

    return success_result(
        f"Successfully installed '{apk.name}' ({format_size(apk.stat().st_size)}) "
        f"on device {device.serial} ({device.display_model})"
    )


# =============================================================================
# Uninstall / Launch
# =============================================================================

@mcp_tool(ANDROID_UNINSTALL_APP, "Error uninstalling app")
@requires_device()
async def android_uninstall_app(
    device: Device,
    context: DeviceContext,
    params: Dict[str, Any]
) -> ToolResult:
    """
    Uninstall a package, optionally keeping its data (`pm uninstall -k`).

    `adb shell` exits 0 on older devices even when pm fails, so success is
    read from the output marker.
    """
    package_name = params["packageName"]
    keep_data = params["keepData"]
    await require_package(context, device, package_name)

    command = "pm uninstall -k" if keep_data else "pm uninstall"
    result = await context.adb.shell(device.serial, f"{command} {shlex.quote(package_name)}")
    output = result.output.strip()

    if result.ok and has_marker(output, context.config.markers.uninstall_success):
        data_text = " (data preserved)" if keep_data else " (data removed)"
        return success_result(
            f"Successfully uninstalled '{package_name}' from device {device.serial}{data_text}"
        )
    return error_result(
        f"Failed to uninstall '{package_name}' from device {device.serial}: "
        f"{output or f'exit status {result.returncode}'}"
    )


@mcp_tool(ANDROID_LAUNCH_APP, "Error launching app")
@requires_device()
async def android_launch_app(
    device: Device,
    context: DeviceContext,
    params: Dict[str, Any]
) -> ToolResult:
    """
    Launch an app's main activity with monkey, or a named activity with
    `am start -n package/activity`.
    """
    package_name = params["packageName"]
    activity = params["activityName"]
    await require_package(context, device, package_name)

    if activity:
        target = f"{package_name}/{activity}"
        command = f"am start -n {shlex.quote(target)}"
    else:
        target = package_name
        command = f"monkey -p {shlex.quote(package_name)} -c android.intent.category.LAUNCHER 1"

    result = await context.adb.shell(device.serial, command)
    output = result.output.strip()
    markers = context.config.markers

    failed = not result.ok or has_marker(output, markers.launch_failure)
    if not failed and (not output or has_marker(output, markers.launch_success)):
        return success_result(f"Successfully launched '{target}' on device {device.serial}")
    return error_result(
        f"Failed to launch '{target}' on device {device.serial}: "
        f"{output or f'exit status {result.returncode}'}"
    )


# =============================================================================
# Listing
# =============================================================================

@mcp_tool(ANDROID_LIST_PACKAGES, "Error listing packages")
@requires_device()
async def android_list_packages(
    device: Device,
    context: DeviceContext,
    params: Dict[str, Any]
) -> ToolResult:
    """
    List packages, optionally including uninstalled-with-data ones.

    At most the configured cap is shown; the remainder is summarized.
    """
    text_filter = params["filter"]
    packages = await context.adb.list_packages(
        device.serial,
        include_uninstalled=params["includeUninstalled"],
    )
    if not packages:
        return success_result(f"No packages found on device {device.serial}")

    matches = filter_entries(packages, text_filter, key=lambda p: p.name)
    if not matches:
        return success_result(
            f"No packages found matching filter '{text_filter}' on device {device.serial}"
        )

    page = paginate(matches, context.config.limits.packages)
    listing = "\n".join(
        p.name if p.installed else f"{p.name} (uninstalled)" for p in page.shown
    )
    text = (
        f"Found {page.total} package(s) on device {device.serial}{filter_suffix(text_filter)}:"
        f"\n\nShowing {len(page.shown)} packages:\n{listing}"
    )
    note = truncation_note(page.remaining, "packages")
    if note:
        text += f"\n\n{note}"
    return success_result(text)
