"""
MCP SDK Manager Tool
====================

One tool, android-sdk-manager, dispatching on an `action` argument:

- list: show SDK packages (optionally obsolete ones), filtered and capped
- install: install one package
- update: update every installed package
- uninstall: always refused with guidance text

Copyright (c) 2025 Hugo José Pinto & Contributors
"""

from typing import Any, Dict, List

from android_mcp.errors import UnsupportedOperation, ValidationError
from ..server import DeviceContext, ToolResult
from .core import success_result
from .decorators import mcp_tool
from .formatting import filter_entries, paginate, truncation_note
from .schema import ParameterSpec, ParamType, ToolDescriptor

SDK_ACTIONS = ("list", "install", "update", "uninstall")

SDK_HINT = "Ensure Android SDK tools are installed and in PATH."

UNINSTALL_GUIDANCE = (
    "Uninstall action is not supported. "
    "Use Android Studio or manually delete SDK components."
)


ANDROID_SDK_MANAGER = ToolDescriptor(
    name="android-sdk-manager",
    description="Manage Android SDK packages and components",
    parameters=(
        ParameterSpec(
            "action", ParamType.ENUM,
            "Action to perform",
            required=True,
            allowed_values=SDK_ACTIONS,
        ),
        ParameterSpec(
            "package", ParamType.STRING,
            "Package name to install/uninstall (required for install/uninstall actions)",
        ),
        ParameterSpec(
            "filter", ParamType.STRING,
            "Filter packages by name (optional, for list action)",
        ),
        ParameterSpec(
            "includeObsolete", ParamType.BOOLEAN,
            "Include obsolete packages in list (default: false)",
            default=False,
        ),
        ParameterSpec(
            "acceptLicenses", ParamType.BOOLEAN,
            "Automatically accept SDK licenses (default: false)",
            default=False,
        ),
    ),
)


def listing_lines(output: str) -> List[str]:
    """
    Keep the meaningful lines of `sdkmanager --list` output.

    Progress bars ("[=====    ] 25% Loading...") and table rules
    ("-------") are dropped.
    """
    lines = []
    for line in output.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("[") or set(stripped) <= set("-| "):
            continue
        lines.append(line.rstrip())
    return lines


@mcp_tool(ANDROID_SDK_MANAGER, "Error managing SDK", extract=False)
async def android_sdk_manager(
    context: DeviceContext,
    args: Dict[str, Any]
) -> ToolResult:
    """
    Dispatch on `action`.

    The action is validated on its own first, so `uninstall` is refused
    before any other argument is looked at.
    """
    action = ANDROID_SDK_MANAGER.extract(args, only=("action",))["action"]
    if action == "uninstall":
        raise UnsupportedOperation(UNINSTALL_GUIDANCE)

    params = ANDROID_SDK_MANAGER.extract(args)
    if action == "list":
        return await _list_packages(context, params)
    if action == "install":
        return await _install_package(context, params)
    return await _update_packages(context, params)


async def _list_packages(context: DeviceContext, params: Dict[str, Any]) -> ToolResult:
    text_filter = params["filter"]
    result = await context.sdk_manager.list_packages(include_obsolete=params["includeObsolete"])
    result.raise_for_status("Error listing SDK packages", hint=SDK_HINT)

    lines = filter_entries(listing_lines(result.stdout), text_filter)
    if not lines:
        if text_filter:
            return success_result(f"No SDK packages found matching filter '{text_filter}'")
        return success_result("No SDK packages found")

    cap = context.config.limits.sdk_packages
    page = paginate(lines, cap)
    if page.remaining:
        header = f"SDK packages (showing first {cap} entries):"
    else:
        header = f"SDK packages ({page.total} entries):"
    text = f"{header}\n\n" + "\n".join(page.shown)
    note = truncation_note(page.remaining, "entries")
    if note:
        text += f"\n\n{note}"
    return success_result(text)


async def _install_package(context: DeviceContext, params: Dict[str, Any]) -> ToolResult:
    package = params["package"]
    if not package:
        raise ValidationError(
            "package",
            "is required for install action",
            message="Error: 'package' parameter is required for install action",
        )

    result = await context.sdk_manager.install(package, accept_licenses=params["acceptLicenses"])
    result.raise_for_status(f"Failed to install SDK package '{package}'", hint=SDK_HINT)
    return success_result(f"Successfully installed SDK package '{package}'")


async def _update_packages(context: DeviceContext, params: Dict[str, Any]) -> ToolResult:
    result = await context.sdk_manager.update(accept_licenses=params["acceptLicenses"])
    result.raise_for_status("Failed to update SDK packages", hint=SDK_HINT)
    return success_result("Successfully updated all SDK packages")
