"""
MCP Tool Registry
=================

The fixed set of tools served by the MCP server, in tools/list order.

Copyright (c) 2025 Hugo José Pinto & Contributors
"""

from .apps import android_install_apk, android_launch_app, android_list_packages, android_uninstall_app
from .avd import android_create_avd, android_list_avds, android_start_avd, android_stop_avd
from .devices import android_devices, android_devices_list
from .files import android_pull_file, android_push_file
from .misc import get_date
from .sdk import android_sdk_manager
from .shell import android_logcat, android_shell

ALL_TOOLS = [
    android_devices,
    android_devices_list,
    android_shell,
    android_install_apk,
    android_uninstall_app,
    android_launch_app,
    android_list_packages,
    android_logcat,
    android_push_file,
    android_pull_file,
    android_list_avds,
    android_create_avd,
    android_start_avd,
    android_stop_avd,
    android_sdk_manager,
    get_date,
]

TOOLS_BY_NAME = {tool.descriptor.name: tool for tool in ALL_TOOLS}


def get_tool(name: str):
    """Return the handler registered under `name`, or None."""
    return TOOLS_BY_NAME.get(name)
