"""
MCP Tools Package
=================

This package provides all MCP tool implementations for the Android server.

Tools are organized into logical modules:
- devices: Device enumeration
- shell: Shell commands and logcat
- apps: Install, uninstall, launch and list packages
- files: Push and pull files
- avd: List, create, start and stop AVDs
- sdk: SDK package management
- misc: Current date

Helper modules:
- core: Result helpers (text_content, error_result, success_result)
- decorators: Tool decorators (@mcp_tool, @requires_device)
- parsing: Parameter parsing (parse_integer, parse_boolean, parse_choice)
- schema: Tool descriptors and argument extraction
- resolver: Device selection
- formatting: Filtering, capping and listing text
- registry: The served tool set

Copyright (c) 2025 Hugo José Pinto & Contributors
"""

# Core utilities
from .core import (
    text_content,
    error_result,
    success_result,
    result_from_error,
)

# Decorators
from .decorators import (
    mcp_tool,
    requires_device,
)

# Parsing utilities
from .parsing import (
    parse_integer,
    parse_boolean,
    parse_choice,
)

# Schema
from .schema import (
    ParamType,
    ParameterSpec,
    ToolDescriptor,
    DEVICE_SERIAL,
)

# Device resolution
from .resolver import (
    select_device,
    resolve_device,
)

# Device tools
from .devices import (
    android_devices,
    android_devices_list,
)

# Shell tools
from .shell import (
    android_shell,
    android_logcat,
)

# App tools
from .apps import (
    android_install_apk,
    android_uninstall_app,
    android_launch_app,
    android_list_packages,
)

# File tools
from .files import (
    android_push_file,
    android_pull_file,
)

# AVD tools
from .avd import (
    android_list_avds,
    android_create_avd,
    android_start_avd,
    android_stop_avd,
)

# SDK tools
from .sdk import android_sdk_manager

# Misc tools
from .misc import get_date

# Registry
from .registry import ALL_TOOLS, get_tool

__all__ = [
    # Core
    "text_content",
    "error_result",
    "success_result",
    "result_from_error",
    # Decorators
    "mcp_tool",
    "requires_device",
    # Parsing
    "parse_integer",
    "parse_boolean",
    "parse_choice",
    # Schema
    "ParamType",
    "ParameterSpec",
    "ToolDescriptor",
    "DEVICE_SERIAL",
    # Resolution
    "select_device",
    "resolve_device",
    # Devices
    "android_devices",
    "android_devices_list",
    # Shell
    "android_shell",
    "android_logcat",
    # Apps
    "android_install_apk",
    "android_uninstall_app",
    "android_launch_app",
    "android_list_packages",
    # Files
    "android_push_file",
    "android_pull_file",
    # AVDs
    "android_list_avds",
    "android_create_avd",
    "android_start_avd",
    "android_stop_avd",
    # SDK
    "android_sdk_manager",
    # Misc
    "get_date",
    # Registry
    "ALL_TOOLS",
    "get_tool",
]
