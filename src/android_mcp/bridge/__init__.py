"""
Android Bridge Package
======================

Clients for the external Android tooling consumed by the MCP tools:

- executor: CommandExecutor / CommandResult (asyncio subprocesses)
- adb: AdbClient (device enumeration, shell, install, push/pull)
- sdk: AvdManagerClient, EmulatorLauncher, SdkManagerClient
- models: Device, VirtualDevice, Package, EmulatorJob

Copyright (c) 2025 Hugo José Pinto & Contributors
"""

from .executor import CommandExecutor, CommandResult
from .models import Device, DeviceState, EmulatorJob, Package, VirtualDevice
from .adb import AdbClient, parse_devices, parse_packages
from .sdk import AvdManagerClient, EmulatorLauncher, SdkManagerClient, parse_avd_list

__all__ = [
    # Execution
    "CommandExecutor",
    "CommandResult",
    # Models
    "Device",
    "DeviceState",
    "EmulatorJob",
    "Package",
    "VirtualDevice",
    # adb
    "AdbClient",
    "parse_devices",
    "parse_packages",
    # SDK tools
    "AvdManagerClient",
    "EmulatorLauncher",
    "SdkManagerClient",
    "parse_avd_list",
]
