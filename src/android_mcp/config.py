"""
Android MCP Server - Configuration
==================================

Server configuration: external binary locations, per-operation timeouts,
listing limits, output markers and the default device selection policy.

Configuration comes from:
- Default values (defined here)
- Command-line options (see android_mcp.cli.main)

No environment variables are consulted; the binaries are looked up on PATH
unless an explicit path is given.

Copyright (c) 2025 Hugo José Pinto & Contributors
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


class DeviceSelection(Enum):
    """
    Policy used when a device-scoped tool is called without a serial.

    FIRST: use the first online device in adb enumeration order.
    REQUIRE_EXPLICIT: refuse to guess when more than one device is online.
    """
    FIRST = "first"
    REQUIRE_EXPLICIT = "require-explicit"


@dataclass
class TimeoutConfig:
    """
    Time budgets in seconds for each class of external command.

    None means no timeout; the command can still be cancelled.

    Attributes:
        query: Device/AVD/package enumeration and existence probes
        shell: Shell commands, logcat, app launch/uninstall, emulator stop
        transfer: File push/pull, APK install, AVD creation
        sdk: sdkmanager list/install/update
    """
    query: Optional[float] = 30.0
    shell: Optional[float] = 120.0
    transfer: Optional[float] = 600.0
    sdk: Optional[float] = None


@dataclass
class MarkerConfig:
    """
    Text markers used where exit codes are not a reliable success signal.

    `adb shell` on older devices always exits 0, so uninstall and launch
    results are read from their output instead.
    """
    uninstall_success: Tuple[str, ...] = ("Success",)
    launch_success: Tuple[str, ...] = ("Events injected", "Starting:")
    launch_failure: Tuple[str, ...] = ("Error:", "No activities found", "does not exist")
    install_failure: Tuple[str, ...] = ("Failure [",)
    remote_exists: str = "exists"


@dataclass
class ListingLimits:
    """
    Display caps for listing tools.

    Attributes:
        packages: Maximum package names shown by android-list-packages
        sdk_packages: Maximum lines shown by android-sdk-manager list
        logcat_default: Log lines fetched when 'lines' is omitted
        logcat_max: Upper bound applied to 'lines'
    """
    packages: int = 50
    sdk_packages: int = 50
    logcat_default: int = 100
    logcat_max: int = 1000


@dataclass
class ServerConfig:
    """
    Configuration for the Android MCP server.

    Attributes:
        adb_path: adb binary (name on PATH or absolute path)
        avdmanager_path: avdmanager binary
        emulator_path: emulator binary
        sdkmanager_path: sdkmanager binary
        device_selection: Default device selection policy
        license_responses: Number of "y" answers fed to sdkmanager
            when acceptLicenses is set
        default_avd_device: Device profile used by android-create-avd
        timeouts: Per-operation timeouts
        markers: Output markers for marker-based success detection
        limits: Listing caps
    """
    adb_path: str = "adb"
    avdmanager_path: str = "avdmanager"
    emulator_path: str = "emulator"
    sdkmanager_path: str = "sdkmanager"

    device_selection: DeviceSelection = DeviceSelection.FIRST
    license_responses: int = 10
    default_avd_device: str = "pixel"

    timeouts: TimeoutConfig = field(default_factory=TimeoutConfig)
    markers: MarkerConfig = field(default_factory=MarkerConfig)
    limits: ListingLimits = field(default_factory=ListingLimits)
