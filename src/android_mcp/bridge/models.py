"""
Bridge Data Model
=================

Value types produced by the adb and SDK clients. None of these are cached:
each tool invocation re-queries the external tools and builds fresh
instances.

Copyright (c) 2025 Hugo José Pinto & Contributors
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class DeviceState(Enum):
    """Connection state reported by `adb devices`."""
    ONLINE = "online"
    OFFLINE = "offline"
    UNAUTHORIZED = "unauthorized"
    UNKNOWN = "unknown"

    @classmethod
    def from_adb(cls, raw: str) -> "DeviceState":
        """Map the adb state column ("device", "offline", ...) to a DeviceState."""
        if raw == "device":
            return cls.ONLINE
        if raw == "offline":
            return cls.OFFLINE
        if raw == "unauthorized":
            return cls.UNAUTHORIZED
        return cls.UNKNOWN


@dataclass(frozen=True)
class Device:
    """
    A connected physical device or running emulator.

    Attributes:
        serial: adb serial (unique while connected)
        state: Connection state
        raw_state: State text exactly as adb printed it
        is_emulator: True for emulator-NNNN serials
        model: ro.product.model as reported by `adb devices -l`
        product: Product name
        device: Device (board) name
        transport_id: adb transport id
    """
    serial: str
    state: DeviceState
    raw_state: str = ""
    is_emulator: bool = False
    model: Optional[str] = None
    product: Optional[str] = None
    device: Optional[str] = None
    transport_id: Optional[str] = None

    @property
    def is_online(self) -> bool:
        return self.state is DeviceState.ONLINE

    @property
    def display_model(self) -> str:
        """Model for user-facing text."""
        return self.model or "Unknown Model"


@dataclass(frozen=True)
class VirtualDevice:
    """
    An Android Virtual Device definition on disk.

    Attributes:
        name: AVD name (compared case-insensitively)
        target: Target platform description
        device: Hardware profile
        based_on: System image description
        path: Location of the .avd directory
    """
    name: str
    target: Optional[str] = None
    device: Optional[str] = None
    based_on: Optional[str] = None
    path: Optional[str] = None

    def matches(self, name: str) -> bool:
        """Case-insensitive name comparison."""
        return self.name.casefold() == name.casefold()


@dataclass(frozen=True)
class Package:
    """An application package on a device."""
    name: str
    installed: bool = True


@dataclass
class EmulatorJob:
    """
    A submitted emulator launch.

    This is deliberately distinct from Device: the process has been started
    but the emulator is not known to adb until a later enumeration finds it.

    Attributes:
        avd_name: The AVD that was launched
        pid: Process id of the emulator
        args: Full argument vector
        state: Always "submitted" when returned by the launcher
    """
    avd_name: str
    pid: Optional[int]
    args: List[str] = field(default_factory=list)
    state: str = "submitted"
