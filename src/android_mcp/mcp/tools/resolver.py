"""
MCP Tool Device Resolution
==========================

Maps an optional device serial plus a fresh `adb devices -l` enumeration
to exactly one online target device, or raises an error that explains why
no device could be chosen.

An explicit serial is authoritative: when it does not match, resolution
fails and never falls back to another device.

Copyright (c) 2025 Hugo José Pinto & Contributors
"""

import logging
from typing import Optional, Sequence

from android_mcp.bridge import Device
from android_mcp.config import DeviceSelection
from android_mcp.errors import (
    DeviceNotFoundError,
    DeviceUnavailableError,
    NoDevicesError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def _describe(devices: Sequence[Device]) -> str:
    return "\n".join(f"- {d.serial} ({d.raw_state or d.state.value})" for d in devices)


def select_device(
    devices: Sequence[Device],
    serial: Optional[str] = None,
    policy: DeviceSelection = DeviceSelection.FIRST,
    emulator_only: bool = False,
) -> Device:
    """
    Choose the target device from an enumeration.

    Args:
        devices: Devices in adb enumeration order
        serial: Explicitly requested serial, or None
        policy: What to do when no serial is given
        emulator_only: Restrict candidates to emulators

    Returns:
        The selected, online device

    Raises:
        NoDevicesError: Nothing (online) is connected
        DeviceNotFoundError: The explicit serial is not connected
        DeviceUnavailableError: The explicit serial is offline/unauthorized
        ValidationError: REQUIRE_EXPLICIT policy with several candidates
    """
    if not devices:
        raise NoDevicesError()

    if emulator_only:
        if serial:
            match = next((d for d in devices if d.serial == serial and d.is_emulator), None)
            if match is None:
                raise DeviceNotFoundError(
                    serial,
                    f"Emulator with serial '{serial}' not found or is not an emulator.",
                )
            if not match.is_online:
                raise DeviceUnavailableError(match.serial, match.raw_state or match.state.value)
            return match
        devices = [d for d in devices if d.is_emulator]
        if not devices:
            raise NoDevicesError(
                "No running emulators found.",
                remediation=NoDevicesError.EMULATOR_REMEDIATION,
            )
    elif serial:
        match = next((d for d in devices if d.serial == serial), None)
        if match is None:
            raise DeviceNotFoundError(serial)
        if not match.is_online:
            raise DeviceUnavailableError(match.serial, match.raw_state or match.state.value)
        return match

    online = [d for d in devices if d.is_online]
    if not online:
        raise NoDevicesError(
            "No online Android devices found.",
            detail=f"Connected devices:\n{_describe(devices)}",
        )

    if policy is DeviceSelection.REQUIRE_EXPLICIT and len(online) > 1:
        serials = ", ".join(d.serial for d in online)
        raise ValidationError(
            "deviceSerial",
            "is required when several devices are connected",
            message=(
                f"Error: {len(online)} devices are online ({serials}). "
                f"Specify 'deviceSerial' to choose one."
            ),
        )

    return online[0]


async def resolve_device(
    context,
    serial: Optional[str] = None,
    emulator_only: bool = False,
) -> Device:
    """
    Enumerate devices through adb and select the target.

    Args:
        context: DeviceContext providing the adb client and config
        serial: Explicitly requested serial, or None
        emulator_only: Restrict candidates to emulators
    """
    devices = await context.adb.list_devices()
    device = select_device(
        devices,
        serial,
        policy=context.config.device_selection,
        emulator_only=emulator_only,
    )
    logger.debug("resolved device %s (requested %s)", device.serial, serial or "any")
    return device
