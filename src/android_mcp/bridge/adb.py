"""
ADB Client
==========

Thin async client for the Android Debug Bridge command-line tool.

Every method shells out to `adb` through the CommandExecutor; nothing is
cached between calls, so device and package state always reflect the
moment of the query.

Copyright (c) 2025 Hugo José Pinto & Contributors
"""

import logging
import shlex
from typing import Dict, List, Optional

from android_mcp.bridge.executor import CommandExecutor, CommandResult
from android_mcp.bridge.models import Device, DeviceState, Package
from android_mcp.config import ServerConfig

logger = logging.getLogger(__name__)

PACKAGE_PREFIX = "package:"


# =============================================================================
# Output Parsing
# =============================================================================

def parse_devices(output: str) -> List[Device]:
    """
    Parse `adb devices -l` output.

    Example input:
        List of devices attached
        emulator-5554   device product:sdk_gphone64 model:sdk_gphone64 device:emu64xa transport_id:1
        R58M41ABCDE     unauthorized usb:1-1 transport_id:2

    Daemon chatter ("* daemon started successfully") and the header line
    are skipped. Devices are returned in the order adb printed them.
    """
    devices = []
    for line in output.splitlines():
        line = line.strip()
        if not line or line.startswith("*") or line.startswith("List of devices"):
            continue

        parts = line.split()
        if len(parts) < 2:
            continue

        serial = parts[0]
        rest = parts[1:]
        if rest[0] == "no" and len(rest) > 1 and rest[1].startswith("permissions"):
            raw_state = "no permissions"
        else:
            raw_state = rest[0]

        props: Dict[str, str] = {}
        for token in rest[1:]:
            key, sep, value = token.partition(":")
            if sep and key and value:
                props[key] = value

        devices.append(Device(
            serial=serial,
            state=DeviceState.from_adb(raw_state),
            raw_state=raw_state,
            is_emulator=serial.startswith("emulator-"),
            model=props.get("model"),
            product=props.get("product"),
            device=props.get("device"),
            transport_id=props.get("transport_id"),
        ))
    return devices


def parse_packages(output: str) -> List[str]:
    """Parse `pm list packages` output into package names, keeping order."""
    names = []
    for line in output.splitlines():
        line = line.strip()
        if line.startswith(PACKAGE_PREFIX):
            name = line[len(PACKAGE_PREFIX):].strip()
            if name:
                names.append(name)
    return names


# =============================================================================
# Client
# =============================================================================

class AdbClient:
    """
    Async wrapper around the adb binary.

    Attributes:
        executor: Runs the adb processes
        config: Server configuration (binary path, timeouts)
    """

    def __init__(self, executor: CommandExecutor, config: ServerConfig):
        self.executor = executor
        self.config = config

    @property
    def adb_path(self) -> str:
        return self.config.adb_path

    async def _run(
        self,
        args: List[str],
        serial: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> CommandResult:
        """Run adb, targeting `serial` with -s when given."""
        cmd = [self.adb_path]
        if serial:
            cmd += ["-s", serial]
        cmd += args
        return await self.executor.run(cmd, timeout=timeout)

    async def start_server(self) -> CommandResult:
        """Start the adb daemon. Harmless if it is already running."""
        result = await self._run(["start-server"], timeout=self.config.timeouts.query)
        return result.raise_for_status("Failed to start adb server")

    async def list_devices(self) -> List[Device]:
        """
        Enumerate connected devices.

        Returns:
            Devices in adb enumeration order (may be empty)

        Raises:
            ExternalToolFailure: If adb itself fails
        """
        result = await self._run(["devices", "-l"], timeout=self.config.timeouts.query)
        result.raise_for_status("Error listing Android devices")
        devices = parse_devices(result.stdout)
        logger.debug("adb reported %d device(s)", len(devices))
        return devices

    async def shell(
        self,
        serial: str,
        command: str,
        timeout: Optional[float] = None,
    ) -> CommandResult:
        """
        Run a shell command on the device.

        The command string is passed as a single argument and interpreted
        by the device's shell. The result is returned unchecked; callers
        decide what counts as failure.
        """
        if timeout is None:
            timeout = self.config.timeouts.shell
        return await self._run(["shell", command], serial=serial, timeout=timeout)

    async def file_exists(self, serial: str, remote_path: str) -> bool:
        """Probe for a regular file on the device with `test -f`."""
        marker = self.config.markers.remote_exists
        probe = f"test -f {shlex.quote(remote_path)} && echo '{marker}' || echo 'not found'"
        result = await self.shell(serial, probe, timeout=self.config.timeouts.query)
        return marker in "".join(result.lines).strip()

    async def list_packages(self, serial: str, include_uninstalled: bool = False) -> List[Package]:
        """
        List packages on the device.

        With include_uninstalled, packages that were removed but kept their
        data (`pm list packages -u`) are included and flagged installed=False.
        """
        timeout = self.config.timeouts.query
        result = await self.shell(serial, "pm list packages", timeout=timeout)
        result.raise_for_status(f"Error listing packages on device {serial}")
        installed = parse_packages(result.stdout)

        if not include_uninstalled:
            return [Package(name) for name in installed]

        result = await self.shell(serial, "pm list packages -u", timeout=timeout)
        result.raise_for_status(f"Error listing packages on device {serial}")
        present = set(installed)
        return [Package(name, installed=name in present) for name in parse_packages(result.stdout)]

    async def install(
        self,
        serial: str,
        apk_path: str,
        reinstall: bool = False,
        grant_permissions: bool = False,
    ) -> CommandResult:
        """Run `adb install` with -r / -g mapped from the flags."""
        args = ["install"]
        if reinstall:
            args.append("-r")
        if grant_permissions:
            args.append("-g")
        args.append(apk_path)
        return await self._run(args, serial=serial, timeout=self.config.timeouts.transfer)

    async def push(self, serial: str, local_path: str, remote_path: str) -> CommandResult:
        return await self._run(
            ["push", local_path, remote_path],
            serial=serial,
            timeout=self.config.timeouts.transfer,
        )

    async def pull(self, serial: str, remote_path: str, local_path: str) -> CommandResult:
        return await self._run(
            ["pull", remote_path, local_path],
            serial=serial,
            timeout=self.config.timeouts.transfer,
        )

    async def emu_kill(self, serial: str) -> CommandResult:
        """Ask the emulator console to exit immediately."""
        return await self._run(["emu", "kill"], serial=serial, timeout=self.config.timeouts.shell)
