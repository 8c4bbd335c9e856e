"""
SDK and Emulator Clients
========================

Async wrappers for the Android SDK command-line tools:

- avdmanager: list and create Android Virtual Devices
- emulator: launch an AVD (fire-and-forget)
- sdkmanager: list, install and update SDK packages

Copyright (c) 2025 Hugo José Pinto & Contributors
"""

import asyncio
import logging
from typing import Dict, List, Optional, Set

from android_mcp.bridge.executor import CommandExecutor, CommandResult
from android_mcp.bridge.models import EmulatorJob, VirtualDevice
from android_mcp.config import ServerConfig

logger = logging.getLogger(__name__)

# avdmanager prints this before AVDs whose config is broken
UNLOADABLE_SECTION = "could not be loaded"

# Fields of `avdmanager list avd` mapped to VirtualDevice attributes
AVD_FIELDS = {
    "Name": "name",
    "Device": "device",
    "Path": "path",
    "Target": "target",
    "Based on": "based_on",
}


# =============================================================================
# Output Parsing
# =============================================================================

def parse_avd_list(output: str) -> List[VirtualDevice]:
    """
    Parse `avdmanager list avd` output.

    Example input:
        Available Android Virtual Devices:
            Name: Pixel_6_API_34
          Device: pixel_6 (Google)
            Path: /home/dev/.android/avd/Pixel_6_API_34.avd
          Target: Google APIs (Google Inc.)
                  Based on: Android 14.0 ("UpsideDownCake") Tag/ABI: google_apis/x86_64
        ---------
            Name: Small_Phone
            ...

    Entries listed under "The following Android Virtual Devices could not
    be loaded" are skipped.
    """
    avds = []
    current: Dict[str, str] = {}

    def flush() -> None:
        if current.get("name"):
            avds.append(VirtualDevice(**current))
        current.clear()

    for line in output.splitlines():
        stripped = line.strip()
        if not stripped:
            continue
        if UNLOADABLE_SECTION in stripped:
            break
        if stripped.startswith("---"):
            flush()
            continue

        key, sep, value = stripped.partition(":")
        attr = AVD_FIELDS.get(key.strip())
        if not sep or attr is None:
            continue
        if attr == "name" and current.get("name"):
            flush()
        current[attr] = value.strip()

    flush()
    return avds


# =============================================================================
# avdmanager
# =============================================================================

class AvdManagerClient:
    """Wrapper around `avdmanager`."""

    def __init__(self, executor: CommandExecutor, config: ServerConfig):
        self.executor = executor
        self.config = config

    async def list_avds(self) -> List[VirtualDevice]:
        """
        List AVD definitions.

        Raises:
            ExternalToolFailure: If avdmanager fails or is missing
        """
        result = await self.executor.run(
            [self.config.avdmanager_path, "list", "avd"],
            timeout=self.config.timeouts.query,
        )
        result.raise_for_status(
            "Error listing AVDs",
            hint="Ensure Android SDK tools are installed and in PATH.",
        )
        return parse_avd_list(result.stdout)

    async def find_avd(self, name: str) -> Optional[VirtualDevice]:
        """Find an AVD by case-insensitive name."""
        for avd in await self.list_avds():
            if avd.matches(name):
                return avd
        return None

    async def create_avd(
        self,
        name: str,
        package: str,
        device: str,
        force: bool = False,
    ) -> CommandResult:
        """
        Run `avdmanager create avd`.

        avdmanager asks whether to create a custom hardware profile; the
        answer "no" is written to stdin so the command never blocks.
        """
        args = [
            self.config.avdmanager_path, "create", "avd",
            "-n", name,
            "-k", package,
            "-d", device,
        ]
        if force:
            args.append("--force")
        return await self.executor.run(
            args,
            timeout=self.config.timeouts.transfer,
            input_text="no\n",
        )


# =============================================================================
# emulator
# =============================================================================

class EmulatorLauncher:
    """
    Starts emulator processes without waiting for them to boot.

    The launcher keeps a reaper task per spawned process so that exited
    emulators do not linger as zombies. That task is the only work in the
    server that outlives the tool invocation which started it.
    """

    def __init__(self, executor: CommandExecutor, config: ServerConfig):
        self.executor = executor
        self.config = config
        self._reapers: Set[asyncio.Task] = set()

    @staticmethod
    def build_args(emulator_path: str, name: str, no_window: bool, wipe_data: bool) -> List[str]:
        args = [emulator_path, f"@{name}"]
        if no_window:
            args.append("-no-window")
        if wipe_data:
            args.append("-wipe-data")
        return args

    async def start(self, name: str, no_window: bool = False, wipe_data: bool = False) -> EmulatorJob:
        """
        Launch `emulator @name`.

        Returns:
            EmulatorJob in the "submitted" state

        Raises:
            ToolNotInstalledError: If the emulator binary is missing
        """
        args = self.build_args(self.config.emulator_path, name, no_window, wipe_data)
        process = await self.executor.spawn(args)
        job = EmulatorJob(avd_name=name, pid=process.pid, args=args)
        logger.info("emulator for AVD '%s' submitted (pid %s)", name, job.pid)

        task = asyncio.ensure_future(self._reap(job, process))
        self._reapers.add(task)
        task.add_done_callback(self._reapers.discard)
        return job

    @staticmethod
    async def _reap(job: EmulatorJob, process) -> None:
        returncode = await process.wait()
        logger.info("emulator for AVD '%s' (pid %s) exited with %s", job.avd_name, job.pid, returncode)


# =============================================================================
# sdkmanager
# =============================================================================

class SdkManagerClient:
    """Wrapper around `sdkmanager`."""

    def __init__(self, executor: CommandExecutor, config: ServerConfig):
        self.executor = executor
        self.config = config

    def _license_input(self, accept_licenses: bool) -> Optional[str]:
        """
        Build stdin for sdkmanager.

        A fixed number of "y" answers is supplied. If sdkmanager asks more
        questions than that it reads EOF and the exit code tells the story.
        """
        if not accept_licenses:
            return None
        return "y\n" * self.config.license_responses

    async def list_packages(self, include_obsolete: bool = False) -> CommandResult:
        args = [self.config.sdkmanager_path, "--list"]
        if include_obsolete:
            args.append("--include_obsolete")
        return await self.executor.run(args, timeout=self.config.timeouts.sdk)

    async def install(self, package: str, accept_licenses: bool = False) -> CommandResult:
        return await self.executor.run(
            [self.config.sdkmanager_path, package],
            timeout=self.config.timeouts.sdk,
            input_text=self._license_input(accept_licenses),
        )

    async def update(self, accept_licenses: bool = False) -> CommandResult:
        return await self.executor.run(
            [self.config.sdkmanager_path, "--update"],
            timeout=self.config.timeouts.sdk,
            input_text=self._license_input(accept_licenses),
        )
