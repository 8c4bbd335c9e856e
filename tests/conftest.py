"""
Shared Test Fixtures
====================

A scripted CommandExecutor stands in for adb and the SDK tools: tests
register canned results for argument patterns and inspect the commands
that were run.

Copyright (c) 2025 Hugo José Pinto & Contributors
"""

import asyncio

import pytest

from android_mcp.bridge import CommandExecutor, CommandResult
from android_mcp.config import ServerConfig
from android_mcp.mcp.server import DeviceContext


EMULATOR_LINE = (
    "emulator-5554          device product:sdk_gphone64_x86_64 "
    "model:sdk_gphone64_x86_64 device:emu64xa transport_id:1"
)
PHONE_LINE = (
    "R58M41ABCDE            device usb:1-1 product:beyond1 "
    "model:SM_G973F device:beyond1 transport_id:2"
)
UNAUTHORIZED_LINE = "0123456789ABCDEF       unauthorized usb:1-2 transport_id:3"


class FakeProcess:
    """Stand-in for a spawned asyncio subprocess."""

    def __init__(self, pid: int = 4242, returncode: int = 0):
        self.pid = pid
        self.returncode = None
        self._exit = returncode

    async def wait(self) -> int:
        self.returncode = self._exit
        return self._exit


class FakeExecutor(CommandExecutor):
    """
    Scripted executor.

    A rule matches when its tokens appear as a contiguous run in the
    argument vector. The most recently added matching rule wins; unmatched
    commands succeed with no output.
    """

    def __init__(self):
        self.rules = []
        self.calls = []
        self.spawned = []
        self.spawn_error = None

    def on(self, *tokens, stdout="", stderr="", returncode=0, error=None, delay=0, effect=None):
        """
        Script a result for commands containing `tokens`.

        error is raised instead of returning; delay sleeps first (so the
        call can be cancelled); effect(argv) runs before the result is
        returned, e.g. to create a pulled file.
        """
        self.rules.append((list(tokens), stdout, stderr, returncode, error, delay, effect))
        return self

    def set_devices(self, *lines):
        output = "List of devices attached\n" + "".join(f"{line}\n" for line in lines)
        return self.on("devices", "-l", stdout=output)

    def set_packages(self, *names, uninstalled=()):
        self.on("pm list packages", stdout="".join(f"package:{n}\n" for n in names))
        every = list(names) + list(uninstalled)
        return self.on("pm list packages -u", stdout="".join(f"package:{n}\n" for n in every))

    @staticmethod
    def _matches(tokens, argv):
        n = len(tokens)
        return any(argv[i:i + n] == tokens for i in range(len(argv) - n + 1))

    async def run(self, args, timeout=None, input_text=None):
        argv = [str(a) for a in args]
        self.calls.append({"args": argv, "timeout": timeout, "input": input_text})
        for tokens, stdout, stderr, returncode, error, delay, effect in reversed(self.rules):
            if self._matches(tokens, argv):
                if delay:
                    await asyncio.sleep(delay)
                if error is not None:
                    raise error
                if effect is not None:
                    effect(argv)
                return CommandResult(argv, returncode, stdout, stderr)
        return CommandResult(argv, 0, "", "")

    async def spawn(self, args):
        argv = [str(a) for a in args]
        if self.spawn_error is not None:
            raise self.spawn_error
        self.spawned.append(argv)
        return FakeProcess()

    def commands(self):
        """Argument vectors of every run() call, in order."""
        return [call["args"] for call in self.calls]

    def ran(self, *tokens) -> bool:
        return any(self._matches(list(tokens), argv) for argv in self.commands())


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def executor():
    """Scripted executor with no devices attached."""
    return FakeExecutor().set_devices()


@pytest.fixture
def config():
    return ServerConfig()


@pytest.fixture
def context(executor, config):
    """DeviceContext wired to the scripted executor."""
    return DeviceContext(config, executor=executor)


@pytest.fixture
def one_device(executor):
    """A single online emulator."""
    return executor.set_devices(EMULATOR_LINE)


@pytest.fixture
def two_devices(executor):
    """An online emulator followed by an online phone."""
    return executor.set_devices(EMULATOR_LINE, PHONE_LINE)
