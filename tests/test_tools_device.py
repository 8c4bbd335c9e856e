"""
Device, Shell and Logcat Tool Tests
===================================

Copyright (c) 2025 Hugo José Pinto & Contributors
"""

import pytest

from android_mcp.errors import ToolNotInstalledError
from android_mcp.mcp.tools import (
    android_devices,
    android_devices_list,
    android_logcat,
    android_shell,
    get_date,
    get_tool,
)

from conftest import UNAUTHORIZED_LINE


LOGCAT_CMD = "logcat -d -t 100 '*:I'"
LOGCAT_OUTPUT = (
    "10-17 10:00:00.000  1000  1000 I ActivityManager: Start proc com.example.app\n"
    "10-17 10:00:01.000  2000  2000 W Camera: Low light\n"
)


# =============================================================================
# Every tool
# =============================================================================

class TestEmptyArguments:
    """An empty argument bag never raises and yields one text block."""

    @pytest.mark.asyncio
    async def test_all_tools_with_empty_bag(self, context):
        from android_mcp.mcp.tools import ALL_TOOLS

        for tool in ALL_TOOLS:
            result = await tool(context, {})
            assert len(result.content) == 1
            assert result.content[0]["type"] == "text"
            assert result.text

    @pytest.mark.asyncio
    async def test_all_tools_with_none(self, context):
        from android_mcp.mcp.tools import ALL_TOOLS

        for tool in ALL_TOOLS:
            result = await tool(context, None)
            assert len(result.content) == 1


DEVICE_SCOPED = [
    ("android-shell", {"command": "ls"}),
    ("android-install-apk", {"apkPath": "{local}"}),
    ("android-uninstall-app", {"packageName": "com.example.app"}),
    ("android-launch-app", {"packageName": "com.example.app"}),
    ("android-list-packages", {}),
    ("android-logcat", {}),
    ("android-push-file", {"localPath": "{local}", "remotePath": "/sdcard/app.apk"}),
    ("android-pull-file", {"remotePath": "/sdcard/app.apk", "localPath": "{pulled}"}),
    ("android-stop-avd", {}),
]


def device_arguments(arguments, tmp_path, **extra):
    """Fill in local paths that must exist before a device is contacted."""
    local = tmp_path / "app.apk"
    local.write_bytes(b"PK")
    paths = {"{local}": str(local), "{pulled}": str(tmp_path / "pulled.apk")}
    filled = {key: paths.get(value, value) for key, value in arguments.items()}
    filled.update(extra)
    return filled


class TestDeviceScopedTools:
    """Device resolution is the same for every device-scoped tool."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("name,arguments", DEVICE_SCOPED)
    async def test_unknown_serial_never_falls_back(self, context, two_devices, tmp_path, name, arguments):
        tool = get_tool(name)
        result = await tool(context, device_arguments(arguments, tmp_path, deviceSerial="ZZZ"))

        assert len(result.content) == 1
        assert result.is_error
        assert "ZZZ" in result.text
        assert "not found" in result.text
        for command in ("shell", "install", "push", "pull", "emu"):
            assert not two_devices.ran(command)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("name,arguments", DEVICE_SCOPED)
    async def test_no_devices_gives_guidance(self, context, executor, tmp_path, name, arguments):
        tool = get_tool(name)
        result = await tool(context, device_arguments(arguments, tmp_path))

        assert len(result.content) == 1
        assert not result.is_error
        assert "USB debugging" in result.text


# =============================================================================
# android-devices
# =============================================================================

class TestDevicesTool:
    """Test android-devices."""

    @pytest.mark.asyncio
    async def test_lists_devices(self, context, two_devices):
        result = await android_devices(context, {})
        assert not result.is_error
        assert result.text == (
            "Found 2 Android device(s):\n\n"
            "1. Serial: emulator-5554, Product: sdk_gphone64_x86_64, "
            "Model: sdk_gphone64_x86_64 (Emulator)\n"
            "2. Serial: R58M41ABCDE, Product: beyond1, Model: SM_G973F"
        )

    @pytest.mark.asyncio
    async def test_no_devices(self, context):
        result = await android_devices(context, {})
        assert not result.is_error
        assert "No Android devices found." in result.text
        assert "USB debugging is enabled" in result.text
        assert "ADB is in your PATH" in result.text

    @pytest.mark.asyncio
    async def test_shows_unusable_state(self, context, executor):
        executor.set_devices(UNAUTHORIZED_LINE)
        result = await android_devices(context, {})
        assert "[unauthorized]" in result.text

    @pytest.mark.asyncio
    async def test_adb_missing(self, context, executor):
        executor.on("devices", error=ToolNotInstalledError("adb", ["adb", "devices", "-l"]))
        result = await android_devices(context, {})
        assert result.is_error
        assert "'adb' could not be executed" in result.text
        assert "PATH" in result.text

    @pytest.mark.asyncio
    async def test_unexpected_error(self, context, executor):
        executor.on("devices", error=RuntimeError("boom"))
        result = await android_devices(context, {})
        assert result.is_error
        assert result.text == "Error listing Android devices: boom"


class TestDevicesListTool:
    """Test android-devices-list."""

    @pytest.mark.asyncio
    async def test_starts_server_then_lists(self, context, two_devices):
        result = await android_devices_list(context, {})
        assert two_devices.commands()[0] == ["adb", "start-server"]
        assert result.text == (
            "Connected Android Devices:\n"
            "- emulator-5554 (device) - sdk_gphone64_x86_64\n"
            "- R58M41ABCDE (device) - SM_G973F"
        )

    @pytest.mark.asyncio
    async def test_no_devices(self, context):
        result = await android_devices_list(context, {})
        assert "No devices connected." in result.text
        assert "USB debugging" in result.text


# =============================================================================
# android-shell
# =============================================================================

class TestShellTool:
    """Test android-shell."""

    @pytest.mark.asyncio
    async def test_runs_command(self, context, one_device):
        one_device.on("shell", "getprop ro.build.version.release", stdout="14\n")
        result = await android_shell(context, {"command": "getprop ro.build.version.release"})
        assert not result.is_error
        assert result.text == (
            "Shell command 'getprop ro.build.version.release' executed on device "
            "emulator-5554 (sdk_gphone64_x86_64):\n\n14"
        )
        assert one_device.ran("adb", "-s", "emulator-5554", "shell")

    @pytest.mark.asyncio
    async def test_no_output(self, context, one_device):
        result = await android_shell(context, {"command": "true"})
        assert result.text.endswith("(no output)")

    @pytest.mark.asyncio
    async def test_empty_command(self, context, one_device):
        result = await android_shell(context, {"command": ""})
        assert result.is_error
        assert "cannot be empty" in result.text
        assert one_device.commands() == []

    @pytest.mark.asyncio
    async def test_missing_command(self, context, one_device):
        result = await android_shell(context, {})
        assert result.text == "Error: 'command' parameter is required"

    @pytest.mark.asyncio
    async def test_unknown_serial(self, context, one_device):
        result = await android_shell(context, {"command": "ls", "deviceSerial": "nope"})
        assert result.text == "Device with serial 'nope' not found."
        assert not one_device.ran("shell")

    @pytest.mark.asyncio
    async def test_failed_command(self, context, one_device):
        one_device.on("shell", "cat /nope", returncode=1, stderr="cat: /nope: No such file or directory")
        result = await android_shell(context, {"command": "cat /nope"})
        assert result.is_error
        assert result.text == "Error executing command: cat: /nope: No such file or directory"

    @pytest.mark.asyncio
    async def test_explicit_serial(self, context, two_devices):
        two_devices.on("-s", "R58M41ABCDE", "shell", "id", stdout="uid=2000(shell)")
        result = await android_shell(context, {"command": "id", "deviceSerial": "R58M41ABCDE"})
        assert "R58M41ABCDE (SM_G973F)" in result.text
        assert "uid=2000(shell)" in result.text


# =============================================================================
# android-logcat
# =============================================================================

class TestLogcatTool:
    """Test android-logcat."""

    @pytest.mark.asyncio
    async def test_defaults(self, context, one_device):
        one_device.on(LOGCAT_CMD, stdout=LOGCAT_OUTPUT)
        result = await android_logcat(context, {})
        assert result.text.startswith(
            "Logcat from device emulator-5554 (level: I, lines: 100):\n\n"
        )
        assert "Low light" in result.text

    @pytest.mark.asyncio
    async def test_lines_capped(self, context, one_device):
        one_device.on("logcat -d -t 1000 '*:I'", stdout=LOGCAT_OUTPUT)
        result = await android_logcat(context, {"lines": 5000})
        assert "lines: 1000" in result.text
        assert one_device.ran("logcat -d -t 1000 '*:I'")

    @pytest.mark.asyncio
    async def test_filter(self, context, one_device):
        one_device.on(LOGCAT_CMD, stdout=LOGCAT_OUTPUT)
        result = await android_logcat(context, {"filter": "camera"})
        assert "(filtered by 'camera')" in result.text
        assert "Low light" in result.text
        assert "ActivityManager" not in result.text

    @pytest.mark.asyncio
    async def test_filter_without_match(self, context, one_device):
        one_device.on(LOGCAT_CMD, stdout=LOGCAT_OUTPUT)
        result = await android_logcat(context, {"filter": "zzz"})
        assert not result.is_error
        assert result.text == "No logcat entries found matching filter 'zzz' on device emulator-5554"

    @pytest.mark.asyncio
    async def test_empty_log(self, context, one_device):
        result = await android_logcat(context, {})
        assert result.text == "No logcat entries found on device emulator-5554"

    @pytest.mark.asyncio
    async def test_clear_and_level(self, context, one_device):
        one_device.on("logcat -d -t 100 '*:W'", stdout=LOGCAT_OUTPUT)
        result = await android_logcat(context, {"clear": True, "level": "w"})
        assert one_device.ran("logcat -c")
        assert "(logs cleared) (level: W, lines: 100)" in result.text

    @pytest.mark.asyncio
    async def test_unknown_level(self, context, one_device):
        result = await android_logcat(context, {"level": "X"})
        assert result.is_error
        assert result.text == "Error: Unknown level 'X'. Use one of: V, D, I, W, E, F"


class TestDateTool:
    """Test get-date."""

    @pytest.mark.asyncio
    async def test_date(self, context):
        from datetime import date

        result = await get_date(context, {})
        assert result.text == f"Today's date is {date.today().isoformat()}"
