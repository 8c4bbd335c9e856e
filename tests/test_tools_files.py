"""
File Transfer Tool Tests
========================

Copyright (c) 2025 Hugo José Pinto & Contributors
"""

from pathlib import Path

import pytest

from android_mcp.mcp.tools import android_pull_file, android_push_file


def probe(remote: str) -> str:
    return f"test -f {remote} && echo 'exists' || echo 'not found'"


def write_pulled(argv):
    """Simulate adb pull by writing the destination file."""
    Path(argv[-1]).write_text("pulled data")


class TestPushFile:
    """Test android-push-file."""

    @pytest.mark.asyncio
    async def test_push(self, context, one_device, tmp_path):
        local = tmp_path / "hello.txt"
        local.write_text("hello")
        result = await android_push_file(
            context, {"localPath": str(local), "remotePath": "/sdcard/hello.txt"}
        )
        assert not result.is_error
        assert result.text == (
            f"Successfully pushed '{local}' (5 bytes) to '/sdcard/hello.txt' "
            f"on device emulator-5554"
        )
        assert one_device.commands()[-1] == [
            "adb", "-s", "emulator-5554", "push", str(local), "/sdcard/hello.txt",
        ]

    @pytest.mark.asyncio
    async def test_missing_local_file(self, context, executor):
        result = await android_push_file(
            context, {"localPath": "/no/such.txt", "remotePath": "/sdcard/x"}
        )
        assert result.is_error
        assert result.text == "Error: Local file '/no/such.txt' not found"
        assert executor.commands() == []

    @pytest.mark.asyncio
    async def test_missing_remote_path(self, context, tmp_path):
        local = tmp_path / "hello.txt"
        local.write_text("hello")
        result = await android_push_file(context, {"localPath": str(local)})
        assert result.text == "Error: 'remotePath' parameter is required"

    @pytest.mark.asyncio
    async def test_push_failure(self, context, one_device, tmp_path):
        local = tmp_path / "hello.txt"
        local.write_text("hello")
        one_device.on("push", returncode=1, stderr="adb: error: remote couldn't create file: Permission denied")
        result = await android_push_file(
            context, {"localPath": str(local), "remotePath": "/system/hello.txt"}
        )
        assert result.is_error
        assert result.text.startswith("Failed to push file to device emulator-5554: ")
        assert "Permission denied" in result.text


class TestPullFile:
    """Test android-pull-file."""

    @pytest.mark.asyncio
    async def test_pull_creates_directories(self, context, one_device, tmp_path):
        one_device.on(probe("/sdcard/log.txt"), stdout="exists\n")
        one_device.on("pull", effect=write_pulled)
        local = tmp_path / "nested" / "dir" / "log.txt"

        result = await android_pull_file(
            context, {"remotePath": "/sdcard/log.txt", "localPath": str(local)}
        )
        assert not result.is_error
        assert local.read_text() == "pulled data"
        assert result.text == (
            f"Successfully pulled '/sdcard/log.txt' from device emulator-5554 "
            f"to '{local}' (11 bytes)"
        )

    @pytest.mark.asyncio
    async def test_pull_into_directory(self, context, one_device, tmp_path):
        one_device.on(probe("/sdcard/log.txt"), stdout="exists\n")
        one_device.on("pull", effect=write_pulled)
        result = await android_pull_file(
            context, {"remotePath": "/sdcard/log.txt", "localPath": str(tmp_path)}
        )
        assert not result.is_error
        assert (tmp_path / "log.txt").is_file()

    @pytest.mark.asyncio
    async def test_remote_missing(self, context, one_device, tmp_path):
        result = await android_pull_file(
            context, {"remotePath": "/sdcard/none.txt", "localPath": str(tmp_path / "x")}
        )
        assert result.is_error
        assert result.text == "Error: Remote file '/sdcard/none.txt' not found on device emulator-5554"
        assert not one_device.ran("pull")

    @pytest.mark.asyncio
    async def test_pull_failure(self, context, one_device, tmp_path):
        one_device.on(probe("/sdcard/log.txt"), stdout="exists\n")
        one_device.on("pull", returncode=1, stderr="adb: error: failed to copy")
        result = await android_pull_file(
            context, {"remotePath": "/sdcard/log.txt", "localPath": str(tmp_path / "log.txt")}
        )
        assert result.is_error
        assert result.text == (
            "Failed to pull file from device emulator-5554: adb: error: failed to copy"
        )

    @pytest.mark.asyncio
    async def test_pull_without_local_file(self, context, one_device, tmp_path):
        one_device.on(probe("/sdcard/log.txt"), stdout="exists\n")
        result = await android_pull_file(
            context, {"remotePath": "/sdcard/log.txt", "localPath": str(tmp_path / "log.txt")}
        )
        assert result.is_error
        assert "was not created" in result.text
