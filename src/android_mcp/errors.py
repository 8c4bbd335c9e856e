"""
Android MCP Error Hierarchy
===========================

This module defines the exception hierarchy for the Android MCP server.
All exceptions inherit from AndroidMcpError, allowing the tool layer to
catch every expected failure with a single except clause and turn it into
response text.

Exception Hierarchy
-------------------
AndroidMcpError (base)
├── ValidationError - missing or malformed tool argument
├── AlreadyExistsError - create refused without an override flag
├── NotFoundError - device, AVD, package or file does not exist
│   └── DeviceNotFoundError - explicit serial not among connected devices
├── DeviceUnavailableError - device connected but offline/unauthorized
├── NoDevicesError - nothing connected (informational, with remediation)
├── ExternalToolFailure - adb/avdmanager/emulator/sdkmanager failed
│   ├── ToolNotInstalledError - binary not found on PATH
│   └── CommandTimeoutError - command exceeded its time budget
└── UnsupportedOperation - deliberately disabled action

Design Philosophy
-----------------
Errors never cross the tool boundary as exceptions. Every tool handler is
wrapped by @mcp_tool, which converts an AndroidMcpError into a single text
block using str(error). The message formatting therefore lives here, next
to the data each error carries.

Copyright (c) 2025 Hugo José Pinto & Contributors
"""

from typing import Optional, Sequence


# =============================================================================
# Base Exception Class
# =============================================================================

class AndroidMcpError(Exception):
    """
    Base exception for all Android MCP errors.

    Subclasses format their own message; str(error) is exactly the text
    returned to the host.
    """

    # Whether the text describes a failure (True) or an informational
    # outcome such as "nothing connected" (False).
    is_error: bool = True


# =============================================================================
# Argument Errors
# =============================================================================

class ValidationError(AndroidMcpError):
    """
    A tool argument is missing or has the wrong type.

    Attributes:
        field: Name of the offending argument
        reason: What is wrong with it
    """

    def __init__(self, field: str, reason: str, message: Optional[str] = None):
        self.field = field
        self.reason = reason
        super().__init__(message or f"Error: '{field}' {reason}")


class AlreadyExistsError(AndroidMcpError):
    """Creation refused because the target exists and no override flag was given."""

    def __init__(self, kind: str, identifier: str, message: Optional[str] = None):
        self.kind = kind
        self.identifier = identifier
        super().__init__(message or f"Error: {kind} '{identifier}' already exists")


class UnsupportedOperation(AndroidMcpError):
    """An action that is deliberately disabled. Always reported, never attempted."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


# =============================================================================
# Lookup Errors
# =============================================================================

class NotFoundError(AndroidMcpError):
    """
    A requested device, AVD, package or file does not exist.

    Attributes:
        kind: What was looked up ("AVD", "package", "file", ...)
        identifier: The identifier that failed to resolve
    """

    def __init__(self, kind: str, identifier: str, message: Optional[str] = None):
        self.kind = kind
        self.identifier = identifier
        super().__init__(message or f"Error: {kind} '{identifier}' not found")


class DeviceNotFoundError(NotFoundError):
    """An explicitly requested serial is not among the connected devices."""

    def __init__(self, serial: str, message: Optional[str] = None):
        super().__init__(
            "device",
            serial,
            message or f"Device with serial '{serial}' not found.",
        )
        self.serial = serial


class DeviceUnavailableError(AndroidMcpError):
    """
    The requested device is connected but cannot accept commands.

    Attributes:
        serial: Device serial
        state: adb state text ("offline", "unauthorized", ...)
    """

    HINTS = {
        "unauthorized": "Accept the USB debugging prompt on the device, then retry.",
        "offline": "Reconnect the device or restart the adb server (adb kill-server).",
    }

    def __init__(self, serial: str, state: str):
        self.serial = serial
        self.state = state
        hint = self.HINTS.get(state, "Check the device connection and USB debugging settings.")
        super().__init__(f"Error: Device '{serial}' is {state}. {hint}")


class NoDevicesError(AndroidMcpError):
    """
    No usable device is connected.

    This is an informational outcome rather than a fault: the text lists
    the steps needed to get a device attached.
    """

    is_error = False

    REMEDIATION = (
        "Make sure:\n"
        "- Android SDK is installed\n"
        "- ADB is in your PATH\n"
        "- USB debugging is enabled on your device\n"
        "- Device is connected via USB or network"
    )

    EMULATOR_REMEDIATION = (
        "Start one with android-start-avd, or use android-list-avds to see "
        "the AVDs that can be started."
    )

    def __init__(
        self,
        headline: str = "No Android devices found.",
        detail: Optional[str] = None,
        remediation: Optional[str] = None,
    ):
        self.headline = headline
        self.detail = detail
        text = headline
        if detail:
            text += f"\n{detail}"
        super().__init__(f"{text}\n{remediation or self.REMEDIATION}")


# =============================================================================
# External Tool Errors
# =============================================================================

class ExternalToolFailure(AndroidMcpError):
    """
    An external command failed or could not be run.

    Attributes:
        command: The argument vector that was executed
        returncode: Exit status, or None if the process never ran
        stderr: Captured standard error (or stdout when stderr was empty)
        hint: Optional remediation suggestion
    """

    def __init__(
        self,
        message: str,
        command: Optional[Sequence[str]] = None,
        returncode: Optional[int] = None,
        stderr: str = "",
        hint: Optional[str] = None,
    ):
        self.message = message
        self.command = list(command) if command else []
        self.returncode = returncode
        self.stderr = stderr
        self.hint = hint
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        parts = [self.message]
        if self.stderr:
            parts[0] = f"{self.message}: {self.stderr}"
        if self.hint:
            parts.append(self.hint)
        return " ".join(parts)


class ToolNotInstalledError(ExternalToolFailure):
    """The external binary could not be located."""

    def __init__(self, binary: str, command: Optional[Sequence[str]] = None):
        self.binary = binary
        super().__init__(
            f"'{binary}' could not be executed (not found)",
            command=command,
            hint="Ensure Android SDK tools are installed and in PATH.",
        )


class CommandTimeoutError(ExternalToolFailure):
    """The external command did not finish within its time budget."""

    def __init__(self, command: Sequence[str], timeout: float):
        self.timeout = timeout
        super().__init__(
            f"Command timed out after {timeout:g}s: {' '.join(command)}",
            command=command,
        )
