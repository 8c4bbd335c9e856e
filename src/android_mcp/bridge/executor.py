"""
Command Executor
================

Runs external commands (adb, avdmanager, emulator, sdkmanager) with
captured stdout/stderr and exit status.

- Every call is an asyncio subprocess; the calling task is the only owner.
- A timeout, or cancellation of the calling task, kills the child process
  before the error propagates.
- stdin is closed unless input text is supplied, so an unexpected
  interactive prompt reads EOF instead of hanging.

Copyright (c) 2025 Hugo José Pinto & Contributors
"""

import asyncio
import logging
import os
import shlex
from dataclasses import dataclass
from typing import List, Optional, Sequence

from android_mcp.errors import (
    CommandTimeoutError,
    ExternalToolFailure,
    ToolNotInstalledError,
)

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """
    Outcome of one external command.

    Attributes:
        args: Argument vector that was executed
        returncode: Process exit status
        stdout: Decoded standard output
        stderr: Decoded standard error
    """
    args: List[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def output(self) -> str:
        """stdout and stderr joined, for marker scanning."""
        return "\n".join(part for part in (self.stdout, self.stderr) if part)

    @property
    def lines(self) -> List[str]:
        """Non-blank stdout lines with trailing whitespace (and CR) removed."""
        return [line.rstrip() for line in self.stdout.splitlines() if line.strip()]

    @property
    def error_text(self) -> str:
        """Best text to explain a failure: stderr, else stdout."""
        return self.stderr.strip() or self.stdout.strip()

    def raise_for_status(self, message: str, hint: Optional[str] = None) -> "CommandResult":
        """Raise ExternalToolFailure if the command exited non-zero."""
        if not self.ok:
            raise ExternalToolFailure(
                message,
                command=self.args,
                returncode=self.returncode,
                stderr=self.error_text or f"exit status {self.returncode}",
                hint=hint,
            )
        return self


class CommandExecutor:
    """
    Runs external processes for the bridge clients.

    Tests substitute a scripted subclass; production code only ever calls
    run() and spawn().
    """

    async def run(
        self,
        args: Sequence[str],
        timeout: Optional[float] = None,
        input_text: Optional[str] = None,
    ) -> CommandResult:
        """
        Run a command to completion.

        Args:
            args: Argument vector; args[0] is the binary
            timeout: Seconds before the child is killed (None = no limit)
            input_text: Text written to stdin, which is then closed

        Returns:
            CommandResult with decoded output

        Raises:
            ToolNotInstalledError: If the binary cannot be found
            CommandTimeoutError: If the timeout expires
            ExternalToolFailure: If the process cannot be started
        """
        argv = [str(a) for a in args]
        logger.debug("exec: %s", shlex.join(argv))

        try:
            process = await asyncio.create_subprocess_exec(
                *argv,
                stdin=asyncio.subprocess.PIPE if input_text is not None else asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError:
            raise ToolNotInstalledError(argv[0], command=argv) from None
        except PermissionError as e:
            raise ExternalToolFailure(
                f"Cannot execute '{argv[0]}'", command=argv, stderr=str(e)
            ) from e

        data = input_text.encode("utf-8") if input_text is not None else None
        try:
            if timeout is not None:
                stdout_bytes, stderr_bytes = await asyncio.wait_for(
                    process.communicate(data), timeout
                )
            else:
                stdout_bytes, stderr_bytes = await process.communicate(data)
        except asyncio.TimeoutError:
            await self._kill(process)
            logger.warning("timed out after %ss: %s", timeout, shlex.join(argv))
            raise CommandTimeoutError(argv, timeout) from None
        except asyncio.CancelledError:
            await self._kill(process)
            logger.info("cancelled: %s", shlex.join(argv))
            raise

        result = CommandResult(
            args=argv,
            returncode=process.returncode if process.returncode is not None else -1,
            stdout=stdout_bytes.decode("utf-8", errors="replace"),
            stderr=stderr_bytes.decode("utf-8", errors="replace"),
        )
        if not result.ok:
            logger.warning(
                "exit %d: %s: %s", result.returncode, shlex.join(argv), result.error_text
            )
        return result

    async def spawn(self, args: Sequence[str]) -> asyncio.subprocess.Process:
        """
        Start a long-running process without waiting for it.

        The child gets its own session and no pipes, so it is not tied to
        the server's stdio and survives the invocation that started it.

        Raises:
            ToolNotInstalledError: If the binary cannot be found
        """
        argv = [str(a) for a in args]
        logger.debug("spawn: %s", shlex.join(argv))
        try:
            return await asyncio.create_subprocess_exec(
                *argv,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.DEVNULL,
                start_new_session=os.name == "posix",
            )
        except FileNotFoundError:
            raise ToolNotInstalledError(argv[0], command=argv) from None

    @staticmethod
    async def _kill(process: asyncio.subprocess.Process) -> None:
        """Kill a child process and reap it."""
        if process.returncode is None:
            try:
                process.kill()
            except ProcessLookupError:
                pass
        await process.wait()
