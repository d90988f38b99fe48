"""External command execution, optionally elevated via pkexec."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from dataclasses import dataclass
from typing import Protocol, Sequence

log = logging.getLogger(__name__)

# Timeout for external commands, including the pkexec prompt (seconds).
_COMMAND_TIMEOUT = 300


class PrivilegeError(Exception):
    """Raised when a command cannot be launched or does not finish."""


@dataclass(frozen=True, slots=True)
class CommandOutcome:
    """Exit status and captured output of a finished command."""

    success: bool
    stdout: str = ""
    stderr: str = ""
    returncode: int = 0


class CommandRunner(Protocol):
    def run(self, program: str, args: Sequence[str], *, elevated: bool = False) -> CommandOutcome: ...


def is_root() -> bool:
    """Check if the current process is running as root."""
    return os.geteuid() == 0


def pkexec_available() -> bool:
    """Check if pkexec is available on the system."""
    return shutil.which("pkexec") is not None


class SubprocessRunner:
    """Runs commands synchronously with :func:`subprocess.run`.

    Elevated commands are prefixed with ``pkexec`` unless the process
    already runs as root, so one password prompt covers the whole batch.
    """

    def __init__(self, timeout: float = _COMMAND_TIMEOUT) -> None:
        self.timeout = timeout

    def run(self, program: str, args: Sequence[str], *, elevated: bool = False) -> CommandOutcome:
        """Run *program* with *args* and capture its output.

        Raises:
            PrivilegeError: The command could not be launched or timed out.
        """
        argv = [program, *args]
        via_pkexec = elevated and not is_root()
        if via_pkexec:
            if not pkexec_available():
                raise PrivilegeError("pkexec is not available on this system")
            argv = ["pkexec", *argv]

        log.debug("Running %s (%d arguments)", argv[0], len(argv) - 1)
        try:
            proc = subprocess.run(
                argv,
                capture_output=True,
                text=True,
                errors="replace",
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            raise PrivilegeError(f"{argv[0]} timed out after {self.timeout:g} seconds")
        except OSError as exc:
            raise PrivilegeError(f"{argv[0]}: {exc.strerror or exc}") from exc

        stderr = proc.stderr.strip()
        if via_pkexec and not stderr:
            if proc.returncode == 126:
                stderr = "Authentication dismissed by user"
            elif proc.returncode == 127:
                stderr = "Authentication denied"

        if proc.returncode != 0:
            log.warning("%s exited with status %d: %s", argv[0], proc.returncode, stderr)
        return CommandOutcome(
            success=proc.returncode == 0,
            stdout=proc.stdout,
            stderr=stderr,
            returncode=proc.returncode,
        )


def run_elevated(argv: Sequence[str], runner: CommandRunner | None = None) -> CommandOutcome:
    """Run *argv* with elevated privileges through *runner*."""
    runner = runner or SubprocessRunner()
    return runner.run(argv[0], argv[1:], elevated=True)
