# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Safe wrappers around ``subprocess`` execution."""

from __future__ import annotations

import shutil

# Bandit: subprocess usage is intentional. Commands are always passed as an
# argument list and ``shell=True`` is never used.
import subprocess  # nosec B404
from collections.abc import Sequence
from dataclasses import dataclass, replace
from pathlib import Path
from subprocess import CompletedProcess


@dataclass(frozen=True, slots=True)
class CommandOptions:
    """Immutable command execution options."""

    cwd: Path | None = None
    check: bool = True
    capture_output: bool = False
    discard_stdin: bool = False

    def with_overrides(self, **overrides: object) -> CommandOptions:
        """Return a copy of the options with ``overrides`` applied.

        Raises:
            TypeError: If an unknown option name is supplied.
        """

        unknown = sorted(key for key in overrides if key not in self.__dataclass_fields__)
        if unknown:
            raise TypeError(f"Unknown command option(s): {', '.join(unknown)}")
        return replace(self, **overrides)  # type: ignore[arg-type]


@dataclass(frozen=True, slots=True)
class ExecResult:
    """Exit status and captured output of a finished command."""

    exit_code: int
    stdout: str
    stderr: str


class SubprocessExecutionError(RuntimeError):
    """Raised when a subprocess exits with a non-zero status while ``check`` is true."""

    def __init__(
        self,
        command: Sequence[str],
        returncode: int,
        stdout: str | None,
        stderr: str | None,
    ) -> None:
        super().__init__(
            f"Command '{command[0]}' exited with status {returncode}. stderr: {stderr or '<none>'}",
        )
        self.command = tuple(command)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


def _normalize_args(args: Sequence[str]) -> list[str]:
    """Resolve the executable of ``args`` against ``PATH``.

    Raises:
        ValueError: If no arguments are provided.
        FileNotFoundError: If the executable cannot be found.
    """

    if not args:
        msg = "subprocess command requires at least one argument"
        raise ValueError(msg)

    head, *rest = args
    head_path = Path(head)
    if head_path.is_absolute():
        return [str(head_path), *rest]

    resolved = shutil.which(head)
    if resolved is None:
        msg = f"Executable '{head}' was not found on PATH"
        raise FileNotFoundError(msg)
    return [resolved, *rest]


def command_exists(command: str) -> bool:
    """Return ``True`` when ``command`` resolves to an executable."""

    if Path(command).is_absolute():
        return Path(command).is_file()
    return shutil.which(command) is not None


def run_command(
    args: Sequence[str],
    *,
    options: CommandOptions | None = None,
    **overrides: object,
) -> CompletedProcess[str]:
    """Execute ``args`` after normalising the executable path.

    Args:
        args: Command and argument sequence to execute.
        options: Base options configuring execution semantics.
        **overrides: Option overrides applied to a copy of ``options``.

    Returns:
        CompletedProcess: Subprocess execution metadata.

    Raises:
        FileNotFoundError: If the executable cannot be resolved on ``PATH``.
        SubprocessExecutionError: When ``check`` is true and the process exits
            with a non-zero status.
    """

    normalized = _normalize_args(args)
    resolved = (options or CommandOptions()).with_overrides(**overrides)

    # Bandit: argument lists are passed directly without shell expansion.
    completed: CompletedProcess[str] = subprocess.run(  # nosec B603
        normalized,
        cwd=str(resolved.cwd) if resolved.cwd is not None else None,
        check=False,
        capture_output=resolved.capture_output,
        text=True,
        stdin=subprocess.DEVNULL if resolved.discard_stdin else None,
    )

    if resolved.check and completed.returncode != 0:
        raise SubprocessExecutionError(
            normalized,
            completed.returncode,
            completed.stdout if isinstance(completed.stdout, str) else None,
            completed.stderr if isinstance(completed.stderr, str) else None,
        )

    return completed


def run_tool(command: str, args: Sequence[str], *, cwd: Path | None = None) -> ExecResult:
    """Run ``command`` with ``args`` and return its exit code and trimmed output.

    A nonzero exit status is returned, never raised.
    """

    completed = run_command(
        [command, *args],
        cwd=cwd,
        check=False,
        capture_output=True,
        discard_stdin=True,
    )
    return ExecResult(
        exit_code=completed.returncode,
        stdout=(completed.stdout or "").strip(),
        stderr=(completed.stderr or "").strip(),
    )


__all__ = [
    "CommandOptions",
    "ExecResult",
    "SubprocessExecutionError",
    "command_exists",
    "run_command",
    "run_tool",
]
