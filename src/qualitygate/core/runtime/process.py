# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Safe wrappers around ``subprocess`` execution."""

from __future__ import annotations

import shutil

# Bandit: subprocess usage is intentional; the wrapper normalises arguments and
# never enables ``shell=True``.
import subprocess  # nosec B404
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from subprocess import CompletedProcess
from typing import Final

TIMEOUT_RETURNCODE: Final[int] = 124


@dataclass(frozen=True, slots=True)
class CommandOptions:
    """Immutable command execution options."""

    cwd: Path | None = None
    env: Mapping[str, str] | None = None
    check: bool = False
    capture_output: bool = True
    text: bool = True
    timeout: float | None = None


CommandRunner = Callable[..., CompletedProcess[str]]


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


def _ensure_text(value: str | bytes | None) -> str | None:
    """Return ``value`` decoded to text when supplied as ``bytes``."""

    if value is None or isinstance(value, str):
        return value
    return value.decode(errors="ignore")


def _normalize_args(args: Sequence[str]) -> list[str]:
    """Resolve the executable in ``args`` against ``PATH``.

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


def run_command(
    args: Sequence[str],
    *,
    options: CommandOptions | None = None,
) -> CompletedProcess[str]:
    """Execute ``args`` after normalising the executable path.

    A timeout does not raise; the returned process carries
    :data:`TIMEOUT_RETURNCODE` and a note appended to ``stderr``.

    Args:
        args: Command and argument sequence to execute.
        options: Options configuring execution semantics.

    Returns:
        CompletedProcess: Subprocess execution metadata.

    Raises:
        FileNotFoundError: If the executable cannot be resolved on ``PATH``.
        SubprocessExecutionError: When ``check`` is true and the process exits
            with a non-zero status.
    """

    normalized = _normalize_args(args)
    resolved_options = options or CommandOptions()

    try:
        completed: CompletedProcess[str] = subprocess.run(  # nosec B603 - argument list, no shell
            normalized,
            cwd=str(resolved_options.cwd) if resolved_options.cwd is not None else None,
            env=dict(resolved_options.env) if resolved_options.env is not None else None,
            check=False,
            capture_output=resolved_options.capture_output,
            text=resolved_options.text,
            timeout=resolved_options.timeout,
            stdin=subprocess.DEVNULL,
        )
    except subprocess.TimeoutExpired as exc:
        stdout = _ensure_text(exc.stdout) or ""
        stderr = _ensure_text(exc.stderr)
        timeout_msg = f"Command timed out after {resolved_options.timeout:.1f}s"
        completed = subprocess.CompletedProcess(
            args=list(normalized),
            returncode=TIMEOUT_RETURNCODE,
            stdout=stdout,
            stderr=f"{stderr}\n{timeout_msg}" if stderr else timeout_msg,
        )

    if resolved_options.check and completed.returncode != 0:
        raise SubprocessExecutionError(
            normalized,
            completed.returncode,
            completed.stdout if isinstance(completed.stdout, str) else None,
            completed.stderr if isinstance(completed.stderr, str) else None,
        )

    return completed


__all__ = [
    "TIMEOUT_RETURNCODE",
    "CommandOptions",
    "CommandRunner",
    "SubprocessExecutionError",
    "run_command",
]
