# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Runtime helpers for invoking external processes."""

from __future__ import annotations

from .process import TIMEOUT_RETURNCODE, CommandOptions, CommandRunner, SubprocessExecutionError, run_command

__all__ = [
    "TIMEOUT_RETURNCODE",
    "CommandOptions",
    "CommandRunner",
    "SubprocessExecutionError",
    "run_command",
]
