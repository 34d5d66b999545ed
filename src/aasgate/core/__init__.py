# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Process execution and logging primitives shared by the gate."""

from __future__ import annotations

from .logger import GateLogger
from .process import ExecResult, SubprocessExecutionError, command_exists, run_command, run_tool

__all__ = [
    "ExecResult",
    "GateLogger",
    "SubprocessExecutionError",
    "command_exists",
    "run_command",
    "run_tool",
]
