# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Locate a Python interpreter and provision ``aas_test_engines`` for a run."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Final

from packaging.version import InvalidVersion, Version

from .config import GateConfig
from .constants import DEFAULT_PIP_VERSION, ENGINE_COMMAND, UNKNOWN_VERSION
from .core.logger import GateLogger
from .core.process import SubprocessExecutionError, command_exists, run_command

_PIP_VERSION_LINE: Final[re.Pattern[str]] = re.compile(r"^Version:\s*(.+)$", re.MULTILINE)
_PYTHON_VERSION_SNIPPET: Final[str] = (
    'import sys; print(f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}")'
)
_DEFAULT_PYTHON_CANDIDATES: Final[tuple[str, ...]] = ("python3", "python")
PYTHON_NOT_FOUND_MESSAGE: Final[str] = (
    "Python not found. Please ensure Python is installed and available in PATH.\n"
    "In GitHub Actions, use actions/setup-python before this action:\n\n"
    "- uses: actions/setup-python@v5\n"
    "  with:\n"
    '    python-version: "3.11"'
)


class EnvironmentSetupError(RuntimeError):
    """Raised when the conformance engine cannot be made available."""


@dataclass(frozen=True, slots=True)
class ToolEnvironment:
    """Interpreter and engine details detected once per run."""

    python_cmd: str
    python_version: str = UNKNOWN_VERSION
    engine_version: str = UNKNOWN_VERSION
    engine_command: str = ENGINE_COMMAND


def _candidates(preferred: str) -> list[str]:
    ordered = [preferred, *_DEFAULT_PYTHON_CANDIDATES] if preferred else list(_DEFAULT_PYTHON_CANDIDATES)
    return list(dict.fromkeys(ordered))


def detect_python(preferred: str, logger: GateLogger) -> str:
    """Return the first usable interpreter, trying ``preferred`` first.

    Raises:
        EnvironmentSetupError: If no candidate answers ``--version``.
    """

    for cmd in _candidates(preferred):
        if not command_exists(cmd):
            continue
        completed = run_command([cmd, "--version"], check=False, capture_output=True)
        if completed.returncode == 0:
            reported = (completed.stdout or completed.stderr or "").strip()
            logger.info(f"Found Python: {cmd} ({reported})")
            return cmd
    raise EnvironmentSetupError(PYTHON_NOT_FOUND_MESSAGE)


def python_version(python_cmd: str) -> str:
    """Return ``major.minor.micro`` of ``python_cmd`` or ``"unknown"``."""

    try:
        completed = run_command([python_cmd, "-c", _PYTHON_VERSION_SNIPPET], check=False, capture_output=True)
    except (OSError, ValueError):
        return UNKNOWN_VERSION
    return (completed.stdout or "").strip() or UNKNOWN_VERSION


def package_spec(pip_package: str, pip_version: str) -> str:
    """Return the pip requirement for ``pip_package`` pinned to ``pip_version``."""

    if pip_version == DEFAULT_PIP_VERSION:
        return pip_package
    return f"{pip_package}=={pip_version}"


def install_test_engines(python_cmd: str, pip_package: str, pip_version: str, logger: GateLogger) -> None:
    """Install or upgrade the engine package with pip.

    Raises:
        EnvironmentSetupError: If pip exits with a nonzero status.
    """

    spec = package_spec(pip_package, pip_version)
    logger.info(f"Installing {pip_package}...")
    try:
        completed = run_command([python_cmd, "-m", "pip", "install", "--upgrade", spec], capture_output=True)
    except SubprocessExecutionError as exc:
        detail = (exc.stderr or "").strip() or (exc.stdout or "").strip()
        raise EnvironmentSetupError(f"Failed to install {spec}:\n{detail}") from exc
    logger.debug((completed.stdout or "").strip())
    logger.info(f"Successfully installed {pip_package}")


def engine_version(python_cmd: str, pip_package: str) -> str:
    """Return the installed engine version reported by ``pip show``."""

    completed = run_command([python_cmd, "-m", "pip", "show", pip_package], check=False, capture_output=True)
    if completed.returncode != 0:
        return UNKNOWN_VERSION
    match = _PIP_VERSION_LINE.search(completed.stdout or "")
    if match is None:
        return UNKNOWN_VERSION
    raw = match.group(1).strip()
    try:
        return str(Version(raw))
    except InvalidVersion:
        return raw


def ensure_test_engines(config: GateConfig, logger: GateLogger) -> ToolEnvironment:
    """Detect Python, install the engine, and capture the versions in play.

    Args:
        config: Gate configuration supplying the interpreter and package pins.
        logger: Logger receiving progress messages.

    Returns:
        ToolEnvironment: Snapshot passed to the runner, index and summary.

    Raises:
        EnvironmentSetupError: If Python is missing or installation fails.
    """

    python_cmd = detect_python(config.python_cmd, logger)
    install_test_engines(python_cmd, config.pip_package, config.pip_version, logger)
    environment = ToolEnvironment(
        python_cmd=python_cmd,
        python_version=python_version(python_cmd),
        engine_version=engine_version(python_cmd, config.pip_package),
    )
    logger.info(f"aas_test_engines version: {environment.engine_version}")
    return environment


__all__ = [
    "EnvironmentSetupError",
    "ToolEnvironment",
    "detect_python",
    "engine_version",
    "ensure_test_engines",
    "install_test_engines",
    "package_spec",
    "python_version",
]
