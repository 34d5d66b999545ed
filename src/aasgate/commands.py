# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Argument lists for the ``aas_test_engines`` command line.

The grammar below belongs to the external tool and must not drift::

    check_file <path> [--format {json|xml}] [--model_type TYPE] --output {json|html}
    check_server <url> <profile> [--filter PATTERN] [--header "Name: value"]* --output {json|html}
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import PurePath
from typing import Final

from .actions import REDACTED
from .config import ContentFormat, ReportFormat

CHECK_FILE: Final[str] = "check_file"
CHECK_SERVER: Final[str] = "check_server"
HEADER_FLAG: Final[str] = "--header"

_EXTENSION_FORMATS: Final[dict[str, ContentFormat]] = {
    ".json": ContentFormat.JSON,
    ".xml": ContentFormat.XML,
    ".aasx": ContentFormat.AASX,
}


def infer_format(file_path: str) -> ContentFormat | None:
    """Return the content format implied by the extension of ``file_path``."""

    return _EXTENSION_FORMATS.get(PurePath(file_path).suffix.lower())


def build_file_check_args(
    file_path: str,
    fmt: ContentFormat | str,
    model_type: str,
    output: ReportFormat | str,
) -> list[str]:
    """Build the ``check_file`` invocation for one file.

    ``--format`` is passed for JSON and XML only. AASX packages describe their
    own content, so the flag is omitted for them and for unknown extensions.

    Args:
        file_path: File to validate.
        fmt: Explicit content format, or empty to infer from the extension.
        model_type: Optional model type filter; omitted when blank.
        output: Report format requested from the tool.

    Returns:
        list[str]: Arguments following the tool executable.
    """

    args = [CHECK_FILE, file_path]
    effective = ContentFormat(fmt) if fmt else infer_format(file_path)
    if effective in (ContentFormat.JSON, ContentFormat.XML):
        args.extend(["--format", effective.value])
    if model_type:
        args.extend(["--model_type", model_type])
    args.extend(["--output", ReportFormat(output).value])
    return args


def build_server_check_args(
    server_url: str,
    api_profile: str,
    filter_pattern: str,
    headers: Sequence[str],
    output: ReportFormat | str,
) -> list[str]:
    """Build the ``check_server`` invocation, one ``--header`` pair per header in order."""

    args = [CHECK_SERVER, server_url, api_profile]
    if filter_pattern:
        args.extend(["--filter", filter_pattern])
    for header in headers:
        args.extend([HEADER_FLAG, header])
    args.extend(["--output", ReportFormat(output).value])
    return args


def redact_args(args: Sequence[str]) -> list[str]:
    """Return ``args`` with every header value replaced for logging."""

    redacted: list[str] = []
    previous = ""
    for arg in args:
        if previous == HEADER_FLAG and ":" in arg:
            name = arg.split(":", 1)[0]
            redacted.append(f"{name}: {REDACTED}")
        else:
            redacted.append(arg)
        previous = arg
    return redacted


def format_command(command: str, args: Sequence[str]) -> str:
    """Render a command line for log output."""

    return " ".join([command, *args])


__all__ = [
    "CHECK_FILE",
    "CHECK_SERVER",
    "build_file_check_args",
    "build_server_check_args",
    "format_command",
    "infer_format",
    "redact_args",
]
