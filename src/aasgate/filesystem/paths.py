# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Deterministic report locations beneath the gate output directory."""

from __future__ import annotations

from os import PathLike
from pathlib import Path
from typing import Final

from ..config import ReportFormat
from ..constants import FILE_REPORT_DIR, SERVER_REPORT_DIR
from .sanitize import sanitize_filename, sanitize_profile_name

_Pathish = str | PathLike[str]
REPORT_SUFFIXES: Final[frozenset[str]] = frozenset({".json", ".html"})


def file_report_path(output_dir: _Pathish, file_path: str, fmt: ReportFormat | str) -> Path:
    """Return ``output_dir/file/<sanitized file path>.<fmt>``."""

    return Path(output_dir) / FILE_REPORT_DIR / f"{sanitize_filename(file_path)}.{ReportFormat(fmt).value}"


def server_report_path(output_dir: _Pathish, profile: str, fmt: ReportFormat | str) -> Path:
    """Return ``output_dir/server/<sanitized profile label>.<fmt>``."""

    return Path(output_dir) / SERVER_REPORT_DIR / f"{sanitize_profile_name(profile)}.{ReportFormat(fmt).value}"


def ensure_report_directories(output_dir: _Pathish) -> None:
    """Create the ``file`` and ``server`` report directories if missing."""

    root = Path(output_dir)
    (root / FILE_REPORT_DIR).mkdir(parents=True, exist_ok=True)
    (root / SERVER_REPORT_DIR).mkdir(parents=True, exist_ok=True)


def list_reports(output_dir: _Pathish) -> list[Path]:
    """Return every JSON and HTML report below ``output_dir``, sorted.

    A missing directory yields an empty list.
    """

    root = Path(output_dir)
    if not root.is_dir():
        return []
    return sorted(path for path in root.rglob("*") if path.is_file() and path.suffix in REPORT_SUFFIXES)


__all__ = [
    "REPORT_SUFFIXES",
    "ensure_report_directories",
    "file_report_path",
    "list_reports",
    "server_report_path",
]
