# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Filesystem helpers for deterministic report naming and layout."""

from __future__ import annotations

from .paths import ensure_report_directories, file_report_path, list_reports, server_report_path
from .sanitize import MAX_FILENAME_LENGTH, UNNAMED, sanitize_filename, sanitize_profile_name

__all__ = [
    "MAX_FILENAME_LENGTH",
    "UNNAMED",
    "ensure_report_directories",
    "file_report_path",
    "list_reports",
    "sanitize_filename",
    "sanitize_profile_name",
    "server_report_path",
]
