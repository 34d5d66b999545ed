# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Reporting helpers: the persisted run index and the Markdown job summary."""

from __future__ import annotations

from .index import build_report_index, failed_check_ids, write_report_index
from .summary import render_summary

__all__ = [
    "build_report_index",
    "failed_check_ids",
    "render_summary",
    "write_report_index",
]
