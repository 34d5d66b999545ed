# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Aggregate check results into the machine-readable ``index.json``."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime
from pathlib import Path

from ..config import GateConfig
from ..constants import ACTION_VERSION, INDEX_FILENAME
from ..environment import ToolEnvironment
from ..models import CheckResult, CheckSummary, ReportIndex


def build_report_index(
    config: GateConfig,
    results: Sequence[CheckResult],
    environment: ToolEnvironment,
    *,
    now: datetime | None = None,
) -> ReportIndex:
    """Summarise ``results`` in execution order.

    Args:
        config: Configuration of the run, supplying the mode.
        results: Check results in the order they were executed.
        environment: Detected tool environment, supplying the engine version.
        now: Timestamp override; defaults to the current UTC time.

    Returns:
        ReportIndex: Immutable aggregate of the run.
    """

    passed = sum(1 for result in results if result.passed)
    return ReportIndex(
        generated=now or datetime.now(UTC),
        action_version=ACTION_VERSION,
        engine_version=environment.engine_version,
        mode=config.mode,
        total_checks=len(results),
        passed_checks=passed,
        failed_checks=len(results) - passed,
        checks=tuple(CheckSummary.from_result(result) for result in results),
    )


def write_report_index(index: ReportIndex, output_dir: Path) -> Path:
    """Write ``index`` to ``output_dir/index.json`` and return the path."""

    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / INDEX_FILENAME
    path.write_text(index.to_json(), encoding="utf-8")
    return path


def failed_check_ids(results: Sequence[CheckResult]) -> list[str]:
    """Return the ids of every check that did not pass, in order."""

    return [result.id for result in results if not result.passed]


__all__ = ["build_report_index", "failed_check_ids", "write_report_index"]
