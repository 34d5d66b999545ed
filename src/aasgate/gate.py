# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""End-to-end flow of a gate run, from prepared config to exit status."""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from .actions import ActionsContext
from .config import GateConfig
from .core.logger import GateLogger
from .environment import ToolEnvironment, ensure_test_engines
from .filesystem.paths import ensure_report_directories
from .models import CheckResult, ReportIndex
from .reporting.index import build_report_index, failed_check_ids, write_report_index
from .reporting.summary import render_summary
from .runner import CheckRunner

EnvironmentPreparer = Callable[[GateConfig, GateLogger], ToolEnvironment]
RunnerFactory = Callable[[GateConfig, ToolEnvironment, GateLogger], CheckRunner]


@dataclass(frozen=True, slots=True)
class GateOutcome:
    """Everything a caller needs once the run has finished."""

    results: tuple[CheckResult, ...]
    index: ReportIndex
    index_path: Path
    failed_checks: tuple[str, ...]
    exit_code: int

    @property
    def passed(self) -> bool:
        return not self.failed_checks


def run_gate(
    config: GateConfig,
    actions: ActionsContext,
    logger: GateLogger,
    *,
    prepare: EnvironmentPreparer | None = None,
    runner_factory: RunnerFactory | None = None,
) -> GateOutcome:
    """Run every configured check and publish the results.

    Args:
        config: Validated configuration.
        actions: CI collaborator receiving outputs and the job summary.
        logger: Logger for progress output.
        prepare: Environment preparation hook; defaults to
            :func:`ensure_test_engines`.
        runner_factory: Builds the check runner; defaults to :class:`CheckRunner`.

    Returns:
        GateOutcome: Results, index and the process exit code to use.

    Raises:
        EnvironmentSetupError: If the engine cannot be provisioned.
        OSError: If the output directory or index cannot be written.
    """

    logger.info(f"Mode: {config.mode}")
    ensure_report_directories(config.output_dir)

    environment = (prepare or ensure_test_engines)(config, logger)
    runner = (runner_factory or CheckRunner)(config, environment, logger)

    results: list[CheckResult] = []
    if config.includes_file:
        logger.section("Running file checks")
        results.extend(runner.run_file_checks())
    if config.includes_server:
        logger.section("Running server checks")
        results.extend(runner.run_server_checks())

    index = build_report_index(config, results, environment)
    index_path = write_report_index(index, config.output_dir)
    logger.info(f"Report index written: {index_path}")

    failed = failed_check_ids(results)
    passed = not failed
    actions.set_output("passed", "true" if passed else "false")
    actions.set_output("reportDir", config.report_dir)
    actions.set_output("failedChecks", json.dumps(failed))

    actions.write_summary(render_summary(config, results, index, environment))
    logger.info("Job summary written")

    logger.section("Result")
    exit_code = 0
    if passed:
        logger.ok("All conformance checks passed!")
    elif not config.continue_on_error:
        logger.fail(
            f"AAS conformance gate failed. {len(failed)} check(s) did not pass.\n"
            f"See the job summary and reports in {config.output_dir}/ for details."
        )
        exit_code = 1
    else:
        logger.warn(
            f"AAS conformance gate: {len(failed)} check(s) failed, but continueOnError is enabled."
        )

    return GateOutcome(
        results=tuple(results),
        index=index,
        index_path=index_path,
        failed_checks=tuple(failed),
        exit_code=exit_code,
    )


__all__ = ["EnvironmentPreparer", "GateOutcome", "RunnerFactory", "run_gate"]
