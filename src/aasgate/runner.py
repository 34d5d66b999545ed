# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run the conformance engine once per target and report format.

Targets are processed strictly one after another. For each target the engine
is invoked once per requested report format, in configured order, and its
stdout is written verbatim to the deterministic report path. The exit code of
the last invocation decides whether the target passed.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path

from .commands import build_file_check_args, build_server_check_args, format_command, redact_args
from .config import GateConfig, ReportFormat
from .constants import ENGINE_REPOSITORY_URL, FILE_REPORT_DIR, SERVER_REPORT_DIR
from .core.logger import GateLogger
from .core.process import ExecResult, run_tool
from .discovery import expand_globs
from .environment import ToolEnvironment
from .filesystem.paths import file_report_path, server_report_path
from .models import CheckDraft, CheckResult

ToolExecutor = Callable[[str, Sequence[str]], ExecResult]
ReportPathFor = Callable[[ReportFormat], Path]
ArgsFor = Callable[[ReportFormat], list[str]]


def _execute(command: str, args: Sequence[str]) -> ExecResult:
    return run_tool(command, args)


def _expand(patterns: Sequence[str]) -> list[str]:
    return expand_globs(patterns)


@dataclass(slots=True)
class CheckRunner:
    """Drive the engine for every target described by ``config``."""

    config: GateConfig
    environment: ToolEnvironment
    logger: GateLogger
    execute: ToolExecutor = _execute
    expand: Callable[[Sequence[str]], list[str]] = _expand

    def run_file_checks(self) -> list[CheckResult]:
        """Check every file matched by the configured patterns, in sorted order."""

        files = self.expand(self.config.files)
        if not files:
            self.logger.warn("No files matched the provided patterns")
            return []

        self.logger.info(f"Found {len(files)} file(s) to check")
        results: list[CheckResult] = []
        for file_path in files:
            result = self.run_file_check(file_path)
            results.append(result)
            if result.passed:
                self.logger.ok(f"{file_path} passed")
            else:
                self.logger.fail(f"{file_path} failed (exit code: {result.exit_code})")
        return results

    def run_file_check(self, file_path: str) -> CheckResult:
        """Run ``check_file`` for ``file_path`` once per report format."""

        draft = CheckDraft.for_file(file_path)
        self._run_formats(
            draft,
            report_dir=self.config.output_dir / FILE_REPORT_DIR,
            args_for=lambda fmt: build_file_check_args(
                file_path,
                self.config.format,
                self.config.model_type,
                fmt,
            ),
            path_for=lambda fmt: file_report_path(self.config.output_dir, file_path, fmt),
        )
        if draft.error is not None:
            self.logger.fail(f"File check failed for {file_path}: {draft.error}")
        return draft.finalize()

    def run_server_checks(self) -> list[CheckResult]:
        """Run ``check_server`` against the configured endpoint and profile."""

        config = self.config
        draft = CheckDraft.for_server(config.server_url, config.api_profile)
        self.logger.info("Server conformance check:")
        self.logger.info(f"  URL: {config.server_url}")
        self.logger.info(f"  Profile: {config.api_profile}")
        if config.filter:
            self.logger.info(f"  Filter: {config.filter}")
        self.logger.info(f"Note: Server tests require pre-populated test data. See: {ENGINE_REPOSITORY_URL}#readme")

        self._run_formats(
            draft,
            report_dir=config.output_dir / SERVER_REPORT_DIR,
            args_for=lambda fmt: build_server_check_args(
                config.server_url,
                config.api_profile,
                config.filter,
                config.headers,
                fmt,
            ),
            path_for=lambda fmt: server_report_path(config.output_dir, config.api_profile, fmt),
        )
        if draft.error is not None:
            self.logger.fail(f"Server check failed: {draft.error}")

        result = draft.finalize()
        if result.passed:
            self.logger.ok("Server check passed")
        else:
            self.logger.fail(f"Server check failed (exit code: {result.exit_code})")
        return [result]

    def _run_formats(
        self,
        draft: CheckDraft,
        *,
        report_dir: Path,
        args_for: ArgsFor,
        path_for: ReportPathFor,
    ) -> None:
        """Invoke the engine per report format, recording into ``draft``.

        The first exception stops the remaining formats and is stored on the
        draft; the run itself carries on with the next target.
        """

        command = self.environment.engine_command
        try:
            report_dir.mkdir(parents=True, exist_ok=True)
            for fmt in self.config.report_formats:
                args = args_for(fmt)
                self.logger.info(f"Running: {format_command(command, redact_args(args))}")
                outcome = self.execute(command, args)
                draft.exit_code = outcome.exit_code

                report_path = path_for(fmt)
                report_path.write_text(outcome.stdout, encoding="utf-8")
                draft.report_paths[fmt] = report_path
                self.logger.info(f"Report written: {report_path}")

                if outcome.stderr:
                    self.logger.warn(f"stderr: {outcome.stderr}")
        except Exception as exc:  # noqa: BLE001 - any failure is confined to this target
            draft.error = str(exc) or exc.__class__.__name__


__all__ = ["CheckRunner", "ToolExecutor"]
