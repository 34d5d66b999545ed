# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the end-to-end gate flow."""

from __future__ import annotations

import json
import os
from pathlib import Path

import pytest

from aasgate.actions import ActionsContext
from aasgate.config import Mode
from aasgate.core.process import ExecResult
from aasgate.gate import run_gate
from aasgate.inputs import resolve_inputs
from aasgate.runner import CheckRunner

PROFILE = "https://example.com/profile/SSP-001"


@pytest.fixture
def actions(tmp_path: Path) -> ActionsContext:
    return ActionsContext(
        env={"GITHUB_OUTPUT": str(tmp_path / "output.txt"), "GITHUB_STEP_SUMMARY": str(tmp_path / "summary.md")}
    )


def _outputs(path: Path) -> dict[str, str]:
    lines = path.read_text(encoding="utf-8").splitlines()
    values: dict[str, str] = {}
    for position in range(0, len(lines), 3):
        name = lines[position].split("<<", 1)[0]
        values[name] = lines[position + 1]
    return values


def _gate(config, actions, logger, environment, engine, files=("/data/model.json",)):
    return run_gate(
        config,
        actions,
        logger,
        prepare=lambda _config, _logger: environment,
        runner_factory=lambda cfg, env, log: CheckRunner(
            cfg, env, log, execute=engine, expand=lambda _patterns: list(files)
        ),
    )


def test_passing_run(tmp_path: Path, make_config, actions, logger, environment, fake_engine) -> None:
    config = make_config()

    outcome = _gate(config, actions, logger, environment, fake_engine)

    assert outcome.passed
    assert outcome.exit_code == 0
    assert outcome.index_path == config.output_dir / "index.json"
    assert json.loads(outcome.index_path.read_text(encoding="utf-8"))["passedChecks"] == 1
    assert _outputs(tmp_path / "output.txt") == {
        "passed": "true",
        "reportDir": str(config.output_dir),
        "failedChecks": "[]",
    }
    assert "All checks passed" in (tmp_path / "summary.md").read_text(encoding="utf-8")
    assert (config.output_dir / "file").is_dir()
    assert (config.output_dir / "server").is_dir()


def test_failing_run_exits_nonzero(tmp_path: Path, make_config, actions, logger, environment, engine_factory) -> None:
    engine = engine_factory(lambda args: ExecResult(exit_code=1, stdout="", stderr=""))

    outcome = _gate(make_config(), actions, logger, environment, engine)

    assert outcome.exit_code == 1
    assert outcome.failed_checks == ("file:/data/model.json",)
    outputs = _outputs(tmp_path / "output.txt")
    assert outputs["passed"] == "false"
    assert json.loads(outputs["failedChecks"]) == ["file:/data/model.json"]


def test_continue_on_error_keeps_exit_zero(make_config, actions, logger, environment, engine_factory) -> None:
    engine = engine_factory(lambda args: ExecResult(exit_code=1, stdout="", stderr=""))

    outcome = _gate(make_config(continue_on_error=True), actions, logger, environment, engine)

    assert not outcome.passed
    assert outcome.exit_code == 0
    assert logger.warnings == ["AAS conformance gate: 1 check(s) failed, but continueOnError is enabled."]


def test_no_matching_files_passes(make_config, actions, logger, environment, fake_engine) -> None:
    outcome = _gate(make_config(), actions, logger, environment, fake_engine, files=())

    assert outcome.passed
    assert outcome.index.total_checks == 0
    assert "No files matched the provided patterns" in logger.warnings


def test_both_mode_runs_files_before_server(make_config, actions, logger, environment, fake_engine) -> None:
    config = make_config(mode=Mode.BOTH, server_url="http://localhost:8080", api_profile=PROFILE)

    outcome = _gate(config, actions, logger, environment, fake_engine)

    assert [result.id for result in outcome.results] == ["file:/data/model.json", f"server:{PROFILE}"]
    assert [args[0] for _, args in fake_engine.calls] == ["check_file", "check_file", "check_server", "check_server"]
    assert [check.id for check in outcome.index.checks] == [result.id for result in outcome.results]


def test_default_preparer_is_used(monkeypatch: pytest.MonkeyPatch, make_config, actions, logger, environment, fake_engine) -> None:
    monkeypatch.setattr("aasgate.gate.ensure_test_engines", lambda _config, _logger: environment)
    monkeypatch.setattr("aasgate.runner.run_tool", lambda command, args: fake_engine(command, args))
    monkeypatch.setattr("aasgate.runner.expand_globs", lambda patterns: ["/data/model.json"])

    outcome = run_gate(make_config(), actions, logger)

    assert outcome.passed
    assert len(fake_engine.calls) == 2


def test_report_dir_output_keeps_user_spelling(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, actions, logger, environment, fake_engine, secrets
) -> None:
    monkeypatch.chdir(tmp_path)
    config = resolve_inputs({"files": "model.json", "outputDir": "./reports/"}, secrets)

    outcome = _gate(config, actions, logger, environment, fake_engine)

    assert _outputs(tmp_path / "output.txt")["reportDir"] == "./reports/"
    assert outcome.index_path == Path("reports") / "index.json"
    assert (tmp_path / "reports" / "index.json").is_file()


def test_undecodable_filename_does_not_abort_the_run(
    tmp_path: Path, make_config, actions, logger, environment, fake_engine
) -> None:
    raw_path = os.fsdecode(b"/data/m\xff.json")

    outcome = _gate(make_config(), actions, logger, environment, fake_engine, files=(raw_path,))

    assert outcome.exit_code == 0
    assert json.loads(outcome.index_path.read_text(encoding="utf-8"))["checks"][0]["id"] == "file:/data/m\ufffd.json"
    assert "/data/m\ufffd.json" in (tmp_path / "summary.md").read_text(encoding="utf-8")
