# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the per-target check runner."""

from __future__ import annotations

import json
import os
from collections.abc import Sequence
from pathlib import Path

import pytest

from aasgate.actions import SecretRegistry
from aasgate.config import Mode, ReportFormat
from aasgate.core.logger import GateLogger
from aasgate.core.process import ExecResult
from aasgate.discovery import expand_braces
from aasgate.filesystem.paths import file_report_path, server_report_path
from aasgate.inputs import resolve_inputs
from aasgate.models import CheckKind
from aasgate.reporting.index import build_report_index
from aasgate.runner import CheckRunner

PROFILE = "https://admin-shell.io/aas/API/3/0/AssetAdministrationShellRepositoryServiceSpecification/SSP-002"
SERVER = {"mode": Mode.SERVER, "files": (), "server_url": "http://localhost:8080", "api_profile": PROFILE}


def _runner(config, environment, logger, engine, files: Sequence[str] = ("/data/model.json",)) -> CheckRunner:
    return CheckRunner(config, environment, logger, execute=engine, expand=lambda _patterns: list(files))


def _exit_by_format(codes: dict[str, int]):
    def respond(args: Sequence[str]) -> ExecResult:
        return ExecResult(exit_code=codes[args[-1]], stdout=f"<{args[-1]}>", stderr="")

    return respond


def test_all_formats_run_in_order_and_write_stdout(make_config, environment, logger, fake_engine) -> None:
    config = make_config()

    results = _runner(config, environment, logger, fake_engine).run_file_checks()

    assert [args[-1] for _, args in fake_engine.calls] == ["json", "html"]
    assert all(command == "aas_test_engines" for command, _ in fake_engine.calls)
    (result,) = results
    assert result.passed
    assert result.id == "file:/data/model.json"
    assert result.kind is CheckKind.FILE
    assert result.exit_code == 0
    json_path = file_report_path(config.output_dir, "/data/model.json", "json")
    assert result.report_paths == {
        ReportFormat.JSON: json_path,
        ReportFormat.HTML: file_report_path(config.output_dir, "/data/model.json", "html"),
    }
    assert json_path.read_text(encoding="utf-8") == "report for json"


def test_files_are_checked_in_given_order(make_config, environment, logger, fake_engine) -> None:
    files = ["/data/a.json", "/data/b.xml"]

    results = _runner(make_config(), environment, logger, fake_engine, files).run_file_checks()

    assert [result.target for result in results] == files
    assert [args[1] for _, args in fake_engine.calls] == ["/data/a.json", "/data/a.json", "/data/b.xml", "/data/b.xml"]


def test_last_format_failure_fails_target(make_config, environment, logger, engine_factory) -> None:
    engine = engine_factory(_exit_by_format({"json": 0, "html": 2}))

    (result,) = _runner(make_config(), environment, logger, engine).run_file_checks()

    assert not result.passed
    assert result.exit_code == 2
    assert set(result.report_paths) == {ReportFormat.JSON, ReportFormat.HTML}
    assert logger.warnings == []


def test_last_format_success_masks_earlier_failure(make_config, environment, logger, engine_factory) -> None:
    engine = engine_factory(_exit_by_format({"json": 1, "html": 0}))

    (result,) = _runner(make_config(), environment, logger, engine).run_file_checks()

    assert result.passed
    assert result.exit_code == 0


def test_stderr_becomes_a_warning(make_config, environment, logger, engine_factory) -> None:
    engine = engine_factory(lambda args: ExecResult(exit_code=0, stdout="{}", stderr="deprecated option"))

    _runner(make_config(report_formats=(ReportFormat.JSON,)), environment, logger, engine).run_file_checks()

    assert logger.warnings == ["stderr: deprecated option"]


def test_report_write_failure_is_confined_to_target(make_config, environment, logger, fake_engine) -> None:
    config = make_config()
    blocked = file_report_path(config.output_dir, "/data/a.json", "json")
    blocked.mkdir(parents=True)

    results = _runner(config, environment, logger, fake_engine, ["/data/a.json", "/data/b.json"]).run_file_checks()

    first, second = results
    assert not first.passed
    assert first.error
    assert first.report_paths == {}
    assert len([call for call in fake_engine.calls if call[1][1] == "/data/a.json"]) == 1
    assert second.passed


def test_unwritable_output_dir_records_not_executed(tmp_path: Path, make_config, environment, logger, fake_engine) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")

    (result,) = _runner(make_config(output_dir=blocker), environment, logger, fake_engine).run_file_checks()

    assert not result.passed
    assert result.exit_code == -1
    assert result.error
    assert fake_engine.calls == []


def test_missing_engine_is_recorded_as_error(make_config, environment, logger, engine_factory) -> None:
    def respond(args: Sequence[str]) -> ExecResult:
        raise FileNotFoundError("Executable 'aas_test_engines' was not found on PATH")

    (result,) = _runner(make_config(), environment, logger, engine_factory(respond)).run_file_checks()

    assert not result.passed
    assert result.exit_code == -1
    assert "not found on PATH" in (result.error or "")


def test_no_matching_files_warns(make_config, environment, logger, fake_engine) -> None:
    results = _runner(make_config(), environment, logger, fake_engine, []).run_file_checks()

    assert results == []
    assert logger.warnings == ["No files matched the provided patterns"]
    assert fake_engine.calls == []


def test_default_expansion_uses_globs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, make_config, environment, logger, fake_engine) -> None:
    (tmp_path / "models").mkdir()
    (tmp_path / "models" / "b.json").write_text("{}", encoding="utf-8")
    (tmp_path / "models" / "a.json").write_text("{}", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    runner = CheckRunner(make_config(files=("models/*.json",)), environment, logger, execute=fake_engine)
    results = runner.run_file_checks()

    assert [Path(result.target).name for result in results] == ["a.json", "b.json"]


def test_server_check(make_config, environment, logger, fake_engine) -> None:
    config = make_config(**SERVER, filter="GetAll*", headers=("X-Api-Key: k",))

    (result,) = _runner(config, environment, logger, fake_engine).run_server_checks()

    assert result.passed
    assert result.kind is CheckKind.SERVER
    assert result.id == f"server:{PROFILE}"
    assert result.target == f"http://localhost:8080 ({PROFILE})"
    assert result.report_paths[ReportFormat.JSON] == (
        config.output_dir / "server" / "AssetAdministrationShellRepositoryServiceSpecification_SSP-002.json"
    )
    assert result.report_paths[ReportFormat.HTML] == server_report_path(config.output_dir, PROFILE, "html")
    _, args = fake_engine.calls[0]
    assert args == [
        "check_server",
        "http://localhost:8080",
        PROFILE,
        "--filter",
        "GetAll*",
        "--header",
        "X-Api-Key: k",
        "--output",
        "json",
    ]


def test_server_failure(make_config, environment, logger, engine_factory) -> None:
    engine = engine_factory(lambda args: ExecResult(exit_code=1, stdout="", stderr=""))

    (result,) = _runner(make_config(**SERVER), environment, logger, engine).run_server_checks()

    assert not result.passed
    assert result.exit_code == 1


def test_header_values_never_reach_the_log(
    capsys: pytest.CaptureFixture[str], make_config, environment, logger, secrets, fake_engine
) -> None:
    secrets.register("Bearer t0k3n")
    config = make_config(**SERVER, headers=("Authorization: Bearer t0k3n",))

    _runner(config, environment, logger, fake_engine).run_server_checks()

    out = capsys.readouterr().out
    assert "Authorization: ***" in out
    assert "t0k3n" not in out
    assert fake_engine.calls[0][1][4] == "Authorization: Bearer t0k3n"


def test_masks_are_announced_before_any_log_line(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, environment, fake_engine
) -> None:
    events: list[str] = []
    registry = SecretRegistry(announce=True, emit=events.append)
    monkeypatch.setattr("aasgate.core.logger.core_info", lambda msg, **_kwargs: events.append(f"info:{msg}"))
    logger = GateLogger(secrets=registry, use_emoji=False, use_color=False)

    config = resolve_inputs(
        {
            "mode": "server",
            "serverUrl": "http://localhost:8080",
            "apiProfile": PROFILE,
            "headers": "Authorization: Bearer s3cret",
            "outputDir": str(tmp_path / "out"),
        },
        registry,
    )
    _runner(config, environment, logger, fake_engine).run_server_checks()

    assert events[0] == "::add-mask::Bearer s3cret"
    assert all("s3cret" not in event for event in events[1:])
    assert any(event.startswith("info:Running:") for event in events)


def test_brace_patterns_select_every_alternative(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, make_config, environment, logger, fake_engine
) -> None:
    for name in ("a.json", "b.xml", "c.txt"):
        (tmp_path / name).write_text("{}", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    runner = CheckRunner(make_config(files=("*.{json,xml}",)), environment, logger, execute=fake_engine)
    results = runner.run_file_checks()

    assert [Path(result.target).name for result in results] == ["a.json", "b.xml"]


def test_negated_patterns_exclude_matches(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, make_config, environment, logger, fake_engine
) -> None:
    (tmp_path / "models").mkdir()
    for name in ("a.json", "b.json"):
        (tmp_path / "models" / name).write_text("{}", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    config = make_config(files=("!models/a.json", "models/**/*.json"))
    results = CheckRunner(config, environment, logger, execute=fake_engine).run_file_checks()

    assert [Path(result.target).name for result in results] == ["b.json"]


def test_undecodable_filename_is_checked_and_indexed(make_config, environment, logger, fake_engine) -> None:
    raw_path = os.fsdecode(b"/data/m\xff.json")
    config = make_config()

    (result,) = _runner(config, environment, logger, fake_engine, [raw_path]).run_file_checks()
    index = build_report_index(config, [result], environment)

    assert result.passed
    assert result.target == "/data/m\ufffd.json"
    assert result.id == "file:/data/m\ufffd.json"
    assert fake_engine.calls[0][1][1] == raw_path
    assert json.loads(index.to_json())["checks"][0]["target"] == "/data/m\ufffd.json"
    assert result.report_paths[ReportFormat.JSON].name == "data_m.json"


def test_expand_braces_handles_nested_groups() -> None:
    assert expand_braces("m.{json,{xml,aasx}}") == ["m.json", "m.xml", "m.aasx"]
    assert expand_braces("{literal}.json") == ["{literal}.json"]
