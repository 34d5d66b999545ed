# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path

import pytest

from aasgate.actions import SecretRegistry
from aasgate.config import GateConfig
from aasgate.core.logger import GateLogger
from aasgate.core.process import ExecResult
from aasgate.environment import ToolEnvironment
from aasgate.inputs import INPUT_KEYS, input_env_name

_RUNNER_ENV = ("GITHUB_ACTIONS", "GITHUB_OUTPUT", "GITHUB_STEP_SUMMARY", "RUNNER_DEBUG")


@pytest.fixture(autouse=True)
def _isolate_runner_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep tests independent of the CI job that happens to run them."""
    for name in _RUNNER_ENV:
        monkeypatch.delenv(name, raising=False)
    for key in INPUT_KEYS:
        monkeypatch.delenv(input_env_name(key), raising=False)


class FakeEngine:
    """Stand-in for the conformance engine that records every invocation."""

    def __init__(self, respond: Callable[[Sequence[str]], ExecResult] | None = None) -> None:
        self.calls: list[tuple[str, list[str]]] = []
        self._respond = respond or (lambda args: ExecResult(exit_code=0, stdout=f"report for {args[-1]}", stderr=""))

    def __call__(self, command: str, args: Sequence[str]) -> ExecResult:
        self.calls.append((command, list(args)))
        return self._respond(args)


@pytest.fixture
def secrets() -> SecretRegistry:
    return SecretRegistry()


@pytest.fixture
def logger(secrets: SecretRegistry) -> GateLogger:
    return GateLogger(secrets=secrets, use_emoji=False, use_color=False)


@pytest.fixture
def environment() -> ToolEnvironment:
    return ToolEnvironment(python_cmd="python3", python_version="3.12.1", engine_version="1.2.0")


@pytest.fixture
def make_config(tmp_path: Path) -> Callable[..., GateConfig]:
    def factory(**overrides: object) -> GateConfig:
        values: dict[str, object] = {"files": ("model.json",), "output_dir": tmp_path / "reports"}
        values.update(overrides)
        return GateConfig(**values)

    return factory


@pytest.fixture
def engine_factory() -> type[FakeEngine]:
    return FakeEngine


@pytest.fixture
def fake_engine() -> FakeEngine:
    return FakeEngine()
