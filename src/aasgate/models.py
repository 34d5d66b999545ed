# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core data models shared across the aasgate package."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from .config import Mode, ReportFormat
from .constants import NOT_EXECUTED_EXIT_CODE
from .discovery import display_path


class CheckKind(StrEnum):
    """Pipeline that produced a check result."""

    FILE = "file"
    SERVER = "server"


class CheckResult(BaseModel):
    """Final outcome of checking one target."""

    model_config = ConfigDict(frozen=True)

    id: str
    kind: CheckKind
    target: str
    passed: bool
    exit_code: int = NOT_EXECUTED_EXIT_CODE
    report_paths: dict[ReportFormat, Path] = Field(default_factory=dict)
    error: str | None = None


@dataclass(slots=True)
class CheckDraft:
    """Mutable record filled in while a target's checks execute."""

    id: str
    kind: CheckKind
    target: str
    exit_code: int = NOT_EXECUTED_EXIT_CODE
    report_paths: dict[ReportFormat, Path] = field(default_factory=dict)
    error: str | None = None

    @classmethod
    def for_file(cls, file_path: str) -> CheckDraft:
        target = display_path(file_path)
        return cls(id=f"{CheckKind.FILE}:{target}", kind=CheckKind.FILE, target=target)

    @classmethod
    def for_server(cls, server_url: str, api_profile: str) -> CheckDraft:
        return cls(
            id=f"{CheckKind.SERVER}:{api_profile}",
            kind=CheckKind.SERVER,
            target=f"{server_url} ({api_profile})",
        )

    def finalize(self) -> CheckResult:
        """Freeze the draft; a target passes only if it ran without error and exited 0."""

        return CheckResult(
            id=self.id,
            kind=self.kind,
            target=self.target,
            passed=self.error is None and self.exit_code == 0,
            exit_code=self.exit_code,
            report_paths=dict(self.report_paths),
            error=self.error,
        )


class CheckSummary(BaseModel):
    """Index entry describing one check."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    type: CheckKind
    target: str
    passed: bool
    reports: dict[ReportFormat, str] = Field(default_factory=dict)
    error: str | None = None

    @classmethod
    def from_result(cls, result: CheckResult) -> CheckSummary:
        return cls(
            id=result.id,
            type=result.kind,
            target=result.target,
            passed=result.passed,
            reports={fmt: str(path) for fmt, path in result.report_paths.items()},
            error=result.error,
        )


class ReportIndex(BaseModel):
    """Aggregate, persisted summary of every check in one run."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    generated: datetime
    action_version: str = Field(alias="actionVersion")
    engine_version: str = Field(alias="engineVersion")
    mode: Mode
    total_checks: int = Field(alias="totalChecks")
    passed_checks: int = Field(alias="passedChecks")
    failed_checks: int = Field(alias="failedChecks")
    checks: tuple[CheckSummary, ...] = ()

    def to_json(self) -> str:
        """Serialise with camelCase keys, omitting unset optional fields."""

        return self.model_dump_json(by_alias=True, exclude_none=True, indent=2)


__all__ = [
    "CheckDraft",
    "CheckKind",
    "CheckResult",
    "CheckSummary",
    "ReportIndex",
]
