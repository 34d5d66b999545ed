# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models for the conformance gate."""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .constants import (
    DEFAULT_OUTPUT_DIR,
    DEFAULT_PIP_PACKAGE,
    DEFAULT_PIP_VERSION,
    EXAMPLE_PROFILE,
    SERVICE_SPECIFICATIONS_URL,
)


class ConfigError(Exception):
    """Raised when configuration input is invalid."""


class Mode(StrEnum):
    """Which check pipelines a run executes."""

    FILE = "file"
    SERVER = "server"
    BOTH = "both"


class ContentFormat(StrEnum):
    """Format of the artifact under test; ``UNSET`` infers it from the extension."""

    UNSET = ""
    JSON = "json"
    XML = "xml"
    AASX = "aasx"


class ReportFormat(StrEnum):
    """Encoding of the report emitted by the conformance tool."""

    JSON = "json"
    HTML = "html"


DEFAULT_REPORT_FORMATS: tuple[ReportFormat, ...] = (ReportFormat.JSON, ReportFormat.HTML)


class GateConfig(BaseModel):
    """Validated, immutable configuration for a single gate run."""

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    mode: Mode = Mode.FILE
    files: tuple[str, ...] = ()
    format: ContentFormat = ContentFormat.UNSET
    model_type: str = ""
    server_url: str = ""
    api_profile: str = ""
    filter: str = ""
    headers: tuple[str, ...] = ()
    report_formats: tuple[ReportFormat, ...] = Field(default=DEFAULT_REPORT_FORMATS, min_length=1)
    output_dir: Path = Path(DEFAULT_OUTPUT_DIR)
    output_dir_input: str = ""
    pip_package: str = DEFAULT_PIP_PACKAGE
    pip_version: str = DEFAULT_PIP_VERSION
    python_cmd: str = ""
    continue_on_error: bool = False

    @property
    def report_dir(self) -> str:
        """Return the output directory as the user wrote it."""

        return self.output_dir_input or str(self.output_dir)

    @property
    def includes_file(self) -> bool:
        """Return ``True`` when the file pipeline runs."""

        return self.mode in (Mode.FILE, Mode.BOTH)

    @property
    def includes_server(self) -> bool:
        """Return ``True`` when the server pipeline runs."""

        return self.mode in (Mode.SERVER, Mode.BOTH)

    @model_validator(mode="after")
    def _require_mode_inputs(self) -> GateConfig:
        """Reject configurations missing the inputs their mode depends on.

        Raises:
            ConfigError: If file mode has no patterns or server mode lacks a URL
                or profile.
        """

        if self.includes_file and not self.files:
            raise ConfigError('File mode requires non-empty "files" input with file paths or glob patterns')
        if self.includes_server:
            if not self.server_url:
                raise ConfigError(
                    'Server mode requires "serverUrl" input with the base URL of the AAS HTTP API server'
                )
            if not self.api_profile:
                raise ConfigError(
                    'Server mode requires "apiProfile" input with the IDTA profile identifier.\n'
                    f"Example: {EXAMPLE_PROFILE}\n"
                    f"See: {SERVICE_SPECIFICATIONS_URL}"
                )
        return self


__all__ = [
    "DEFAULT_REPORT_FORMATS",
    "ConfigError",
    "ContentFormat",
    "GateConfig",
    "Mode",
    "ReportFormat",
]
