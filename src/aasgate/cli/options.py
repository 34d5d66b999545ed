# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Typer parameter declarations and raw-input assembly for the run command."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Annotated

import typer

from ..inputs import inputs_from_env

MODE_OPTION = Annotated[
    str | None,
    typer.Option("--mode", help="Checks to run: file, server or both. [env: INPUT_MODE]"),
]
FILES_OPTION = Annotated[
    list[str] | None,
    typer.Option("--files", "-f", help="File path or glob pattern; repeatable. [env: INPUT_FILES]"),
]
FORMAT_OPTION = Annotated[
    str | None,
    typer.Option("--format", help="Content format override: json, xml or aasx. [env: INPUT_FORMAT]"),
]
MODEL_TYPE_OPTION = Annotated[
    str | None,
    typer.Option("--model-type", help="Model type passed to check_file. [env: INPUT_MODELTYPE]"),
]
SERVER_URL_OPTION = Annotated[
    str | None,
    typer.Option("--server-url", help="Base URL of the AAS HTTP API server. [env: INPUT_SERVERURL]"),
]
API_PROFILE_OPTION = Annotated[
    str | None,
    typer.Option("--api-profile", help="IDTA profile identifier URL. [env: INPUT_APIPROFILE]"),
]
FILTER_OPTION = Annotated[
    str | None,
    typer.Option("--filter", help="Test-name filter passed to check_server. [env: INPUT_FILTER]"),
]
HEADER_OPTION = Annotated[
    list[str] | None,
    typer.Option("--header", "-H", help='"Name: value" request header; repeatable. [env: INPUT_HEADERS]'),
]
REPORT_FORMATS_OPTION = Annotated[
    str | None,
    typer.Option("--report-formats", help="Comma-separated report formats. [env: INPUT_REPORTFORMATS]"),
]
OUTPUT_DIR_OPTION = Annotated[
    str | None,
    typer.Option("--output-dir", "-o", help="Directory receiving reports. [env: INPUT_OUTPUTDIR]"),
]
PIP_PACKAGE_OPTION = Annotated[
    str | None,
    typer.Option("--pip-package", help="Package providing the engine. [env: INPUT_PIPPACKAGE]"),
]
PIP_VERSION_OPTION = Annotated[
    str | None,
    typer.Option("--pip-version", help='Engine version or "latest". [env: INPUT_PIPVERSION]'),
]
PYTHON_CMD_OPTION = Annotated[
    str | None,
    typer.Option("--python-cmd", help="Preferred Python interpreter. [env: INPUT_PYTHONCMD]"),
]
CONTINUE_ON_ERROR_OPTION = Annotated[
    bool | None,
    typer.Option(
        "--continue-on-error/--fail-on-error",
        help="Exit 0 even when checks fail. [env: INPUT_CONTINUEONERROR]",
    ),
]
NO_EMOJI_OPTION = Annotated[
    bool,
    typer.Option("--no-emoji", help="Disable emoji in output."),
]
DEBUG_OPTION = Annotated[
    bool,
    typer.Option("--debug", help="Show debug output."),
]


@dataclass(slots=True)
class RunCLIOptions:
    """Raw CLI inputs for the run command; ``None`` means not given."""

    mode: str | None = None
    files: list[str] | None = None
    format: str | None = None
    model_type: str | None = None
    server_url: str | None = None
    api_profile: str | None = None
    filter: str | None = None
    headers: list[str] | None = None
    report_formats: str | None = None
    output_dir: str | None = None
    pip_package: str | None = None
    pip_version: str | None = None
    python_cmd: str | None = None
    continue_on_error: bool | None = None

    def as_inputs(self) -> dict[str, str]:
        """Return the options given on the command line as raw input strings."""

        raw: dict[str, str | None] = {
            "mode": self.mode,
            "files": "\n".join(self.files) if self.files else None,
            "format": self.format,
            "modelType": self.model_type,
            "serverUrl": self.server_url,
            "apiProfile": self.api_profile,
            "filter": self.filter,
            "headers": "\n".join(self.headers) if self.headers else None,
            "reportFormats": self.report_formats,
            "outputDir": self.output_dir,
            "pipPackage": self.pip_package,
            "pipVersion": self.pip_version,
            "pythonCmd": self.python_cmd,
            "continueOnError": None if self.continue_on_error is None else str(self.continue_on_error).lower(),
        }
        return {key: value for key, value in raw.items() if value is not None}


def merge_inputs(options: RunCLIOptions, env: Mapping[str, str]) -> dict[str, str]:
    """Overlay command-line values on the ``INPUT_*`` environment inputs."""

    merged = inputs_from_env(env)
    merged.update(options.as_inputs())
    return merged


__all__ = [
    "API_PROFILE_OPTION",
    "CONTINUE_ON_ERROR_OPTION",
    "DEBUG_OPTION",
    "FILES_OPTION",
    "FILTER_OPTION",
    "FORMAT_OPTION",
    "HEADER_OPTION",
    "MODEL_TYPE_OPTION",
    "MODE_OPTION",
    "NO_EMOJI_OPTION",
    "OUTPUT_DIR_OPTION",
    "PIP_PACKAGE_OPTION",
    "PIP_VERSION_OPTION",
    "PYTHON_CMD_OPTION",
    "REPORT_FORMATS_OPTION",
    "RunCLIOptions",
    "SERVER_URL_OPTION",
    "merge_inputs",
]
