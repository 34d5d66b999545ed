# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring commands and shared services."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Annotated

import typer

from ..actions import ActionsContext
from ..config import ConfigError
from ..constants import ACTION_NAME, ACTION_VERSION, DEFAULT_OUTPUT_DIR
from ..core.logger import GateLogger
from ..environment import EnvironmentSetupError
from ..filesystem.paths import list_reports
from ..gate import run_gate
from ..inputs import resolve_inputs
from ..logging import emoji
from .options import (
    API_PROFILE_OPTION,
    CONTINUE_ON_ERROR_OPTION,
    DEBUG_OPTION,
    FILES_OPTION,
    FILTER_OPTION,
    FORMAT_OPTION,
    HEADER_OPTION,
    MODE_OPTION,
    MODEL_TYPE_OPTION,
    NO_EMOJI_OPTION,
    OUTPUT_DIR_OPTION,
    PIP_PACKAGE_OPTION,
    PIP_VERSION_OPTION,
    PYTHON_CMD_OPTION,
    REPORT_FORMATS_OPTION,
    SERVER_URL_OPTION,
    RunCLIOptions,
    merge_inputs,
)

app = typer.Typer(
    help="Run aas_test_engines conformance checks and publish sanitized reports.",
    add_completion=False,
    no_args_is_help=False,
)


@app.command("run")
def run_gate_command(
    mode: MODE_OPTION = None,
    files: FILES_OPTION = None,
    format: FORMAT_OPTION = None,
    model_type: MODEL_TYPE_OPTION = None,
    server_url: SERVER_URL_OPTION = None,
    api_profile: API_PROFILE_OPTION = None,
    filter: FILTER_OPTION = None,
    header: HEADER_OPTION = None,
    report_formats: REPORT_FORMATS_OPTION = None,
    output_dir: OUTPUT_DIR_OPTION = None,
    pip_package: PIP_PACKAGE_OPTION = None,
    pip_version: PIP_VERSION_OPTION = None,
    python_cmd: PYTHON_CMD_OPTION = None,
    continue_on_error: CONTINUE_ON_ERROR_OPTION = None,
    no_emoji: NO_EMOJI_OPTION = False,
    debug: DEBUG_OPTION = False,
) -> None:
    """Resolve inputs, run the configured checks, and exit with the gate status.

    Each option falls back to the matching ``INPUT_*`` environment variable.
    """

    actions = ActionsContext(env=dict(os.environ))
    logger = GateLogger(
        secrets=actions.secrets,
        actions=actions,
        use_emoji=not no_emoji,
        debug_enabled=debug or actions.debug_enabled,
    )
    options = RunCLIOptions(
        mode=mode,
        files=files,
        format=format,
        model_type=model_type,
        server_url=server_url,
        api_profile=api_profile,
        filter=filter,
        headers=header,
        report_formats=report_formats,
        output_dir=output_dir,
        pip_package=pip_package,
        pip_version=pip_version,
        python_cmd=python_cmd,
        continue_on_error=continue_on_error,
    )

    try:
        logger.info(f"{emoji('🔧 ', logger.use_emoji)}{ACTION_NAME} v{ACTION_VERSION}")
        config = resolve_inputs(merge_inputs(options, actions.env), actions.secrets)
        outcome = run_gate(config, actions, logger)
    except (ConfigError, EnvironmentSetupError, OSError) as exc:
        logger.fail(f"Action failed: {exc}")
        raise typer.Exit(code=1) from exc
    raise typer.Exit(code=outcome.exit_code)


@app.command("list-reports")
def list_reports_command(
    output_dir: Annotated[
        Path,
        typer.Argument(help="Report directory to list."),
    ] = Path(DEFAULT_OUTPUT_DIR),
) -> None:
    """Print every JSON and HTML report written below ``output_dir``."""

    reports = list_reports(output_dir)
    if not reports:
        typer.echo("No reports found.")
        return
    for report in reports:
        typer.echo(str(report))


def main() -> None:
    """Console-script entry point."""

    app()


__all__ = ["app", "main"]
