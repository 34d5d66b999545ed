# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parse raw string inputs into a validated :class:`GateConfig`.

Inputs arrive the way a GitHub Action receives them: every value is a string,
lists are newline or comma separated, and booleans are the literal ``"true"``.
Resolution fails fast with :class:`ConfigError` on the first invalid value.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from pathlib import Path
from typing import Final

from packaging.version import InvalidVersion, Version

from .actions import SecretRegistry
from .config import DEFAULT_REPORT_FORMATS, ConfigError, ContentFormat, GateConfig, Mode, ReportFormat
from .constants import (
    DEFAULT_MODE,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_PIP_PACKAGE,
    DEFAULT_PIP_VERSION,
    DEFAULT_REPORT_FORMATS as DEFAULT_REPORT_FORMATS_RAW,
)

INPUT_KEYS: Final[tuple[str, ...]] = (
    "mode",
    "files",
    "format",
    "modelType",
    "serverUrl",
    "apiProfile",
    "filter",
    "headers",
    "reportFormats",
    "outputDir",
    "pipPackage",
    "pipVersion",
    "pythonCmd",
    "continueOnError",
)

_LINE_BREAKS: Final[re.Pattern[str]] = re.compile(r"[\r\n]+")
_EXPLICIT_FORMATS: Final[tuple[str, ...]] = (
    ContentFormat.JSON.value,
    ContentFormat.XML.value,
    ContentFormat.AASX.value,
)


def input_env_name(key: str) -> str:
    """Return the environment variable a runner uses for input ``key``."""

    return f"INPUT_{key.replace(' ', '_').upper()}"


def inputs_from_env(env: Mapping[str, str]) -> dict[str, str]:
    """Collect the raw gate inputs present in ``env``."""

    return {key: env[input_env_name(key)] for key in INPUT_KEYS if input_env_name(key) in env}


def parse_newline_separated(value: str) -> list[str]:
    """Split ``value`` on runs of line breaks, trimming and dropping blank lines."""

    return [line.strip() for line in _LINE_BREAKS.split(value) if line.strip()]


def parse_comma_separated(value: str) -> list[str]:
    """Split ``value`` on commas, trimming, lowercasing and dropping blanks."""

    return [item.strip().lower() for item in value.split(",") if item.strip()]


def parse_boolean(value: str) -> bool:
    """Return ``True`` only for a case-insensitive ``"true"``."""

    return value.lower() == "true"


def validate_mode(raw: str) -> Mode:
    normalized = raw.lower().strip()
    try:
        return Mode(normalized)
    except ValueError:
        raise ConfigError(f'Invalid mode: "{raw}". Must be one of: file, server, both') from None


def validate_format(raw: str) -> ContentFormat:
    if not raw:
        return ContentFormat.UNSET
    normalized = raw.lower().strip()
    if normalized in _EXPLICIT_FORMATS:
        return ContentFormat(normalized)
    raise ConfigError(f'Invalid format: "{raw}". Must be one of: json, xml, aasx')


def validate_report_formats(formats: list[str]) -> tuple[ReportFormat, ...]:
    """Return ``formats`` as report formats, defaulting to JSON and HTML when empty.

    Raises:
        ConfigError: If any entry is not ``json`` or ``html``.
    """

    valid: list[ReportFormat] = []
    for entry in formats:
        try:
            valid.append(ReportFormat(entry))
        except ValueError:
            raise ConfigError(f'Invalid report format: "{entry}". Must be json or html') from None
    return tuple(valid) if valid else DEFAULT_REPORT_FORMATS


def validate_pip_version(raw: str) -> str:
    """Accept ``latest`` or a PEP 440 version string."""

    if raw == DEFAULT_PIP_VERSION:
        return raw
    try:
        Version(raw)
    except InvalidVersion:
        raise ConfigError(f'Invalid pipVersion: "{raw}". Use "latest" or a version such as 1.0.0') from None
    return raw


def header_secret(header: str) -> str | None:
    """Return the value portion of a ``Name: value`` header, or ``None``.

    Headers without a name before the colon, without a colon, or with a blank
    value have nothing to mask.
    """

    name, sep, value = header.partition(":")
    if not sep or not name:
        return None
    return value.strip() or None


def mask_header_values(headers: list[str], secrets: SecretRegistry) -> None:
    """Register every header value with ``secrets`` so logs never show it."""

    for header in headers:
        value = header_secret(header)
        if value:
            secrets.register(value)


def resolve_inputs(source: Mapping[str, str], secrets: SecretRegistry) -> GateConfig:
    """Resolve and validate raw inputs from ``source``.

    Header values are registered with ``secrets`` before any other validation
    runs, so neither error messages nor later log lines can leak them.

    Args:
        source: Raw input strings keyed by input name (``mode``, ``files`` ...).
            Missing keys behave like empty strings.
        secrets: Registry receiving sensitive header values.

    Returns:
        GateConfig: Immutable, validated configuration.

    Raises:
        ConfigError: On the first invalid or missing input.
    """

    def get(key: str) -> str:
        return source.get(key) or ""

    mode = validate_mode(get("mode") or DEFAULT_MODE)
    headers = parse_newline_separated(get("headers"))
    mask_header_values(headers, secrets)

    files = parse_newline_separated(get("files"))
    content_format = validate_format(get("format"))
    report_formats = validate_report_formats(
        parse_comma_separated(get("reportFormats") or DEFAULT_REPORT_FORMATS_RAW),
    )
    pip_version = validate_pip_version(get("pipVersion").strip() or DEFAULT_PIP_VERSION)

    return GateConfig(
        mode=mode,
        files=tuple(files),
        format=content_format,
        model_type=get("modelType").strip(),
        server_url=get("serverUrl").strip(),
        api_profile=get("apiProfile").strip(),
        filter=get("filter").strip(),
        headers=tuple(headers),
        report_formats=report_formats,
        output_dir=Path(get("outputDir") or DEFAULT_OUTPUT_DIR),
        output_dir_input=get("outputDir") or DEFAULT_OUTPUT_DIR,
        pip_package=get("pipPackage") or DEFAULT_PIP_PACKAGE,
        pip_version=pip_version,
        python_cmd=get("pythonCmd").strip(),
        continue_on_error=parse_boolean(get("continueOnError")),
    )


__all__ = [
    "INPUT_KEYS",
    "header_secret",
    "input_env_name",
    "inputs_from_env",
    "mask_header_values",
    "parse_boolean",
    "parse_comma_separated",
    "parse_newline_separated",
    "resolve_inputs",
    "validate_format",
    "validate_mode",
    "validate_pip_version",
    "validate_report_formats",
]
