# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""GitHub Actions workflow-command helpers: secret masking, outputs, summaries."""

from __future__ import annotations

import os
import uuid
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final, Literal

import typer
from rich.markdown import Markdown

from .console import get_console_manager

REDACTED: Final[str] = "***"
ACTIONS_ENV: Final[str] = "GITHUB_ACTIONS"
OUTPUT_ENV: Final[str] = "GITHUB_OUTPUT"
SUMMARY_ENV: Final[str] = "GITHUB_STEP_SUMMARY"
DEBUG_ENV: Final[str] = "RUNNER_DEBUG"

AnnotationLevel = Literal["debug", "notice", "warning", "error"]
Emitter = Callable[[str], None]


def escape_data(value: str) -> str:
    """Escape ``value`` for use as the data part of a workflow command."""

    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def _default_emitter(line: str) -> None:
    typer.echo(line)


@dataclass(slots=True)
class SecretRegistry:
    """Track sensitive values and redact them from log output.

    Registering a value immediately announces it to the CI runner with an
    ``::add-mask::`` command when ``announce`` is enabled, so the runner's own
    log masking is active before any later line can contain it.
    """

    announce: bool = False
    emit: Emitter = _default_emitter
    _values: list[str] = field(default_factory=list)

    def register(self, value: str) -> None:
        """Record ``value`` as sensitive; blank values are ignored."""

        if not value or not value.strip() or value in self._values:
            return
        self._values.append(value)
        # Longest first so overlapping secrets are fully replaced.
        self._values.sort(key=len, reverse=True)
        if self.announce:
            self.emit(f"::add-mask::{escape_data(value)}")

    @property
    def values(self) -> tuple[str, ...]:
        """Return the registered secrets, longest first."""

        return tuple(self._values)

    def redact(self, text: str) -> str:
        """Return ``text`` with every registered secret replaced by ``***``."""

        for value in self._values:
            text = text.replace(value, REDACTED)
        return text


@dataclass(slots=True)
class ActionsContext:
    """Adapter around the workflow-command surface of the CI runner."""

    env: Mapping[str, str] = field(default_factory=lambda: dict(os.environ))
    emit: Emitter = _default_emitter
    secrets: SecretRegistry = field(init=False)

    def __post_init__(self) -> None:
        self.secrets = SecretRegistry(announce=self.in_actions, emit=self.emit)

    @property
    def in_actions(self) -> bool:
        """Return ``True`` when running inside a GitHub Actions job."""

        return self.env.get(ACTIONS_ENV, "").lower() == "true"

    @property
    def debug_enabled(self) -> bool:
        """Return ``True`` when the runner requested step debug logging."""

        return self.env.get(DEBUG_ENV, "") == "1"

    def set_secret(self, value: str) -> None:
        """Register ``value`` for masking."""

        self.secrets.register(value)

    def set_output(self, name: str, value: str) -> None:
        """Publish a step output.

        Outputs are appended to the ``GITHUB_OUTPUT`` file using the heredoc
        syntax. Outside Actions the pair is echoed instead.

        Args:
            name: Output name.
            value: Output value; may span several lines.
        """

        output_file = self.env.get(OUTPUT_ENV)
        if not output_file:
            self.emit(f"{name}={value}")
            return
        delimiter = f"ghadelimiter_{uuid.uuid4()}"
        with Path(output_file).open("a", encoding="utf-8") as handle:
            handle.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")

    def write_summary(self, markdown: str) -> Path | None:
        """Append ``markdown`` to the job summary.

        Returns:
            Path | None: Summary file written to, or ``None`` when no summary file
            is configured and the markdown was rendered to the console instead.
        """

        summary_file = self.env.get(SUMMARY_ENV)
        if not summary_file:
            console = get_console_manager().get(color=False, emoji=True)
            console.print(Markdown(markdown))
            return None
        path = Path(summary_file)
        with path.open("a", encoding="utf-8") as handle:
            handle.write(markdown)
        return path

    def annotate(self, level: AnnotationLevel, message: str) -> None:
        """Emit a workflow annotation when running inside Actions."""

        if not self.in_actions:
            return
        self.emit(f"::{level}::{escape_data(self.secrets.redact(message))}")


__all__ = [
    "ActionsContext",
    "AnnotationLevel",
    "REDACTED",
    "SecretRegistry",
    "escape_data",
]
