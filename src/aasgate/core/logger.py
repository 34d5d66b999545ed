# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Logger adapter that redacts secrets and mirrors problems as annotations."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..actions import ActionsContext, SecretRegistry
from ..discovery import display_path
from ..logging import debug as core_debug
from ..logging import fail as core_fail
from ..logging import info as core_info
from ..logging import ok as core_ok
from ..logging import section as core_section
from ..logging import warn as core_warn


@dataclass(slots=True)
class GateLogger:
    """Adapter around project logging helpers honouring emoji and secret settings.

    Every message passes through :meth:`SecretRegistry.redact` before it is
    printed, so values registered by the input resolver never reach the console.
    """

    secrets: SecretRegistry = field(default_factory=SecretRegistry)
    actions: ActionsContext | None = None
    use_emoji: bool = True
    use_color: bool | None = None
    debug_enabled: bool = False
    warnings: list[str] = field(default_factory=list)

    def _clean(self, message: str) -> str:
        return self.secrets.redact(display_path(message))

    def section(self, title: str) -> None:
        """Render a section header."""

        core_section(self._clean(title), use_color=bool(self.use_color))

    def info(self, message: str) -> None:
        """Log an informational message."""

        core_info(self._clean(message), use_emoji=self.use_emoji, use_color=self.use_color)

    def ok(self, message: str) -> None:
        """Log a success message."""

        core_ok(self._clean(message), use_emoji=self.use_emoji, use_color=self.use_color)

    def warn(self, message: str) -> None:
        """Log a warning, remember it, and annotate the job when running in CI.

        Args:
            message: Text describing the warning condition.
        """

        cleaned = self._clean(message)
        self.warnings.append(cleaned)
        core_warn(cleaned, use_emoji=self.use_emoji, use_color=self.use_color)
        if self.actions is not None:
            self.actions.annotate("warning", cleaned)

    def fail(self, message: str) -> None:
        """Log a failure and annotate the job when running in CI."""

        cleaned = self._clean(message)
        core_fail(cleaned, use_emoji=self.use_emoji, use_color=self.use_color)
        if self.actions is not None:
            self.actions.annotate("error", cleaned)

    def debug(self, message: str) -> None:
        """Log a diagnostic message when debug output is enabled."""

        if self.debug_enabled:
            core_debug(self._clean(message), use_color=self.use_color)


__all__ = ["GateLogger"]
