# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Render the Markdown job summary for a gate run."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Final

from ..config import GateConfig, ReportFormat
from ..constants import (
    ACTION_NAME,
    ACTION_VERSION,
    DEFAULT_OUTPUT_DIR,
    ENGINE_REPOSITORY_URL,
    SERVICE_SPECIFICATIONS_URL,
    SPECS_API_URL,
)
from ..environment import ToolEnvironment
from ..models import CheckKind, CheckResult, ReportIndex

TARGET_WIDTH: Final[int] = 60
_ELLIPSIS: Final[str] = "..."


def truncate(text: str, max_length: int) -> str:
    """Shorten ``text`` to ``max_length`` characters, ending in ``...`` when cut."""

    if len(text) <= max_length:
        return text
    return text[: max_length - len(_ELLIPSIS)] + _ELLIPSIS


def _environment_section(environment: ToolEnvironment) -> list[str]:
    return [
        "### Environment",
        "",
        "| Component | Version |",
        "|-----------|----------|",
        f"| Python | {environment.python_version} |",
        f"| aas_test_engines | {environment.engine_version} |",
        f"| Action | {ACTION_VERSION} |",
        "",
    ]


def _configuration_section(config: GateConfig) -> list[str]:
    formats = ", ".join(f"`{fmt}`" for fmt in config.report_formats)
    lines = [
        "### Configuration",
        "",
        "| Setting | Value |",
        "|---------|-------|",
        f"| Mode | `{config.mode}` |",
        f"| Output Directory | `{config.output_dir}` |",
        f"| Report Formats | {formats} |",
    ]
    if config.includes_file:
        lines.append(f"| File Patterns | {len(config.files)} pattern(s) |")
    if config.includes_server:
        lines.append(f"| Server URL | `{config.server_url}` |")
        lines.append(f"| API Profile | `{config.api_profile}` |")
        if config.filter:
            lines.append(f"| Filter | `{config.filter}` |")
    lines.append("")
    return lines


def _report_links(result: CheckResult) -> str:
    links: list[str] = []
    if ReportFormat.JSON in result.report_paths:
        links.append(f"[JSON]({result.report_paths[ReportFormat.JSON]})")
    if ReportFormat.HTML in result.report_paths:
        links.append(f"[HTML]({result.report_paths[ReportFormat.HTML]})")
    return ", ".join(links) or "N/A"


def _results_section(results: Sequence[CheckResult]) -> list[str]:
    lines = [
        "### Results",
        "",
        "| Status | Type | Target | Reports |",
        "|--------|------|--------|----------|",
    ]
    for result in results:
        status = "✅ Pass" if result.passed else "❌ Fail"
        kind = "📄 File" if result.kind is CheckKind.FILE else "🖥️ Server"
        target = truncate(result.target, TARGET_WIDTH)
        lines.append(f"| {status} | {kind} | `{target}` | {_report_links(result)} |")
    lines.append("")
    return lines


def _artifacts_section(output_dir: str) -> list[str]:
    return [
        "### Artifacts",
        "",
        f"Reports are available in the `{output_dir}/` directory.",
        "",
        "To preserve these reports, add an upload-artifact step after this action:",
        "",
        "```yaml",
        "- uses: actions/upload-artifact@v4",
        "  if: always()",
        "  with:",
        f"    name: {DEFAULT_OUTPUT_DIR}",
        f"    path: {output_dir}/",
        "```",
        "",
    ]


def _failures_section(results: Sequence[CheckResult]) -> list[str]:
    lines = ["### Failed Checks", ""]
    for result in results:
        if result.passed:
            continue
        lines.extend([f"#### ❌ {result.target}", ""])
        if result.error:
            lines.extend([f"**Error:** {result.error}", ""])
        lines.extend([f"**Exit code:** {result.exit_code}", ""])
        html_report = result.report_paths.get(ReportFormat.HTML)
        if html_report is not None:
            lines.extend([f"See the [HTML report]({html_report}) for details.", ""])
    return lines


def render_summary(
    config: GateConfig,
    results: Sequence[CheckResult],
    index: ReportIndex,
    environment: ToolEnvironment,
) -> str:
    """Return the Markdown job summary for a finished run.

    Args:
        config: Configuration of the run.
        results: Check results in execution order.
        index: Aggregate counts for the run.
        environment: Interpreter and engine versions used.

    Returns:
        str: Markdown document ready for the job summary.
    """

    failed = index.failed_checks
    status = "✅" if failed == 0 else "❌"
    status_text = "All checks passed" if failed == 0 else f"{failed} check(s) failed"
    output_dir = str(config.output_dir)

    lines = [f"## {status} {ACTION_NAME} - {status_text}", ""]
    lines.extend(_environment_section(environment))
    lines.extend(_configuration_section(config))
    lines.extend(_results_section(results))
    lines.extend(
        [
            "### Summary",
            "",
            f"- **Total checks:** {index.total_checks}",
            f"- **Passed:** {index.passed_checks} ✅",
            f"- **Failed:** {failed} {'❌' if failed > 0 else ''}".rstrip(),
            "",
        ]
    )
    lines.extend(_artifacts_section(output_dir))
    if failed > 0:
        lines.extend(_failures_section(results))
    lines.extend(
        [
            "---",
            "",
            "**References:**",
            f"- [AAS Test Engines]({ENGINE_REPOSITORY_URL})",
            f"- [IDTA Service Specifications]({SERVICE_SPECIFICATIONS_URL})",
            f"- [AAS Specs API]({SPECS_API_URL})",
        ]
    )
    return "\n".join(lines) + "\n"


__all__ = ["TARGET_WIDTH", "render_summary", "truncate"]
