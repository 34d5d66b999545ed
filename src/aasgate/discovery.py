# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Expand user-supplied file patterns into concrete files.

Patterns follow shell glob rules with two additions: ``{a,b}`` alternatives
expand into one pattern per option, and a leading ``!`` turns a pattern into
an exclusion applied after every other pattern has been matched.
"""

from __future__ import annotations

import glob
import os
import re
from collections.abc import Iterable
from pathlib import Path
from typing import Final

NEGATION_PREFIX: Final[str] = "!"
_BRACE_GROUP: Final[re.Pattern[str]] = re.compile(r"\{([^{}]*,[^{}]*)\}")


def expand_braces(pattern: str) -> list[str]:
    """Return every pattern produced by expanding ``{a,b}`` groups in ``pattern``.

    Groups nest, innermost first. Braces without a comma are literal.
    """

    match = _BRACE_GROUP.search(pattern)
    if match is None:
        return [pattern]
    head, tail = pattern[: match.start()], pattern[match.end() :]
    expanded: list[str] = []
    for option in match.group(1).split(","):
        expanded.extend(expand_braces(f"{head}{option}{tail}"))
    return list(dict.fromkeys(expanded))


def _glob_files(pattern: str, base: Path) -> set[str]:
    matches: set[str] = set()
    for variant in expand_braces(os.path.expanduser(pattern)):
        anchored = variant if os.path.isabs(variant) else os.path.join(glob.escape(str(base)), variant)
        for candidate in glob.glob(anchored, recursive=True):
            if os.path.isfile(candidate):
                matches.add(os.path.abspath(candidate))
    return matches


def expand_globs(patterns: Iterable[str], cwd: Path | None = None) -> list[str]:
    """Return the sorted, de-duplicated absolute files matched by ``patterns``.

    Relative patterns resolve against ``cwd`` (defaults to the current
    directory). ``**`` matches recursively, wildcards skip hidden entries, and
    directories are never returned. Files matched by a ``!`` pattern are
    removed from the result regardless of pattern order.

    Args:
        patterns: Glob patterns, exclusions or plain file paths.
        cwd: Base directory for relative patterns.

    Returns:
        list[str]: Absolute file paths in lexical order.
    """

    base = Path.cwd() if cwd is None else Path(cwd)
    matches: set[str] = set()
    excluded: set[str] = set()
    for pattern in patterns:
        if pattern.startswith(NEGATION_PREFIX):
            excluded |= _glob_files(pattern[len(NEGATION_PREFIX) :], base)
        else:
            matches |= _glob_files(pattern, base)
    return sorted(matches - excluded)


def display_path(path: str) -> str:
    """Return ``path`` with undecodable filename bytes shown as U+FFFD."""

    return os.fsencode(path).decode("utf-8", "replace")


__all__ = ["NEGATION_PREFIX", "display_path", "expand_braces", "expand_globs"]
