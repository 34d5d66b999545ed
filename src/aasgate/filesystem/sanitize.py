# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Turn arbitrary paths and profile URLs into safe, bounded report filenames.

Names are deterministic: the same input always maps to the same filename, so
re-running a gate overwrites the previous report for a target instead of
accumulating new ones. Directory components are kept in the name so that
``a/model.json`` and ``b/model.json`` do not share a report. When the result
would exceed the length limit it is truncated and suffixed with a short hash
of the original input.

Two distinct inputs that sanitize to the same string below the length limit
still collide; always hashing would change every existing report name.
"""

from __future__ import annotations

import hashlib
import os
import re
from typing import Final

MAX_FILENAME_LENGTH: Final[int] = 200
UNNAMED: Final[str] = "unnamed"
HASH_LENGTH: Final[int] = 8

# Lone surrogates stand for filename bytes that are not valid UTF-8.
_UNSAFE_CHARS: Final[re.Pattern[str]] = re.compile(r'[/\\:*?"<>|\s\ud800-\udfff]')
_SEPARATORS: Final[re.Pattern[str]] = re.compile(r"[/\\]")
_UNDERSCORE_RUN: Final[re.Pattern[str]] = re.compile(r"_+")


def _content_hash(raw: str) -> str:
    return hashlib.sha256(raw.encode("utf-8", "surrogateescape")).hexdigest()[:HASH_LENGTH]


def _name_parts(raw: str) -> list[str]:
    """Return the directory components of ``raw`` followed by its stem."""

    stem, _ = os.path.splitext(os.path.basename(raw))
    directory = os.path.dirname(raw)
    parts = [part for part in _SEPARATORS.split(directory) if part and part != "."]
    parts.append(stem)
    return parts


def sanitize_filename(raw: str, max_length: int = MAX_FILENAME_LENGTH) -> str:
    """Return a filesystem-safe filename derived from ``raw``.

    Args:
        raw: File path or label to convert. The extension of the final
            component is dropped.
        max_length: Upper bound on the length of the returned name.

    Returns:
        str: Name free of path separators, reserved punctuation and whitespace,
        never longer than ``max_length``. Blank input yields ``"unnamed"``.

    Raises:
        ValueError: If ``max_length`` is not positive.
    """

    if max_length < 1:
        raise ValueError("max_length must be a positive integer")
    if not raw or not raw.strip():
        return UNNAMED

    sanitized = _UNSAFE_CHARS.sub("_", "_".join(_name_parts(raw)))
    sanitized = _UNDERSCORE_RUN.sub("_", sanitized).strip("_")
    if not sanitized:
        return UNNAMED

    if len(sanitized) > max_length:
        digest = _content_hash(raw)
        keep = max_length - HASH_LENGTH - 1
        if keep <= 0:
            return digest[:max_length]
        sanitized = f"{sanitized[:keep]}_{digest}"
    return sanitized


def profile_label(profile: str) -> str:
    """Return the last two non-empty ``/`` segments of ``profile`` joined by ``_``.

    ``https://admin-shell.io/aas/API/3/0/AssetAdministrationShellRepositoryServiceSpecification/SSP-002``
    becomes ``AssetAdministrationShellRepositoryServiceSpecification_SSP-002``.
    """

    segments = [segment for segment in profile.split("/") if segment]
    return "_".join(segments[-2:])


def sanitize_profile_name(profile: str) -> str:
    """Return the report filename stem for a server ``profile`` identifier."""

    return sanitize_filename(profile_label(profile))


__all__ = [
    "HASH_LENGTH",
    "MAX_FILENAME_LENGTH",
    "UNNAMED",
    "profile_label",
    "sanitize_filename",
    "sanitize_profile_name",
]
