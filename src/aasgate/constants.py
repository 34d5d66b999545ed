# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared constants used across aasgate modules."""

from __future__ import annotations

from typing import Final

ACTION_NAME: Final[str] = "AAS Conformance Gate"
ACTION_VERSION: Final[str] = "1.0.0"

ENGINE_COMMAND: Final[str] = "aas_test_engines"
DEFAULT_PIP_PACKAGE: Final[str] = "aas_test_engines"
DEFAULT_PIP_VERSION: Final[str] = "latest"
DEFAULT_OUTPUT_DIR: Final[str] = "aas-conformance-report"
DEFAULT_MODE: Final[str] = "file"
DEFAULT_REPORT_FORMATS: Final[str] = "json,html"

FILE_REPORT_DIR: Final[str] = "file"
SERVER_REPORT_DIR: Final[str] = "server"
INDEX_FILENAME: Final[str] = "index.json"

UNKNOWN_VERSION: Final[str] = "unknown"
NOT_EXECUTED_EXIT_CODE: Final[int] = -1

ENGINE_REPOSITORY_URL: Final[str] = "https://github.com/admin-shell-io/aas-test-engines"
SERVICE_SPECIFICATIONS_URL: Final[str] = (
    "https://industrialdigitaltwin.io/aas-specifications/IDTA-01002/v3.1.1/"
    "http-rest-api/service-specifications-and-profiles.html"
)
SPECS_API_URL: Final[str] = "https://github.com/admin-shell-io/aas-specs-api"
EXAMPLE_PROFILE: Final[str] = (
    "https://admin-shell.io/aas/API/3/0/AssetAdministrationShellRepositoryServiceSpecification/SSP-002"
)
