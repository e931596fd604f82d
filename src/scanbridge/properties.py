"""Property keys understood by the reconciler and the analysis engine."""

from __future__ import annotations

import re
from typing import Mapping

PROJECT_BASEDIR = "sonar.projectBaseDir"
PROJECT_SOURCE_DIRS = "sonar.sources"
PROJECT_TEST_DIRS = "sonar.tests"
COVERAGE_EXCLUSIONS = "sonar.coverage.exclusions"
HOST_URL = "sonar.host.url"
VERBOSE = "sonar.verbose"
SCAN_ALL_SOURCES = "sonar.scanner.scanAll"
JAVA_LIBRARIES = "sonar.java.libraries"
JAVA_BINARIES = "sonar.java.binaries"

# Matches sonar.junit.reportPaths, sonar.coverage.jacoco.xmlReportPath,
# sonar.report.paths, sonar.junit.reportsPath, ...
REPORT_PROPERTY_PATTERN = re.compile(r"^sonar\..*reports?[._]?paths?$", re.IGNORECASE)

_TRUTHY_VALUES = {"1", "true", "yes", "on"}


def is_report_property(key: str) -> bool:
    return REPORT_PROPERTY_PATTERN.match(key) is not None


def is_source_or_test_dirs_key(key: str) -> bool:
    """True for top-level and module-scoped source/test directory keys."""
    return key.endswith(PROJECT_SOURCE_DIRS) or key.endswith(PROJECT_TEST_DIRS)


def parse_flag(value: str | None, *, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in _TRUTHY_VALUES


def declares_java_binaries(user_properties: Mapping[str, str]) -> bool:
    return JAVA_LIBRARIES in user_properties and JAVA_BINARIES in user_properties
