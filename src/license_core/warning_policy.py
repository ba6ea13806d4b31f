"""
license_core/warning_policy.py

Ignore-list handling and the run's exit status.

The ignore list is either a path to a CSV file, whose first row holds the
ignored warnings, or a literal comma-separated string. Matching against a
warning is whole-string and case-insensitive.
"""

from __future__ import annotations

import csv
import io
import logging
import os
from collections.abc import Iterable

logger = logging.getLogger(__name__)

EXIT_OK = 0
ERROR_STATUS = 1
WARNING_STATUS = 64


def _first_csv_row(handle: Iterable[str]) -> list[str]:
    for row in csv.reader(handle, skipinitialspace=True):
        return row
    return []


def load_ignored_warnings(value: str | Iterable[str] | None) -> list[str]:
    """Return the stripped, non-empty ignored warnings for ``value``."""
    if value is None:
        return []
    if not isinstance(value, str):
        return [item.strip() for item in value if item and item.strip()]
    if not value.strip():
        return []
    if os.path.isfile(value):
        with open(value, encoding="utf-8", newline="") as handle:
            row = _first_csv_row(handle)
    else:
        row = _first_csv_row(io.StringIO(value))
    return [item.strip() for item in row if item and item.strip()]


def count_unexpected_warnings(warnings: Iterable[str], ignored: Iterable[str]) -> int:
    ignored_lower = {item.lower() for item in ignored}
    unexpected = 0
    for warning in warnings:
        if warning.lower() in ignored_lower:
            logger.info("Ignoring warning '%s'", warning)
        else:
            unexpected += 1
    return unexpected


def resolve_exit_status(warnings: Iterable[str], ignored: Iterable[str]) -> int:
    if count_unexpected_warnings(warnings, ignored):
        return WARNING_STATUS
    return EXIT_OK
