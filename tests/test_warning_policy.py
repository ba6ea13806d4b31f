"""Tests for the ignore list and exit status."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from license_core.warning_policy import (
    EXIT_OK,
    WARNING_STATUS,
    count_unexpected_warnings,
    load_ignored_warnings,
    resolve_exit_status,
)

DUPLICATE = "Duplicates licenses: B, A"
COLLISION = "A license ID exists with the same ID as an exception ID: A"


class TestLoadIgnoredWarnings:
    def test_literal_string(self) -> None:
        assert load_ignored_warnings("first warning, second warning ,third") == [
            "first warning",
            "second warning",
            "third",
        ]

    def test_csv_file_first_row_only(self, tmp_path: Path) -> None:
        csv_file = tmp_path / "ignored.csv"
        csv_file.write_text(f'"{DUPLICATE}","{COLLISION}"\nnot,read\n', encoding="utf-8")
        assert load_ignored_warnings(str(csv_file)) == [DUPLICATE, COLLISION]

    def test_empty_values(self, tmp_path: Path) -> None:
        empty = tmp_path / "empty.csv"
        empty.write_text("", encoding="utf-8")
        assert load_ignored_warnings(None) == []
        assert load_ignored_warnings("") == []
        assert load_ignored_warnings(str(empty)) == []

    def test_list_from_config(self) -> None:
        assert load_ignored_warnings([" a ", "", "b"]) == ["a", "b"]


class TestResolveExitStatus:
    def test_no_warnings(self) -> None:
        assert resolve_exit_status([], []) == EXIT_OK

    def test_unexpected_warning(self) -> None:
        assert resolve_exit_status([DUPLICATE], []) == WARNING_STATUS

    def test_ignored_case_insensitive(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.INFO, logger="license_core.warning_policy")
        assert resolve_exit_status([DUPLICATE], [DUPLICATE.upper()]) == EXIT_OK
        assert f"Ignoring warning '{DUPLICATE}'" in caplog.text

    def test_partially_ignored(self) -> None:
        assert resolve_exit_status([DUPLICATE, COLLISION], [DUPLICATE]) == WARNING_STATUS

    def test_whole_string_match_only(self) -> None:
        assert count_unexpected_warnings([DUPLICATE], ["Duplicates licenses"]) == 1
