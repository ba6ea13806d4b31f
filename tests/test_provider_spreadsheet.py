"""Tests for the spreadsheet workbook provider."""

from __future__ import annotations

from pathlib import Path

import pytest
from openpyxl import load_workbook

from license_core.exceptions import SourceFormatError
from license_core.providers import spreadsheet
from license_core.providers.spreadsheet import SpreadsheetLicenseProvider

LICENSE_HEADER = ["Full name of License", "License Identifier", "Source/URL", "OSI Approved", "Notes", "Text"]


@pytest.fixture
def workbook(workbook_factory) -> Path:
    return workbook_factory(
        {
            "Licenses": [
                LICENSE_HEADER,
                ["MIT License", "MIT", "https://opensource.org/licenses/MIT https://mit.edu", "YES", None, "MIT body"],
                ["ISC License", "ISC", None, "no", "Short and simple", "ISC body"],
            ],
            "Exceptions": [
                ["Full name of Exception", "Exception Identifier", "Example", "Text"],
                ["Classpath exception 2.0", "Classpath-exception-2.0", "GPL-2.0 WITH Classpath", "exception body"],
                [None, None, None, "no id"],
            ],
            "Deprecated": [
                ["License Identifier", "Full name of License", "Deprecated Version", "Text"],
                ["GPL-2.0", "GNU General Public License v2.0 only", "3.0", "GPL body"],
            ],
            "Info": [["Version", "3.21"], ["Release Date", "2024-01-01"]],
        }
    )


class TestSpreadsheetLicenseProvider:
    def test_licenses(self, workbook: Path) -> None:
        with SpreadsheetLicenseProvider(workbook) as provider:
            licenses = list(provider.iter_licenses())
        assert [lic.license_id for lic in licenses] == ["MIT", "ISC"]
        mit, isc = licenses
        assert mit.name == "MIT License"
        assert mit.text == "MIT body"
        assert mit.osi_approved is True
        assert mit.see_also == ("https://opensource.org/licenses/MIT", "https://mit.edu")
        assert isc.osi_approved is False
        assert isc.comments == "Short and simple"

    def test_version_and_release_date(self, workbook: Path) -> None:
        with SpreadsheetLicenseProvider(workbook) as provider:
            assert provider.version == "3.21"
            assert provider.release_date == "2024-01-01"

    def test_exceptions(self, workbook: Path) -> None:
        with SpreadsheetLicenseProvider(workbook) as provider:
            exceptions = list(provider.iter_exceptions())
        assert [exc.exception_id for exc in exceptions] == ["Classpath-exception-2.0", None]
        assert exceptions[0].license_example == "GPL-2.0 WITH Classpath"

    def test_deprecated(self, workbook: Path) -> None:
        with SpreadsheetLicenseProvider(workbook) as provider:
            records = list(provider.iter_deprecated_licenses())
        assert [record.license_id for record in records] == ["GPL-2.0"]
        assert records[0].deprecated_version == "3.0"
        assert records[0].license.deprecated is True
        assert records[0].license.deprecated_version == "3.0"

    def test_text_file_column(self, workbook_factory, tmp_path: Path) -> None:
        (tmp_path / "text").mkdir()
        (tmp_path / "text" / "MIT.txt").write_text("MIT from file\n", encoding="utf-8")
        path = workbook_factory(
            {"Licenses": [["License Identifier", "Text File"], ["MIT", "MIT.txt"]]}
        )
        with SpreadsheetLicenseProvider(path) as provider:
            assert next(provider.iter_licenses()).text == "MIT from file\n"

    def test_missing_text_file(self, workbook_factory) -> None:
        path = workbook_factory({"Licenses": [["License Identifier", "Text File"], ["MIT", "missing.txt"]]})
        with SpreadsheetLicenseProvider(path) as provider:
            with pytest.raises(SourceFormatError):
                list(provider.iter_licenses())

    def test_duplicate_id_warning(self, workbook_factory) -> None:
        path = workbook_factory(
            {"Licenses": [["License Identifier", "Text"], ["MIT", "first"], ["MIT", "second"]]}
        )
        with SpreadsheetLicenseProvider(path) as provider:
            licenses = list(provider.iter_licenses())
            assert [lic.text for lic in licenses] == ["first"]
            assert provider.warnings == ["Duplicate license ID MIT in Licenses row 3"]

    def test_missing_text_warning(self, workbook_factory) -> None:
        path = workbook_factory({"Licenses": [["License Identifier", "Text"], ["MIT", None]]})
        with SpreadsheetLicenseProvider(path) as provider:
            list(provider.iter_licenses())
            assert provider.warnings == ["No license text found for MIT in Licenses row 2"]

    def test_missing_license_sheet(self, workbook_factory) -> None:
        path = workbook_factory({"Other": [["a"]]})
        with pytest.raises(SourceFormatError, match="missing sheet 'Licenses'"):
            SpreadsheetLicenseProvider(path)

    def test_not_a_workbook(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.xlsx"
        path.write_text("not a workbook", encoding="utf-8")
        with pytest.raises(SourceFormatError) as excinfo:
            SpreadsheetLicenseProvider(path)
        assert excinfo.value.context["path"] == str(path)

    def test_close_is_idempotent(self, workbook: Path) -> None:
        provider = SpreadsheetLicenseProvider(workbook)
        provider.close()
        provider.close()

    def test_workbook_closed_when_info_sheet_fails(
        self, workbook: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        opened = []

        def tracking_load_workbook(*args, **kwargs):
            book = load_workbook(*args, **kwargs)
            real_close = book.close

            def close() -> None:
                opened.append("closed")
                real_close()

            book.close = close
            opened.append(book)
            return book

        def broken_info(self):
            raise ValueError("unreadable Info sheet")

        monkeypatch.setattr(spreadsheet, "load_workbook", tracking_load_workbook)
        monkeypatch.setattr(SpreadsheetLicenseProvider, "_read_info", broken_info)
        with pytest.raises(ValueError, match="unreadable Info sheet"):
            SpreadsheetLicenseProvider(workbook)
        assert opened[-1] == "closed"
