"""
license_core/providers/spreadsheet.py

Reads the license list from an Excel workbook maintained by the license team.

Workbook layout:
  - ``Licenses``: one license per row, header row first.
  - ``Exceptions``: one exception per row (optional sheet).
  - ``Deprecated``: deprecated licenses with a ``Deprecated Version`` column
    (optional sheet).
  - ``Info``: key/value rows; ``Version`` and ``Release Date`` (optional sheet).

Text can be given inline (``Text``) or as a file name (``Text File``,
``Template``) relative to the ``text`` directory next to the workbook.
"""

from __future__ import annotations

import dataclasses
import logging
import zipfile
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from license_core.exceptions import SourceFormatError
from license_core.model import DeprecatedLicenseRecord, License, LicenseException
from license_core.providers.base import LicenseProvider, parse_bool, split_urls
from license_core.utils.text import safe_text

logger = logging.getLogger(__name__)

SPREADSHEET_SUFFIXES = {".xlsx", ".xlsm"}

LICENSE_SHEET = "Licenses"
EXCEPTION_SHEET = "Exceptions"
DEPRECATED_SHEET = "Deprecated"
INFO_SHEET = "Info"
TEXT_DIR_NAME = "text"

LICENSE_COLUMNS = {
    "full name of license": "name",
    "license identifier": "license_id",
    "source/url": "see_also",
    "notes": "comments",
    "osi approved": "osi_approved",
    "standard license header": "header",
    "template": "template_file",
    "text": "text",
    "text file": "text_file",
    "deprecated version": "deprecated_version",
}

EXCEPTION_COLUMNS = {
    "full name of exception": "name",
    "exception identifier": "exception_id",
    "source/url": "see_also",
    "notes": "comments",
    "example": "license_example",
    "text": "text",
    "text file": "text_file",
}


class SpreadsheetLicenseProvider(LicenseProvider):
    name = "spreadsheet"

    def __init__(self, path: Path, *, text_dir: Path | None = None) -> None:
        super().__init__()
        self.path = path
        self.text_dir = text_dir or path.parent / TEXT_DIR_NAME
        try:
            self._workbook = load_workbook(path, read_only=True, data_only=True)
        except (InvalidFileException, zipfile.BadZipFile, KeyError, OSError) as exc:
            raise SourceFormatError(
                f"Invalid spreadsheet: {exc}",
                context={"path": str(path)},
            ) from exc
        sheets = list(self._workbook.sheetnames)
        if LICENSE_SHEET not in sheets:
            self._workbook.close()
            raise SourceFormatError(
                f"Invalid spreadsheet: missing sheet '{LICENSE_SHEET}'",
                context={"path": str(path), "sheets": sheets},
            )
        try:
            info = self._read_info()
        except Exception:
            self._workbook.close()
            raise
        self.version = info.get("version")
        self.release_date = info.get("release date")
        self._closed = False

    def close(self) -> None:
        if not self._closed:
            self._workbook.close()
            self._closed = True

    def _read_info(self) -> dict[str, str]:
        if INFO_SHEET not in self._workbook.sheetnames:
            return {}
        info: dict[str, str] = {}
        for row in self._workbook[INFO_SHEET].iter_rows(values_only=True):
            if not row or row[0] is None:
                continue
            value = row[1] if len(row) > 1 else None
            if value is not None and str(value).strip():
                info[str(row[0]).strip().lower()] = str(value).strip()
        return info

    def _iter_sheet(self, sheet_name: str, columns: dict[str, str]) -> Iterator[tuple[int, dict[str, Any]]]:
        if sheet_name not in self._workbook.sheetnames:
            return
        logger.debug("Reading sheet %s from %s", sheet_name, self.path)
        rows = self._workbook[sheet_name].iter_rows(values_only=True)
        header = next(rows, None)
        if header is None:
            return
        mapping: dict[int, str] = {}
        for index, title in enumerate(header):
            key = columns.get(safe_text(title).strip().lower())
            if key:
                mapping[index] = key
        for row_number, row in enumerate(rows, 2):
            if row is None or all(cell is None or safe_text(cell).strip() == "" for cell in row):
                continue
            values = {key: row[index] for index, key in mapping.items() if index < len(row)}
            yield row_number, values

    def _read_text_file(self, file_name: str, *, sheet: str, row_number: int) -> str:
        path = self.text_dir / file_name
        try:
            return path.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            raise SourceFormatError(
                f"Unable to read text file {path} for {sheet} row {row_number}: {exc}",
                context={"path": str(path), "sheet": sheet, "row": row_number},
            ) from exc

    def _resolve_text(self, values: dict[str, Any], *, sheet: str, row_number: int) -> str:
        text = safe_text(values.get("text"))
        if text.strip():
            return text
        text_file = safe_text(values.get("text_file")).strip()
        if text_file:
            return self._read_text_file(text_file, sheet=sheet, row_number=row_number)
        return ""

    def _build_license(self, values: dict[str, Any], *, sheet: str, row_number: int) -> License:
        license_id = safe_text(values.get("license_id")).strip()
        template_file = safe_text(values.get("template_file")).strip()
        template = None
        if template_file:
            template = self._read_text_file(template_file, sheet=sheet, row_number=row_number)
        text = self._resolve_text(values, sheet=sheet, row_number=row_number)
        if not text and template:
            text = template
        if license_id and not text:
            self.add_warning(f"No license text found for {license_id} in {sheet} row {row_number}")
        return License(
            license_id=license_id,
            name=safe_text(values.get("name")).strip(),
            text=text,
            template=template,
            header=safe_text(values.get("header")) or None,
            see_also=split_urls(values.get("see_also")),
            comments=safe_text(values.get("comments")) or None,
            osi_approved=parse_bool(values.get("osi_approved")),
        )

    def iter_licenses(self) -> Iterator[License]:
        seen: set[str] = set()
        for row_number, values in self._iter_sheet(LICENSE_SHEET, LICENSE_COLUMNS):
            license = self._build_license(values, sheet=LICENSE_SHEET, row_number=row_number)
            if license.license_id and license.license_id in seen:
                self.add_warning(f"Duplicate license ID {license.license_id} in {LICENSE_SHEET} row {row_number}")
                continue
            seen.add(license.license_id)
            yield license

    def iter_exceptions(self) -> Iterator[LicenseException]:
        for row_number, values in self._iter_sheet(EXCEPTION_SHEET, EXCEPTION_COLUMNS):
            exception_id = safe_text(values.get("exception_id")).strip() or None
            yield LicenseException(
                exception_id=exception_id,
                name=safe_text(values.get("name")).strip(),
                text=self._resolve_text(values, sheet=EXCEPTION_SHEET, row_number=row_number),
                see_also=split_urls(values.get("see_also")),
                comments=safe_text(values.get("comments")) or None,
                license_example=safe_text(values.get("license_example")) or None,
            )

    def iter_deprecated_licenses(self) -> Iterator[DeprecatedLicenseRecord]:
        for row_number, values in self._iter_sheet(DEPRECATED_SHEET, LICENSE_COLUMNS):
            license = self._build_license(values, sheet=DEPRECATED_SHEET, row_number=row_number)
            if not license.license_id:
                continue
            version = safe_text(values.get("deprecated_version")).strip() or None
            yield DeprecatedLicenseRecord(
                license=dataclasses.replace(license, deprecated=True, deprecated_version=version),
                deprecated_version=version,
            )
