"""
Shared pytest fixtures for license list generator tests.

Provides:
- In-memory license providers
- A recording writer that captures every writer call
- Builders for license XML directories and spreadsheet workbooks
"""

from __future__ import annotations

import sys
from collections.abc import Callable, Iterable, Iterator
from pathlib import Path
from typing import Any

import pytest

SRC_ROOT = Path(__file__).resolve().parents[1] / "src"
if SRC_ROOT.is_dir():
    sys.path.insert(0, str(SRC_ROOT))

from license_core.model import DeprecatedLicenseRecord, License, LicenseException  # noqa: E402
from license_core.providers.base import LicenseProvider  # noqa: E402
from license_core.writers.base import LicenseFormatWriter  # noqa: E402

REPO_ROOT = Path(__file__).resolve().parents[1]


# =============================================================================
# Providers
# =============================================================================


class FakeProvider(LicenseProvider):
    """Serves fixed records; every ``iter_*`` call starts a fresh pass."""

    name = "fake"

    def __init__(
        self,
        licenses: Iterable[License] = (),
        exceptions: Iterable[LicenseException] = (),
        deprecated: Iterable[DeprecatedLicenseRecord] = (),
        *,
        warnings: Iterable[str] = (),
        version: str | None = None,
        release_date: str | None = None,
    ) -> None:
        super().__init__()
        self.licenses = list(licenses)
        self.exceptions = list(exceptions)
        self.deprecated = list(deprecated)
        self.warnings.extend(warnings)
        self.version = version
        self.release_date = release_date
        self.close_calls = 0
        self.license_passes = 0

    def iter_licenses(self) -> Iterator[License]:
        self.license_passes += 1
        yield from self.licenses

    def iter_exceptions(self) -> Iterator[LicenseException]:
        yield from self.exceptions

    def iter_deprecated_licenses(self) -> Iterator[DeprecatedLicenseRecord]:
        yield from self.deprecated

    def close(self) -> None:
        self.close_calls += 1


# =============================================================================
# Writers
# =============================================================================


class RecordingWriter(LicenseFormatWriter):
    """Appends ``(writer name, method, record id, is_deprecated, version)`` to a shared log."""

    def __init__(self, name: str, calls: list[tuple[Any, ...]], *, fail_on: str | None = None) -> None:
        self.name = name
        self.calls = calls
        self.fail_on = fail_on

    def _record(self, method: str, record_id: str | None, *rest: Any) -> None:
        self.calls.append((self.name, method, record_id, *rest))
        if self.fail_on is not None and self.fail_on == record_id:
            raise RuntimeError(f"{self.name} cannot write {record_id}")

    def write_license(self, license: License, is_deprecated: bool, deprecated_version: str | None) -> None:
        self._record("write_license", license.license_id, is_deprecated, deprecated_version)

    def write_exception(
        self, exception: LicenseException, is_deprecated: bool, deprecated_version: str | None
    ) -> None:
        self._record("write_exception", exception.exception_id, is_deprecated, deprecated_version)

    def write_toc(self) -> None:
        self._record("write_toc", None)


@pytest.fixture
def fake_provider_factory() -> Callable[..., FakeProvider]:
    return FakeProvider


@pytest.fixture
def writer_calls() -> list[tuple[Any, ...]]:
    return []


@pytest.fixture
def recording_writers(writer_calls: list[tuple[Any, ...]]) -> list[RecordingWriter]:
    return [RecordingWriter("first", writer_calls), RecordingWriter("second", writer_calls)]


# =============================================================================
# Source fixtures
# =============================================================================


MIT_TEXT = (
    "Permission is hereby granted, free of charge, to any person obtaining a copy "
    "of this software, to deal in the Software without restriction."
)


def write_license_xml(directory: Path, file_name: str, body: str) -> Path:
    """Write an ``SPDXLicenseCollection`` document wrapping ``body``."""
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / file_name
    path.write_text(
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<SPDXLicenseCollection xmlns="http://www.spdx.org/license">\n'
        f"{body}\n"
        "</SPDXLicenseCollection>\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def xml_license_dir(tmp_path: Path) -> Path:
    """A small license XML directory: MIT, a deprecated GPL id and one exception."""
    directory = tmp_path / "license-xml"
    write_license_xml(
        directory,
        "MIT.xml",
        '<license licenseId="MIT" name="MIT License" isOsiApproved="true">'
        "<crossRefs><crossRef>https://opensource.org/licenses/MIT</crossRef></crossRefs>"
        f"<text><p>{MIT_TEXT}</p></text>"
        "</license>",
    )
    write_license_xml(
        directory,
        "GPL-2.0.xml",
        '<license licenseId="GPL-2.0" name="GNU General Public License v2.0 only" '
        'isOsiApproved="true" isDeprecated="true" deprecatedVersion="3.0">'
        "<text><p>GNU GENERAL PUBLIC LICENSE Version 2, June 1991</p></text>"
        "</license>",
    )
    write_license_xml(
        directory,
        "Classpath-exception-2.0.xml",
        '<exception licenseId="Classpath-exception-2.0" name="Classpath exception 2.0">'
        "<text><p>Linking this library statically or dynamically with other modules "
        "is making a combined work based on this library.</p></text>"
        "</exception>",
    )
    return directory


@pytest.fixture
def workbook_factory(tmp_path: Path) -> Callable[..., Path]:
    """Build an ``.xlsx`` workbook from ``{sheet name: rows}``."""
    from openpyxl import Workbook

    def _build(sheets: dict[str, list[list[Any]]], name: str = "licenses.xlsx") -> Path:
        workbook = Workbook()
        workbook.remove(workbook.active)
        for title, rows in sheets.items():
            sheet = workbook.create_sheet(title)
            for row in rows:
                sheet.append(row)
        path = tmp_path / name
        workbook.save(path)
        return path

    return _build
