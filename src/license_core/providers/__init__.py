"""License list sources."""

from __future__ import annotations

from pathlib import Path

from license_core.exceptions import SourceFormatError
from license_core.providers.base import LicenseProvider
from license_core.providers.spreadsheet import SPREADSHEET_SUFFIXES, SpreadsheetLicenseProvider
from license_core.providers.xml_dir import XmlLicenseProvider


def resolve_provider(input_path: Path) -> LicenseProvider:
    """Pick the provider matching the shape of ``input_path``."""
    if input_path.is_dir():
        return XmlLicenseProvider(input_path)
    if input_path.is_file() and input_path.suffix.lower() in SPREADSHEET_SUFFIXES:
        return SpreadsheetLicenseProvider(input_path)
    raise SourceFormatError(
        "Unsupported file format. Must be a license spreadsheet (.xlsx) "
        "or a directory of license XML files",
        context={"path": str(input_path)},
    )


__all__ = [
    "LicenseProvider",
    "SpreadsheetLicenseProvider",
    "XmlLicenseProvider",
    "resolve_provider",
]
