from __future__ import annotations

from pathlib import Path
from typing import Any

from license_core.model import License, LicenseException
from license_core.utils.io import write_json
from license_core.writers.base import LicenseFormatWriter, ListInfo, file_stem

LICENSES_INDEX_FILE_NAME = "licenses.json"
EXCEPTIONS_INDEX_FILE_NAME = "exceptions.json"


def license_details(license: License, is_deprecated: bool, deprecated_version: str | None) -> dict[str, Any]:
    details: dict[str, Any] = {
        "licenseId": license.license_id,
        "name": license.name,
        "isDeprecatedLicenseId": is_deprecated,
        "isOsiApproved": license.osi_approved,
        "seeAlso": list(license.see_also),
        "licenseText": license.text,
        "standardLicenseTemplate": license.template_text,
    }
    if license.fsf_libre is not None:
        details["isFsfLibre"] = license.fsf_libre
    if license.header:
        details["standardLicenseHeader"] = license.header
    if license.comments:
        details["licenseComments"] = license.comments
    if is_deprecated and deprecated_version:
        details["deprecatedVersion"] = deprecated_version
    return details


def exception_details(
    exception: LicenseException, is_deprecated: bool, deprecated_version: str | None
) -> dict[str, Any]:
    details: dict[str, Any] = {
        "licenseExceptionId": exception.exception_id,
        "name": exception.name,
        "isDeprecatedLicenseId": is_deprecated,
        "seeAlso": list(exception.see_also),
        "licenseExceptionText": exception.text,
    }
    if exception.comments:
        details["licenseComments"] = exception.comments
    if exception.license_example:
        details["licenseExceptionExample"] = exception.license_example
    if is_deprecated and deprecated_version:
        details["deprecatedVersion"] = deprecated_version
    return details


class JsonFormatWriter(LicenseFormatWriter):
    """
    Machine-readable license list.

    ``details/{id}.json`` and ``exceptions/{id}.json`` hold one record each;
    ``licenses.json`` and ``exceptions.json`` index them.
    """

    name = "json"

    def __init__(self, info: ListInfo, json_dir: Path, details_dir: Path, exceptions_dir: Path) -> None:
        self.info = info
        self.json_dir = json_dir
        self.details_dir = details_dir
        self.exceptions_dir = exceptions_dir
        self.license_index: list[dict[str, Any]] = []
        self.exception_index: list[dict[str, Any]] = []

    def write_license(self, license: License, is_deprecated: bool, deprecated_version: str | None) -> None:
        stem = file_stem(license.license_id)
        write_json(self.details_dir / f"{stem}.json", license_details(license, is_deprecated, deprecated_version))
        entry: dict[str, Any] = {
            "reference": f"./{stem}.html",
            "isDeprecatedLicenseId": is_deprecated,
            "detailsUrl": f"./details/{stem}.json",
            "name": license.name,
            "licenseId": license.license_id,
            "seeAlso": list(license.see_also),
            "isOsiApproved": license.osi_approved,
        }
        if license.fsf_libre is not None:
            entry["isFsfLibre"] = license.fsf_libre
        self.license_index.append(entry)

    def write_exception(
        self, exception: LicenseException, is_deprecated: bool, deprecated_version: str | None
    ) -> None:
        stem = file_stem(exception.exception_id or "")
        write_json(
            self.exceptions_dir / f"{stem}.json",
            exception_details(exception, is_deprecated, deprecated_version),
        )
        self.exception_index.append(
            {
                "reference": f"./{stem}.html",
                "isDeprecatedLicenseId": is_deprecated,
                "detailsUrl": f"./exceptions/{stem}.json",
                "name": exception.name,
                "licenseExceptionId": exception.exception_id,
                "seeAlso": list(exception.see_also),
            }
        )

    def _numbered(self, rows: list[dict[str, Any]], id_key: str) -> list[dict[str, Any]]:
        ordered = sorted(rows, key=lambda row: str(row[id_key]).lower())
        return [{**row, "referenceNumber": index} for index, row in enumerate(ordered, 1)]

    def write_toc(self) -> None:
        write_json(
            self.json_dir / LICENSES_INDEX_FILE_NAME,
            {
                "licenseListVersion": self.info.version,
                "licenses": self._numbered(self.license_index, "licenseId"),
                "releaseDate": self.info.release_date,
            },
        )
        write_json(
            self.json_dir / EXCEPTIONS_INDEX_FILE_NAME,
            {
                "licenseListVersion": self.info.version,
                "exceptions": self._numbered(self.exception_index, "licenseExceptionId"),
                "releaseDate": self.info.release_date,
            },
        )
