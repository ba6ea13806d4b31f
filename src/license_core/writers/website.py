from __future__ import annotations

from pathlib import Path

from license_core.model import License, LicenseException
from license_core.utils.io import write_text
from license_core.writers.base import (
    LicenseFormatWriter,
    ListInfo,
    TocEntry,
    file_stem,
    render_template,
    sort_entries,
)

CSS_FILE_NAME = "screen.css"
SORTTABLE_FILE_NAME = "sorttable.js"
WEBSITE_INDEX_FILE_NAME = "index.html"
WEBSITE_EXCEPTIONS_INDEX_FILE_NAME = "exceptions-index.html"


class WebsiteFormatWriter(LicenseFormatWriter):
    """Pages for the public license list website, with sortable index tables."""

    name = "website"

    def __init__(self, info: ListInfo, website_dir: Path) -> None:
        self.info = info
        self.website_dir = website_dir
        self.licenses: list[TocEntry] = []
        self.exceptions: list[TocEntry] = []

    def write_license(self, license: License, is_deprecated: bool, deprecated_version: str | None) -> None:
        entry = TocEntry.for_license(license, is_deprecated, deprecated_version)
        page = render_template(
            "website_license.html", license=license, entry=entry, info=self.info, rdfa=True
        )
        write_text(self.website_dir / f"{file_stem(license.license_id)}.html", page)
        self.licenses.append(entry)

    def write_exception(
        self, exception: LicenseException, is_deprecated: bool, deprecated_version: str | None
    ) -> None:
        entry = TocEntry.for_exception(exception, is_deprecated, deprecated_version)
        page = render_template(
            "website_exception.html", exception=exception, entry=entry, info=self.info, rdfa=True
        )
        write_text(self.website_dir / f"{entry.file_stem}.html", page)
        self.exceptions.append(entry)

    def write_toc(self) -> None:
        licenses = sort_entries(self.licenses)
        write_text(
            self.website_dir / WEBSITE_INDEX_FILE_NAME,
            render_template(
                "website_index.html",
                info=self.info,
                licenses=[entry for entry in licenses if not entry.deprecated],
                deprecated=[entry for entry in licenses if entry.deprecated],
            ),
        )
        write_text(
            self.website_dir / WEBSITE_EXCEPTIONS_INDEX_FILE_NAME,
            render_template(
                "website_exceptions_index.html",
                info=self.info,
                exceptions=sort_entries(self.exceptions),
            ),
        )
