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

HTML_TOC_FILE_NAME = "index.html"


class HtmlFormatWriter(LicenseFormatWriter):
    """One HTML page per record plus an ``index.html`` table of contents."""

    name = "html"
    rdfa = False

    def __init__(self, info: ListInfo, output_dir: Path) -> None:
        self.info = info
        self.output_dir = output_dir
        self.licenses: list[TocEntry] = []
        self.exceptions: list[TocEntry] = []

    def _page_name(self, record_id: str, is_deprecated: bool) -> str:
        stem = file_stem(record_id)
        return f"deprecated_{stem}.html" if is_deprecated else f"{stem}.html"

    def write_license(self, license: License, is_deprecated: bool, deprecated_version: str | None) -> None:
        entry = TocEntry.for_license(license, is_deprecated, deprecated_version)
        page = render_template(
            "license.html",
            license=license,
            entry=entry,
            info=self.info,
            rdfa=self.rdfa,
        )
        write_text(self.output_dir / self._page_name(license.license_id, is_deprecated), page)
        self.licenses.append(entry)

    def write_exception(
        self, exception: LicenseException, is_deprecated: bool, deprecated_version: str | None
    ) -> None:
        entry = TocEntry.for_exception(exception, is_deprecated, deprecated_version)
        page = render_template(
            "exception.html",
            exception=exception,
            entry=entry,
            info=self.info,
            rdfa=self.rdfa,
        )
        write_text(self.output_dir / self._page_name(entry.record_id, is_deprecated), page)
        self.exceptions.append(entry)

    def write_toc(self) -> None:
        licenses = sort_entries(self.licenses)
        page = render_template(
            "toc.html",
            info=self.info,
            licenses=[entry for entry in licenses if not entry.deprecated],
            deprecated=[entry for entry in licenses if entry.deprecated],
            exceptions=sort_entries(self.exceptions),
            rdfa=self.rdfa,
        )
        write_text(self.output_dir / HTML_TOC_FILE_NAME, page)


class RdfaFormatWriter(HtmlFormatWriter):
    """HTML pages carrying RDFa annotations for the license properties."""

    name = "rdfa"
    rdfa = True
