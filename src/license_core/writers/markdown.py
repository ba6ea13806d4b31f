from __future__ import annotations

from pathlib import Path

from license_core.model import License, LicenseException
from license_core.utils.io import write_text
from license_core.writers.base import LicenseFormatWriter, ListInfo, TocEntry, sort_entries


def _yes(flag: bool | None) -> str:
    return "Y" if flag else ""


def _cell(value: str) -> str:
    return value.replace("|", "\\|").replace("\n", " ")


class MarkdownFormatWriter(LicenseFormatWriter):
    """Human-readable table of contents written to a single Markdown file."""

    name = "markdown"

    def __init__(self, info: ListInfo, toc_file: Path) -> None:
        self.info = info
        self.toc_file = toc_file
        self.licenses: list[TocEntry] = []
        self.deprecated: list[TocEntry] = []
        self.exceptions: list[TocEntry] = []

    def write_license(self, license: License, is_deprecated: bool, deprecated_version: str | None) -> None:
        entry = TocEntry.for_license(license, is_deprecated, deprecated_version)
        (self.deprecated if is_deprecated else self.licenses).append(entry)

    def write_exception(
        self, exception: LicenseException, is_deprecated: bool, deprecated_version: str | None
    ) -> None:
        self.exceptions.append(TocEntry.for_exception(exception, is_deprecated, deprecated_version))

    def render(self) -> str:
        lines = ["# License List", ""]
        if self.info.version:
            lines.append(f"Version: {self.info.version}")
        if self.info.release_date:
            lines.append(f"Release date: {self.info.release_date}")
        if self.info.version or self.info.release_date:
            lines.append("")

        lines += [
            "## Licenses with Short Identifiers",
            "",
            "| Full name of License | License Identifier | OSI Approved? | FSF Free/Libre? |",
            "|:---|:---|:---:|:---:|",
        ]
        for entry in sort_entries(self.licenses):
            lines.append(
                f"| {_cell(entry.name)} | [{entry.record_id}](./text/{entry.file_stem}.txt) "
                f"| {_yes(entry.osi_approved)} | {_yes(entry.fsf_libre)} |"
            )
        lines.append("")

        lines += [
            "## Deprecated License Identifiers",
            "",
            "| Full name of License | License Identifier | Deprecated Version |",
            "|:---|:---|:---|",
        ]
        for entry in sort_entries(self.deprecated):
            lines.append(
                f"| {_cell(entry.name)} | [{entry.record_id}](./text/deprecated_{entry.file_stem}.txt) "
                f"| {entry.deprecated_version or ''} |"
            )
        lines.append("")

        lines += [
            "## Exceptions",
            "",
            "| Full name of Exception | Exception Identifier |",
            "|:---|:---|",
        ]
        for entry in sort_entries(self.exceptions):
            lines.append(f"| {_cell(entry.name)} | [{entry.record_id}](./text/{entry.file_stem}.txt) |")
        lines.append("")
        return "\n".join(lines)

    def write_toc(self) -> None:
        write_text(self.toc_file, self.render())
