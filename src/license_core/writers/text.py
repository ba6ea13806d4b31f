from __future__ import annotations

from pathlib import Path

from license_core.model import License, LicenseException
from license_core.utils.io import write_text
from license_core.writers.base import LicenseFormatWriter, file_stem

DEPRECATED_PREFIX = "deprecated_"


def _ensure_newline(text: str) -> str:
    return text if text.endswith("\n") else text + "\n"


class TextFormatWriter(LicenseFormatWriter):
    """Plain license and exception text, one ``.txt`` file per record."""

    name = "text"

    def __init__(self, text_dir: Path) -> None:
        self.text_dir = text_dir

    def write_license(self, license: License, is_deprecated: bool, deprecated_version: str | None) -> None:
        stem = file_stem(license.license_id)
        if is_deprecated:
            stem = DEPRECATED_PREFIX + stem
        write_text(self.text_dir / f"{stem}.txt", _ensure_newline(license.text or ""))

    def write_exception(
        self, exception: LicenseException, is_deprecated: bool, deprecated_version: str | None
    ) -> None:
        stem = file_stem(exception.exception_id or "")
        if is_deprecated:
            stem = DEPRECATED_PREFIX + stem
        write_text(self.text_dir / f"{stem}.txt", _ensure_newline(exception.text or ""))

    def write_toc(self) -> None:
        return None


class TemplateFormatWriter(LicenseFormatWriter):
    """Standard license templates (``<<var>>``/``<<beginOptional>>`` markup)."""

    name = "template"

    def __init__(self, template_dir: Path) -> None:
        self.template_dir = template_dir

    def _path(self, record_id: str, is_deprecated: bool) -> Path:
        stem = file_stem(record_id)
        if is_deprecated:
            stem = DEPRECATED_PREFIX + stem
        return self.template_dir / f"{stem}.template.txt"

    def write_license(self, license: License, is_deprecated: bool, deprecated_version: str | None) -> None:
        write_text(self._path(license.license_id, is_deprecated), _ensure_newline(license.template_text or ""))

    def write_exception(
        self, exception: LicenseException, is_deprecated: bool, deprecated_version: str | None
    ) -> None:
        write_text(
            self._path(exception.exception_id or "", is_deprecated),
            _ensure_newline(exception.text or ""),
        )

    def write_toc(self) -> None:
        return None
