"""
license_core/tester.py

Reference tester: compares generated record text against independently
maintained ``{id}.txt`` files in a test directory.
"""

from __future__ import annotations

import logging
from pathlib import Path

from license_core.compare import is_license_text_equivalent
from license_core.model import License, LicenseException
from license_core.utils.paths import safe_filename

logger = logging.getLogger(__name__)


class SimpleLicenseTester:
    def __init__(self, test_dir: Path) -> None:
        self.test_dir = Path(test_dir)

    def _test_file(self, record_id: str) -> Path | None:
        path = self.test_dir / f"{safe_filename(record_id)}.txt"
        if not path.is_file():
            logger.debug("No test file for %s in %s", record_id, self.test_dir)
            return None
        return path

    def test_license(self, license: License) -> list[str]:
        path = self._test_file(license.license_id)
        if path is None:
            return []
        expected = path.read_text(encoding="utf-8", errors="replace")
        if is_license_text_equivalent(expected, license.text):
            return []
        return [f"License text does not match the test file {path.name}"]

    def test_exception(self, exception: LicenseException) -> list[str]:
        path = self._test_file(exception.exception_id or "")
        if path is None:
            return []
        expected = path.read_text(encoding="utf-8", errors="replace")
        if is_license_text_equivalent(expected, exception.text):
            return []
        return [f"Exception text does not match the test file {path.name}"]
