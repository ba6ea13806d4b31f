from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from license_core.compare import is_license_text_equivalent

logger = logging.getLogger(__name__)

TextComparator = Callable[[str, str], bool]


def _stripped_equal(lhs: str, rhs: str) -> bool:
    return (lhs or "").strip() == (rhs or "").strip()


class DuplicateTextDetector:
    """
    Remembers id -> text pairs and flags a new text that matches a stored one.

    Stored texts are compared in insertion order; only the first match is
    reported. The new pair is always stored, whether or not it matched.
    """

    def __init__(self, comparator: TextComparator, *, label: str) -> None:
        self.comparator = comparator
        self.label = label
        self._seen: dict[str, str] = {}

    def __len__(self) -> int:
        return len(self._seen)

    def find_match(self, text: str) -> str | None:
        for seen_id, seen_text in self._seen.items():
            if self.comparator(seen_text, text):
                return seen_id
        return None

    def check(self, record_id: str, text: str) -> list[str]:
        match = self.find_match(text)
        self._seen[record_id] = text
        if match is None:
            return []
        logger.debug("Duplicate %s text: %s matches %s", self.label, record_id, match)
        return [f"Duplicates {self.label}: {record_id}, {match}"]


def license_duplicate_detector(
    comparator: TextComparator = is_license_text_equivalent,
) -> DuplicateTextDetector:
    return DuplicateTextDetector(comparator, label="licenses")


def exception_duplicate_detector() -> DuplicateTextDetector:
    return DuplicateTextDetector(_stripped_equal, label="exceptions")


class IdCollisionChecker:
    """Flags exception ids that are already used by a license."""

    def __init__(self, license_ids: Iterable[str] | None) -> None:
        self.enabled = license_ids is not None
        self._license_ids = {lid.strip() for lid in license_ids or () if lid}

    def check(self, exception_id: str) -> list[str]:
        if not self.enabled:
            return []
        if exception_id.strip() in self._license_ids:
            return [f"A license ID exists with the same ID as an exception ID: {exception_id}"]
        return []
