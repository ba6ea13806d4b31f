"""
license_core/model.py

Record types carried through the generation pipeline.

Records are frozen dataclasses. The metadata augmenter never mutates a
record in place; it returns an updated copy via ``dataclasses.replace``.
"""

from __future__ import annotations

import dataclasses


@dataclasses.dataclass(frozen=True)
class License:
    """A listed license.

    Attributes:
        license_id: Short identifier, unique within a run (e.g. ``MIT``)
        name: Full license name
        text: License text
        template: Standard license template; writers fall back to ``text``
        header: Standard license header, if the license defines one
        see_also: Reference URLs
        comments: Free-form notes
        osi_approved: Whether the license is OSI approved
        fsf_libre: FSF libre flag; ``None`` when unknown
        deprecated: Whether the license id is deprecated
        deprecated_version: List version in which the id was deprecated
    """

    license_id: str
    text: str
    name: str = ""
    template: str | None = None
    header: str | None = None
    see_also: tuple[str, ...] = ()
    comments: str | None = None
    osi_approved: bool = False
    fsf_libre: bool | None = None
    deprecated: bool = False
    deprecated_version: str | None = None

    @property
    def template_text(self) -> str:
        return self.template if self.template else self.text


@dataclasses.dataclass(frozen=True)
class LicenseException:
    """A listed license exception. An empty ``exception_id`` marks a skipped row."""

    exception_id: str | None
    text: str
    name: str = ""
    see_also: tuple[str, ...] = ()
    comments: str | None = None
    license_example: str | None = None
    deprecated: bool = False
    deprecated_version: str | None = None


@dataclasses.dataclass(frozen=True)
class DeprecatedLicenseRecord:
    license: License
    deprecated_version: str | None

    @property
    def license_id(self) -> str:
        return self.license.license_id


def has_id(identifier: str | None) -> bool:
    return bool(identifier and identifier.strip())
