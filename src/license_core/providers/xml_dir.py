"""
license_core/providers/xml_dir.py

Reads the license list from a directory of license XML files.

Each ``*.xml`` file holds an ``SPDXLicenseCollection`` with ``license`` and/or
``exception`` elements. Licenses flagged ``isDeprecated="true"`` are served by
``iter_deprecated_licenses`` instead of ``iter_licenses``.
"""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from collections.abc import Iterator
from pathlib import Path

from license_core.exceptions import SourceFormatError
from license_core.model import DeprecatedLicenseRecord, License, LicenseException
from license_core.providers.base import LicenseProvider, parse_bool

logger = logging.getLogger(__name__)

_BLOCK_TAGS = {"p", "item", "list", "titleText", "copyrightText", "standardLicenseHeader"}
_BLANK_LINES_RE = re.compile(r"\n{3,}")
_INLINE_WS_RE = re.compile(r"[ \t\r\f\v]*\n[ \t\r\f\v]*")
_SPACES_RE = re.compile(r"[ \t]+")


def _local(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _child(element: ET.Element, name: str) -> ET.Element | None:
    for child in element:
        if _local(child.tag) == name:
            return child
    return None


def _tidy(text: str) -> str:
    text = _INLINE_WS_RE.sub("\n", text)
    text = _SPACES_RE.sub(" ", text)
    text = _BLANK_LINES_RE.sub("\n\n", text)
    return text.strip()


def _render(element: ET.Element, *, template: bool) -> str:
    parts: list[str] = []

    def visit(node: ET.Element) -> None:
        tag = _local(node.tag)
        if tag == "br":
            parts.append("\n")
        elif tag == "alt" and template:
            original = "".join(node.itertext()).strip()
            name = node.get("name", "")
            match = node.get("match", ".+")
            parts.append(f'<<var;name="{name}";original="{original}";match="{match}">>')
            parts.append(node.tail or "")
            return
        elif tag == "optional" and template:
            parts.append("<<beginOptional>>")
        elif tag in _BLOCK_TAGS:
            parts.append("\n\n")
        parts.append(node.text or "")
        for child in node:
            visit(child)
        if tag == "optional" and template:
            parts.append("<<endOptional>>")
        elif tag in _BLOCK_TAGS:
            parts.append("\n\n")
        parts.append(node.tail or "")

    parts.append(element.text or "")
    for child in element:
        visit(child)
    return _tidy("".join(parts))


def _cross_refs(element: ET.Element) -> tuple[str, ...]:
    refs = _child(element, "crossRefs")
    if refs is None:
        return ()
    return tuple(
        (ref.text or "").strip() for ref in refs if _local(ref.tag) == "crossRef" and (ref.text or "").strip()
    )


def _optional_text(element: ET.Element, name: str) -> str | None:
    child = _child(element, name)
    if child is None:
        return None
    return _render(child, template=False) or None


class XmlLicenseProvider(LicenseProvider):
    name = "xml"

    def __init__(self, directory: Path) -> None:
        super().__init__()
        self.directory = directory

    def _files(self) -> list[Path]:
        return sorted(p for p in self.directory.iterdir() if p.is_file() and p.suffix.lower() == ".xml")

    def _iter_elements(self, kind: str) -> Iterator[tuple[Path, ET.Element]]:
        for path in self._files():
            logger.debug("Parsing %s elements from %s", kind, path)
            try:
                root = ET.parse(path).getroot()
            except (ET.ParseError, OSError) as exc:
                raise SourceFormatError(
                    f"Error reading license XML file {path.name}: {exc}",
                    context={"path": str(path)},
                ) from exc
            for element in root.iter():
                if _local(element.tag) == kind:
                    yield path, element

    def _build_license(self, path: Path, element: ET.Element) -> License:
        text_element = _child(element, "text")
        if text_element is None:
            self.add_warning(f"No license text found in {path.name}")
            text = ""
            template = None
        else:
            text = _render(text_element, template=False)
            template = _render(text_element, template=True)
        deprecated = parse_bool(element.get("isDeprecated"))
        return License(
            license_id=(element.get("licenseId") or "").strip(),
            name=(element.get("name") or "").strip(),
            text=text,
            template=template,
            header=_optional_text(element, "standardLicenseHeader"),
            see_also=_cross_refs(element),
            comments=_optional_text(element, "notes"),
            osi_approved=parse_bool(element.get("isOsiApproved")),
            deprecated=deprecated,
            deprecated_version=(element.get("deprecatedVersion") or "").strip() or None,
        )

    def _iter_all_licenses(self) -> Iterator[License]:
        seen: dict[str, str] = {}
        for path, element in self._iter_elements("license"):
            license = self._build_license(path, element)
            if license.license_id in seen:
                self.add_warning(
                    f"Duplicate license ID {license.license_id} in {path.name} "
                    f"(first defined in {seen[license.license_id]})"
                )
                continue
            if license.license_id:
                seen[license.license_id] = path.name
            yield license

    def iter_licenses(self) -> Iterator[License]:
        for license in self._iter_all_licenses():
            if not license.deprecated:
                yield license

    def iter_deprecated_licenses(self) -> Iterator[DeprecatedLicenseRecord]:
        for license in self._iter_all_licenses():
            if license.deprecated and license.license_id:
                yield DeprecatedLicenseRecord(license=license, deprecated_version=license.deprecated_version)

    def iter_exceptions(self) -> Iterator[LicenseException]:
        for path, element in self._iter_elements("exception"):
            text_element = _child(element, "text")
            if text_element is None:
                self.add_warning(f"No exception text found in {path.name}")
            yield LicenseException(
                exception_id=(element.get("licenseId") or "").strip() or None,
                name=(element.get("name") or "").strip(),
                text=_render(text_element, template=False) if text_element is not None else "",
                see_also=_cross_refs(element),
                comments=_optional_text(element, "notes"),
                license_example=_optional_text(element, "example"),
                deprecated=parse_bool(element.get("isDeprecated")),
                deprecated_version=(element.get("deprecatedVersion") or "").strip() or None,
            )
