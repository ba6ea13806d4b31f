"""
license_core/writers/rdf.py

RDF renderings of each license and exception in three serializations:
RDF/XML (``rdfxml/``), Turtle (``rdfturtle/``) and N-Triples (``rdfnt/``).

Every record is a small, fixed graph: one subject with literal-valued
properties, so triples are built directly rather than through a graph store.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from collections.abc import Iterable
from pathlib import Path

from license_core.model import License, LicenseException
from license_core.utils.io import write_text
from license_core.writers.base import LicenseFormatWriter, file_stem

SPDX_NS = "http://spdx.org/rdf/terms#"
RDF_NS = "http://www.w3.org/1999/02/22-rdf-syntax-ns#"
RDFS_NS = "http://www.w3.org/2000/01/rdf-schema#"
XSD_BOOLEAN = "http://www.w3.org/2001/XMLSchema#boolean"
DEFAULT_BASE_URI = "http://spdx.org/licenses/"

PREFIXES = {"spdx": SPDX_NS, "rdf": RDF_NS, "rdfs": RDFS_NS}
for _prefix, _ns in PREFIXES.items():
    ET.register_namespace(_prefix, _ns)

# (predicate namespace, predicate local name, value, is_boolean)
Triple = tuple[str, str, str, bool]


def _escape_literal(value: str) -> str:
    return (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
    )


def _bool(value: bool) -> str:
    return "true" if value else "false"


def license_triples(license: License, is_deprecated: bool, deprecated_version: str | None) -> list[Triple]:
    triples: list[Triple] = [
        (SPDX_NS, "licenseId", license.license_id, False),
        (SPDX_NS, "name", license.name or license.license_id, False),
        (SPDX_NS, "licenseText", license.text or "", False),
        (SPDX_NS, "standardLicenseTemplate", license.template_text or "", False),
        (SPDX_NS, "isOsiApproved", _bool(license.osi_approved), True),
        (SPDX_NS, "isDeprecatedLicenseId", _bool(is_deprecated), True),
    ]
    if license.fsf_libre is not None:
        triples.append((SPDX_NS, "isFsfLibre", _bool(license.fsf_libre), True))
    if license.header:
        triples.append((SPDX_NS, "standardLicenseHeader", license.header, False))
    if is_deprecated and deprecated_version:
        triples.append((SPDX_NS, "deprecatedVersion", deprecated_version, False))
    if license.comments:
        triples.append((RDFS_NS, "comment", license.comments, False))
    triples.extend((RDFS_NS, "seeAlso", url, False) for url in license.see_also)
    return triples


def exception_triples(
    exception: LicenseException, is_deprecated: bool, deprecated_version: str | None
) -> list[Triple]:
    exception_id = exception.exception_id or ""
    triples: list[Triple] = [
        (SPDX_NS, "licenseExceptionId", exception_id, False),
        (SPDX_NS, "name", exception.name or exception_id, False),
        (SPDX_NS, "licenseExceptionText", exception.text or "", False),
        (SPDX_NS, "isDeprecatedLicenseId", _bool(is_deprecated), True),
    ]
    if is_deprecated and deprecated_version:
        triples.append((SPDX_NS, "deprecatedVersion", deprecated_version, False))
    if exception.license_example:
        triples.append((SPDX_NS, "example", exception.license_example, False))
    if exception.comments:
        triples.append((RDFS_NS, "comment", exception.comments, False))
    triples.extend((RDFS_NS, "seeAlso", url, False) for url in exception.see_also)
    return triples


def to_ntriples(subject: str, rdf_type: str, triples: Iterable[Triple]) -> str:
    lines = [f"<{subject}> <{RDF_NS}type> <{SPDX_NS}{rdf_type}> ."]
    for namespace, local, value, is_boolean in triples:
        literal = f'"{_escape_literal(value)}"'
        if is_boolean:
            literal += f"^^<{XSD_BOOLEAN}>"
        lines.append(f"<{subject}> <{namespace}{local}> {literal} .")
    return "\n".join(lines) + "\n"


def to_turtle(subject: str, rdf_type: str, triples: Iterable[Triple]) -> str:
    prefix_for = {ns: prefix for prefix, ns in PREFIXES.items()}
    lines = [f"@prefix {prefix}: <{ns}> ." for prefix, ns in PREFIXES.items()]
    lines.append("")
    body = [f"<{subject}>", f"    a spdx:{rdf_type}"]
    for namespace, local, value, is_boolean in triples:
        literal = _bool(value == "true") if is_boolean else f'"{_escape_literal(value)}"'
        body[-1] += " ;"
        body.append(f"    {prefix_for[namespace]}:{local} {literal}")
    body[-1] += " ."
    lines.extend(body)
    return "\n".join(lines) + "\n"


def to_rdfxml(subject: str, rdf_type: str, triples: Iterable[Triple]) -> str:
    root = ET.Element(f"{{{RDF_NS}}}RDF")
    node = ET.SubElement(root, f"{{{SPDX_NS}}}{rdf_type}", {f"{{{RDF_NS}}}about": subject})
    for namespace, local, value, is_boolean in triples:
        prop = ET.SubElement(node, f"{{{namespace}}}{local}")
        if is_boolean:
            prop.set(f"{{{RDF_NS}}}datatype", XSD_BOOLEAN)
        prop.text = value
    ET.indent(root)
    return '<?xml version="1.0" encoding="UTF-8"?>\n' + ET.tostring(root, encoding="unicode") + "\n"


class RdfFormatWriter(LicenseFormatWriter):
    name = "rdf"

    def __init__(
        self,
        rdfxml_dir: Path,
        turtle_dir: Path,
        nt_dir: Path,
        *,
        base_uri: str = DEFAULT_BASE_URI,
    ) -> None:
        self.rdfxml_dir = rdfxml_dir
        self.turtle_dir = turtle_dir
        self.nt_dir = nt_dir
        self.base_uri = base_uri

    def _write(self, record_id: str, rdf_type: str, triples: list[Triple]) -> None:
        stem = file_stem(record_id)
        subject = f"{self.base_uri}{record_id}"
        write_text(self.rdfxml_dir / f"{stem}.rdf", to_rdfxml(subject, rdf_type, triples))
        write_text(self.turtle_dir / f"{stem}.ttl", to_turtle(subject, rdf_type, triples))
        write_text(self.nt_dir / f"{stem}.nt", to_ntriples(subject, rdf_type, triples))

    def write_license(self, license: License, is_deprecated: bool, deprecated_version: str | None) -> None:
        self._write(
            license.license_id,
            "ListedLicense",
            license_triples(license, is_deprecated, deprecated_version),
        )

    def write_exception(
        self, exception: LicenseException, is_deprecated: bool, deprecated_version: str | None
    ) -> None:
        self._write(
            exception.exception_id or "",
            "ListedLicenseException",
            exception_triples(exception, is_deprecated, deprecated_version),
        )

    def write_toc(self) -> None:
        return None
