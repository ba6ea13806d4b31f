"""Tests for the license XML directory provider and provider resolution."""

from __future__ import annotations

from pathlib import Path

import pytest

from conftest import MIT_TEXT, write_license_xml
from license_core.exceptions import SourceFormatError
from license_core.providers import SpreadsheetLicenseProvider, XmlLicenseProvider, resolve_provider


class TestXmlLicenseProvider:
    def test_licenses(self, xml_license_dir: Path) -> None:
        provider = XmlLicenseProvider(xml_license_dir)
        licenses = list(provider.iter_licenses())
        assert [lic.license_id for lic in licenses] == ["MIT"]
        mit = licenses[0]
        assert mit.name == "MIT License"
        assert mit.text == MIT_TEXT
        assert mit.osi_approved is True
        assert mit.see_also == ("https://opensource.org/licenses/MIT",)
        assert not mit.deprecated

    def test_deprecated_licenses(self, xml_license_dir: Path) -> None:
        provider = XmlLicenseProvider(xml_license_dir)
        records = list(provider.iter_deprecated_licenses())
        assert [record.license_id for record in records] == ["GPL-2.0"]
        assert records[0].deprecated_version == "3.0"
        assert records[0].license.deprecated is True

    def test_exceptions(self, xml_license_dir: Path) -> None:
        provider = XmlLicenseProvider(xml_license_dir)
        exceptions = list(provider.iter_exceptions())
        assert [exc.exception_id for exc in exceptions] == ["Classpath-exception-2.0"]
        assert exceptions[0].text.startswith("Linking this library")

    def test_each_pass_starts_over(self, xml_license_dir: Path) -> None:
        provider = XmlLicenseProvider(xml_license_dir)
        first = [lic.license_id for lic in provider.iter_licenses()]
        second = [lic.license_id for lic in provider.iter_licenses()]
        assert first == second == ["MIT"]

    def test_duplicate_id_is_skipped_with_warning(self, xml_license_dir: Path) -> None:
        write_license_xml(
            xml_license_dir,
            "MIT-copy.xml",
            '<license licenseId="MIT" name="Copy"><text><p>Other text</p></text></license>',
        )
        provider = XmlLicenseProvider(xml_license_dir)
        licenses = list(provider.iter_licenses())
        assert [lic.name for lic in licenses] == ["Copy"]
        assert provider.warnings == ["Duplicate license ID MIT in MIT.xml (first defined in MIT-copy.xml)"]

    def test_template_markup(self, tmp_path: Path) -> None:
        write_license_xml(
            tmp_path,
            "Example.xml",
            '<license licenseId="Example" name="Example">'
            '<text><optional><p>Example License</p></optional>'
            '<p><alt name="copyright" match=".+">Copyright (c) 2024</alt> Permission granted.</p>'
            "</text></license>",
        )
        license = next(XmlLicenseProvider(tmp_path).iter_licenses())
        assert license.text == "Example License\n\nCopyright (c) 2024 Permission granted."
        assert license.template is not None
        assert license.template.startswith("<<beginOptional>>")
        assert "<<endOptional>>" in license.template
        assert '<<var;name="copyright";original="Copyright (c) 2024";match=".+">> Permission granted.' in (
            license.template
        )

    def test_header_and_notes(self, tmp_path: Path) -> None:
        write_license_xml(
            tmp_path,
            "Hdr.xml",
            '<license licenseId="Hdr" name="Header License">'
            "<notes>Some notes</notes>"
            "<text><p>Body</p></text>"
            "<standardLicenseHeader>Licensed under Hdr</standardLicenseHeader>"
            "</license>",
        )
        license = next(XmlLicenseProvider(tmp_path).iter_licenses())
        assert license.comments == "Some notes"
        assert license.header == "Licensed under Hdr"

    def test_malformed_xml(self, tmp_path: Path) -> None:
        (tmp_path / "broken.xml").write_text("<SPDXLicenseCollection><license>", encoding="utf-8")
        provider = XmlLicenseProvider(tmp_path)
        with pytest.raises(SourceFormatError) as excinfo:
            list(provider.iter_licenses())
        assert excinfo.value.code == "source_format_error"
        assert excinfo.value.context["path"].endswith("broken.xml")


class TestResolveProvider:
    def test_directory(self, xml_license_dir: Path) -> None:
        assert isinstance(resolve_provider(xml_license_dir), XmlLicenseProvider)

    def test_spreadsheet(self, workbook_factory) -> None:
        path = workbook_factory({"Licenses": [["License Identifier", "Text"], ["MIT", "text"]]})
        provider = resolve_provider(path)
        try:
            assert isinstance(provider, SpreadsheetLicenseProvider)
        finally:
            provider.close()

    def test_unsupported_file(self, tmp_path: Path) -> None:
        other = tmp_path / "licenses.txt"
        other.write_text("MIT", encoding="utf-8")
        with pytest.raises(SourceFormatError, match="Unsupported file format"):
            resolve_provider(other)
