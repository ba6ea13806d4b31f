"""
license_core/generator.py

Drives a license list generation run: resolves the source provider, prepares
the output layout, streams every record through validation, duplicate
detection, the format writers and the optional reference tester, then
finalizes the writers and returns the run's warnings.

Per-record problems are returned as warnings. Anything that stops the run is
raised as a ``LicenseGeneratorError``.
"""

from __future__ import annotations

import contextlib
import dataclasses
import enum
import logging
from collections.abc import Callable, Iterator, Sequence
from importlib import resources
from pathlib import Path
from typing import Any, Protocol

from license_core.duplicates import (
    IdCollisionChecker,
    exception_duplicate_detector,
    license_duplicate_detector,
)
from license_core.exceptions import (
    ArgumentError,
    LicenseGeneratorError,
    OutputPreparationError,
    WriterError,
)
from license_core.logging_config import LogContext
from license_core.metadata import FsfLicenseData, MetadataAugmenter
from license_core.model import License, LicenseException, has_id
from license_core.providers import LicenseProvider, resolve_provider
from license_core.tester import SimpleLicenseTester
from license_core.text_checks import check_text
from license_core.utils.logging import log_event
from license_core.utils.paths import ensure_dir
from license_core.writers import (
    HtmlFormatWriter,
    JsonFormatWriter,
    LicenseFormatWriter,
    ListInfo,
    MarkdownFormatWriter,
    RdfaFormatWriter,
    RdfFormatWriter,
    TemplateFormatWriter,
    TextFormatWriter,
    WebsiteFormatWriter,
)
from license_core.writers.website import CSS_FILE_NAME, SORTTABLE_FILE_NAME

logger = logging.getLogger(__name__)

TEXT_FOLDER_NAME = "text"
TEMPLATE_FOLDER_NAME = "template"
HTML_FOLDER_NAME = "html"
RDFA_FOLDER_NAME = "rdfa"
JSON_FOLDER_NAME = "json"
JSON_DETAILS_FOLDER_NAME = "details"
JSON_EXCEPTIONS_FOLDER_NAME = "exceptions"
WEBSITE_FOLDER_NAME = "website"
RDFXML_FOLDER_NAME = "rdfxml"
RDFTURTLE_FOLDER_NAME = "rdfturtle"
RDFNT_FOLDER_NAME = "rdfnt"
TABLE_OF_CONTENTS_FILE_NAME = "licenses.md"

_FALLBACK_RESOURCES_DIR = Path(__file__).resolve().parent / "resources"


class GeneratorState(str, enum.Enum):
    INIT = "init"
    RESOLVE_PROVIDER = "resolve_provider"
    PREPARE_OUTPUTS = "prepare_outputs"
    LICENSE_PASS = "license_pass"
    EXCEPTION_PASS = "exception_pass"
    FINALIZE_WRITERS = "finalize_writers"
    AGGREGATE_WARNINGS = "aggregate_warnings"
    DONE = "done"
    ABORTED = "aborted"


ProgressCallback = Callable[[GeneratorState, "str | None"], None]


class LicenseTester(Protocol):
    def test_license(self, license: License) -> list[str]: ...

    def test_exception(self, exception: LicenseException) -> list[str]: ...


@dataclasses.dataclass(frozen=True)
class OutputLayout:
    root: Path

    @property
    def text_dir(self) -> Path:
        return self.root / TEXT_FOLDER_NAME

    @property
    def template_dir(self) -> Path:
        return self.root / TEMPLATE_FOLDER_NAME

    @property
    def html_dir(self) -> Path:
        return self.root / HTML_FOLDER_NAME

    @property
    def rdfa_dir(self) -> Path:
        return self.root / RDFA_FOLDER_NAME

    @property
    def json_dir(self) -> Path:
        return self.root / JSON_FOLDER_NAME

    @property
    def json_details_dir(self) -> Path:
        return self.json_dir / JSON_DETAILS_FOLDER_NAME

    @property
    def json_exceptions_dir(self) -> Path:
        return self.json_dir / JSON_EXCEPTIONS_FOLDER_NAME

    @property
    def website_dir(self) -> Path:
        return self.root / WEBSITE_FOLDER_NAME

    @property
    def rdfxml_dir(self) -> Path:
        return self.root / RDFXML_FOLDER_NAME

    @property
    def rdfturtle_dir(self) -> Path:
        return self.root / RDFTURTLE_FOLDER_NAME

    @property
    def rdfnt_dir(self) -> Path:
        return self.root / RDFNT_FOLDER_NAME

    @property
    def toc_file(self) -> Path:
        return self.root / TABLE_OF_CONTENTS_FILE_NAME

    def directories(self) -> list[Path]:
        return [
            self.text_dir,
            self.template_dir,
            self.html_dir,
            self.rdfa_dir,
            self.json_dir,
            self.json_details_dir,
            self.json_exceptions_dir,
            self.website_dir,
            self.rdfxml_dir,
            self.rdfturtle_dir,
            self.rdfnt_dir,
        ]


def prepare_outputs(output_dir: Path) -> OutputLayout:
    """Create (or reuse) every output directory and the table of contents file."""
    layout = OutputLayout(Path(output_dir))
    for directory in [layout.root, *layout.directories()]:
        if directory.exists() and not directory.is_dir():
            raise OutputPreparationError(
                f"Error: {directory} is not a directory",
                context={"path": str(directory)},
            )
        try:
            ensure_dir(directory)
        except OSError as exc:
            raise OutputPreparationError(
                f"Error: unable to create folder {directory}: {exc}",
                context={"path": str(directory)},
            ) from exc
    if layout.toc_file.exists() and not layout.toc_file.is_file():
        raise OutputPreparationError(
            f"Error: {layout.toc_file} is not a file",
            context={"path": str(layout.toc_file)},
        )
    try:
        layout.toc_file.touch(exist_ok=True)
    except OSError as exc:
        raise OutputPreparationError(
            f"Error: unable to create markdown file {layout.toc_file}: {exc}",
            context={"path": str(layout.toc_file)},
        ) from exc
    return layout


def build_writers(info: ListInfo, layout: OutputLayout) -> list[LicenseFormatWriter]:
    return [
        TextFormatWriter(layout.text_dir),
        TemplateFormatWriter(layout.template_dir),
        HtmlFormatWriter(info, layout.html_dir),
        RdfaFormatWriter(info, layout.rdfa_dir),
        JsonFormatWriter(info, layout.json_dir, layout.json_details_dir, layout.json_exceptions_dir),
        WebsiteFormatWriter(info, layout.website_dir),
        RdfFormatWriter(layout.rdfxml_dir, layout.rdfturtle_dir, layout.rdfnt_dir),
        MarkdownFormatWriter(info, layout.toc_file),
    ]


def _read_resource(name: str) -> bytes:
    try:
        return resources.files("license_core").joinpath("resources", name).read_bytes()
    except (FileNotFoundError, ModuleNotFoundError):
        return (_FALLBACK_RESOURCES_DIR / name).read_bytes()


def copy_static_assets(website_dir: Path) -> None:
    """Write the stylesheet (always replaced) and sort script (kept if present)."""
    try:
        ensure_dir(website_dir)
        (website_dir / CSS_FILE_NAME).write_bytes(_read_resource(CSS_FILE_NAME))
        sorttable = website_dir / SORTTABLE_FILE_NAME
        if sorttable.exists():
            logger.debug("Keeping existing %s", sorttable)
        else:
            sorttable.write_bytes(_read_resource(SORTTABLE_FILE_NAME))
    except OSError as exc:
        raise OutputPreparationError(
            f"Error copying website assets to {website_dir}: {exc}",
            context={"path": str(website_dir)},
        ) from exc


class LicenseListGenerator:
    """
    Streams provider records through the per-record stages.

    For each record: augment (licenses only), validate, detect duplicates,
    fan out to every writer in registration order, then run the tester.
    Records with an empty id are skipped before any stage sees them.
    """

    def __init__(
        self,
        writers: Sequence[LicenseFormatWriter],
        *,
        tester: LicenseTester | None = None,
        augmenter: MetadataAugmenter | None = None,
        progress: ProgressCallback | None = None,
    ) -> None:
        self.writers = list(writers)
        self.tester = tester
        self.augmenter = augmenter or MetadataAugmenter()
        self.progress = progress
        self.state = GeneratorState.INIT
        self.warnings: list[str] = []

    def set_state(self, state: GeneratorState) -> None:
        logger.debug("Generator state %s -> %s", self.state.value, state.value)
        self.state = state
        self._report(None)

    def _report(self, record_id: str | None) -> None:
        if self.progress is not None:
            self.progress(self.state, record_id)

    def _fan_out(self, method: str, record_id: str | None, *args: Any) -> None:
        for writer in self.writers:
            try:
                getattr(writer, method)(*args)
            except LicenseGeneratorError as exc:
                raise exc.add_context(writer=writer.writer_name(), record_id=record_id, method=method)
            except Exception as exc:
                raise WriterError(
                    f"Error in {method} for {record_id or 'the table of contents'} "
                    f"with the {writer.writer_name()} writer: {exc}",
                    context={"writer": writer.writer_name(), "record_id": record_id, "method": method},
                ) from exc

    def _run_tester(self, kind: str, record_id: str, record: License | LicenseException) -> None:
        if self.tester is None:
            return
        try:
            if isinstance(record, License):
                results = self.tester.test_license(record)
            else:
                results = self.tester.test_exception(record)
        except Exception as exc:
            logger.debug("Tester raised for %s %s", kind, record_id, exc_info=True)
            results = [str(exc) or exc.__class__.__name__]
        for result in results:
            self.warnings.append(f"Test for {kind} {record_id} failed: {result}")

    def write_license_list(self, provider: LicenseProvider) -> None:
        detector = license_duplicate_detector()
        for license in provider.iter_licenses():
            if not has_id(license.license_id):
                logger.debug("Skipping license without an id")
                continue
            license_id = license.license_id
            with LogContext(record_id=license_id, record_kind="license"):
                self._report(license_id)
                license = self.augmenter.augment_license(license)
                self.warnings.extend(check_text(license.text, f"License text for {license_id}"))
                self.warnings.extend(detector.check(license_id, license.text))
                self._fan_out("write_license", license_id, license, False, None)
                self._run_tester("license", license_id, license)

        for record in provider.iter_deprecated_licenses():
            if not has_id(record.license_id):
                continue
            license_id = record.license_id
            with LogContext(record_id=license_id, record_kind="deprecated_license"):
                self._report(license_id)
                license = self.augmenter.augment_license(record.license)
                self._fan_out("write_license", license_id, license, True, record.deprecated_version)
                self._run_tester("license", license_id, license)

    def _collect_license_ids(self, provider: LicenseProvider) -> set[str] | None:
        try:
            return {
                license.license_id
                for license in provider.iter_licenses()
                if has_id(license.license_id)
            }
        except Exception as exc:
            logger.warning("Not able to check for duplicate license and exception IDs: %s", exc)
            return None

    def write_exception_list(self, provider: LicenseProvider) -> None:
        detector = exception_duplicate_detector()
        collisions = IdCollisionChecker(self._collect_license_ids(provider))
        for exception in provider.iter_exceptions():
            if not has_id(exception.exception_id):
                logger.debug("Skipping exception without an id")
                continue
            exception_id = exception.exception_id or ""
            with LogContext(record_id=exception_id, record_kind="exception"):
                self._report(exception_id)
                self.warnings.extend(detector.check(exception_id, exception.text))
                self.warnings.extend(collisions.check(exception_id))
                self.warnings.extend(
                    check_text(exception.text, f"License Exception Text for {exception_id}")
                )
                self._fan_out(
                    "write_exception",
                    exception_id,
                    exception,
                    exception.deprecated,
                    exception.deprecated_version,
                )
                self._run_tester("exception", exception_id, exception)

    def finalize(self, website_dir: Path | None) -> None:
        self._fan_out("write_toc", None)
        if website_dir is not None:
            copy_static_assets(website_dir)

    def run(self, provider: LicenseProvider, *, website_dir: Path | None = None) -> list[str]:
        self.set_state(GeneratorState.LICENSE_PASS)
        self.write_license_list(provider)
        self.set_state(GeneratorState.EXCEPTION_PASS)
        self.write_exception_list(provider)
        self.set_state(GeneratorState.FINALIZE_WRITERS)
        self.finalize(website_dir)
        self.set_state(GeneratorState.AGGREGATE_WARNINGS)
        warnings = [*self.warnings, *provider.warnings]
        if warnings:
            logger.warning("The following warning(s) were identified:")
            for warning in warnings:
                logger.warning("\t%s", warning)
        self.set_state(GeneratorState.DONE)
        return warnings


@contextlib.contextmanager
def acquired(provider: LicenseProvider) -> Iterator[LicenseProvider]:
    """Hold ``provider`` for the block and close it exactly once afterwards.

    A failing ``close`` is logged and never replaces the block's outcome.
    """
    try:
        yield provider
    finally:
        try:
            provider.close()
        except Exception:
            logger.exception("Error closing license provider %s", provider.name or type(provider).__name__)


def generate_license_data(
    input_path: Path | None,
    output_dir: Path,
    version: str | None = None,
    release_date: str | None = None,
    test_dir: Path | None = None,
    *,
    fsf_data: str | Path | FsfLicenseData | None = None,
    provider: LicenseProvider | None = None,
    writers: Sequence[LicenseFormatWriter] | None = None,
    tester: LicenseTester | None = None,
    augmenter: MetadataAugmenter | None = None,
    progress: ProgressCallback | None = None,
) -> list[str]:
    """Generate every output format for the license list at ``input_path``.

    Args:
        input_path: Spreadsheet workbook or directory of license XML files.
            Ignored when ``provider`` is given.
        output_dir: Root of the output layout; created if absent.
        version: License list version; defaults to the spreadsheet's.
        release_date: Release date; defaults to the spreadsheet's.
        test_dir: Directory of reference texts. Builds a
            ``SimpleLicenseTester`` unless ``tester`` is given.
        fsf_data: FSF license data, or a path/URL to load it from.
        provider: Pre-built provider, replacing input resolution.
        writers: Writers to use instead of the standard set.
        tester: Reference tester to use instead of the default.
        augmenter: Metadata augmenter to use instead of one built from
            ``fsf_data``.
        progress: Called with ``(state, record_id)`` on each state change
            (``record_id`` is ``None``) and for each record processed.

    Returns:
        Pipeline warnings followed by provider warnings.

    Raises:
        LicenseGeneratorError: On any fatal failure. Unclassified errors are
            wrapped with code ``internal_error``. The provider is closed on
            every exit path.
    """
    generator = LicenseListGenerator([], progress=progress)
    try:
        generator.set_state(GeneratorState.RESOLVE_PROVIDER)
        if provider is None:
            if input_path is None:
                raise ArgumentError("No license input given")
            provider = resolve_provider(Path(input_path))
        with acquired(provider):
            if not version or not version.strip():
                version = provider.version
            if not release_date or not release_date.strip():
                release_date = provider.release_date
            info = ListInfo(version=version, release_date=release_date)

            generator.set_state(GeneratorState.PREPARE_OUTPUTS)
            layout = prepare_outputs(Path(output_dir))
            generator.writers = list(writers) if writers is not None else build_writers(info, layout)
            if tester is None and test_dir is not None:
                tester = SimpleLicenseTester(Path(test_dir))
            generator.tester = tester
            if augmenter is None:
                if not isinstance(fsf_data, FsfLicenseData):
                    fsf_data = FsfLicenseData.load(fsf_data)
                augmenter = MetadataAugmenter(fsf_data)
            generator.augmenter = augmenter

            warnings = generator.run(provider, website_dir=layout.website_dir)
    except LicenseGeneratorError:
        generator.set_state(GeneratorState.ABORTED)
        raise
    except Exception as exc:
        failed_state = generator.state
        generator.set_state(GeneratorState.ABORTED)
        raise LicenseGeneratorError(
            f"Unexpected error generating license data: {exc}",
            context={"state": failed_state.value, "error_type": type(exc).__name__},
        ) from exc

    log_event(
        logger,
        "Completed processing licenses",
        version=version,
        release_date=release_date,
        warnings=len(warnings),
    )
    return warnings
