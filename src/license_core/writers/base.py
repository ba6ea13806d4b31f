from __future__ import annotations

import abc
import dataclasses
from functools import cache
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape

from license_core.model import License, LicenseException
from license_core.utils.paths import safe_filename

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"


@dataclasses.dataclass(frozen=True)
class ListInfo:
    version: str | None = None
    release_date: str | None = None


@dataclasses.dataclass(frozen=True)
class TocEntry:
    """One row of a table of contents."""

    record_id: str
    name: str
    file_stem: str
    osi_approved: bool = False
    fsf_libre: bool | None = None
    deprecated: bool = False
    deprecated_version: str | None = None
    see_also: tuple[str, ...] = ()

    @classmethod
    def for_license(cls, license: License, is_deprecated: bool, deprecated_version: str | None) -> TocEntry:
        return cls(
            record_id=license.license_id,
            name=license.name or license.license_id,
            file_stem=file_stem(license.license_id),
            osi_approved=license.osi_approved,
            fsf_libre=license.fsf_libre,
            deprecated=is_deprecated,
            deprecated_version=deprecated_version,
            see_also=license.see_also,
        )

    @classmethod
    def for_exception(
        cls, exception: LicenseException, is_deprecated: bool, deprecated_version: str | None
    ) -> TocEntry:
        exception_id = exception.exception_id or ""
        return cls(
            record_id=exception_id,
            name=exception.name or exception_id,
            file_stem=file_stem(exception_id),
            deprecated=is_deprecated,
            deprecated_version=deprecated_version,
            see_also=exception.see_also,
        )


def file_stem(record_id: str) -> str:
    return safe_filename(record_id)


def sort_entries(entries: list[TocEntry]) -> list[TocEntry]:
    return sorted(entries, key=lambda entry: entry.record_id.lower())


@cache
def get_environment() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=select_autoescape(["html", "htm", "xml"]),
        keep_trailing_newline=True,
    )
    return env


def render_template(name: str, **context: Any) -> str:
    return get_environment().get_template(name).render(**context)


class LicenseFormatWriter(abc.ABC):
    """
    One output format. The generator calls ``write_license`` and
    ``write_exception`` once per record, then ``write_toc`` once at the end.
    """

    name: str = ""

    @classmethod
    def writer_name(cls) -> str:
        return cls.name or cls.__name__

    @abc.abstractmethod
    def write_license(self, license: License, is_deprecated: bool, deprecated_version: str | None) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def write_exception(
        self, exception: LicenseException, is_deprecated: bool, deprecated_version: str | None
    ) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def write_toc(self) -> None:
        raise NotImplementedError
