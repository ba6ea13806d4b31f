from __future__ import annotations

import abc
from collections.abc import Iterator
from typing import Any

from license_core.model import DeprecatedLicenseRecord, License, LicenseException


class LicenseProvider(abc.ABC):
    """
    Source of license list records.

    Each ``iter_*`` call starts a fresh, ordered pass over the source.
    ``warnings`` collects source-level problems found while iterating and is
    complete once every pass has finished. Providers are context managers;
    ``close`` releases any open handle and is safe to call more than once.
    """

    name: str = ""
    version: str | None = None
    release_date: str | None = None

    def __init__(self) -> None:
        self.warnings: list[str] = []

    @abc.abstractmethod
    def iter_licenses(self) -> Iterator[License]:
        raise NotImplementedError

    @abc.abstractmethod
    def iter_exceptions(self) -> Iterator[LicenseException]:
        raise NotImplementedError

    @abc.abstractmethod
    def iter_deprecated_licenses(self) -> Iterator[DeprecatedLicenseRecord]:
        raise NotImplementedError

    def close(self) -> None:
        return None

    def add_warning(self, message: str) -> None:
        if message not in self.warnings:
            self.warnings.append(message)

    def __enter__(self) -> LicenseProvider:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


def parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in {"true", "yes", "y", "1", "x"}


def split_urls(value: Any) -> tuple[str, ...]:
    if not value:
        return ()
    if isinstance(value, (list, tuple)):
        items = value
    else:
        items = str(value).split()
    return tuple(url.strip() for url in items if url and url.strip())
