"""
license_core/exceptions.py

Fatal errors raised while generating the license list.

Every fatal error is a ``LicenseGeneratorError`` tagged with one of the codes
below; the CLI branches on ``code`` (usage text for ``argument_error``) and
exits 1 for all of them. Per-record problems such as invalid characters or
duplicate texts are not errors: they are collected as warning strings.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

ARGUMENT_ERROR = "argument_error"
SOURCE_FORMAT_ERROR = "source_format_error"
OUTPUT_PREPARATION_ERROR = "output_preparation_error"
WRITER_ERROR = "writer_error"
CONFIG_ERROR = "config_error"
INTERNAL_ERROR = "internal_error"


class LicenseGeneratorError(Exception):
    """Fatal generator failure.

    ``context`` holds the identifiers needed to locate the failure (input
    path, record id, writer name, ...). Code further up the call stack may add
    keys with ``add_context`` before re-raising.
    """

    code: str = INTERNAL_ERROR

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        self.context: dict[str, Any] = dict(context or {})

    def add_context(self, **fields: Any) -> LicenseGeneratorError:
        """Fill in context keys that are not already set. Returns ``self``."""
        for key, value in fields.items():
            self.context.setdefault(key, value)
        return self

    def as_log_fields(self) -> dict[str, Any]:
        return {
            "error_code": self.code,
            "error_message": self.message,
            "error_context": self.context,
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


class ArgumentError(LicenseGeneratorError):
    code = ARGUMENT_ERROR


class SourceFormatError(LicenseGeneratorError):
    code = SOURCE_FORMAT_ERROR


class OutputPreparationError(LicenseGeneratorError):
    code = OUTPUT_PREPARATION_ERROR


class WriterError(LicenseGeneratorError):
    code = WRITER_ERROR


class ConfigError(LicenseGeneratorError):
    code = CONFIG_ERROR
