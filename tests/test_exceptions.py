from __future__ import annotations

import pytest

from license_core.exceptions import (
    ArgumentError,
    ConfigError,
    LicenseGeneratorError,
    OutputPreparationError,
    SourceFormatError,
    WriterError,
)


@pytest.mark.parametrize(
    ("error_cls", "code"),
    [
        (ArgumentError, "argument_error"),
        (SourceFormatError, "source_format_error"),
        (OutputPreparationError, "output_preparation_error"),
        (WriterError, "writer_error"),
        (ConfigError, "config_error"),
        (LicenseGeneratorError, "internal_error"),
    ],
)
def test_subclasses_preset_code(error_cls: type[LicenseGeneratorError], code: str) -> None:
    err = error_cls("failed")
    assert err.code == code
    assert isinstance(err, LicenseGeneratorError)


def test_as_log_fields() -> None:
    err = WriterError("disk full", context={"writer": "json", "record_id": "MIT"})
    assert err.as_log_fields() == {
        "error_code": "writer_error",
        "error_message": "disk full",
        "error_context": {"writer": "json", "record_id": "MIT"},
    }
    assert str(err) == "disk full"


def test_explicit_code_wins() -> None:
    err = LicenseGeneratorError("bad input", code="argument_error")
    assert err.code == "argument_error"
    assert err.context == {}


def test_add_context_keeps_existing_keys() -> None:
    err = SourceFormatError("bad row", context={"record_id": "MIT"})
    returned = err.add_context(record_id="ISC", writer="json")
    assert returned is err
    assert err.context == {"record_id": "MIT", "writer": "json"}
    assert repr(err) == "SourceFormatError(code='source_format_error', message='bad row')"
