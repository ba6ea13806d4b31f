"""
license_core/cli.py

Command line front end:

    license-generator INPUT OUTPUT_DIR [VERSION [RELEASE_DATE [TEST_DIR [IGNORED_WARNINGS]]]]

Exit status is 0 on success, 64 when the run produced warnings that are not
in the ignore list, and 1 on any fatal error.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import NoReturn

from license_core.config import GeneratorConfig, load_config
from license_core.exceptions import ArgumentError, LicenseGeneratorError
from license_core.generator import generate_license_data
from license_core.logging_config import LogContext, add_logging_args, configure_logging
from license_core.warning_policy import (
    ERROR_STATUS,
    load_ignored_warnings,
    resolve_exit_status,
)

logger = logging.getLogger(__name__)


class GeneratorArgumentParser(argparse.ArgumentParser):
    """Raises ``ArgumentError`` on bad arguments instead of exiting with status 2."""

    def error(self, message: str) -> NoReturn:
        raise ArgumentError(f"Invalid arguments: {message}", context={"prog": self.prog})


def build_arg_parser() -> argparse.ArgumentParser:
    ap = GeneratorArgumentParser(
        prog="license-generator",
        description="Generate the license list in every output format from a license "
        "spreadsheet (.xlsx) or a directory of license XML files.",
    )
    ap.add_argument("input", help="License spreadsheet (.xlsx) or directory of license XML files.")
    ap.add_argument("output_dir", help="Output directory; created if it does not exist.")
    ap.add_argument("version", nargs="?", default=None, help="License list version.")
    ap.add_argument("release_date", nargs="?", default=None, help="License list release date.")
    ap.add_argument(
        "test_dir",
        nargs="?",
        default=None,
        help="Directory of reference license texts ({id}.txt) to test the output against.",
    )
    ap.add_argument(
        "ignored_warnings",
        nargs="?",
        default=None,
        help="CSV file, or a comma-separated string, of warnings that do not affect the exit status.",
    )
    ap.add_argument("--config", default=None, help="Optional YAML configuration file.")
    ap.add_argument(
        "--fsf-data",
        default=None,
        help="Local path or http(s) URL of FSF license data used to set the FSF libre flag.",
    )
    add_logging_args(ap)
    return ap


def _validate_paths(config: GeneratorConfig, args: argparse.Namespace) -> None:
    input_path = Path(args.input)
    if not input_path.exists():
        raise ArgumentError(f"License input {input_path} does not exist", context={"path": str(input_path)})
    output_dir = Path(args.output_dir)
    if output_dir.exists() and not output_dir.is_dir():
        raise ArgumentError(
            f"Output directory {output_dir} is not a directory",
            context={"path": str(output_dir)},
        )
    if config.test_dir is not None:
        if not config.test_dir.exists():
            raise ArgumentError(
                f"License test directory {config.test_dir} does not exist",
                context={"path": str(config.test_dir)},
            )
        if not config.test_dir.is_dir():
            raise ArgumentError(
                f"License test directory {config.test_dir} is not a directory",
                context={"path": str(config.test_dir)},
            )


def _log_error(exc: LicenseGeneratorError) -> None:
    with LogContext(**exc.as_log_fields()):
        logger.error("%s", exc.message)


def main(argv: list[str] | None = None) -> int:
    ap = build_arg_parser()
    try:
        args = ap.parse_args(argv)
    except ArgumentError as exc:
        configure_logging()
        _log_error(exc)
        ap.print_usage(sys.stderr)
        return ERROR_STATUS

    try:
        config = load_config(Path(args.config) if args.config else None)
    except LicenseGeneratorError as exc:
        configure_logging(level=args.log_level, fmt=args.log_format or "text")
        _log_error(exc)
        return ERROR_STATUS

    config = config.merged(
        version=args.version,
        release_date=args.release_date,
        test_dir=Path(args.test_dir) if args.test_dir else None,
        ignored_warnings=args.ignored_warnings,
        fsf_data=args.fsf_data,
        log_level=args.log_level,
        log_format=args.log_format,
    )
    configure_logging(level=config.log_level, fmt=config.log_format or "text")

    try:
        _validate_paths(config, args)
        ignored = load_ignored_warnings(config.ignored_warnings)
    except ArgumentError as exc:
        _log_error(exc)
        ap.print_usage(sys.stderr)
        return ERROR_STATUS
    except OSError as exc:
        logger.error("IO Error reading ignored errors: %s", exc)
        return ERROR_STATUS

    try:
        warnings = generate_license_data(
            Path(args.input),
            Path(args.output_dir),
            config.version,
            config.release_date,
            config.test_dir,
            fsf_data=config.fsf_data,
        )
    except LicenseGeneratorError as exc:
        _log_error(exc)
        if exc.code == ArgumentError.code:
            ap.print_usage(sys.stderr)
        return ERROR_STATUS

    return resolve_exit_status(warnings, ignored)


if __name__ == "__main__":
    raise SystemExit(main())
