"""
license_core/config.py

Optional YAML run configuration. Values given on the command line take
precedence over the file.
"""

from __future__ import annotations

import dataclasses
import datetime
import json
import logging
from functools import cache
from importlib import resources
from pathlib import Path
from typing import Any

import yaml
from jsonschema import Draft7Validator

from license_core.exceptions import ConfigError

logger = logging.getLogger(__name__)

CONFIG_SCHEMA_NAME = "generator_config"
_FALLBACK_SCHEMA_DIR = Path(__file__).resolve().parent / "schemas"


@dataclasses.dataclass(frozen=True)
class GeneratorConfig:
    version: str | None = None
    release_date: str | None = None
    test_dir: Path | None = None
    ignored_warnings: str | tuple[str, ...] | None = None
    fsf_data: str | None = None
    log_level: str | None = None
    log_format: str | None = None

    def merged(self, **overrides: Any) -> GeneratorConfig:
        """Return a copy where every non-``None`` override replaces the file value."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        return dataclasses.replace(self, **changes)


@cache
def load_schema(schema_name: str) -> dict[str, Any]:
    try:
        schema_path = resources.files("license_core").joinpath("schemas", f"{schema_name}.schema.json")
        return json.loads(schema_path.read_text(encoding="utf-8"))
    except (FileNotFoundError, ModuleNotFoundError):
        path = _FALLBACK_SCHEMA_DIR / f"{schema_name}.schema.json"
        return json.loads(path.read_text(encoding="utf-8"))


def validate_config(data: Any, *, config_path: Path | None = None) -> None:
    validator = Draft7Validator(load_schema(CONFIG_SCHEMA_NAME))
    errors = sorted(validator.iter_errors(data), key=lambda exc: list(exc.path))
    if not errors:
        return
    location = str(config_path) if config_path else "<config>"
    lines = [f"Schema validation failed for {location}."]
    details: list[dict[str, str]] = []
    for error in errors:
        path = ".".join(str(p) for p in error.path) if error.path else "<root>"
        lines.append(f"- {path}: {error.message}")
        details.append({"path": path, "message": error.message})
    raise ConfigError("\n".join(lines), context={"path": location, "errors": details})


def load_config(path: Path | None) -> GeneratorConfig:
    if path is None:
        return GeneratorConfig()
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Unable to read config {path}: {exc}", context={"path": str(path)}) from exc
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(
            f"YAML parse error in {path}: {exc}",
            context={"path": str(path), "error": str(exc)},
        ) from exc
    if data is None:
        data = {}
    # YAML reads an unquoted 2024-01-01 as a date.
    if isinstance(data, dict) and isinstance(data.get("release_date"), datetime.date):
        data["release_date"] = data["release_date"].isoformat()
    validate_config(data, config_path=path)
    logger.debug("Loaded config from %s", path)

    ignored = data.get("ignored_warnings")
    if isinstance(ignored, list):
        ignored = tuple(ignored)
    version = data.get("version")
    test_dir = data.get("test_dir")
    return GeneratorConfig(
        version=str(version) if version is not None else None,
        release_date=data.get("release_date"),
        test_dir=Path(test_dir) if test_dir else None,
        ignored_warnings=ignored,
        fsf_data=data.get("fsf_data"),
        log_level=data.get("log_level"),
        log_format=data.get("log_format"),
    )
