"""Shared utility functions for the license list generator."""

from license_core.utils.io import read_json, write_json, write_text
from license_core.utils.logging import log_event
from license_core.utils.paths import ensure_dir, safe_filename
from license_core.utils.text import safe_text

__all__ = [
    "log_event",
    "ensure_dir",
    "safe_filename",
    "safe_text",
    "read_json",
    "write_json",
    "write_text",
]
