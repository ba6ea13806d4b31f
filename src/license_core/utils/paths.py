from __future__ import annotations

import re
import unicodedata
from pathlib import Path

_WINDOWS_RESERVED = {
    "CON",
    "PRN",
    "AUX",
    "NUL",
    *(f"COM{i}" for i in range(1, 10)),
    *(f"LPT{i}" for i in range(1, 10)),
}


def ensure_dir(path: Path) -> None:
    """Create directory and parents if they don't exist."""
    path.mkdir(parents=True, exist_ok=True)


def safe_filename(s: str, max_length: int = 200) -> str:
    """
    Convert a license or exception id to a safe file stem.

    License ids are already restricted to letters, digits, ``.``, ``-`` and
    ``+``, so well-formed ids pass through unchanged.
    """
    if not s:
        return "file"
    s = unicodedata.normalize("NFKD", s)
    s = s.encode("ascii", "ignore").decode("ascii")
    s = s.replace("\x00", "")
    dangerous = set('/\\<>:"|?*')
    s = "".join(c if c not in dangerous else "_" for c in s)
    s = s.strip(". ")
    s = re.sub(r"[_\s]+", "_", s)
    if s.upper() in _WINDOWS_RESERVED:
        s = f"_{s}"
    return s[:max_length] or "file"
