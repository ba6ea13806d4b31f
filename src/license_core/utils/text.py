from __future__ import annotations

from typing import Any


def safe_text(value: Any) -> str:
    """Convert value to string, handling None."""
    return "" if value is None else str(value)
