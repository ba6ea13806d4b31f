from __future__ import annotations

import json
import logging
from typing import Any


def log_event(logger: logging.Logger, message: str, **fields: Any) -> None:
    """Log a structured message with JSON fields."""
    if fields:
        payload = json.dumps(fields, sort_keys=True, ensure_ascii=False, default=str)
        logger.info("%s | %s", message, payload)
    else:
        logger.info("%s", message)
