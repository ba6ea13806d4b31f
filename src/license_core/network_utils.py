from __future__ import annotations

import time
from collections.abc import Callable
from typing import TypeVar

import requests

T = TypeVar("T")


def is_retryable_http_exception(exc: Exception, retry_on_429: bool = True) -> bool:
    """Check if an HTTP exception is worth retrying.

    Server errors (5xx), rate limiting (429) and transport failures are
    retryable; other client errors are not.
    """
    if isinstance(exc, requests.exceptions.HTTPError):
        status_code = exc.response.status_code if exc.response is not None else None
        if status_code is None:
            return False
        if status_code >= 500:
            return True
        return status_code == 429 and retry_on_429
    return isinstance(
        exc,
        (
            requests.exceptions.ConnectionError,
            requests.exceptions.Timeout,
            requests.exceptions.ChunkedEncodingError,
            requests.exceptions.ContentDecodingError,
        ),
    )


def with_retries(
    fn: Callable[[], T],
    *,
    max_attempts: int = 3,
    backoff_base: float = 2.0,
    backoff_max: float = 30.0,
    on_retry: Callable[[int, Exception], None] | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """Execute ``fn`` with exponential backoff on retryable HTTP failures.

    Raises:
        Exception: The last exception if all attempts fail, or the first
            non-retryable one.
    """
    attempts = max(1, max_attempts)
    for attempt in range(attempts):
        try:
            return fn()
        except Exception as exc:
            if not is_retryable_http_exception(exc) or attempt >= attempts - 1:
                raise
            if on_retry:
                on_retry(attempt + 1, exc)
            sleep(min(backoff_base**attempt, backoff_max))
    raise RuntimeError("unreachable")


def fetch_json(url: str, *, timeout: float = 30.0, max_attempts: int = 3) -> object:
    """GET ``url`` and decode the JSON body, retrying transient failures."""

    def _get() -> object:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
        return response.json()

    return with_retries(_get, max_attempts=max_attempts)
