"""Tests for license_core.network_utils."""

from __future__ import annotations

from unittest.mock import Mock

import pytest
import requests

from license_core.network_utils import is_retryable_http_exception, with_retries


def _http_error(status_code: int) -> requests.exceptions.HTTPError:
    response = Mock()
    response.status_code = status_code
    return requests.exceptions.HTTPError(response=response)


class TestIsRetryableHttpException:
    def test_5xx_server_error_is_retryable(self) -> None:
        for status_code in [500, 502, 503, 504]:
            assert is_retryable_http_exception(_http_error(status_code)) is True

    def test_429_rate_limit(self) -> None:
        assert is_retryable_http_exception(_http_error(429)) is True
        assert is_retryable_http_exception(_http_error(429), retry_on_429=False) is False

    def test_4xx_client_errors_not_retryable(self) -> None:
        for status_code in [400, 401, 403, 404]:
            assert is_retryable_http_exception(_http_error(status_code)) is False

    def test_connection_errors_retryable(self) -> None:
        assert is_retryable_http_exception(requests.exceptions.ConnectionError()) is True
        assert is_retryable_http_exception(requests.exceptions.Timeout()) is True

    def test_other_errors_not_retryable(self) -> None:
        assert is_retryable_http_exception(ValueError("bad json")) is False


class TestWithRetries:
    def test_succeeds_after_transient_failures(self) -> None:
        sleeps: list[float] = []
        retries: list[int] = []
        fn = Mock(side_effect=[requests.exceptions.ConnectionError(), _http_error(503), "ok"])
        result = with_retries(
            fn,
            max_attempts=3,
            backoff_base=2.0,
            on_retry=lambda attempt, exc: retries.append(attempt),
            sleep=sleeps.append,
        )
        assert result == "ok"
        assert sleeps == [1.0, 2.0]
        assert retries == [1, 2]

    def test_gives_up_after_max_attempts(self) -> None:
        fn = Mock(side_effect=requests.exceptions.ConnectionError("down"))
        with pytest.raises(requests.exceptions.ConnectionError):
            with_retries(fn, max_attempts=2, sleep=lambda _: None)
        assert fn.call_count == 2

    def test_non_retryable_raises_immediately(self) -> None:
        fn = Mock(side_effect=_http_error(404))
        with pytest.raises(requests.exceptions.HTTPError):
            with_retries(fn, max_attempts=5, sleep=lambda _: None)
        assert fn.call_count == 1

    def test_backoff_is_capped(self) -> None:
        sleeps: list[float] = []
        fn = Mock(side_effect=[_http_error(500)] * 3 + ["ok"])
        assert with_retries(fn, max_attempts=4, backoff_base=10.0, backoff_max=15.0, sleep=sleeps.append) == "ok"
        assert sleeps == [1.0, 10.0, 15.0]
