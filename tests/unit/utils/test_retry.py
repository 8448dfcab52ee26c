"""Tests for retry and error handling utilities."""

from unittest.mock import Mock

import pytest
import requests

from announcecast.utils.retry import (
    InvalidRequestError,
    NetworkConnectionError,
    NonRetryableError,
    RateLimitError,
    RequestTimeoutError,
    RetryConfig,
    RetryableError,
    ServerError,
    classify_http_error,
    classify_request_exception,
    with_retry,
)

from tests.helpers import FAST_RETRY_CONFIG


# Pytest fixture to use fast retry config in tests
@pytest.fixture(autouse=True)
def fast_retry_config(monkeypatch):
    """Use fast retry configuration for all tests to avoid long delays."""
    monkeypatch.setattr("announcecast.utils.retry.DEFAULT_RETRY_CONFIG", FAST_RETRY_CONFIG)


class TestErrorClassification:
    """Test error classification."""

    def test_retryable_errors(self):
        """Test retryable error types."""
        for error_type in (RateLimitError, RequestTimeoutError, NetworkConnectionError, ServerError):
            assert issubclass(error_type, RetryableError)

    def test_non_retryable_errors(self):
        """Test non-retryable error types."""
        assert issubclass(InvalidRequestError, NonRetryableError)
        assert not issubclass(InvalidRequestError, RetryableError)


class TestClassifyHttpError:
    """Test HTTP error classification."""

    def test_rate_limit_429(self):
        """Test 429 classified as rate limit."""
        error = classify_http_error(429, "Too many requests")
        assert isinstance(error, RateLimitError)
        assert "Rate limit exceeded" in str(error)

    def test_server_errors_5xx(self):
        """Test 5xx classified as server errors."""
        for status_code in [500, 502, 503, 504]:
            error = classify_http_error(status_code, "Server error")
            assert isinstance(error, ServerError)

    def test_timeout_408(self):
        """Test 408 classified as timeout."""
        error = classify_http_error(408, "Request timeout")
        assert isinstance(error, RequestTimeoutError)

    def test_client_errors_4xx(self):
        """Test other 4xx classified as invalid request."""
        for status_code in [400, 403, 404, 422]:
            error = classify_http_error(status_code, "Bad request")
            assert isinstance(error, InvalidRequestError)

    def test_unknown_error(self):
        """Test unknown status codes classified as non-retryable."""
        error = classify_http_error(999, "Unknown error")
        assert isinstance(error, NonRetryableError)


class TestClassifyRequestException:
    """Test mapping of requests exceptions."""

    def test_timeout(self):
        error = classify_request_exception(requests.Timeout("read timed out"))
        assert isinstance(error, RequestTimeoutError)

    def test_connection_error(self):
        error = classify_request_exception(requests.ConnectionError("refused"))
        assert isinstance(error, NetworkConnectionError)

    def test_http_error_uses_status_code(self):
        """Test HTTPError is classified by its response status."""
        response = Mock(status_code=503)
        error = classify_request_exception(requests.HTTPError("503", response=response))
        assert isinstance(error, ServerError)

        response = Mock(status_code=404)
        error = classify_request_exception(requests.HTTPError("404", response=response))
        assert isinstance(error, InvalidRequestError)

    def test_other_request_errors(self):
        error = classify_request_exception(requests.RequestException("bad url"))
        assert isinstance(error, NonRetryableError)


class TestRetryConfig:
    """Test retry configuration."""

    def test_default_config(self):
        """Test default retry configuration."""
        config = RetryConfig()
        assert config.max_attempts == 3
        assert config.max_wait_seconds == 30
        assert config.min_wait_seconds == 1
        assert config.jitter is True

    def test_custom_config(self):
        """Test custom retry configuration."""
        config = RetryConfig(
            max_attempts=5,
            max_wait_seconds=120,
            min_wait_seconds=2,
            jitter=False,
        )
        assert config.max_attempts == 5
        assert config.max_wait_seconds == 120
        assert config.min_wait_seconds == 2
        assert config.jitter is False


class TestWithRetryDecorator:
    """Test with_retry decorator."""

    def test_success_no_retry(self):
        """Test successful call doesn't retry."""
        call_count = 0

        @with_retry()
        def successful_call():
            nonlocal call_count
            call_count += 1
            return "success"

        result = successful_call()
        assert result == "success"
        assert call_count == 1

    def test_retry_on_retryable_error(self):
        """Test retries on retryable errors."""
        call_count = 0

        @with_retry(config=FAST_RETRY_CONFIG)
        def failing_call():
            nonlocal call_count
            call_count += 1
            if call_count < 3:
                raise ServerError("Bad gateway")
            return "success"

        result = failing_call()
        assert result == "success"
        assert call_count == 3

    def test_no_retry_on_non_retryable_error(self):
        """Test doesn't retry on non-retryable errors."""
        call_count = 0

        @with_retry(config=FAST_RETRY_CONFIG)
        def not_found_call():
            nonlocal call_count
            call_count += 1
            raise InvalidRequestError("Not found")

        with pytest.raises(InvalidRequestError):
            not_found_call()

        assert call_count == 1  # No retries

    def test_max_attempts_reached(self):
        """Test raises error after max attempts."""
        call_count = 0

        @with_retry(config=FAST_RETRY_CONFIG)
        def always_fails():
            nonlocal call_count
            call_count += 1
            raise RateLimitError("Rate limit")

        with pytest.raises(RateLimitError):
            always_fails()

        assert call_count == 3

    def test_custom_retry_on(self):
        """Test custom exception types for retry."""
        call_count = 0

        @with_retry(config=FAST_RETRY_CONFIG, retry_on=(RequestTimeoutError,))
        def timeout_only():
            nonlocal call_count
            call_count += 1
            if call_count == 1:
                raise RequestTimeoutError("Timeout")
            return "success"

        assert timeout_only() == "success"
        assert call_count == 2

        # RateLimitError should not retry
        call_count = 0

        @with_retry(config=FAST_RETRY_CONFIG, retry_on=(RequestTimeoutError,))
        def rate_limited():
            nonlocal call_count
            call_count += 1
            raise RateLimitError("Rate limit")

        with pytest.raises(RateLimitError):
            rate_limited()

        assert call_count == 1

    def test_preserves_function_metadata(self):
        """Test decorator keeps the wrapped function's name."""

        @with_retry()
        def fetch_feed():
            """Fetch a feed."""
            return None

        assert fetch_feed.__name__ == "fetch_feed"
        assert fetch_feed.__doc__ == "Fetch a feed."
