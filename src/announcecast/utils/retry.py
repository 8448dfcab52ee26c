"""Retry utilities for outbound HTTP calls.

Exponential backoff with jitter for transient failures of the search
provider and feed hosts.
"""

import logging
from collections.abc import Callable
from functools import wraps

import requests
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

logger = logging.getLogger(__name__)


# Error classification: Which errors should trigger retries?

class RetryableError(Exception):
    """Base class for errors that should trigger retries."""

    pass


class RateLimitError(RetryableError):
    """Remote host rate limit exceeded."""

    pass


class RequestTimeoutError(RetryableError):
    """Request timeout."""

    pass


class NetworkConnectionError(RetryableError):
    """Network connection error."""

    pass


class ServerError(RetryableError):
    """Server-side error (5xx)."""

    pass


class NonRetryableError(Exception):
    """Base class for errors that should NOT trigger retries."""

    pass


class InvalidRequestError(NonRetryableError):
    """Invalid request (4xx other than 408/429)."""

    pass


# Retry configuration

class RetryConfig:
    """Configuration for retry behavior."""

    def __init__(
        self,
        max_attempts: int = 3,
        max_wait_seconds: float = 30,
        min_wait_seconds: float = 1,
        jitter: bool = True,
    ):
        """Initialize retry configuration.

        Args:
            max_attempts: Maximum number of attempts (including initial)
            max_wait_seconds: Maximum wait time between retries
            min_wait_seconds: Minimum wait time between retries
            jitter: Whether to add jitter to wait times
        """
        self.max_attempts = max_attempts
        self.max_wait_seconds = max_wait_seconds
        self.min_wait_seconds = min_wait_seconds
        self.jitter = jitter


DEFAULT_RETRY_CONFIG = RetryConfig(
    max_attempts=3,
    max_wait_seconds=30,
    min_wait_seconds=1,
    jitter=True,
)

RETRYABLE_ERRORS: tuple[type[Exception], ...] = (
    RateLimitError,
    RequestTimeoutError,
    NetworkConnectionError,
    ServerError,
)


def log_retry_attempt(retry_state: RetryCallState) -> None:
    """Log retry attempts for debugging.

    Args:
        retry_state: Tenacity retry state
    """
    if retry_state.outcome and retry_state.outcome.failed:
        exception = retry_state.outcome.exception()
        logger.warning(
            "Retry attempt %d failed: %s: %s",
            retry_state.attempt_number,
            type(exception).__name__,
            exception,
        )


def with_retry(
    config: RetryConfig | None = None,
    retry_on: tuple[type[Exception], ...] | None = None,
) -> Callable:
    """Decorator for adding retry logic with exponential backoff.

    Usage:
        @with_retry()
        def fetch():
            ...

        @with_retry(config=RetryConfig(max_attempts=5))
        def important_fetch():
            ...

    Args:
        config: Retry configuration (uses DEFAULT_RETRY_CONFIG if None)
        retry_on: Exception types to retry on (all RetryableError subclasses if None)

    Returns:
        Decorated function with retry logic
    """
    config = config or DEFAULT_RETRY_CONFIG
    retry_on = retry_on or RETRYABLE_ERRORS

    def decorator(func: Callable) -> Callable:
        retry_decorator = retry(
            stop=stop_after_attempt(config.max_attempts),
            wait=wait_exponential_jitter(
                initial=config.min_wait_seconds,
                max=config.max_wait_seconds,
                jitter=config.max_wait_seconds if config.jitter else 0,
            ),
            retry=retry_if_exception_type(retry_on),
            before_sleep=log_retry_attempt,
            reraise=True,
        )
        retrying = retry_decorator(func)

        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return retrying(*args, **kwargs)
            except Exception as e:
                logger.error(
                    "Function %s failed after retries: %s: %s",
                    func.__name__,
                    type(e).__name__,
                    e,
                )
                raise

        return wrapper

    return decorator


# Error classification helpers

def classify_http_error(status_code: int, error_message: str = "") -> Exception:
    """Classify HTTP error into retryable or non-retryable.

    Args:
        status_code: HTTP status code
        error_message: Error message from the remote host

    Returns:
        Appropriate exception instance
    """
    if status_code == 429:
        return RateLimitError(f"Rate limit exceeded: {error_message}")

    if 500 <= status_code < 600:
        return ServerError(f"Server error (HTTP {status_code}): {error_message}")

    if status_code == 408:
        return RequestTimeoutError(f"Request timeout: {error_message}")

    if 400 <= status_code < 500:
        return InvalidRequestError(f"Invalid request (HTTP {status_code}): {error_message}")

    return NonRetryableError(f"HTTP error {status_code}: {error_message}")


def classify_request_exception(exception: requests.RequestException) -> Exception:
    """Map a ``requests`` exception onto the retry taxonomy.

    Example:
        try:
            response = requests.get(url, timeout=10)
            response.raise_for_status()
        except requests.RequestException as e:
            raise classify_request_exception(e) from e
    """
    if isinstance(exception, requests.Timeout):
        return RequestTimeoutError(str(exception))

    if isinstance(exception, requests.ConnectionError):
        return NetworkConnectionError(str(exception))

    if isinstance(exception, requests.HTTPError) and exception.response is not None:
        return classify_http_error(exception.response.status_code, str(exception))

    return NonRetryableError(str(exception))
