"""
Resilience Infrastructure.

Retry policy and retry callback for outbound HTTP calls.

Only failures to establish a connection are retried: in that case the
request never reached the server, so even a POST is safe to resend.
HTTP error statuses are never retried.

Usage:
    from bh.core.resilience import build_retrying

    async for attempt in build_retrying(attempts=3, wait_min=0.5, wait_max=4):
        with attempt:
            response = await client.send(request)
"""

from typing import Any

import httpx
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from bh.core.logging import get_logger

logger = get_logger(__name__)

RETRYABLE_ERRORS: tuple[type[Exception], ...] = (
    httpx.ConnectError,
    httpx.ConnectTimeout,
)


def log_retry(retry_state: Any) -> None:
    """Tenacity before_sleep callback that emits structured retry events.

    Args:
        retry_state: tenacity.RetryCallState instance
    """
    duration_ms = None
    if retry_state.outcome_timestamp and retry_state.start_time:
        duration_ms = round(
            (retry_state.outcome_timestamp - retry_state.start_time) * 1000
        )

    error = None
    if retry_state.outcome and retry_state.outcome.failed:
        error = str(retry_state.outcome.exception())

    fn_name = getattr(retry_state.fn, "__name__", "http_request")

    logger.warning(
        f"Retrying {fn_name} (attempt {retry_state.attempt_number})",
        resilience_event="retry_attempt",
        dependency=fn_name,
        attempt=retry_state.attempt_number,
        duration_ms=duration_ms,
        error=error,
    )


def build_retrying(attempts: int, wait_min: float, wait_max: float) -> AsyncRetrying:
    """Create the retry controller used around each outbound request.

    Args:
        attempts: Total attempts, including the first one
        wait_min: Lower bound of the exponential backoff (seconds)
        wait_max: Upper bound of the exponential backoff (seconds)

    Returns:
        AsyncRetrying that re-raises the last error once attempts run out
    """
    return AsyncRetrying(
        stop=stop_after_attempt(attempts),
        wait=wait_exponential(multiplier=wait_min, min=wait_min, max=wait_max),
        retry=retry_if_exception_type(RETRYABLE_ERRORS),
        before_sleep=log_retry,
        reraise=True,
    )
