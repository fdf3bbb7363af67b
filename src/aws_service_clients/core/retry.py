"""Retry policy applied around every HTTP attempt."""

from __future__ import annotations

from aws_service_clients.core.errors import AWSError


class RetryStrategy:
    """Exponential backoff for retryable errors.

    ``attempted_retries`` counts retries already made (0 after the first
    attempt).
    """

    def __init__(self, max_retries: int = 2, scale_factor_ms: int = 25) -> None:
        self.max_retries = max_retries
        self.scale_factor_ms = scale_factor_ms

    def should_retry(self, error: AWSError, attempted_retries: int) -> bool:
        if attempted_retries >= self.max_retries:
            return False
        return error.retryable

    def calculate_delay_before_next_retry(self, error: AWSError, attempted_retries: int) -> float:
        """Delay in seconds."""
        if attempted_retries == 0:
            return 0.0
        return (self.scale_factor_ms * (1 << attempted_retries)) / 1000.0
