"""
Retry policies for node submission and receipt polling.

Provides backoff algorithms with jitter. The policy only computes and waits
out delays; the execution layer decides which outcomes are worth another
attempt.
"""

import logging
import math
import random
import time
from abc import ABC, abstractmethod
from typing import Callable

from ..runtime.errors import ErrorHandler


logger = logging.getLogger(__name__)


class RetryPolicy(ABC):
    """
    Abstract base class for retry policies.

    Defines the interface for retry strategies with configurable
    backoff algorithms.
    """

    def __init__(
        self,
        max_attempts: int = 10,
        base_delay: float = 0.25,
        max_delay: float = 8.0,
        jitter: bool = True,
        jitter_factor: float = 0.1,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize retry policy.

        Args:
            max_attempts: Maximum number of attempts
            base_delay: Delay after the first failed attempt, in seconds
            max_delay: Maximum delay between attempts, in seconds
            jitter: Whether to add jitter to delays
            jitter_factor: Jitter factor (0.0 to 1.0)
            sleep: Function used to wait, replaceable in tests
        """
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")
        if base_delay < 0 or max_delay < base_delay:
            raise ValueError(f"invalid backoff bounds [{base_delay}, {max_delay}]")
        self.max_attempts = max_attempts
        self.base_delay = base_delay
        self.max_delay = max_delay
        self.jitter = jitter
        self.jitter_factor = jitter_factor
        self._sleep = sleep

        # Statistics
        self.total_retries = 0

    @abstractmethod
    def calculate_delay(self, attempt: int) -> float:
        """
        Calculate delay for given attempt number.

        Args:
            attempt: Attempt number (1-based)

        Returns:
            Delay in seconds
        """
        pass

    def should_retry(self, attempt: int, exception: Exception) -> bool:
        """
        Determine if a failed attempt may be repeated.

        Args:
            attempt: Current attempt number
            exception: Exception that occurred

        Returns:
            True if should retry, False otherwise
        """
        if attempt >= self.max_attempts:
            return False
        return ErrorHandler.is_retryable(exception)

    def add_jitter(self, delay: float) -> float:
        """
        Add jitter to delay if enabled.

        Args:
            delay: Base delay

        Returns:
            Delay with jitter applied
        """
        if not self.jitter:
            return delay

        jitter_amount = delay * self.jitter_factor * (random.random() - 0.5)
        return max(0, delay + jitter_amount)

    def backoff(self, attempt: int, reason: str = "") -> float:
        """
        Wait before the next attempt.

        Args:
            attempt: Attempt number that just failed (1-based)
            reason: Logged with the delay

        Returns:
            The delay waited, in seconds
        """
        delay = self.add_jitter(min(self.calculate_delay(attempt), self.max_delay))
        self.total_retries += 1
        logger.debug(f"Attempt {attempt} unsuccessful ({reason}); retrying in {delay:.2f}s")
        if delay > 0:
            self._sleep(delay)
        return delay


class ExponentialBackoff(RetryPolicy):
    """
    Exponential backoff retry policy.

    Delay increases exponentially with each attempt: base_delay * (factor ^ (attempt - 1))
    """

    def __init__(
        self,
        max_attempts: int = 10,
        base_delay: float = 0.25,
        max_delay: float = 8.0,
        factor: float = 2.0,
        jitter: bool = True,
        jitter_factor: float = 0.1,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize exponential backoff policy.

        Args:
            max_attempts: Maximum attempts
            base_delay: Base delay in seconds
            max_delay: Maximum delay cap
            factor: Exponential factor
            jitter: Enable jitter
            jitter_factor: Jitter randomization factor
            sleep: Function used to wait
        """
        super().__init__(max_attempts, base_delay, max_delay, jitter, jitter_factor, sleep)
        if factor <= 0:
            raise ValueError(f"factor must be positive, got {factor}")
        self.factor = factor
        # Past this exponent the delay is already at max_delay
        self._max_exponent = 0
        if factor > 1 and base_delay > 0:
            self._max_exponent = math.ceil(math.log(max_delay / base_delay, factor)) + 1

    def calculate_delay(self, attempt: int) -> float:
        """Calculate exponential backoff delay."""
        exponent = attempt - 1
        if self.factor > 1:
            exponent = min(exponent, self._max_exponent)
        delay = self.base_delay * (self.factor ** exponent)
        return min(delay, self.max_delay)


class FixedBackoff(RetryPolicy):
    """
    Fixed delay retry policy.

    Uses constant delay between all retry attempts.
    """

    def __init__(
        self,
        max_attempts: int = 10,
        delay: float = 0.25,
        jitter: bool = False,
        sleep: Callable[[float], None] = time.sleep,
    ):
        super().__init__(max_attempts, delay, delay, jitter, 0.1, sleep)

    def calculate_delay(self, attempt: int) -> float:
        """Calculate fixed delay."""
        return self.base_delay


__all__ = ["RetryPolicy", "ExponentialBackoff", "FixedBackoff"]
