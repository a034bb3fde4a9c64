"""
Retry policy for flow invocations.

Pure bookkeeping: no timers, no I/O. The wrapper in ``flows.base`` owns the
sleeping and decides what counts as a retryable failure.
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RetryPolicy:
    """
    Bounded exponential backoff.

    Attempt ``n`` (1-based) that fails waits ``base_delay_ms * backoff_multiplier ** (n - 1)``
    before attempt ``n + 1``. With the defaults: 500 ms, then 1000 ms, then give up.
    """

    max_attempts: int = 3
    base_delay_ms: int = 500
    backoff_multiplier: float = 2

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        if self.base_delay_ms < 0:
            raise ValueError("base_delay_ms must be >= 0")
        if self.backoff_multiplier < 1:
            raise ValueError("backoff_multiplier must be >= 1")

    def delay_ms(self, attempt: int) -> float:
        return self.base_delay_ms * self.backoff_multiplier ** (attempt - 1)


DEFAULT_RETRY_POLICY = RetryPolicy()


@dataclass
class RetryState:
    """Per-invocation counters; a new one is created for every call."""

    policy: RetryPolicy
    attempt: int = 0
    total_delay_ms: float = 0

    def begin_attempt(self) -> int:
        self.attempt += 1
        return self.attempt

    @property
    def exhausted(self) -> bool:
        return self.attempt >= self.policy.max_attempts

    def next_delay_ms(self) -> float:
        """Delay to wait before the next attempt; accumulates into ``total_delay_ms``."""
        delay = self.policy.delay_ms(self.attempt)
        self.total_delay_ms += delay
        return delay
