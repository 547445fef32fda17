"""Retry policy for inference calls.

Pure decision function from (attempt index, failure kind) to "retry after
delay" or "stop". No clocks and no I/O, so it is testable on its own.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from docindex.domain.exceptions import FailureKind


@dataclass(frozen=True)
class RetryDecision:
    """Outcome of RetryPolicy.decide: whether to try again and how long to wait first."""

    retry: bool
    delay: float = 0.0


STOP = RetryDecision(retry=False)


@dataclass(frozen=True)
class RetryPolicy:
    """Exponential backoff limited to retryable failure kinds.

    Attempts are numbered from 0. The wait before attempt n+1 is
    base_delay * multiplier ** n, so the defaults give 1s then 2s and no
    wait after the last of three attempts.
    """

    max_attempts: int = 3
    base_delay: float = 1.0
    multiplier: float = 2.0
    retryable: frozenset[FailureKind] = field(
        default_factory=lambda: frozenset({FailureKind.TRANSPORT})
    )

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        if self.base_delay < 0:
            raise ValueError("base_delay must be >= 0")
        if self.multiplier < 1:
            raise ValueError("multiplier must be >= 1")

    def delay_for(self, attempt: int) -> float:
        """Return the backoff (seconds) to wait after failed attempt `attempt`."""
        return self.base_delay * self.multiplier**attempt

    def decide(self, attempt: int, kind: FailureKind) -> RetryDecision:
        """Decide what follows a failed attempt.

        Args:
            attempt: Zero-based index of the attempt that just failed.
            kind: Classification of the failure.

        Returns:
            RetryDecision(retry=True, delay=...) when the kind is retryable and
            budget remains; otherwise STOP.
        """
        if kind not in self.retryable:
            return STOP
        if attempt + 1 >= self.max_attempts:
            return STOP
        return RetryDecision(retry=True, delay=self.delay_for(attempt))
