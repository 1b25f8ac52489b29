"""Retry policy for transient source failures.

The policy only decides; it never sleeps or calls anything. The attempt loop
lives in ``discord_jukebox.application.services.retry``.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from discord_jukebox.domain.playback.value_objects import FailureKind
from discord_jukebox.domain.shared.exceptions import SourceRateLimited
from discord_jukebox.domain.shared.types import DelaySeconds, NonNegativeInt, RetryBudget


class RetryDecision(BaseModel):
    """Whether to try again, and after how many seconds."""

    model_config = ConfigDict(frozen=True)

    retry: bool
    delay: float = 0.0


GIVE_UP = RetryDecision(retry=False, delay=0.0)


class AttemptRecord(BaseModel):
    """Ephemeral bookkeeping for one fetch target."""

    model_config = ConfigDict(frozen=True)

    target: str
    attempt_count: NonNegativeInt = 0
    last_failure_kind: FailureKind | None = None

    def failed(self, kind: FailureKind) -> AttemptRecord:
        return self.model_copy(
            update={"attempt_count": self.attempt_count + 1, "last_failure_kind": kind}
        )


class RetryPolicy(BaseModel):
    """Linear backoff for rate-limited fetches.

    After failed attempt ``n`` (1-based) a rate-limited failure is retried
    after ``n * base_delay`` seconds as long as ``n <= max_retries``. Any
    other failure is permanent and never retried.
    """

    model_config = ConfigDict(frozen=True)

    max_retries: RetryBudget = 2
    base_delay: DelaySeconds = 2.0

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1

    @staticmethod
    def classify(error: BaseException) -> FailureKind:
        if isinstance(error, SourceRateLimited):
            return FailureKind.RATE_LIMITED
        return FailureKind.PERMANENT

    def decide(self, attempt: int, kind: FailureKind) -> RetryDecision:
        if kind is not FailureKind.RATE_LIMITED or attempt > self.max_retries:
            return GIVE_UP
        return RetryDecision(retry=True, delay=attempt * self.base_delay)
