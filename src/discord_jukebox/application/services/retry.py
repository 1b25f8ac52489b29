"""Attempt loop for source fetches, bounded by a ``RetryPolicy``."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from ...domain.playback.retry import AttemptRecord, RetryPolicy
from ...domain.playback.value_objects import FailureKind
from ...domain.shared.exceptions import RetriesExhaustedError, SourceError
from ...domain.shared.messages import LogTemplates

logger = logging.getLogger(__name__)

T = TypeVar("T")

Sleep = Callable[[float], Awaitable[None]]
RetryHook = Callable[[AttemptRecord, float], Awaitable[None]]


async def run_with_retry(
    operation: Callable[[], Awaitable[T]],
    policy: RetryPolicy,
    *,
    target: str,
    sleep: Sleep = asyncio.sleep,
    on_retry: RetryHook | None = None,
) -> T:
    """Run ``operation`` until it succeeds or the policy gives up.

    Only ``SourceError`` is considered. A permanent failure is re-raised as
    is on the first attempt; a rate-limited failure that outlasts the budget
    becomes ``RetriesExhaustedError``. ``on_retry`` runs before each sleep.
    """
    record = AttemptRecord(target=target)

    while True:
        try:
            return await operation()
        except SourceError as exc:
            kind = policy.classify(exc)
            record = record.failed(kind)
            decision = policy.decide(record.attempt_count, kind)

            if not decision.retry:
                if kind is FailureKind.RATE_LIMITED:
                    logger.warning(
                        LogTemplates.RETRY_GIVING_UP, target, record.attempt_count, exc
                    )
                    raise RetriesExhaustedError(target, record.attempt_count, exc) from exc
                raise

            logger.info(
                LogTemplates.RETRY_SCHEDULED,
                target,
                decision.delay,
                record.attempt_count,
                policy.max_retries,
            )
            if on_retry is not None:
                await on_retry(record, decision.delay)
            await sleep(decision.delay)
