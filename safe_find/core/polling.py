"""
Polling primitive for safe element lookups.

Runs a single attempt function repeatedly under a time budget, stopping on the
first attempt that reports success or once the budget is spent. The retry loop
is driven by tenacity with no wait between attempts unless a poll interval is
requested explicitly.
"""

from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar

from tenacity import (
    Retrying,
    retry_if_result,
    stop_after_delay,
    stop_before_delay,
    wait_fixed,
    wait_none,
)

T = TypeVar('T')


@dataclass(frozen=True)
class AttemptOutcome(Generic[T]):
    """Result of one lookup attempt: a payload and whether polling should stop."""
    value: Optional[T]
    done: bool

    @classmethod
    def found(cls, value: Optional[T]) -> "AttemptOutcome[T]":
        """Final outcome. The payload may be None (e.g. a validator rejected the element)."""
        return cls(value=value, done=True)

    @classmethod
    def missed(cls) -> "AttemptOutcome[T]":
        """No success this iteration."""
        return cls(value=None, done=False)


def _not_done(outcome: AttemptOutcome) -> bool:
    return not outcome.done


def poll_until_found(
    attempt: Callable[[], AttemptOutcome[T]],
    timeout: Optional[float] = None,
    poll_interval: float = 0.0,
) -> Optional[T]:
    """
    Run ``attempt`` until it reports success or ``timeout`` seconds elapse.

    Args:
        attempt: Callable returning an AttemptOutcome. It must not raise.
        timeout: Time budget in seconds. None, 0 or a negative value means
            exactly one attempt with no retrying.
        poll_interval: Seconds to wait between attempts. 0 polls back-to-back.

    Returns:
        The value of the first successful outcome, or None when the budget was
        spent without success (or the single attempt missed).
    """
    if timeout is None or timeout <= 0:
        return attempt().value

    retrying = Retrying(
        # No attempt may start at or past the deadline, including after a poll-interval sleep
        stop=stop_after_delay(timeout) | stop_before_delay(timeout),
        wait=wait_fixed(poll_interval) if poll_interval > 0 else wait_none(),
        retry=retry_if_result(_not_done),
        retry_error_callback=lambda retry_state: AttemptOutcome.missed(),
    )
    return retrying(attempt).value
