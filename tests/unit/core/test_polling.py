"""
Unit tests for the polling primitive.
"""

import time

import pytest

from safe_find.core.polling import AttemptOutcome, poll_until_found


class ScriptedAttempt:
    """Attempt function that misses a fixed number of times, then succeeds."""

    def __init__(self, misses=None, value="found"):
        self.misses = misses
        self.value = value
        self.calls = 0

    def __call__(self):
        self.calls += 1
        if self.misses is None or self.calls <= self.misses:
            return AttemptOutcome.missed()
        return AttemptOutcome.found(self.value)


class TestAttemptOutcome:
    """Tests for the AttemptOutcome value type."""

    def test_found_is_done(self):
        outcome = AttemptOutcome.found("element")
        assert outcome.done is True
        assert outcome.value == "element"

    def test_found_may_carry_none(self):
        outcome = AttemptOutcome.found(None)
        assert outcome.done is True
        assert outcome.value is None

    def test_missed_is_not_done(self):
        outcome = AttemptOutcome.missed()
        assert outcome.done is False
        assert outcome.value is None


class TestPollUntilFound:
    """Tests for poll_until_found."""

    @pytest.mark.parametrize("timeout", [None, 0, -1, -0.5])
    def test_non_positive_timeout_makes_exactly_one_attempt(self, timeout):
        """A missed single attempt is not retried."""
        attempt = ScriptedAttempt()

        result = poll_until_found(attempt, timeout)

        assert result is None
        assert attempt.calls == 1

    @pytest.mark.parametrize("timeout", [None, 0])
    def test_non_positive_timeout_returns_success(self, timeout):
        attempt = ScriptedAttempt(misses=0, value="element")

        assert poll_until_found(attempt, timeout) == "element"
        assert attempt.calls == 1

    def test_stops_on_first_success(self):
        """Polling stops as soon as an attempt succeeds."""
        attempt = ScriptedAttempt(misses=3, value="element")

        start = time.monotonic()
        result = poll_until_found(attempt, timeout=5)
        elapsed = time.monotonic() - start

        assert result == "element"
        assert attempt.calls == 4
        assert elapsed < 1

    def test_returns_none_after_timeout(self):
        """An attempt that never succeeds is polled until the deadline."""
        attempt = ScriptedAttempt()

        start = time.monotonic()
        result = poll_until_found(attempt, timeout=0.5)
        elapsed = time.monotonic() - start

        assert result is None
        assert attempt.calls > 1
        assert 0.5 <= elapsed < 1.0

    def test_success_with_none_payload_is_final(self):
        """A done outcome stops polling even when its value is None."""
        attempt = ScriptedAttempt(misses=0, value=None)

        start = time.monotonic()
        result = poll_until_found(attempt, timeout=2)

        assert result is None
        assert attempt.calls == 1
        assert time.monotonic() - start < 0.5

    def test_poll_interval_spaces_attempts(self):
        """With a poll interval the number of attempts is bounded by the timeout."""
        attempt = ScriptedAttempt()

        result = poll_until_found(attempt, timeout=0.35, poll_interval=0.1)

        # Attempts at ~0.0, 0.1, 0.2 and 0.3 s; one more would start past the deadline
        assert result is None
        assert 3 <= attempt.calls <= 4

    def test_poll_interval_never_starts_an_attempt_after_the_deadline(self):
        """A sleep that would cross the deadline ends polling instead of running late."""
        started_at = []
        start = time.monotonic()

        def always_missed():
            started_at.append(time.monotonic() - start)
            return AttemptOutcome.missed()

        result = poll_until_found(always_missed, timeout=0.25, poll_interval=0.2)
        elapsed = time.monotonic() - start

        assert result is None
        assert len(started_at) == 2
        assert all(offset < 0.25 for offset in started_at)
        assert elapsed < 0.25 + 0.05

    def test_no_poll_interval_polls_back_to_back(self):
        attempt = ScriptedAttempt()

        poll_until_found(attempt, timeout=0.2)

        # Far more attempts than any interval-based schedule would allow
        assert attempt.calls > 20
