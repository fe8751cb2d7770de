"""
Safe element lookups.

``safe_find_element`` and ``safe_find_elements`` wrap a search context's raw
finds in the polling primitive. Every failure the driver can raise (no such
element, stale element/frame/window, anything else) is swallowed and retried
until the timeout expires; callers only ever see a found value or None.
Error identity is discarded on purpose: a caller cannot tell "timed out" from
"malformed locator" from "frame destroyed". The last swallowed error type is
reported in the debug log.
"""

import time
import warnings
from typing import Any, Callable, List, Optional

from safe_find.config import config
from safe_find.core.contexts import SearchContext, as_search_context
from safe_find.core.logger import bind_context, get_structured_logger
from safe_find.core.polling import AttemptOutcome, poll_until_found

logger = get_structured_logger(__name__)

# Receives a found element, returns it (accepted) or None (rejected)
Validator = Callable[[Any], Optional[Any]]


def _resolve_timeout(timeout: Optional[float]) -> float:
    if timeout is None:
        return config.lookup.default_timeout_seconds
    return timeout


def _log_outcome(
    op_logger,
    event: str,
    attempts: int,
    start_time: float,
    last_error: Optional[Exception],
) -> None:
    op_logger.debug(
        event,
        attempts=attempts,
        duration_ms=round((time.monotonic() - start_time) * 1000, 2),
        last_error_type=type(last_error).__name__ if last_error else None,
    )


def safe_find_element(
    context: Any,
    locator: Any,
    timeout: Optional[float] = None,
    validator: Optional[Validator] = None,
) -> Optional[Any]:
    """
    Find one element, retrying transient failures until ``timeout`` expires.

    Args:
        context: Search context, Selenium driver/element or Playwright page/frame/handle.
        locator: How to find the element. None returns None without any lookup.
        timeout: Seconds to keep retrying. 0 or negative tries exactly once;
            None uses ``config.lookup.default_timeout_seconds``.
        validator: Optional check applied to the found element. Returning None
            rejects it, and that rejection is final (not retried).

    Returns:
        The found (and validated) element, or None. Never raises on lookup failure.

    Raises:
        UnsupportedSearchContextError: If ``context`` cannot perform lookups.
    """
    if locator is None:
        return None

    search_context = as_search_context(context)
    timeout = _resolve_timeout(timeout)
    op_logger = bind_context(logger, locator=repr(locator), timeout=timeout)
    attempts = 0
    rejected = False
    last_error: Optional[Exception] = None

    def attempt() -> AttemptOutcome[Any]:
        nonlocal attempts, rejected, last_error
        attempts += 1
        try:
            element = search_context.find_one(locator)
            if element is None:
                return AttemptOutcome.missed()
            if validator is not None:
                element = validator(element)
                rejected = element is None
            return AttemptOutcome.found(element)
        except Exception as e:  # noqa: BLE001
            last_error = e
            return AttemptOutcome.missed()

    start_time = time.monotonic()
    element = poll_until_found(attempt, timeout, config.lookup.poll_interval_seconds)

    if element is not None:
        event = "element_lookup_resolved"
    elif rejected:
        event = "element_lookup_rejected"
    else:
        event = "element_lookup_absent"
    _log_outcome(op_logger, event, attempts, start_time, last_error)
    return element


def safe_find_elements(
    context: Any,
    locator: Any,
    timeout: Optional[float] = None,
) -> Optional[List[Any]]:
    """
    Find all matching elements, retrying transient failures until ``timeout`` expires.

    An empty collection returned by the context is a final result, distinct
    from None (which means the locator was None or no attempt succeeded).
    A context returning None instead of a collection is polled again, the
    same way safe_find_element treats a None element.

    Args:
        context: Search context, Selenium driver/element or Playwright page/frame/handle.
        locator: How to find the elements. None returns None without any lookup.
        timeout: Seconds to keep retrying. 0 or negative tries exactly once;
            None uses ``config.lookup.default_timeout_seconds``.

    Returns:
        The found collection (possibly empty), or None. Never raises on lookup failure.
    """
    if locator is None:
        return None

    search_context = as_search_context(context)
    timeout = _resolve_timeout(timeout)
    op_logger = bind_context(logger, locator=repr(locator), timeout=timeout)
    attempts = 0
    last_error: Optional[Exception] = None

    def attempt() -> AttemptOutcome[List[Any]]:
        nonlocal attempts, last_error
        attempts += 1
        try:
            elements = search_context.find_all(locator)
            if elements is None:
                return AttemptOutcome.missed()
            return AttemptOutcome.found(elements)
        except Exception as e:  # noqa: BLE001
            last_error = e
            return AttemptOutcome.missed()

    start_time = time.monotonic()
    elements = poll_until_found(attempt, timeout, config.lookup.poll_interval_seconds)

    event = "elements_lookup_absent" if elements is None else "elements_lookup_resolved"
    _log_outcome(op_logger, event, attempts, start_time, last_error)
    return elements


def safe_get_element(
    context: Any,
    locator: Any,
    timeout: Optional[float] = None,
    validator: Optional[Validator] = None,
) -> Optional[Any]:
    """Deprecated alias of safe_find_element."""
    warnings.warn(
        "use 'safe_find_element' instead", DeprecationWarning, stacklevel=2
    )
    return safe_find_element(context, locator, timeout, validator)


def safe_get_elements(
    context: Any,
    locator: Any,
    timeout: Optional[float] = None,
) -> Optional[List[Any]]:
    """Deprecated alias of safe_find_elements."""
    warnings.warn(
        "use 'safe_find_elements' instead", DeprecationWarning, stacklevel=2
    )
    return safe_find_elements(context, locator, timeout)


class SafeFinder:
    """
    Safe lookups bound to one search context.

    Example:
        >>> finder = SafeFinder(driver, default_timeout=5)
        >>> button = finder.find_element((By.ID, "submit"), validator=lambda e: e if e.is_enabled() else None)
    """

    def __init__(self, context: Any, default_timeout: Optional[float] = None):
        """
        Args:
            context: Search context, Selenium driver/element or Playwright page/frame/handle.
            default_timeout: Timeout used when a call passes none. None falls back
                to ``config.lookup.default_timeout_seconds``.
        """
        self.context: SearchContext = as_search_context(context)
        self.default_timeout = default_timeout

    def _timeout(self, timeout: Optional[float]) -> Optional[float]:
        return self.default_timeout if timeout is None else timeout

    def find_element(
        self,
        locator: Any,
        timeout: Optional[float] = None,
        validator: Optional[Validator] = None,
    ) -> Optional[Any]:
        """Find one element. See safe_find_element."""
        return safe_find_element(self.context, locator, self._timeout(timeout), validator)

    def find_elements(self, locator: Any, timeout: Optional[float] = None) -> Optional[List[Any]]:
        """Find all matching elements. See safe_find_elements."""
        return safe_find_elements(self.context, locator, self._timeout(timeout))
