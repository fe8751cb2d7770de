import os
import sys

import pytest
from unittest.mock import MagicMock
from selenium.common.exceptions import NoSuchElementException

# Adjust the python path to import the package without installing it
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from safe_find.config import config


class FakeSearchContext:
    """
    Search context with scripted behaviour and call counters.

    A plain class rather than a MagicMock: busy-polling tests make many
    thousands of calls and MagicMock records every one of them.
    """

    def __init__(self, element=None, elements=None, error=None, failures_before_success=None):
        self.element = element
        self.elements = elements
        self.error = error
        self.failures_before_success = failures_before_success
        self.find_one_calls = 0
        self.find_all_calls = 0
        self.locators = []

    def _should_fail(self, calls):
        if self.error is None:
            return False
        return self.failures_before_success is None or calls <= self.failures_before_success

    def find_one(self, locator):
        self.find_one_calls += 1
        if len(self.locators) < 10:
            self.locators.append(locator)
        if self._should_fail(self.find_one_calls):
            raise self.error
        return self.element

    def find_all(self, locator):
        self.find_all_calls += 1
        if len(self.locators) < 10:
            self.locators.append(locator)
        if self._should_fail(self.find_all_calls):
            raise self.error
        return self.elements


@pytest.fixture
def element():
    """A displayed web element."""
    web_element = MagicMock(name="banana_element")
    web_element.is_displayed.return_value = True
    return web_element


@pytest.fixture
def missing_context():
    """A search context that never finds anything."""
    return FakeSearchContext(error=NoSuchElementException("Unable to locate element: #banana"))


@pytest.fixture
def found_context(element):
    """A search context that finds the element on the first attempt."""
    return FakeSearchContext(element=element, elements=[element])


@pytest.fixture(autouse=True)
def default_lookup_config(monkeypatch):
    """Pin lookup timing settings so a local .env cannot change test behaviour."""
    monkeypatch.setattr(config.lookup, "default_timeout_seconds", 0.0)
    monkeypatch.setattr(config.lookup, "poll_interval_seconds", 0.0)


@pytest.fixture
def make_context():
    """Factory for scripted search contexts."""
    return FakeSearchContext
