"""
Search contexts: the objects safe lookups run their raw finds against.

A search context exposes ``find_one(locator)`` and ``find_all(locator)``.
Selenium drivers/elements and Playwright pages/frames/element handles are
adapted to that shape; anything already exposing it is used as-is.
"""

from typing import Any, List, Protocol, Tuple, Union

from playwright.sync_api import ElementHandle, Frame, Page
from selenium.webdriver.remote.webdriver import WebDriver
from selenium.webdriver.remote.webelement import WebElement

from safe_find.core.exceptions import ElementLookupError, UnsupportedSearchContextError


class SearchContext(Protocol):
    """Anything able to perform one raw single- or multi-element find. Used for type hints only."""

    def find_one(self, locator: Any) -> Any:
        ...

    def find_all(self, locator: Any) -> List[Any]:
        ...


class SeleniumSearchContext:
    """
    Adapts a Selenium WebDriver or WebElement.

    Locators are ``(by, value)`` tuples, e.g. ``(By.ID, "banana")``. Selenium
    raises NoSuchElementException, StaleElementReferenceException,
    NoSuchFrameException etc. on failure; those propagate unchanged.
    """

    def __init__(self, target: Union[WebDriver, WebElement]):
        self.target = target

    def find_one(self, locator: Tuple[str, str]) -> WebElement:
        by, value = locator
        return self.target.find_element(by, value)

    def find_all(self, locator: Tuple[str, str]) -> List[WebElement]:
        by, value = locator
        return list(self.target.find_elements(by, value))


class PlaywrightSearchContext:
    """
    Adapts a Playwright (sync API) Page, Frame or ElementHandle.

    Locators are selector strings. ``query_selector`` returns None on no match,
    so ``find_one`` turns that into an ElementLookupError.
    """

    def __init__(self, target: Union[Page, Frame, ElementHandle]):
        self.target = target

    def find_one(self, locator: str) -> ElementHandle:
        element = self.target.query_selector(locator)
        if element is None:
            raise ElementLookupError(locator)
        return element

    def find_all(self, locator: str) -> List[ElementHandle]:
        return self.target.query_selector_all(locator)


def _has_methods(target: Any, *names: str) -> bool:
    return all(callable(getattr(target, name, None)) for name in names)


def as_search_context(target: Any) -> SearchContext:
    """
    Return ``target`` as a SearchContext, wrapping known driver objects.

    Raises:
        UnsupportedSearchContextError: If ``target`` cannot perform lookups.
    """
    # Duck-typed rather than isinstance(): Protocol checks only see static attributes
    if _has_methods(target, "find_one", "find_all"):
        return target
    if isinstance(target, (Page, Frame, ElementHandle)) or _has_methods(
        target, "query_selector", "query_selector_all"
    ):
        return PlaywrightSearchContext(target)
    if isinstance(target, (WebDriver, WebElement)) or _has_methods(
        target, "find_element", "find_elements"
    ):
        return SeleniumSearchContext(target)
    raise UnsupportedSearchContextError(target)
