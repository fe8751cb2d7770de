from typing import Any


class ElementLookupError(LookupError):
    """Raised by a search context when no element matches the locator."""

    def __init__(self, locator: Any, message: str | None = None):
        self.locator = locator
        self.message = (
            message if message is not None else f"No element matches locator: {locator!r}"
        )
        super().__init__(self.message)


class UnsupportedSearchContextError(TypeError):
    """Raised when an object cannot be used as a search context."""

    def __init__(self, target: Any):
        self.message = (
            f"Object of type {type(target).__name__} is not a search context. "
            "Expected find_one/find_all, a Selenium driver or element, "
            "or a Playwright page, frame or element handle."
        )
        super().__init__(self.message)
