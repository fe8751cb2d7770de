"""
safe_find: forgiving element lookups for browser-automation tests.

Element queries are retried until they succeed or a timeout expires, and every
lookup failure is reported as None instead of an exception.
"""

from .core.contexts import (
    PlaywrightSearchContext,
    SearchContext,
    SeleniumSearchContext,
    as_search_context,
)
from .core.exceptions import ElementLookupError, UnsupportedSearchContextError
from .core.logger import setup_logging
from .core.lookup import (
    SafeFinder,
    safe_find_element,
    safe_find_elements,
    safe_get_element,
    safe_get_elements,
)

__all__ = [
    'safe_find_element',
    'safe_find_elements',
    'safe_get_element',
    'safe_get_elements',
    'SafeFinder',
    'SearchContext',
    'SeleniumSearchContext',
    'PlaywrightSearchContext',
    'as_search_context',
    'ElementLookupError',
    'UnsupportedSearchContextError',
    'setup_logging',
]
