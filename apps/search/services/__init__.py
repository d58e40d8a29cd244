"""Services for global search."""

from .exceptions import SearchServiceError, AIGatewayError, AIRateLimitError
from .global_search import (
    SOURCES,
    sanitize_query,
    gather_search_data,
    format_basic_results,
    global_search,
)

__all__ = [
    # Exceptions
    'SearchServiceError',
    'AIGatewayError',
    'AIRateLimitError',
    # Search
    'SOURCES',
    'sanitize_query',
    'gather_search_data',
    'format_basic_results',
    'global_search',
]
