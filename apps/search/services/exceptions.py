"""Domain-specific exceptions for search services."""


class SearchServiceError(Exception):
    """Base exception for search services."""
    pass


class AIGatewayError(SearchServiceError):
    """Raised when the AI gateway fails or answers with an error."""
    pass


class AIRateLimitError(AIGatewayError):
    """Raised when the AI gateway answers HTTP 429."""
    pass
