"""
Fetch failure classifications for the price endpoint.

These exceptions never escape PriceFetcher.fetch(); they travel between the
transport, the decoder and the retry policy, which maps them to a decision.
"""

from typing import Any, Optional


class FetchError(Exception):
    """Base class for failures of a single fetch attempt."""

    def __init__(self, message: str, context: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.retryable = False


class TransportError(FetchError):
    """No HTTP response was obtained (refused, timed out, reset, protocol error)."""

    def __init__(self, message: str, url: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.url = url
        self.retryable = True


class HttpStatusError(FetchError):
    """A response arrived with a status other than 200."""

    def __init__(self, message: str, status: int, body_excerpt: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.status = status
        self.body_excerpt = body_excerpt
        self.retryable = status == 429 or status >= 500


class MalformedResponseError(FetchError):
    """A 200 response whose body does not carry the expected numeric field."""

    def __init__(self, message: str, raw_body: Optional[str] = None,
                 expected_path: Optional[tuple[str, ...]] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.raw_body = raw_body
        self.expected_path = expected_path
