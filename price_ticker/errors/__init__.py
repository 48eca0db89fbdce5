"""
Error classification for the fetch-and-wait engine.

Fetch errors are split by recovery characteristics: transient failures are
retried with backoff, contract breaks are surfaced immediately as an invalid
reading. Configuration errors are only raised at startup.
"""

from .configuration import ConfigurationError
from .fetch_failures import (
    FetchError,
    HttpStatusError,
    MalformedResponseError,
    TransportError,
)

__all__ = [
    # Fetch Failures
    "FetchError",
    "TransportError",
    "HttpStatusError",
    "MalformedResponseError",
    # Startup
    "ConfigurationError",
]
