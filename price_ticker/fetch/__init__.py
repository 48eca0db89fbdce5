"""
Price fetching: HTTP transport, retry policy and the retrying fetcher.
"""
from .fetcher import PriceFetcher
from .retry import FailureClass, RetryDecision, RetryPolicy
from .transport import HttpResponse, HttpTransport

__all__ = [
    "FailureClass",
    "HttpResponse",
    "HttpTransport",
    "PriceFetcher",
    "RetryDecision",
    "RetryPolicy",
]
