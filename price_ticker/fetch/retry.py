"""Retry classification for failed fetch attempts."""

from dataclasses import dataclass
from enum import Enum
from typing import Union

from ..config.defaults import RetryParams
from ..errors import FetchError, HttpStatusError, MalformedResponseError


class FailureClass(Enum):
    """Failure classes a fetch attempt can end in."""
    TRANSPORT = "transport_failure"
    RATE_LIMITED = "rate_limited"
    SERVER_ERROR = "server_error"
    CLIENT_ERROR = "client_error"
    UNEXPECTED_STATUS = "unexpected_status"
    MALFORMED_RESPONSE = "malformed_response"
    UNEXPECTED_ERROR = "unexpected_error"


@dataclass(frozen=True)
class RetryDecision:
    """Either NoRetry, or RetryAfter(delay seconds)."""
    retry: bool
    delay: float
    classification: FailureClass

    @classmethod
    def no_retry(cls, classification: FailureClass) -> "RetryDecision":
        return cls(retry=False, delay=0.0, classification=classification)

    @classmethod
    def retry_after(cls, delay: float, classification: FailureClass) -> "RetryDecision":
        return cls(retry=True, delay=delay, classification=classification)


@dataclass(frozen=True)
class RetryPolicy:
    """
    Stateless retry policy: a pure function of the observed failure.

    Transient conditions (no response, rate limiting, server errors) are
    retried with a class-specific backoff. Everything else, including any
    body that fails to decode, is terminal for the current poll cycle.
    """
    max_attempts: int = 3
    transport_backoff: float = 5.0
    rate_limit_backoff: float = 10.0
    server_error_backoff: float = 5.0

    @classmethod
    def from_params(cls, params: RetryParams) -> "RetryPolicy":
        return cls(
            max_attempts=params.max_attempts,
            transport_backoff=params.transport_backoff,
            rate_limit_backoff=params.rate_limit_backoff,
            server_error_backoff=params.server_error_backoff,
        )

    def classify(self, status_or_error: Union[int, BaseException]) -> RetryDecision:
        """
        Map an HTTP status or an attempt exception to a retry decision.

        Args:
            status_or_error: Non-200 HTTP status code, or the exception raised
                by the attempt

        Returns:
            RetryDecision for the failure
        """
        if isinstance(status_or_error, HttpStatusError):
            return self._classify_status(status_or_error.status)

        if isinstance(status_or_error, MalformedResponseError):
            return RetryDecision.no_retry(FailureClass.MALFORMED_RESPONSE)

        if isinstance(status_or_error, FetchError):
            # No response at all; the error declares whether that is transient
            if status_or_error.retryable:
                return RetryDecision.retry_after(self.transport_backoff, FailureClass.TRANSPORT)
            return RetryDecision.no_retry(FailureClass.UNEXPECTED_ERROR)

        if isinstance(status_or_error, BaseException):
            # Unknown error - treat as a lost response
            return RetryDecision.retry_after(self.transport_backoff, FailureClass.UNEXPECTED_ERROR)

        return self._classify_status(status_or_error)

    def _classify_status(self, status: int) -> RetryDecision:
        if status == 429:
            return RetryDecision.retry_after(self.rate_limit_backoff, FailureClass.RATE_LIMITED)
        if status >= 500:
            return RetryDecision.retry_after(self.server_error_backoff, FailureClass.SERVER_ERROR)
        if 400 <= status < 500:
            return RetryDecision.no_retry(FailureClass.CLIENT_ERROR)
        return RetryDecision.no_retry(FailureClass.UNEXPECTED_STATUS)
