"""Retrying price fetcher: one logical "get the value" per poll cycle."""

import json
import math
from typing import Any, Optional, Sequence

from ..errors import HttpStatusError, MalformedResponseError
from ..logging.config import get_fetch_logger, log_fetch_attempt
from ..models import PriceReading
from ..runtime.cancellation import CancellationToken
from ..runtime.clock import Sleeper, SystemSleeper, sleep_cancellable
from .retry import RetryPolicy
from .transport import Transport

fetch_logger = get_fetch_logger(__name__)


class PriceFetcher:
    """
    Fetches the price with a bounded number of attempts.

    fetch() never raises: every failure ends up as an invalid reading.
    Diagnostics are logged per failed attempt and never influence the
    retry decision.
    """

    def __init__(
        self,
        transport: Transport,
        token: CancellationToken,
        policy: Optional[RetryPolicy] = None,
        sleeper: Optional[Sleeper] = None,
        price_path: Sequence[str] = ("bitcoin", "usd"),
        tick_seconds: float = 1.0
    ) -> None:
        self.transport = transport
        self.token = token
        self.policy = policy or RetryPolicy()
        self.sleeper = sleeper if sleeper is not None else SystemSleeper()
        self.price_path = tuple(price_path)
        self.tick_seconds = tick_seconds
        self.logger = fetch_logger

        self.last_attempt_count = 0

    def fetch(self) -> PriceReading:
        """
        Fetch the current price, retrying transient failures.

        Returns:
            Valid reading on success, invalid reading on terminal failure,
            exhausted attempts or cancellation
        """
        max_attempts = self.policy.max_attempts
        self.last_attempt_count = 0

        for attempt in range(1, max_attempts + 1):
            if self.token.is_requested():
                self.logger.info("Fetch abandoned, cancellation requested", attempt=attempt)
                return PriceReading.invalid()

            self.last_attempt_count = attempt
            try:
                value = self._attempt()
            except Exception as e:
                failure = e
            else:
                self.logger.debug("Price fetched", attempt=attempt, value=value)
                return PriceReading.ok(value)

            decision = self.policy.classify(failure)
            will_retry = decision.retry and attempt < max_attempts

            log_fetch_attempt(
                self.logger,
                attempt=attempt,
                max_attempts=max_attempts,
                classification=decision.classification.value,
                next_action="retry" if will_retry else "give_up",
                delay=decision.delay,
                context={"error": str(failure), "error_type": type(failure).__name__}
            )

            if not will_retry:
                break

            if not sleep_cancellable(self.sleeper, decision.delay, self.token, self.tick_seconds):
                self.logger.info("Backoff interrupted by cancellation", attempt=attempt)
                break

        return PriceReading.invalid()

    def _attempt(self) -> float:
        """One GET plus decoding; raises a FetchError subclass on failure."""
        response = self.transport.get()

        if response.status != 200:
            excerpt = response.body[:200].decode("utf-8", errors="replace")
            raise HttpStatusError(f"HTTP {response.status}", status=response.status, body_excerpt=excerpt)

        return self.decode_price(response.body)

    def decode_price(self, body: bytes) -> float:
        """
        Extract the numeric price at price_path from a JSON body.

        Raises:
            MalformedResponseError: If the body is not JSON or lacks a finite number at the path
        """
        excerpt = body[:200].decode("utf-8", errors="replace")
        try:
            node: Any = json.loads(body)
        except ValueError as e:
            raise MalformedResponseError(
                f"Invalid JSON: {e}", raw_body=excerpt, expected_path=self.price_path
            ) from e

        for key in self.price_path:
            if not isinstance(node, dict) or key not in node:
                raise MalformedResponseError(
                    f"Missing field {'.'.join(self.price_path)}",
                    raw_body=excerpt,
                    expected_path=self.price_path
                )
            node = node[key]

        if isinstance(node, bool) or not isinstance(node, (int, float)) or not math.isfinite(node):
            raise MalformedResponseError(
                f"Field {'.'.join(self.price_path)} is not a finite number: {node!r}",
                raw_body=excerpt,
                expected_path=self.price_path
            )

        return float(node)

    def close(self) -> None:
        self.transport.close()
