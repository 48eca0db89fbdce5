"""HTTP GET transport for the price endpoint."""

import http.client
from dataclasses import dataclass
from typing import Optional, Protocol
from urllib.parse import urlsplit

import structlog

from ..config.defaults import EndpointParams
from ..errors import TransportError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class HttpResponse:
    """Status and raw body of one HTTP exchange."""
    status: int
    body: bytes


class Transport(Protocol):
    def get(self) -> HttpResponse:
        ...

    def close(self) -> None:
        ...


class HttpTransport:
    """
    Issues GET requests against a single URL over a reused connection.

    The connection is created lazily on first use with the connect timeout,
    then switched to the read timeout for the exchange. Any transport failure
    drops the connection so the next attempt starts from a fresh one.
    Only the poll loop thread uses an instance.
    """

    def __init__(
        self,
        url: str,
        connect_timeout: float = 5.0,
        read_timeout: float = 5.0,
        user_agent: str = "price-ticker/0.1"
    ) -> None:
        parsed = urlsplit(url)
        if parsed.scheme not in ("http", "https") or not parsed.hostname:
            raise ValueError(f"Invalid URL: {url}")

        self.url = url
        self.connect_timeout = connect_timeout
        self.read_timeout = read_timeout
        self._scheme = parsed.scheme
        self._host = parsed.hostname
        self._port = parsed.port
        self._target = parsed.path or "/"
        if parsed.query:
            self._target += f"?{parsed.query}"
        self._headers = {
            "Accept": "application/json",
            "User-Agent": user_agent,
        }
        self._conn: Optional[http.client.HTTPConnection] = None

    @classmethod
    def from_params(cls, params: EndpointParams) -> "HttpTransport":
        return cls(
            url=params.url,
            connect_timeout=params.connect_timeout,
            read_timeout=params.read_timeout,
            user_agent=params.user_agent,
        )

    def get(self) -> HttpResponse:
        """
        Perform one GET exchange.

        Returns:
            HttpResponse for any status code the server answered with

        Raises:
            TransportError: If no response was obtained
        """
        reused = self._conn is not None and self._conn.sock is not None
        try:
            return self._exchange()
        except (http.client.RemoteDisconnected, ConnectionResetError, BrokenPipeError) as e:
            self.close()
            if not reused:
                raise TransportError(f"Connection lost: {e}", url=self.url) from e
            # Idle keep-alive connection closed by the server; one fresh try
            logger.debug("Reused connection was closed by peer, reconnecting", error=str(e))
        except (OSError, http.client.HTTPException) as e:
            self.close()
            raise TransportError(f"Network error: {e}", url=self.url) from e

        try:
            return self._exchange()
        except (OSError, http.client.HTTPException) as e:
            self.close()
            raise TransportError(f"Network error: {e}", url=self.url) from e

    def _exchange(self) -> HttpResponse:
        conn = self._connection()
        if conn.sock is None:
            conn.connect()
            conn.sock.settimeout(self.read_timeout)

        conn.request("GET", self._target, headers=self._headers)
        response = conn.getresponse()
        body = response.read()

        if response.will_close:
            self.close()

        return HttpResponse(status=response.status, body=body)

    def _connection(self) -> http.client.HTTPConnection:
        if self._conn is None:
            if self._scheme == "https":
                self._conn = http.client.HTTPSConnection(
                    self._host, self._port, timeout=self.connect_timeout
                )
            else:
                self._conn = http.client.HTTPConnection(
                    self._host, self._port, timeout=self.connect_timeout
                )
        return self._conn

    def close(self) -> None:
        """Drop the current connection, if any."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None
