"""
HTTP transport layer.

The client never talks to the network directly; it hands fully-formed
requests to a :class:`Transport`. :class:`RequestsTransport` is the default
implementation, built on ``requests.Session`` for connection pooling.
"""

from __future__ import annotations
import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import requests

from .errors import TransportError

logger = logging.getLogger(__name__)

QueryParams = List[Tuple[str, str]]


@dataclass
class TransportResponse:
    """Raw response handed back by a transport."""

    status_code: int
    content: bytes = b""
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def is_client_error(self) -> bool:
        return 400 <= self.status_code < 500


class Transport(ABC):
    """Abstract base for all transports."""

    @abstractmethod
    def send(
        self,
        method: str,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[QueryParams] = None,
        body: Optional[bytes] = None,
    ) -> TransportResponse:
        """
        Perform one HTTP exchange.

        Args:
            method: HTTP method (GET, POST, PATCH, DELETE)
            url: Absolute request URL without query string
            headers: Request headers
            params: Ordered query parameters
            body: Raw request body

        Returns:
            Status, headers and raw body of the response

        Raises:
            TransportError: If no response could be obtained
        """
        ...

    def close(self) -> None:
        """Release transport resources."""

    def __enter__(self) -> Transport:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


class RequestsTransport(Transport):
    """
    Transport backed by ``requests``.

    Timeouts, TLS verification and connection reuse are delegated entirely
    to the underlying session.
    """

    def __init__(
        self,
        timeout: float = 30.0,
        verify_ssl: bool = True,
        user_agent: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the transport.

        Args:
            timeout: Request timeout in seconds
            verify_ssl: Whether to verify TLS certificates
            user_agent: Value for the ``User-Agent`` header
            session: Optional requests.Session for connection pooling
        """
        self._timeout = timeout
        self._verify_ssl = verify_ssl
        self._session = session or requests.Session()
        self._owns_session = session is None
        if user_agent:
            self._session.headers["User-Agent"] = user_agent

    @property
    def session(self) -> requests.Session:
        return self._session

    def send(
        self,
        method: str,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[QueryParams] = None,
        body: Optional[bytes] = None,
    ) -> TransportResponse:
        start = time.monotonic()
        try:
            response = self._session.request(
                method,
                url,
                headers=headers,
                params=params,
                data=body,
                timeout=self._timeout,
                verify=self._verify_ssl,
            )
            content = response.content
        except requests.exceptions.RequestException as e:
            raise TransportError(f"{method} {url} failed to execute: {e}", {"url": url}, e) from e

        logger.debug(
            "%s %s -> %d (%.2fms)",
            method, url, response.status_code, (time.monotonic() - start) * 1000,
        )
        return TransportResponse(
            status_code=response.status_code,
            content=content,
            headers=dict(response.headers),
        )

    def close(self) -> None:
        """Close the HTTP session if owned by this transport."""
        if self._owns_session:
            self._session.close()
