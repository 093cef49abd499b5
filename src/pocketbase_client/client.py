"""
PocketBase API Client.

Two client types share one request pipeline:

- :class:`AnonymousClient` carries no token. Its :meth:`~AnonymousClient.authenticate`
  returns a new :class:`AuthenticatedClient`; the anonymous value is left
  untouched.
- :class:`AuthenticatedClient` carries the token and additionally exposes
  operations that require it (collection creation).

Both are immutable after construction, so either may be shared freely.
"""

from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import ValidationError as PydanticValidationError

from .collections import AuthenticatedCollectionsManager, CollectionsManager
from .config import ClientConfig
from .decoding import classify, encode, parse_error_response
from .errors import AuthError, PocketBaseError, TransportError
from .logs import LogsManager
from .models import AuthSuccessResponse, HealthCheckResponse
from .records import RecordsManager
from .transport import RequestsTransport, Transport, TransportResponse

logger = logging.getLogger(__name__)


class BaseClient:
    """
    Request pipeline shared by anonymous and authenticated clients.

    Every outbound request goes through :meth:`send`, which is the only
    place the ``Authorization`` header is attached.
    """

    __slots__ = ("_config", "_transport", "_auth_token")

    def __init__(
        self,
        config: Union[str, ClientConfig],
        transport: Optional[Transport] = None,
        auth_token: Optional[str] = None,
    ):
        if isinstance(config, str):
            config = ClientConfig(base_url=config)
        object.__setattr__(self, "_config", config)
        object.__setattr__(self, "_transport", transport or RequestsTransport(
            timeout=config.timeout,
            verify_ssl=config.verify_ssl,
            user_agent=config.user_agent,
        ))
        object.__setattr__(self, "_auth_token", auth_token)
        if config.debug:
            logging.getLogger(__package__).setLevel(logging.DEBUG)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(base_url={self.base_url!r})"

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def base_url(self) -> str:
        return self._config.base_url

    @property
    def auth_token(self) -> Optional[str]:
        return self._auth_token

    @property
    def is_authenticated(self) -> bool:
        return self._auth_token is not None

    @property
    def transport(self) -> Transport:
        return self._transport

    def close(self) -> None:
        """Close the transport. Clients derived from this one share it."""
        self._transport.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    # =========================================================================
    # Request pipeline
    # =========================================================================

    def build_url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def headers(self, has_body: bool = False) -> Dict[str, str]:
        """Headers for one request, including the token when present."""
        headers: Dict[str, str] = {}
        if self._auth_token is not None:
            headers["Authorization"] = self._auth_token
        if has_body:
            headers["Content-Type"] = "application/json"
        return headers

    def send(
        self,
        method: str,
        url: str,
        params: Optional[List[Tuple[str, str]]] = None,
        json: Any = None,
    ) -> TransportResponse:
        """
        Send one request through the transport.

        Args:
            method: HTTP method
            url: Absolute URL (see :meth:`build_url`)
            params: Ordered query parameters
            json: Body, serialised as JSON when not None

        Returns:
            Raw response

        Raises:
            TransportError: If the exchange itself failed
        """
        body = encode(json) if json is not None else None
        logger.debug("%s %s params=%s", method, url, params or [])
        try:
            return self._transport.send(
                method,
                url,
                headers=self.headers(has_body=body is not None),
                params=params,
                body=body,
            )
        except TransportError:
            raise
        except OSError as e:
            raise TransportError(f"{method} {url} failed to execute: {e}", {"url": url}, e) from e

    # =========================================================================
    # Resources
    # =========================================================================

    def health_check(self) -> HealthCheckResponse:
        """
        Query ``/api/health``.

        Raises:
            TransportError: Network failure
            HttpStatusError: Non-2xx response
            DecodeError: Unexpected body
        """
        url = self.build_url("/api/health")
        return classify(self.send("GET", url), HealthCheckResponse, url)

    def collections(self) -> CollectionsManager:
        return CollectionsManager(self)

    def logs(self) -> LogsManager:
        return LogsManager(self)

    def records(self, name: str, model: Any = Dict[str, Any]) -> RecordsManager:
        """
        Records of one collection.

        Args:
            name: Collection name
            model: Type records are decoded into (pydantic model, dict, ...)
        """
        return RecordsManager(self, name, model)


class AnonymousClient(BaseClient):
    """
    Client without credentials.

    Example:
        ```python
        client = AnonymousClient("http://127.0.0.1:8090")
        client.health_check()

        admin = client.authenticate("users", "alice@example.com", "secret")
        posts = admin.records("posts").list().sort("-created").execute()
        ```
    """

    __slots__ = ()

    def __init__(self, config: Union[str, ClientConfig], transport: Optional[Transport] = None):
        super().__init__(config, transport)

    def authenticate(self, collection: str, identity: str, password: str) -> AuthenticatedClient:
        """
        Log in with identity and password.

        Args:
            collection: Auth collection (e.g. ``users``)
            identity: Username or email
            password: Password

        Returns:
            A new authenticated client sharing this client's transport

        Raises:
            AuthError: ``Validation`` for a 4xx with a validation body,
                ``Other`` for any other failure
        """
        url = self.build_url(f"/api/collections/{collection}/auth-with-password")
        try:
            response = self.send("POST", url, json={"identity": identity, "password": password})
        except TransportError as e:
            raise AuthError.other(str(e), cause=e) from e

        if response.status_code == 200:
            try:
                token = AuthSuccessResponse.model_validate_json(response.content).token
            except PydanticValidationError as e:
                raise AuthError.other(f"Invalid auth response from {url}: {e}", cause=e) from e
            logger.debug("authenticated against collection %s", collection)
            return AuthenticatedClient(self._config, token, self._transport)

        if response.is_client_error:
            error_response = parse_error_response(response.content)
            if error_response is not None:
                raise AuthError.validation(error_response)

        raise AuthError.other(
            f"Unexpected status {response.status_code} with body: {response.text or '<no body>'}"
        )


class AuthenticatedClient(BaseClient):
    """Client holding a token obtained from :meth:`AnonymousClient.authenticate`."""

    __slots__ = ()

    def __init__(
        self,
        config: Union[str, ClientConfig],
        auth_token: str,
        transport: Optional[Transport] = None,
    ):
        if not auth_token:
            raise PocketBaseError("AuthenticatedClient requires a token")
        super().__init__(config, transport, auth_token)

    def collections(self) -> AuthenticatedCollectionsManager:
        return AuthenticatedCollectionsManager(self)


Client = AnonymousClient
