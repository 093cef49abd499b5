"""
PocketBase Error Model

This module provides the error handling framework for the PocketBase Python SDK.
Every failure produced by a request is raised as one of the exceptions below,
carrying enough context (URL, status, truncated body, decode path) to diagnose
it without re-running the request.
"""

from __future__ import annotations
import codecs
import json
from typing import Optional, Dict, Any, TYPE_CHECKING
from enum import IntEnum

if TYPE_CHECKING:
    from .models import ErrorResponse


SNIPPET_LIMIT = 2000


class ErrorCode(IntEnum):
    """Error codes for categorising SDK failures."""

    UNKNOWN = 1
    CONFIGURATION = 2

    # Transport errors
    TRANSPORT = 100

    # HTTP errors
    HTTP_STATUS = 200
    NOT_FOUND = 204

    # Client-side validation errors
    VALIDATION = 300
    AUTHENTICATION = 301

    # Decoding errors
    DECODE = 400

    # Pagination errors
    PAGINATION = 500


def body_snippet(body: Any, limit: int = SNIPPET_LIMIT) -> str:
    """
    Truncate a response body for diagnostics.

    Args:
        body: Raw response body (bytes or str)
        limit: Maximum number of bytes kept

    Returns:
        At most ``limit`` bytes of the body, decoded as UTF-8
    """
    if body is None:
        return ""
    if isinstance(body, str):
        body = body.encode("utf-8")
    # A multi-byte character cut at the boundary is dropped; invalid bytes
    # elsewhere become U+FFFD
    decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
    return decoder.decode(body[:limit], final=len(body) <= limit)


class PocketBaseError(Exception):
    """
    Base class for all PocketBase SDK errors.

    Provides structured error information shared by every failure kind.
    """

    def __init__(self, message: str, code: ErrorCode = ErrorCode.UNKNOWN,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[BaseException] = None):
        """
        Initialize a PocketBase error.

        Args:
            message: Error message
            code: Error code
            details: Additional error details
            cause: Underlying exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        parts = [f"[{self.code.name}] {self.message}"]
        if self.cause:
            parts.append(f"Caused by: {self.cause}")
        return " | ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        result = {
            "code": self.code.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.cause:
            result["cause"] = str(self.cause)
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> PocketBaseError:
        """
        Create error from dictionary representation.

        Subclass constructors take different arguments, so the result is
        always a plain :class:`PocketBaseError` carrying the original code,
        message and details, whichever class this is called on.
        """
        try:
            code = ErrorCode(data.get("code", ErrorCode.UNKNOWN))
        except ValueError:
            code = ErrorCode.UNKNOWN
        return PocketBaseError(data.get("message", "Unknown error"), code, data.get("details"))


class ConfigurationError(PocketBaseError):
    """Invalid or missing client configuration."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCode.CONFIGURATION, details)


class TransportError(PocketBaseError):
    """Connection refused, timeout, DNS or TLS failures."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None,
                 cause: Optional[BaseException] = None):
        super().__init__(message, ErrorCode.TRANSPORT, details, cause)


class HttpStatusError(PocketBaseError):
    """Generic non-2xx response."""

    def __init__(self, status: int, url: str, body_snippet: str = "",
                 message: Optional[str] = None, code: ErrorCode = ErrorCode.HTTP_STATUS):
        super().__init__(
            message or f"http error {status} for {url}: {body_snippet}",
            code,
            {"status": status, "url": url},
        )
        self.status = status
        self.url = url
        self.body_snippet = body_snippet


class NotFoundError(HttpStatusError):
    """A single record (collection + identifier) was not found."""

    def __init__(self, collection: str, identifier: str, body_snippet: str = "", url: str = ""):
        super().__init__(
            404,
            url,
            body_snippet,
            message=f"record not found: collection='{collection}', id='{identifier}'",
            code=ErrorCode.NOT_FOUND,
        )
        self.collection = collection
        self.identifier = identifier
        self.details.update({"collection": collection, "identifier": identifier})


class ValidationFailure(HttpStatusError):
    """
    Structured 4xx field-validation failure returned by the server.

    ``status`` is the HTTP status of the response; the status reported inside
    the body stays available as ``response.status``.
    """

    def __init__(self, response: ErrorResponse, url: str = "", body_snippet: str = "",
                 status: Optional[int] = None):
        if status is None:
            status = response.status
        super().__init__(
            status,
            url,
            body_snippet,
            message=f"{response.message} ({status})",
            code=ErrorCode.VALIDATION,
        )
        self.response = response

    @property
    def field_errors(self) -> Dict[str, Any]:
        return dict(self.response.data)


class DecodeError(PocketBaseError):
    """
    Success response whose JSON did not match the expected shape.

    ``path`` is the location inside the document where decoding diverged,
    e.g. ``items[3].created``.
    """

    def __init__(self, path: str, source: Any, body_snippet: str = "", url: str = ""):
        super().__init__(
            f"json decode error at `{path}`: {source}",
            ErrorCode.DECODE,
            {"path": path, "url": url},
            source if isinstance(source, BaseException) else None,
        )
        self.path = path
        self.source = source
        self.body_snippet = body_snippet
        self.url = url


class PaginationError(PocketBaseError):
    """Auto-pagination could not converge on the reported total."""

    def __init__(self, message: str, pages: int, collected: int, total_items: int):
        super().__init__(
            message,
            ErrorCode.PAGINATION,
            {"pages": pages, "collected": collected, "totalItems": total_items},
        )
        self.pages = pages
        self.collected = collected
        self.total_items = total_items


class AuthError(PocketBaseError):
    """
    Authentication failure.

    Tagged as either ``Validation`` (carrying the server's ``ErrorResponse``)
    or ``Other`` (carrying a descriptive message). The tagged form survives a
    round trip through :meth:`to_json` and :meth:`from_json`.
    """

    VALIDATION = "Validation"
    OTHER = "Other"

    def __init__(self, variant: str, payload: Any, cause: Optional[BaseException] = None):
        if variant not in (self.VALIDATION, self.OTHER):
            raise ValueError(f"Unknown AuthError variant: {variant}")
        self.variant = variant
        self.payload = payload
        if variant == self.VALIDATION:
            message = f"{payload.message} ({payload.status})"
        else:
            message = str(payload)
        super().__init__(message, ErrorCode.AUTHENTICATION, cause=cause)

    @classmethod
    def validation(cls, response: ErrorResponse) -> AuthError:
        return cls(cls.VALIDATION, response)

    @classmethod
    def other(cls, message: str, cause: Optional[BaseException] = None) -> AuthError:
        return cls(cls.OTHER, message, cause)

    @property
    def is_validation(self) -> bool:
        return self.variant == self.VALIDATION

    @property
    def response(self) -> Optional[ErrorResponse]:
        """The validation payload, or None for ``Other``."""
        return self.payload if self.is_validation else None

    def to_json(self) -> str:
        """Serialise to the tagged ``{"variant", "payload"}`` representation."""
        if self.is_validation:
            payload = self.payload.model_dump(mode="json")
        else:
            payload = self.payload
        return json.dumps({"variant": self.variant, "payload": payload})

    @classmethod
    def from_json(cls, raw: str) -> AuthError:
        """
        Parse the tagged representation produced by :meth:`to_json`.

        Input that is not a valid tagged document becomes ``Other(raw)``.
        """
        from .models import ErrorResponse
        from pydantic import ValidationError as PydanticValidationError

        try:
            data = json.loads(raw)
        except ValueError:
            return cls.other(raw)
        if not isinstance(data, dict):
            return cls.other(raw)

        variant = data.get("variant")
        if variant == cls.VALIDATION:
            try:
                return cls.validation(ErrorResponse.model_validate(data.get("payload")))
            except PydanticValidationError:
                return cls.other(raw)
        if variant == cls.OTHER and isinstance(data.get("payload"), str):
            return cls.other(data["payload"])
        return cls.other(raw)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AuthError):
            return NotImplemented
        return self.variant == other.variant and self.payload == other.payload

    __hash__ = Exception.__hash__


# Every exception a single-record view may raise
RecordViewError = (NotFoundError, HttpStatusError, DecodeError, TransportError)


__all__ = [
    "SNIPPET_LIMIT",
    "ErrorCode",
    "body_snippet",
    "PocketBaseError",
    "ConfigurationError",
    "TransportError",
    "HttpStatusError",
    "NotFoundError",
    "ValidationFailure",
    "DecodeError",
    "PaginationError",
    "AuthError",
    "RecordViewError",
]
