"""
Response classification and path-precise JSON decoding.

Every raw response goes through :func:`classify`, which either returns the
decoded success value or raises the matching exception from
:mod:`pocketbase_client.errors`. Nothing is retried.
"""

from __future__ import annotations
import functools
import json
from typing import Any, Optional, Sequence, Tuple, Union

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from .errors import (
    DecodeError,
    HttpStatusError,
    NotFoundError,
    ValidationFailure,
    body_snippet,
)
from .models import ErrorResponse
from .transport import TransportResponse


def format_path(loc: Sequence[Union[str, int]]) -> str:
    """
    Render a pydantic error location as a JSON path.

    ``('items', 2, 'created')`` becomes ``items[2].created``; the empty
    location (document root) becomes ``.``.
    """
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        elif path:
            path += f".{part}"
        else:
            path = str(part)
    return path or "."


def document_loc(
    document: Any, loc: Sequence[Union[str, int]], missing: bool = False
) -> Tuple[Union[str, int], ...]:
    """
    Keep only the parts of ``loc`` that address ``document``.

    Validators add entries of their own to an error location (union members,
    dict key markers); those name nothing in the JSON and are dropped. For a
    ``missing`` error the final key is kept even though it is absent.
    """
    kept = []
    node = document
    for i, part in enumerate(loc):
        if isinstance(node, list) and isinstance(part, int) and 0 <= part < len(node):
            kept.append(part)
            node = node[part]
        elif isinstance(node, dict) and part in node:
            kept.append(part)
            node = node[part]
        elif missing and isinstance(node, dict) and i == len(loc) - 1:
            kept.append(part)
    return tuple(kept)


@functools.lru_cache(maxsize=256)
def _adapter(target: Any) -> TypeAdapter:
    return TypeAdapter(target)


def encode(value: Any) -> bytes:
    """Serialise a request body (dict, pydantic model, dataclass, ...) to JSON."""
    return _adapter(type(value)).dump_json(value, by_alias=True)


def decode(body: bytes, target: Any, url: str = "") -> Any:
    """
    Decode a JSON body into ``target``.

    Args:
        body: Raw response body
        target: Any type pydantic can validate (model, ``List[...]``, ...)
        url: Request URL, kept on the error for diagnostics

    Returns:
        The validated value

    Raises:
        DecodeError: With the path of the first field that failed
    """
    try:
        return _adapter(target).validate_json(body or b"")
    except PydanticValidationError as e:
        first = e.errors(include_url=False)[0]
        loc = first.get("loc", ())
        if first.get("type") != "json_invalid":
            loc = document_loc(json.loads(body), loc, missing=first.get("type") == "missing")
        path = format_path(loc)
        raise DecodeError(path, first.get("msg", str(e)), body_snippet(body), url) from e


def classify(
    response: TransportResponse,
    target: Any,
    url: str,
    not_found: Optional[Tuple[str, str]] = None,
    validation: bool = False,
) -> Any:
    """
    Turn a raw response into a success value or a typed failure.

    Args:
        response: Raw transport response
        target: Expected success type; ``None`` skips decoding
        url: Request URL
        not_found: ``(collection, identifier)`` when a 404 means the single
            requested record does not exist
        validation: Whether a 4xx body may carry an ``ErrorResponse``

    Returns:
        Decoded success value (``None`` if ``target`` is ``None``)

    Raises:
        DecodeError: 2xx body does not match ``target``
        NotFoundError: 404 on a single-record lookup
        ValidationFailure: 4xx with a structured validation body
        HttpStatusError: Any other non-2xx status
    """
    status = response.status_code
    if response.is_success:
        if target is None:
            return None
        return decode(response.content, target, url)

    snippet = body_snippet(response.content)
    if status == 404 and not_found is not None:
        collection, identifier = not_found
        raise NotFoundError(collection, identifier, snippet, url)

    if validation and response.is_client_error:
        error_response = parse_error_response(response.content)
        if error_response is not None:
            raise ValidationFailure(error_response, url, snippet, status)

    raise HttpStatusError(status, url, snippet)


def parse_error_response(body: bytes) -> Optional[ErrorResponse]:
    """Decode a validation payload, or return None if the body is not one."""
    try:
        return ErrorResponse.model_validate_json(body or b"")
    except PydanticValidationError:
        return None


def expect_status(response: TransportResponse, status: int, url: str) -> None:
    """
    Require an exact status code.

    Raises:
        HttpStatusError: For any other status, including other 2xx codes
    """
    if response.status_code != status:
        raise HttpStatusError(response.status_code, url, body_snippet(response.content))
