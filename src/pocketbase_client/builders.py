"""
Request builders.

Builders are immutable: every setter returns a new builder with exactly one
option changed, so a base builder can be shared across derived queries.
Each builder has a single terminal :meth:`execute`. One generic engine
serves every resource; resources differ only in path, item type and
query-parameter naming (:class:`QueryStyle`).
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, Generic, List, Optional, Tuple, TypeVar

from .decoding import classify, expect_status
from .models import CreateResponse, Page
from .pagination import fetch_all

if TYPE_CHECKING:
    from .client import BaseClient

T = TypeVar("T")

DEFAULT_PAGE = 1
DEFAULT_PER_PAGE = 100


@dataclass(frozen=True)
class QueryStyle:
    """
    Query-string contract of one resource family.

    ``options`` lists the supported option names in the order they are
    emitted; paging parameters always follow them.
    """

    options: Tuple[str, ...] = ("filter", "sort", "expand")
    per_page_param: str = "perPage"
    page_param: str = "page"


RECORDS_STYLE = QueryStyle()
COLLECTIONS_STYLE = QueryStyle(per_page_param="per_page")
LOGS_STYLE = QueryStyle(options=("sort", "filter"))


@dataclass(frozen=True)
class ListOptions:
    """Filtering, sorting, expansion and paging options of a list request."""

    filter: Optional[str] = None
    sort: Optional[str] = None
    expand: Optional[str] = None
    page: int = DEFAULT_PAGE
    per_page: int = DEFAULT_PER_PAGE

    def __post_init__(self):
        if self.page < 1:
            raise ValueError(f"page must be >= 1, got {self.page}")
        if self.per_page < 1:
            raise ValueError(f"per_page must be >= 1, got {self.per_page}")

    def to_query(self, style: QueryStyle) -> List[Tuple[str, str]]:
        """Serialise to an ordered list of query parameters."""
        query = []
        for name in style.options:
            value = getattr(self, name)
            if value is not None:
                query.append((name, value))
        query.append((style.per_page_param, str(self.per_page)))
        query.append((style.page_param, str(self.page)))
        return query


@dataclass(frozen=True)
class RequestBuilder:
    """Common state of every builder: the client and the resource path."""

    client: BaseClient = field(repr=False, compare=False)
    path: str

    @property
    def url(self) -> str:
        return self.client.build_url(self.path)


@dataclass(frozen=True)
class ListRequestBuilder(RequestBuilder, Generic[T]):
    """
    Paged list of ``item_type`` values.

    Example:
        ```python
        base = client.records("posts", Post).list().filter("published = true")
        newest = base.sort("-created").execute()
        second = base.page(2).execute()
        everything = base.fetch_all()
        ```
    """

    item_type: Any = dict
    options: ListOptions = field(default_factory=ListOptions)
    style: QueryStyle = RECORDS_STYLE

    def _with_option(self, name: str, value: Any) -> ListRequestBuilder[T]:
        if name in ("filter", "sort", "expand") and name not in self.style.options:
            raise ValueError(f"'{name}' is not supported by {self.path}")
        return replace(self, options=replace(self.options, **{name: value}))

    def filter(self, expression: str) -> ListRequestBuilder[T]:
        return self._with_option("filter", expression)

    def sort(self, expression: str) -> ListRequestBuilder[T]:
        return self._with_option("sort", expression)

    def expand(self, relations: str) -> ListRequestBuilder[T]:
        return self._with_option("expand", relations)

    def page(self, page: int) -> ListRequestBuilder[T]:
        return self._with_option("page", page)

    def per_page(self, per_page: int) -> ListRequestBuilder[T]:
        return self._with_option("per_page", per_page)

    def query(self) -> List[Tuple[str, str]]:
        return self.options.to_query(self.style)

    def execute(self) -> Page[T]:
        """
        Fetch one page.

        Returns:
            The requested page

        Raises:
            TransportError: Network failure
            HttpStatusError: Non-2xx response
            DecodeError: Body does not match ``Page[item_type]``
        """
        url = self.url
        response = self.client.send("GET", url, params=self.query())
        return classify(response, Page[self.item_type], url)

    def fetch_all(self, max_pages: Optional[int] = None) -> List[T]:
        """
        Collect every item matching this builder's filter/sort/expand.

        See :func:`pocketbase_client.pagination.fetch_all`.
        """
        return fetch_all(self, max_pages=max_pages)


@dataclass(frozen=True)
class ViewRequestBuilder(RequestBuilder, Generic[T]):
    """
    Single resource of type ``response_type``.

    When ``not_found`` is set to ``(collection, identifier)``, a 404 is
    raised as :class:`NotFoundError` instead of a generic status error.
    """

    response_type: Any = dict
    not_found: Optional[Tuple[str, str]] = None

    def execute(self) -> T:
        url = self.url
        response = self.client.send("GET", url)
        return classify(response, self.response_type, url, not_found=self.not_found)


@dataclass(frozen=True)
class CreateRequestBuilder(RequestBuilder, Generic[T]):
    """POST ``record`` to the resource path."""

    record: Any = None

    def execute(self) -> CreateResponse:
        """
        Create the record.

        Returns:
            Creation acknowledgment (id and timestamps)

        Raises:
            ValidationFailure: Server rejected one or more fields
            HttpStatusError: Other non-2xx response
            DecodeError: Acknowledgment could not be decoded
        """
        url = self.url
        response = self.client.send("POST", url, json=self.record)
        return classify(response, CreateResponse, url, validation=True)


@dataclass(frozen=True)
class UpdateRequestBuilder(RequestBuilder, Generic[T]):
    """PATCH ``record`` onto an existing resource."""

    record: Any = None

    def execute(self) -> T:
        """
        Update the record.

        The server's response body is only checked for success; the record
        passed by the caller is returned unchanged.

        Raises:
            ValidationFailure: Server rejected one or more fields
            HttpStatusError: Other non-2xx response
        """
        url = self.url
        response = self.client.send("PATCH", url, json=self.record)
        classify(response, None, url, validation=True)
        return self.record


@dataclass(frozen=True)
class DestroyRequestBuilder(RequestBuilder):
    """DELETE a resource. Only ``204 No Content`` counts as success."""

    def execute(self) -> None:
        url = self.url
        response = self.client.send("DELETE", url)
        expect_status(response, 204, url)


__all__ = [
    "DEFAULT_PAGE",
    "DEFAULT_PER_PAGE",
    "QueryStyle",
    "RECORDS_STYLE",
    "COLLECTIONS_STYLE",
    "LOGS_STYLE",
    "ListOptions",
    "RequestBuilder",
    "ListRequestBuilder",
    "ViewRequestBuilder",
    "CreateRequestBuilder",
    "UpdateRequestBuilder",
    "DestroyRequestBuilder",
]
