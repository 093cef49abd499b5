"""
Auto-pagination over list builders.

Pages are fetched sequentially starting at page 1. Each request re-sends the
builder's filter/sort/expand unchanged; only the page number advances.
Collection stops once the number of items gathered equals the
``total_items`` reported by the most recent page. Items keep the server's
order and are not deduplicated, so a data set that changes between page
fetches may yield duplicates or omissions.
"""

from __future__ import annotations
import logging
from typing import TYPE_CHECKING, Iterator, List, Optional, TypeVar

from .errors import PaginationError
from .models import Page

if TYPE_CHECKING:
    from .builders import ListRequestBuilder

logger = logging.getLogger(__name__)

T = TypeVar("T")

FETCH_ALL_PER_PAGE = 1000


def iter_pages(
    builder: ListRequestBuilder[T],
    per_page: int = FETCH_ALL_PER_PAGE,
    max_pages: Optional[int] = None,
) -> Iterator[Page[T]]:
    """
    Yield successive pages until the reported total has been collected.

    Args:
        builder: List builder whose filter/sort/expand are reused
        per_page: Page size used for every request
        max_pages: Optional upper bound on the number of requests

    Yields:
        Each fetched page, in order

    Raises:
        PaginationError: If ``max_pages`` is exceeded, or a page comes back
            empty before the total is reached
    """
    if max_pages is not None and max_pages < 1:
        raise ValueError(f"max_pages must be >= 1, got {max_pages}")

    base = builder.per_page(per_page)
    collected = 0
    page_number = 1

    while True:
        if max_pages is not None and page_number > max_pages:
            raise PaginationError(
                f"{builder.path}: gave up after {max_pages} pages "
                f"with {collected} items collected",
                pages=max_pages,
                collected=collected,
                total_items=page.total_items,
            )

        page = base.page(page_number).execute()
        collected += len(page.items)
        logger.debug(
            "%s page %d: %d items (%d/%d)",
            builder.path, page_number, len(page.items), collected, page.total_items,
        )
        yield page

        if collected == page.total_items:
            return
        if not page.items:
            raise PaginationError(
                f"{builder.path}: page {page_number} was empty with "
                f"{collected} of {page.total_items} items collected",
                pages=page_number,
                collected=collected,
                total_items=page.total_items,
            )
        page_number += 1


def fetch_all(
    builder: ListRequestBuilder[T],
    per_page: int = FETCH_ALL_PER_PAGE,
    max_pages: Optional[int] = None,
) -> List[T]:
    """Concatenate the items of every page yielded by :func:`iter_pages`."""
    items: List[T] = []
    for page in iter_pages(builder, per_page=per_page, max_pages=max_pages):
        items.extend(page.items)
    return items
