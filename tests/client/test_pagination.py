"""
Test auto-pagination.
"""

import math

import pytest

from helpers import json_response, page_payload

from pocketbase_client import PaginationError, iter_pages

RECORDS = "/api/collections/posts/records"


def serve_dataset(transport, total, reported_total=None, path=RECORDS):
    """Serve ``total`` records, paginated by the request's page/perPage."""
    reported = total if reported_total is None else reported_total

    def responder(request):
        query = request.query
        page = int(query["page"])
        per_page = int(query["perPage"])
        start = (page - 1) * per_page
        items = [{"id": f"r{i}"} for i in range(start, min(start + per_page, total))]
        return json_response(200, page_payload(items, page, per_page, reported))

    transport.route("GET", path, responder)


def test_fetch_all_collects_every_page(client, transport):
    serve_dataset(transport, 2500)

    items = client.records("posts").list().fetch_all()

    assert len(items) == 2500
    assert [item["id"] for item in items] == [f"r{i}" for i in range(2500)]
    assert [r.query["page"] for r in transport.requests] == ["1", "2", "3"]
    assert {r.query["perPage"] for r in transport.requests} == {"1000"}


@pytest.mark.parametrize("total, per_page", [(1, 1), (10, 3), (9, 3), (7, 100), (250, 50)])
def test_number_of_fetches(client, transport, total, per_page):
    serve_dataset(transport, total)

    pages = list(iter_pages(client.records("posts").list(), per_page=per_page))

    assert len(transport.requests) == math.ceil(total / per_page)
    assert sum(len(page.items) for page in pages) == total


def test_options_resent_on_every_page(client, transport):
    serve_dataset(transport, 5)
    builder = client.records("posts").list().filter("a = 1").sort("-created").expand("author")

    list(iter_pages(builder, per_page=2))

    assert len(transport.requests) == 3
    for number, request in enumerate(transport.requests, start=1):
        assert request.params == [
            ("filter", "a = 1"),
            ("sort", "-created"),
            ("expand", "author"),
            ("perPage", "2"),
            ("page", str(number)),
        ]


def test_original_builder_paging_ignored(client, transport):
    serve_dataset(transport, 3)

    items = client.records("posts").list().page(5).per_page(1).fetch_all()

    assert len(items) == 3
    assert transport.requests[0].query["page"] == "1"


def test_empty_collection(client, transport):
    serve_dataset(transport, 0)

    assert client.records("posts").fetch_all() == []
    assert len(transport.requests) == 1


def test_max_pages_bound(client, transport):
    serve_dataset(transport, 10)

    with pytest.raises(PaginationError) as exc_info:
        list(iter_pages(client.records("posts").list(), per_page=3, max_pages=2))

    assert exc_info.value.pages == 2
    assert exc_info.value.collected == 6
    assert len(transport.requests) == 2


def test_empty_page_before_total_stops(client, transport):
    # The server claims more items than it can serve
    serve_dataset(transport, 3, reported_total=5)

    with pytest.raises(PaginationError) as exc_info:
        list(iter_pages(client.records("posts").list(), per_page=2))

    assert exc_info.value.collected == 3
    assert exc_info.value.total_items == 5
    assert len(transport.requests) == 3


def test_collections_fetch_all_uses_collection_paging(client, transport):
    collection = {
        "id": "c1",
        "created": "2024-01-01T10:00:00Z",
        "updated": "2024-01-01T10:00:00Z",
        "type": "base",
        "name": "posts",
        "schema": [],
    }

    def responder(request):
        assert "per_page" in request.query
        return json_response(200, page_payload([collection], 1, 1000, 1))

    transport.route("GET", "/api/collections", responder)

    collections = client.collections().list().fetch_all()

    assert [c.name for c in collections] == ["posts"]
