"""
Test builder defaults, immutability and query-string serialisation.
"""

import pytest

from helpers import BASE_URL, json_response, page_payload

from pocketbase_client import ListOptions, ListRequestBuilder

SETTERS = [
    ("filter", "status = 'draft'"),
    ("sort", "-created"),
    ("expand", "author"),
    ("page", 3),
    ("per_page", 25),
]


def test_list_defaults(client):
    builder = client.records("posts").list()

    assert builder.options == ListOptions()
    assert builder.options.page == 1
    assert builder.options.per_page == 100
    assert builder.options.filter is None
    assert builder.options.sort is None
    assert builder.options.expand is None


@pytest.mark.parametrize("name, value", SETTERS)
def test_setter_returns_new_builder(client, name, value):
    original = client.records("posts").list()
    before = original.options

    derived = getattr(original, name)(value)

    assert derived is not original
    assert original.options == before
    assert getattr(derived.options, name) == value
    # Exactly one option changed
    changed = [
        field for field in ("filter", "sort", "expand", "page", "per_page")
        if getattr(derived.options, field) != getattr(before, field)
    ]
    assert changed == [name]


def test_shared_base_builder(client):
    base = client.records("posts").list().filter("published = true")

    by_date = base.sort("-created")
    second_page = base.page(2)

    assert base.options.sort is None
    assert base.options.page == 1
    assert by_date.options.filter == second_page.options.filter == "published = true"
    assert by_date.options.page == 1
    assert second_page.options.sort is None


def test_builders_are_values(client):
    a = client.records("posts").list().sort("-created")
    b = client.records("posts").list().sort("-created")
    assert a == b
    assert a != a.page(2)


@pytest.mark.parametrize("bad", [0, -1])
def test_paging_must_be_positive(client, bad):
    builder = client.records("posts").list()
    with pytest.raises(ValueError):
        builder.page(bad)
    with pytest.raises(ValueError):
        builder.per_page(bad)


class TestQueryStrings:

    def test_records_query(self, client):
        builder = (
            client.records("posts").list()
            .per_page(10).page(2).expand("author").sort("-created").filter("a = 1")
        )
        assert builder.query() == [
            ("filter", "a = 1"),
            ("sort", "-created"),
            ("expand", "author"),
            ("perPage", "10"),
            ("page", "2"),
        ]

    def test_unset_options_are_omitted(self, client):
        assert client.records("posts").list().query() == [("perPage", "100"), ("page", "1")]

    def test_collections_use_snake_case_page_size(self, client):
        builder = client.collections().list().filter("system = false")
        assert builder.query() == [("filter", "system = false"), ("per_page", "100"), ("page", "1")]

    def test_logs_order_and_options(self, client):
        builder = client.logs().list().filter("status >= 400").sort("-created")
        assert builder.query() == [
            ("sort", "-created"),
            ("filter", "status >= 400"),
            ("perPage", "100"),
            ("page", "1"),
        ]

    def test_logs_reject_expand(self, client):
        with pytest.raises(ValueError):
            client.logs().list().expand("anything")

    def test_execute_sends_query_and_path(self, client, transport):
        transport.route(
            "GET",
            "/api/collections/posts/records",
            json_response(200, page_payload([], 2, 10, 0)),
        )

        client.records("posts").list().sort("title").page(2).per_page(10).execute()

        sent = transport.last
        assert sent.method == "GET"
        assert sent.url == f"{BASE_URL}/api/collections/posts/records"
        assert sent.params == [("sort", "title"), ("perPage", "10"), ("page", "2")]
        assert sent.body is None
        assert "Content-Type" not in sent.headers


def test_builder_reuse(client, transport):
    transport.route(
        "GET",
        "/api/collections/posts/records",
        json_response(200, page_payload([{"id": "p1"}], 1, 100, 1)),
    )
    builder = client.records("posts").list()

    first = builder.execute()
    second = builder.execute()

    assert first == second
    assert len(transport.requests) == 2
    assert isinstance(builder, ListRequestBuilder)
