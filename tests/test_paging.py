"""Tests for paging through query/scan results."""

from __future__ import annotations

import pytest

from awskit.integrations.dynamo_client import ConsistentReadSource
from awskit.services.paging import PagingQueryRunner

THREE_PAGES = [
    {"Items": [1], "LastEvaluatedKey": {"id": "a"}},
    {"Items": [2], "LastEvaluatedKey": {"id": "b"}},
    {"Items": [3]},
]


async def test_query_all_accumulates_every_page(scripted_source) -> None:
    """Items from every page are concatenated after exactly one request per page."""
    source = scripted_source(THREE_PAGES)

    items = await PagingQueryRunner(source).query_all({"TableName": "plans"})

    assert items == [1, 2, 3]
    assert len(source.requests) == 3


async def test_continuation_key_is_passed_to_the_next_request(scripted_source) -> None:
    source = scripted_source(THREE_PAGES)

    await PagingQueryRunner(source).scan_all({"TableName": "plans"})

    assert [params.get("ExclusiveStartKey") for _, params in source.requests] == [
        None,
        {"id": "a"},
        {"id": "b"},
    ]
    assert {operation for operation, _ in source.requests} == {"scan"}


async def test_pages_without_items_contribute_nothing(scripted_source) -> None:
    """The service may omit Items on an empty page."""
    source = scripted_source([{"LastEvaluatedKey": {"id": "a"}}, {"Items": [7]}])

    assert await PagingQueryRunner(source).query_all({"TableName": "plans"}) == [7]


async def test_paged_callback_runs_before_next_request(scripted_source) -> None:
    """Each page is handed over, and awaited, before the next page is fetched."""
    source = scripted_source(THREE_PAGES)
    seen = []

    async def on_page(items):
        seen.append((list(items), len(source.requests)))

    await PagingQueryRunner(source).query_paged({"TableName": "plans"}, on_page)

    assert seen == [([1], 1), ([2], 2), ([3], 3)]


async def test_failing_callback_stops_paging(scripted_source) -> None:
    source = scripted_source(THREE_PAGES)

    async def on_page(items):
        if items == [2]:
            raise RuntimeError("downstream refused page")

    with pytest.raises(RuntimeError, match="downstream"):
        await PagingQueryRunner(source).scan_paged({"TableName": "plans"}, on_page)

    assert len(source.requests) == 2


async def test_consumer_can_stop_iterating_early(scripted_source) -> None:
    source = scripted_source(THREE_PAGES)

    async for page in PagingQueryRunner(source).iter_pages("query", {"TableName": "plans"}):
        assert page == [1]
        break

    assert len(source.requests) == 1


async def test_iter_pages_rejects_unknown_operations(scripted_source) -> None:
    runner = PagingQueryRunner(scripted_source([]))

    with pytest.raises(ValueError, match="Unsupported"):
        async for _ in runner.iter_pages("get_item", {}):
            pass


async def test_consistent_read_source_flags_every_request(scripted_source) -> None:
    """The wrapper adds ConsistentRead without touching the caller's params."""
    source = scripted_source(THREE_PAGES)
    params = {"TableName": "plans"}

    await PagingQueryRunner(ConsistentReadSource(source)).query_all(params)

    assert all(request["ConsistentRead"] is True for _, request in source.requests)
    assert params == {"TableName": "plans"}
