from __future__ import annotations

import json
from datetime import datetime
from decimal import Decimal

import httpx
import pytest

from sales_insights.services import SeedSourceClient, SourceUnavailableError
from tests.conftest import SEED_SOURCE_URL, seed_record


def _client(handler) -> SeedSourceClient:  # type: ignore[no-untyped-def]
    return SeedSourceClient(SEED_SOURCE_URL, client=httpx.Client(transport=httpx.MockTransport(handler)))


def test_fetch_validates_records() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "GET"
        assert str(request.url) == SEED_SOURCE_URL
        assert request.headers["Accept"] == "application/json"
        return httpx.Response(200, json=[seed_record(), seed_record(title="Naive date", dateOfSale="2022-01-05T08:00:00")])

    records = _client(handler).fetch()

    assert len(records) == 2
    assert records[0].title == "Fjallraven Backpack"
    assert records[0].price == Decimal("329.85")
    assert records[0].date_of_sale == datetime(2021, 11, 27, 14, 59, 54)
    assert records[0].date_of_sale.tzinfo is None
    assert records[1].date_of_sale == datetime(2022, 1, 5, 8, 0)


def test_fetch_ignores_upstream_ids_and_unknown_fields() -> None:
    record = seed_record(id=99, rating={"rate": 3.9})
    records = _client(lambda request: httpx.Response(200, json=[record])).fetch()

    dumped = records[0].model_dump()
    assert "id" not in dumped
    assert "rating" not in dumped


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, json={"message": "boom"}),
        httpx.Response(404),
        httpx.Response(200, content=b"<html>not json</html>"),
        httpx.Response(200, json={"items": []}),
        httpx.Response(200, json=[{"title": "missing fields"}]),
    ],
)
def test_fetch_raises_source_unavailable(response: httpx.Response) -> None:
    with pytest.raises(SourceUnavailableError) as exc_info:
        _client(lambda request: response).fetch()

    assert exc_info.value.message == "Error fetching data"
    assert exc_info.value.detail


def test_fetch_wraps_transport_errors() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(SourceUnavailableError) as exc_info:
        _client(handler).fetch()

    assert "connection refused" in (exc_info.value.detail or "")


def test_fetch_handles_empty_feed() -> None:
    assert _client(lambda request: httpx.Response(200, content=json.dumps([]))).fetch() == []
