from datetime import date, timedelta
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from ga4_toolkit.api.searchconsole import (
    get_country_performance,
    get_device_performance,
    get_search_appearance,
    get_top_pages,
    get_top_queries,
    query_search_analytics,
)
from ga4_toolkit.client import ClientRegistry, CredentialError
from ga4_toolkit.schema import NO_SAVE
from ga4_toolkit.storage import list_results, load_result


def _query_call(service: MagicMock):
    return service.searchanalytics.return_value.query.call_args


def test_query_with_shorthand_range(registry: ClientRegistry, search_console_service: MagicMock) -> None:
    response = query_search_analytics(["query"], "7d", registry=registry)

    today = date.today()
    call = _query_call(search_console_service)
    assert call.kwargs["siteUrl"] == "https://example.com"
    assert call.kwargs["body"] == {
        "startDate": (today - timedelta(days=7)).isoformat(),
        "endDate": today.isoformat(),
        "dimensions": ["query"],
        "rowLimit": 1000,
    }
    row = response["rows"][0]
    assert {"keys", "clicks", "impressions", "ctr", "position"} <= set(row)


def test_query_with_explicit_range(registry: ClientRegistry, search_console_service: MagicMock) -> None:
    query_search_analytics(
        ["page", "query"],
        {"startDate": "2024-01-01", "endDate": "2024-01-31"},
        row_limit=50,
        search_type="image",
        dimension_filter_groups=[{"filters": [{"dimension": "country", "expression": "usa"}]}],
        registry=registry,
    )

    body = _query_call(search_console_service).kwargs["body"]
    assert body["startDate"] == "2024-01-01"
    assert body["endDate"] == "2024-01-31"
    assert body["rowLimit"] == 50
    assert body["type"] == "image"
    assert body["dimensionFilterGroups"][0]["filters"][0]["dimension"] == "country"
    assert list_results("searchconsole")[0].name.endswith("__search_analytics__custom.json")


def test_query_saves_raw_response(registry: ClientRegistry) -> None:
    response = query_search_analytics(["query"], "28d", registry=registry)

    paths = list_results("searchconsole")
    assert len(paths) == 1
    assert paths[0].name.endswith("__search_analytics__28d.json")
    assert load_result(paths[0]).data == response


def test_query_without_saving(registry: ClientRegistry, results_dir: Path) -> None:
    query_search_analytics(["query"], save=NO_SAVE, registry=registry)
    assert not (results_dir / "searchconsole").exists()


def test_empty_response_is_returned_and_saved_as_sent(
    registry: ClientRegistry, search_console_service: MagicMock
) -> None:
    raw = {"responseAggregationType": "byProperty"}
    search_console_service.searchanalytics.return_value.query.return_value.execute.side_effect = lambda: dict(raw)

    response = query_search_analytics(["query"], "7d", registry=registry)

    assert response == raw
    assert load_result(list_results("searchconsole")[0]).data == raw


def test_range_missing_end_date_raises(registry: ClientRegistry, search_console_service: MagicMock) -> None:
    with pytest.raises(ValueError, match="Unsupported Search Console date range"):
        query_search_analytics(["query"], {"startDate": "2024-01-01"}, registry=registry)
    search_console_service.searchanalytics.assert_not_called()


def test_missing_site_url_raises(
    registry: ClientRegistry, search_console_service: MagicMock, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.delenv("SEARCH_CONSOLE_SITE_URL")
    with pytest.raises(CredentialError, match="SEARCH_CONSOLE_SITE_URL"):
        get_top_queries(registry=registry)
    search_console_service.searchanalytics.assert_not_called()


def test_unsupported_range_raises(registry: ClientRegistry) -> None:
    with pytest.raises(ValueError, match="Unsupported Search Console date range"):
        query_search_analytics(["query"], "last month", registry=registry)


@pytest.mark.parametrize(
    ("function", "operation", "dimension"),
    [
        (get_top_queries, "top_queries", "query"),
        (get_top_pages, "top_pages", "page"),
        (get_device_performance, "device_performance", "device"),
        (get_country_performance, "country_performance", "country"),
        (get_search_appearance, "search_appearance", "searchAppearance"),
    ],
)
def test_named_queries(
    registry: ClientRegistry, search_console_service: MagicMock, function, operation: str, dimension: str
) -> None:
    response = function("30d", registry=registry)

    assert isinstance(response["rows"], list)
    assert _query_call(search_console_service).kwargs["body"]["dimensions"] == [dimension]
    assert list_results("searchconsole")[0].name.endswith(f"__{operation}__30d.json")
