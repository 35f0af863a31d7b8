from __future__ import annotations

from typing import Any, Mapping, Sequence

from ..client import ClientRegistry, CredentialError, resolve_registry
from ..config import ENV_SITE_URL
from ..dates import DateRangeInput, date_range_label, parse_search_console_date_range
from ..schema import SAVE, SaveOptions
from ..storage import save_if_requested
from .reports import resolve_date_range

CATEGORY = "searchconsole"
DEFAULT_ROW_LIMIT = 1000


def require_site_url(registry: ClientRegistry) -> str:
    site_url = registry.site_url()
    if not site_url:
        raise CredentialError(f"{ENV_SITE_URL} is required for Search Console operations")
    return site_url


def _run_query(service, site_url: str, body: dict) -> dict:
    return service.searchanalytics().query(siteUrl=site_url, body=body).execute()


def query_search_analytics(
    dimensions: Sequence[str] | None = None,
    date_range: DateRangeInput | None = None,
    *,
    row_limit: int = DEFAULT_ROW_LIMIT,
    search_type: str | None = None,
    dimension_filter_groups: Sequence[dict[str, Any]] | None = None,
    operation: str = "search_analytics",
    save: SaveOptions = SAVE,
    registry: ClientRegistry | None = None,
) -> dict[str, Any]:
    registry = resolve_registry(registry)
    date_range = resolve_date_range(date_range)
    wire_range = parse_search_console_date_range(date_range)
    if not isinstance(wire_range, Mapping) or not {"startDate", "endDate"} <= wire_range.keys():
        raise ValueError(f"Unsupported Search Console date range: {date_range!r}")

    body: dict[str, Any] = {
        "startDate": wire_range["startDate"],
        "endDate": wire_range["endDate"],
        "dimensions": list(dimensions or []),
        "rowLimit": max(1, int(row_limit)),
    }
    if search_type:
        body["type"] = search_type
    if dimension_filter_groups:
        body["dimensionFilterGroups"] = list(dimension_filter_groups)

    site_url = require_site_url(registry)
    response = _run_query(registry.search_console(), site_url, body)

    save_if_requested(save, response, CATEGORY, operation, date_range_label(date_range))
    return response


def get_top_queries(
    date_range: DateRangeInput | None = None,
    *,
    row_limit: int = DEFAULT_ROW_LIMIT,
    save: SaveOptions = SAVE,
    registry: ClientRegistry | None = None,
) -> dict[str, Any]:
    return query_search_analytics(
        ["query"],
        date_range,
        row_limit=row_limit,
        operation="top_queries",
        save=save,
        registry=registry,
    )


def get_top_pages(
    date_range: DateRangeInput | None = None,
    *,
    row_limit: int = DEFAULT_ROW_LIMIT,
    save: SaveOptions = SAVE,
    registry: ClientRegistry | None = None,
) -> dict[str, Any]:
    return query_search_analytics(
        ["page"],
        date_range,
        row_limit=row_limit,
        operation="top_pages",
        save=save,
        registry=registry,
    )


def get_device_performance(
    date_range: DateRangeInput | None = None,
    *,
    save: SaveOptions = SAVE,
    registry: ClientRegistry | None = None,
) -> dict[str, Any]:
    return query_search_analytics(
        ["device"],
        date_range,
        operation="device_performance",
        save=save,
        registry=registry,
    )


def get_country_performance(
    date_range: DateRangeInput | None = None,
    *,
    row_limit: int = DEFAULT_ROW_LIMIT,
    save: SaveOptions = SAVE,
    registry: ClientRegistry | None = None,
) -> dict[str, Any]:
    return query_search_analytics(
        ["country"],
        date_range,
        row_limit=row_limit,
        operation="country_performance",
        save=save,
        registry=registry,
    )


def get_search_appearance(
    date_range: DateRangeInput | None = None,
    *,
    save: SaveOptions = SAVE,
    registry: ClientRegistry | None = None,
) -> dict[str, Any]:
    return query_search_analytics(
        ["searchAppearance"],
        date_range,
        operation="search_appearance",
        save=save,
        registry=registry,
    )
