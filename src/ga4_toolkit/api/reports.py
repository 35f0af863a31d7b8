from __future__ import annotations

from typing import Any, Sequence

from ..client import ClientRegistry, resolve_registry
from ..config import get_settings
from ..dates import DateRangeInput, date_range_label, parse_date_range
from ..schema import SAVE, SaveOptions
from ..storage import save_if_requested

CATEGORY = "reports"

PAGE_VIEW_DIMENSIONS = ("pagePath", "pageTitle")
PAGE_VIEW_METRICS = ("screenPageViews", "activeUsers", "averageSessionDuration", "bounceRate")

TRAFFIC_SOURCE_DIMENSIONS = ("sessionSource", "sessionMedium")
TRAFFIC_SOURCE_METRICS = ("sessions", "activeUsers", "newUsers", "bounceRate")

DEMOGRAPHIC_DIMENSIONS = ("country", "deviceCategory")
DEMOGRAPHIC_METRICS = ("activeUsers", "sessions", "newUsers")

EVENT_DIMENSIONS = ("eventName",)
EVENT_METRICS = ("eventCount", "totalUsers")

CONVERSION_DIMENSIONS = ("eventName", "sessionSource")
CONVERSION_METRICS = ("conversions", "totalRevenue")


def resolve_date_range(date_range: DateRangeInput | None) -> DateRangeInput:
    if date_range is None:
        return get_settings().default_date_range
    return date_range


def _named(names: Sequence[str]) -> list[dict[str, str]]:
    return [{"name": name} for name in names]


def build_report_body(
    dimensions: Sequence[str],
    metrics: Sequence[str],
    date_range: DateRangeInput,
    *,
    dimension_filter: dict[str, Any] | None = None,
    order_bys: Sequence[dict[str, Any]] | None = None,
    limit: int | None = None,
) -> dict[str, Any]:
    body: dict[str, Any] = {
        "dimensions": _named(dimensions),
        "metrics": _named(metrics),
        "dateRanges": [parse_date_range(date_range)],
    }
    if dimension_filter:
        body["dimensionFilter"] = dimension_filter
    if order_bys:
        body["orderBys"] = list(order_bys)
    if limit is not None:
        body["limit"] = max(1, int(limit))
    return body


def run_report(
    dimensions: Sequence[str],
    metrics: Sequence[str],
    date_range: DateRangeInput | None = None,
    *,
    dimension_filter: dict[str, Any] | None = None,
    order_bys: Sequence[dict[str, Any]] | None = None,
    limit: int | None = None,
    operation: str = "custom_report",
    save: SaveOptions = SAVE,
    registry: ClientRegistry | None = None,
) -> dict[str, Any]:
    """Run a GA4 Data API report and return the raw response."""
    registry = resolve_registry(registry)
    date_range = resolve_date_range(date_range)
    body = build_report_body(
        dimensions,
        metrics,
        date_range,
        dimension_filter=dimension_filter,
        order_bys=order_bys,
        limit=limit,
    )

    service = registry.analytics_data()
    response = service.properties().runReport(property=registry.property_id(), body=body).execute()

    save_if_requested(save, response, CATEGORY, operation, date_range_label(date_range))
    return response


def get_page_views(
    date_range: DateRangeInput | None = None,
    *,
    dimensions: Sequence[str] = PAGE_VIEW_DIMENSIONS,
    metrics: Sequence[str] = PAGE_VIEW_METRICS,
    save: SaveOptions = SAVE,
    registry: ClientRegistry | None = None,
) -> dict[str, Any]:
    return run_report(
        dimensions,
        metrics,
        date_range,
        order_bys=[{"metric": {"metricName": "screenPageViews"}, "desc": True}],
        operation="page_views",
        save=save,
        registry=registry,
    )


def get_traffic_sources(
    date_range: DateRangeInput | None = None,
    *,
    dimensions: Sequence[str] = TRAFFIC_SOURCE_DIMENSIONS,
    metrics: Sequence[str] = TRAFFIC_SOURCE_METRICS,
    save: SaveOptions = SAVE,
    registry: ClientRegistry | None = None,
) -> dict[str, Any]:
    return run_report(
        dimensions,
        metrics,
        date_range,
        order_bys=[{"metric": {"metricName": "sessions"}, "desc": True}],
        operation="traffic_sources",
        save=save,
        registry=registry,
    )


def get_user_demographics(
    date_range: DateRangeInput | None = None,
    *,
    dimensions: Sequence[str] = DEMOGRAPHIC_DIMENSIONS,
    metrics: Sequence[str] = DEMOGRAPHIC_METRICS,
    save: SaveOptions = SAVE,
    registry: ClientRegistry | None = None,
) -> dict[str, Any]:
    return run_report(
        dimensions,
        metrics,
        date_range,
        order_bys=[{"metric": {"metricName": "activeUsers"}, "desc": True}],
        operation="demographics",
        save=save,
        registry=registry,
    )


def get_event_counts(
    date_range: DateRangeInput | None = None,
    *,
    dimensions: Sequence[str] = EVENT_DIMENSIONS,
    metrics: Sequence[str] = EVENT_METRICS,
    save: SaveOptions = SAVE,
    registry: ClientRegistry | None = None,
) -> dict[str, Any]:
    return run_report(
        dimensions,
        metrics,
        date_range,
        order_bys=[{"metric": {"metricName": "eventCount"}, "desc": True}],
        operation="event_counts",
        save=save,
        registry=registry,
    )


def get_conversions(
    date_range: DateRangeInput | None = None,
    *,
    dimensions: Sequence[str] = CONVERSION_DIMENSIONS,
    metrics: Sequence[str] = CONVERSION_METRICS,
    save: SaveOptions = SAVE,
    registry: ClientRegistry | None = None,
) -> dict[str, Any]:
    return run_report(
        dimensions,
        metrics,
        date_range,
        order_bys=[{"metric": {"metricName": "conversions"}, "desc": True}],
        operation="conversions",
        save=save,
        registry=registry,
    )
