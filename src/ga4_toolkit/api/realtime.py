from __future__ import annotations

from typing import Any, Sequence

from ..client import ClientRegistry, resolve_registry
from ..schema import SAVE, SaveOptions
from ..storage import save_if_requested

CATEGORY = "realtime"


def run_realtime_report(
    dimensions: Sequence[str],
    metrics: Sequence[str],
    *,
    minute_ranges: Sequence[dict[str, Any]] | None = None,
    limit: int | None = None,
    operation: str = "realtime_report",
    save: SaveOptions = SAVE,
    registry: ClientRegistry | None = None,
) -> dict[str, Any]:
    """Realtime report over the last 30 minutes unless ``minute_ranges`` narrows it."""
    registry = resolve_registry(registry)
    body: dict[str, Any] = {
        "dimensions": [{"name": name} for name in dimensions],
        "metrics": [{"name": name} for name in metrics],
    }
    if minute_ranges:
        body["minuteRanges"] = list(minute_ranges)
    if limit is not None:
        body["limit"] = max(1, int(limit))

    service = registry.analytics_data()
    response = service.properties().runRealtimeReport(property=registry.property_id(), body=body).execute()

    save_if_requested(save, response, CATEGORY, operation)
    return response


def get_active_users(
    dimensions: Sequence[str] = ("country",),
    *,
    save: SaveOptions = SAVE,
    registry: ClientRegistry | None = None,
) -> dict[str, Any]:
    return run_realtime_report(
        dimensions,
        ["activeUsers"],
        operation="active_users",
        save=save,
        registry=registry,
    )


def get_realtime_events(
    *,
    save: SaveOptions = SAVE,
    registry: ClientRegistry | None = None,
) -> dict[str, Any]:
    return run_realtime_report(
        ["eventName"],
        ["eventCount"],
        operation="realtime_events",
        save=save,
        registry=registry,
    )


def get_realtime_pages(
    *,
    save: SaveOptions = SAVE,
    registry: ClientRegistry | None = None,
) -> dict[str, Any]:
    return run_realtime_report(
        ["unifiedScreenName"],
        ["screenPageViews", "activeUsers"],
        operation="realtime_pages",
        save=save,
        registry=registry,
    )
