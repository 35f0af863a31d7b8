from __future__ import annotations

import logging
from typing import Any, Sequence

from .api.metadata import get_property_metadata
from .api.realtime import get_active_users, get_realtime_events, get_realtime_pages
from .api.reports import (
    get_event_counts,
    get_page_views,
    get_traffic_sources,
    get_user_demographics,
    resolve_date_range,
    run_report,
)
from .api.searchconsole import (
    get_country_performance,
    get_device_performance,
    get_top_pages,
    get_top_queries,
)
from .client import ClientRegistry
from .dates import DateRangeInput, date_range_label, parse_date_range
from .schema import NO_SAVE, SAVE, SaveOptions
from .storage import save_if_requested

logger = logging.getLogger(__name__)


def site_overview(
    date_range: DateRangeInput | None = None,
    *,
    save: SaveOptions = SAVE,
    registry: ClientRegistry | None = None,
) -> dict[str, Any]:
    date_range = resolve_date_range(date_range)
    logger.info("Generating site overview")
    results: dict[str, Any] = {}

    logger.info("-> page views")
    results["pageViews"] = get_page_views(date_range, save=NO_SAVE, registry=registry)
    logger.info("-> traffic sources")
    results["trafficSources"] = get_traffic_sources(date_range, save=NO_SAVE, registry=registry)
    logger.info("-> user demographics")
    results["demographics"] = get_user_demographics(date_range, save=NO_SAVE, registry=registry)
    logger.info("-> event counts")
    results["events"] = get_event_counts(date_range, save=NO_SAVE, registry=registry)

    save_if_requested(save, results, "reports", "site_overview", date_range_label(date_range))
    logger.info("Site overview complete")
    return results


def traffic_analysis(
    date_range: DateRangeInput | None = None,
    *,
    save: SaveOptions = SAVE,
    registry: ClientRegistry | None = None,
) -> dict[str, Any]:
    date_range = resolve_date_range(date_range)
    logger.info("Analyzing traffic sources")
    results: dict[str, Any] = {}

    logger.info("-> traffic sources")
    results["sources"] = get_traffic_sources(date_range, save=NO_SAVE, registry=registry)
    logger.info("-> session quality by source")
    results["sessions"] = run_report(
        ["sessionSource", "sessionMedium"],
        ["sessions", "engagedSessions", "averageSessionDuration", "bounceRate"],
        date_range,
        save=NO_SAVE,
        registry=registry,
    )
    logger.info("-> new vs returning users")
    results["newVsReturning"] = run_report(
        ["newVsReturning"],
        ["activeUsers", "sessions", "conversions"],
        date_range,
        save=NO_SAVE,
        registry=registry,
    )

    save_if_requested(save, results, "reports", "traffic_analysis", date_range_label(date_range))
    logger.info("Traffic analysis complete")
    return results


def content_performance(
    date_range: DateRangeInput | None = None,
    *,
    save: SaveOptions = SAVE,
    registry: ClientRegistry | None = None,
) -> dict[str, Any]:
    date_range = resolve_date_range(date_range)
    logger.info("Analyzing content performance")
    results: dict[str, Any] = {}

    logger.info("-> page views")
    results["pages"] = get_page_views(date_range, save=NO_SAVE, registry=registry)
    logger.info("-> landing pages")
    results["landingPages"] = run_report(
        ["landingPage"],
        ["sessions", "activeUsers", "bounceRate", "averageSessionDuration"],
        date_range,
        save=NO_SAVE,
        registry=registry,
    )
    logger.info("-> exit pages")
    results["exitPages"] = run_report(
        ["pagePath"],
        ["exits", "screenPageViews"],
        date_range,
        save=NO_SAVE,
        registry=registry,
    )

    save_if_requested(save, results, "reports", "content_performance", date_range_label(date_range))
    logger.info("Content performance analysis complete")
    return results


def user_behavior(
    date_range: DateRangeInput | None = None,
    *,
    save: SaveOptions = SAVE,
    registry: ClientRegistry | None = None,
) -> dict[str, Any]:
    date_range = resolve_date_range(date_range)
    logger.info("Analyzing user behavior")
    results: dict[str, Any] = {}

    logger.info("-> demographics")
    results["demographics"] = get_user_demographics(date_range, save=NO_SAVE, registry=registry)
    logger.info("-> events")
    results["events"] = get_event_counts(date_range, save=NO_SAVE, registry=registry)
    logger.info("-> daily engagement")
    results["engagement"] = run_report(
        ["date"],
        ["activeUsers", "engagedSessions", "engagementRate", "averageSessionDuration"],
        date_range,
        save=NO_SAVE,
        registry=registry,
    )

    save_if_requested(save, results, "reports", "user_behavior", date_range_label(date_range))
    logger.info("User behavior analysis complete")
    return results


def compare_date_ranges(
    range1: DateRangeInput,
    range2: DateRangeInput,
    dimensions: Sequence[str] = ("date",),
    metrics: Sequence[str] = ("activeUsers", "sessions", "screenPageViews"),
    *,
    save: SaveOptions = SAVE,
    registry: ClientRegistry | None = None,
) -> dict[str, Any]:
    logger.info("Comparing date ranges %s and %s", range1, range2)
    period1 = run_report(dimensions, metrics, range1, save=NO_SAVE, registry=registry)
    period2 = run_report(dimensions, metrics, range2, save=NO_SAVE, registry=registry)

    comparison = {
        "period1": {"dateRange": parse_date_range(range1), "data": period1},
        "period2": {"dateRange": parse_date_range(range2), "data": period2},
    }

    save_if_requested(save, comparison, "reports", "date_comparison")
    logger.info("Date range comparison complete")
    return comparison


def live_snapshot(
    *,
    save: SaveOptions = SAVE,
    registry: ClientRegistry | None = None,
) -> dict[str, Any]:
    logger.info("Getting live data snapshot")
    results: dict[str, Any] = {}

    logger.info("-> active users")
    results["activeUsers"] = get_active_users(save=NO_SAVE, registry=registry)
    logger.info("-> current pages")
    results["currentPages"] = get_realtime_pages(save=NO_SAVE, registry=registry)
    logger.info("-> current events")
    results["currentEvents"] = get_realtime_events(save=NO_SAVE, registry=registry)

    save_if_requested(save, results, "realtime", "snapshot")
    logger.info("Live snapshot complete")
    return results


def search_console_overview(
    date_range: DateRangeInput | None = None,
    *,
    save: SaveOptions = SAVE,
    registry: ClientRegistry | None = None,
) -> dict[str, Any]:
    date_range = resolve_date_range(date_range)
    logger.info("Generating Search Console overview")
    results: dict[str, Any] = {}

    logger.info("-> top queries")
    results["topQueries"] = get_top_queries(date_range, save=NO_SAVE, registry=registry)
    logger.info("-> top pages")
    results["topPages"] = get_top_pages(date_range, save=NO_SAVE, registry=registry)
    logger.info("-> devices")
    results["devices"] = get_device_performance(date_range, save=NO_SAVE, registry=registry)
    logger.info("-> countries")
    results["countries"] = get_country_performance(date_range, save=NO_SAVE, registry=registry)

    save_if_requested(save, results, "searchconsole", "search_overview", date_range_label(date_range))
    logger.info("Search Console overview complete")
    return results


def get_available_fields(*, registry: ClientRegistry | None = None) -> dict[str, Any]:
    metadata = get_property_metadata(registry=registry)
    logger.info(
        "Found %d dimensions and %d metrics",
        len(metadata.get("dimensions", [])),
        len(metadata.get("metrics", [])),
    )
    return metadata
