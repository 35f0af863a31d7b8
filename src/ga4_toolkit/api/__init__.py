from __future__ import annotations

from .bulk_lookup import build_url_filter, get_metrics_for_urls, normalize_urls
from .indexing import (
    get_indexing_status,
    inspect_url,
    remove_from_index,
    request_indexing,
    request_indexing_batch,
)
from .metadata import get_available_dimensions, get_available_metrics, get_property_metadata
from .realtime import get_active_users, get_realtime_events, get_realtime_pages, run_realtime_report
from .reports import (
    get_conversions,
    get_event_counts,
    get_page_views,
    get_traffic_sources,
    get_user_demographics,
    run_report,
)
from .searchconsole import (
    get_country_performance,
    get_device_performance,
    get_search_appearance,
    get_top_pages,
    get_top_queries,
    query_search_analytics,
)

__all__ = [
    "build_url_filter",
    "get_active_users",
    "get_available_dimensions",
    "get_available_metrics",
    "get_conversions",
    "get_country_performance",
    "get_device_performance",
    "get_event_counts",
    "get_indexing_status",
    "get_metrics_for_urls",
    "get_page_views",
    "get_property_metadata",
    "get_realtime_events",
    "get_realtime_pages",
    "get_search_appearance",
    "get_top_pages",
    "get_top_queries",
    "get_traffic_sources",
    "get_user_demographics",
    "inspect_url",
    "normalize_urls",
    "query_search_analytics",
    "remove_from_index",
    "request_indexing",
    "request_indexing_batch",
    "run_realtime_report",
    "run_report",
]
