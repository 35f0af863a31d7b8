from __future__ import annotations

from .analysis import (
    compare_date_ranges,
    content_performance,
    get_available_fields,
    live_snapshot,
    search_console_overview,
    site_overview,
    traffic_analysis,
    user_behavior,
)
from .api import *  # noqa: F401,F403
from .api import __all__ as _api_all
from .client import (
    ClientRegistry,
    CredentialError,
    get_client,
    get_indexing_client,
    get_property_id,
    get_search_console_client,
    get_site_url,
    reset_client,
)
from .config import Settings, ValidationResult, get_settings, validate_settings
from .dates import ExplicitRange, RelativeShorthand, parse_date_range, parse_search_console_date_range
from .schema import NO_SAVE, SAVE, SaveOptions, StoredResult
from .storage import get_latest_result, list_results, load_result, save_result

__all__ = [
    *_api_all,
    "ClientRegistry",
    "CredentialError",
    "ExplicitRange",
    "NO_SAVE",
    "RelativeShorthand",
    "SAVE",
    "SaveOptions",
    "Settings",
    "StoredResult",
    "ValidationResult",
    "compare_date_ranges",
    "content_performance",
    "get_available_fields",
    "get_client",
    "get_indexing_client",
    "get_latest_result",
    "get_property_id",
    "get_search_console_client",
    "get_settings",
    "get_site_url",
    "list_results",
    "live_snapshot",
    "load_result",
    "parse_date_range",
    "parse_search_console_date_range",
    "reset_client",
    "save_result",
    "search_console_overview",
    "site_overview",
    "traffic_analysis",
    "user_behavior",
    "validate_settings",
]
