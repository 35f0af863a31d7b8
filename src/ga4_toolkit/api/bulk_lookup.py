from __future__ import annotations

from typing import Any, Iterable, Sequence

from ..client import ClientRegistry
from ..dates import DateRangeInput
from ..schema import SAVE, SaveOptions
from .reports import run_report

DEFAULT_METRICS = ("screenPageViews", "activeUsers", "averageSessionDuration", "bounceRate")


def normalize_urls(urls: Iterable[str]) -> list[str]:
    normalized: list[str] = []
    for url in urls:
        path = url.strip()
        if not path:
            continue
        if not path.startswith("/"):
            path = f"/{path}"
        normalized.append(path)
    return normalized


def build_url_filter(urls: Sequence[str]) -> dict[str, Any] | None:
    if not urls:
        return None
    return {
        "filter": {
            "fieldName": "pagePath",
            "inListFilter": {
                "values": list(urls),
                "caseSensitive": False,
            },
        }
    }


def get_metrics_for_urls(
    urls: Iterable[str],
    *,
    date_range: DateRangeInput | None = None,
    metrics: Sequence[str] | None = None,
    save: SaveOptions = SAVE,
    registry: ClientRegistry | None = None,
) -> dict[str, Any]:
    paths = normalize_urls(urls)
    url_filter = build_url_filter(paths)
    if url_filter is None:
        return {"rows": [], "rowCount": 0}

    return run_report(
        ["pagePath"],
        list(metrics or DEFAULT_METRICS),
        date_range,
        dimension_filter=url_filter,
        operation="bulk_url_lookup",
        save=save,
        registry=registry,
    )
