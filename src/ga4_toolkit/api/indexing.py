from __future__ import annotations

import logging
import re
from typing import Any, Iterable, Literal

from ..client import ClientRegistry, resolve_registry
from ..schema import SAVE, NO_SAVE, SaveOptions
from ..storage import save_if_requested
from .searchconsole import require_site_url

logger = logging.getLogger(__name__)

CATEGORY = "indexing"

NotificationType = Literal["URL_UPDATED", "URL_DELETED"]

_SLUG_PATTERN = re.compile(r"[^A-Za-z0-9]+")
SLUG_MAX_LENGTH = 60


def url_slug(url: str) -> str:
    """Filename-safe tag for a URL, scheme dropped."""
    without_scheme = re.sub(r"^[a-z]+://", "", url.strip(), flags=re.IGNORECASE)
    slug = _SLUG_PATTERN.sub("_", without_scheme).strip("_")
    return slug[:SLUG_MAX_LENGTH].rstrip("_") or "root"


def _publish(registry: ClientRegistry, url: str, notification_type: NotificationType) -> dict[str, Any]:
    service = registry.indexing()
    return service.urlNotifications().publish(body={"url": url, "type": notification_type}).execute()


def request_indexing(
    url: str,
    *,
    save: SaveOptions = SAVE,
    registry: ClientRegistry | None = None,
) -> dict[str, Any]:
    """Tell Google the page at ``url`` was added or changed."""
    response = _publish(resolve_registry(registry), url, "URL_UPDATED")
    save_if_requested(save, response, CATEGORY, "url_update", url_slug(url))
    return response


def remove_from_index(
    url: str,
    *,
    save: SaveOptions = SAVE,
    registry: ClientRegistry | None = None,
) -> dict[str, Any]:
    response = _publish(resolve_registry(registry), url, "URL_DELETED")
    save_if_requested(save, response, CATEGORY, "url_removal", url_slug(url))
    return response


def request_indexing_batch(
    urls: Iterable[str],
    *,
    save: SaveOptions = SAVE,
    registry: ClientRegistry | None = None,
) -> list[dict[str, Any]]:
    """Publish ``URL_UPDATED`` for each URL in order; one bundle is saved at the end."""
    registry = resolve_registry(registry)
    results: list[dict[str, Any]] = []
    for url in urls:
        logger.info("Requesting indexing for %s", url)
        results.append(request_indexing(url, save=NO_SAVE, registry=registry))

    save_if_requested(save, results, CATEGORY, "batch_update")
    return results


def get_indexing_status(
    url: str,
    *,
    save: SaveOptions = SAVE,
    registry: ClientRegistry | None = None,
) -> dict[str, Any]:
    """Latest update/remove notifications Google has received for ``url``."""
    service = resolve_registry(registry).indexing()
    response = service.urlNotifications().getMetadata(url=url).execute()
    save_if_requested(save, response, CATEGORY, "notification_status", url_slug(url))
    return response


def inspect_url(
    url: str,
    *,
    save: SaveOptions = SAVE,
    registry: ClientRegistry | None = None,
) -> dict[str, Any]:
    """URL Inspection result for ``url`` within the configured Search Console property."""
    registry = resolve_registry(registry)
    site_url = require_site_url(registry)
    service = registry.search_console()
    response = (
        service.urlInspection()
        .index()
        .inspect(body={"inspectionUrl": url, "siteUrl": site_url})
        .execute()
    )
    save_if_requested(save, response, CATEGORY, "url_inspection", url_slug(url))
    return response
