from __future__ import annotations

from typing import Any

from ..client import ClientRegistry, resolve_registry
from ..schema import SAVE, NO_SAVE, SaveOptions
from ..storage import save_if_requested

CATEGORY = "reports"


def get_property_metadata(
    *,
    save: SaveOptions = SAVE,
    registry: ClientRegistry | None = None,
) -> dict[str, Any]:
    """Every dimension and metric the property exposes, custom ones included."""
    registry = resolve_registry(registry)
    service = registry.analytics_data()
    response = service.properties().getMetadata(name=f"{registry.property_id()}/metadata").execute()

    save_if_requested(save, response, CATEGORY, "property_metadata")
    return response


def get_available_dimensions(
    *,
    save: SaveOptions = SAVE,
    registry: ClientRegistry | None = None,
) -> dict[str, Any]:
    metadata = get_property_metadata(save=NO_SAVE, registry=registry)
    result = {"dimensions": metadata.get("dimensions", [])}
    save_if_requested(save, result, CATEGORY, "available_dimensions")
    return result


def get_available_metrics(
    *,
    save: SaveOptions = SAVE,
    registry: ClientRegistry | None = None,
) -> dict[str, Any]:
    metadata = get_property_metadata(save=NO_SAVE, registry=registry)
    result = {"metrics": metadata.get("metrics", [])}
    save_if_requested(save, result, CATEGORY, "available_metrics")
    return result
