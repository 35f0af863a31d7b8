from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any

from .config import get_settings
from .schema import ResultCategory, SaveOptions, StoredResult, make_stored_result

logger = logging.getLogger(__name__)

FILENAME_TIME_FORMAT = "%Y%m%d_%H%M%S"


def _to_json_text(payload: dict) -> str:
    return json.dumps(payload, ensure_ascii=False, indent=2) + "\n"


def build_filename(moment: datetime, operation: str, extra_info: str | None = None) -> str:
    parts = [moment.strftime(FILENAME_TIME_FORMAT), operation]
    if extra_info:
        parts.append(extra_info)
    return "__".join(parts) + ".json"


def save_result(
    data: Any,
    category: ResultCategory,
    operation: str,
    extra_info: str | None = None,
) -> Path:
    """Write ``data`` inside a metadata envelope and return the file path.

    The filename has second granularity, so a second save of the same
    category/operation/extra_info within one second replaces the first.
    """
    settings = get_settings()
    now = datetime.now().astimezone()
    envelope = make_stored_result(
        data,
        category=category,
        operation=operation,
        property_id=settings.property_id,
        saved_at=now,
    )

    output_dir = settings.results_dir / category
    output_dir.mkdir(parents=True, exist_ok=True)

    file_path = (output_dir / build_filename(now, operation, extra_info)).resolve()
    file_path.write_text(_to_json_text(envelope.model_dump(mode="json", by_alias=True)), encoding="utf-8")
    logger.debug("Saved %s/%s result to %s", category, operation, file_path)
    return file_path


def load_result(file_path: str | Path) -> StoredResult | None:
    path = Path(file_path)
    if not path.exists():
        return None
    payload = json.loads(path.read_text(encoding="utf-8"))
    return StoredResult.model_validate(payload)


def list_results(category: str, limit: int | None = None) -> list[Path]:
    """Saved results in a category, newest first."""
    category_dir = get_settings().results_dir / category
    if not category_dir.is_dir():
        return []

    files = sorted(
        (path for path in category_dir.iterdir() if path.suffix == ".json" and path.is_file()),
        key=lambda path: path.name,
        reverse=True,
    )
    if limit is not None:
        files = files[: max(0, limit)]
    return files


def get_latest_result(category: str, operation: str | None = None) -> StoredResult | None:
    for path in list_results(category):
        if operation and operation not in path.name:
            continue
        return load_result(path)
    return None


def save_if_requested(
    save: SaveOptions,
    data: Any,
    category: ResultCategory,
    operation: str,
    extra_info: str | None = None,
) -> Path | None:
    if not save.persist:
        return None
    return save_result(data, category, operation, extra_info)
