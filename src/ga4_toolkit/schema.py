from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

ResultCategory = Literal["reports", "realtime", "searchconsole", "indexing"]
RESULT_CATEGORIES: tuple[ResultCategory, ...] = ("reports", "realtime", "searchconsole", "indexing")


@dataclass(frozen=True)
class SaveOptions:
    persist: bool = True


SAVE = SaveOptions()
NO_SAVE = SaveOptions(persist=False)


class ResultMetadata(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    saved_at: str = Field(alias="savedAt")
    category: ResultCategory
    operation: str
    property_id: str = Field(alias="propertyId")


class StoredResult(BaseModel):
    model_config = ConfigDict(extra="ignore")

    metadata: ResultMetadata
    data: Any = None


def iso_timestamp(moment: datetime) -> str:
    utc = moment.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def make_stored_result(
    data: Any,
    category: ResultCategory,
    operation: str,
    property_id: str,
    saved_at: datetime,
) -> StoredResult:
    return StoredResult(
        metadata=ResultMetadata(
            saved_at=iso_timestamp(saved_at),
            category=category,
            operation=operation,
            property_id=property_id,
        ),
        data=data,
    )
