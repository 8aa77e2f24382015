from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class FeedingKind(str, Enum):
    """Event kinds that take part in feeding prediction."""
    FORMULA = "formula"
    NURSING = "nursing"


# Labels written by the Japanese-language front end
_LEGACY_KIND_LABELS = {
    "ミルク": FeedingKind.FORMULA,
    "母乳": FeedingKind.NURSING,
}


FEEDING_EVENT_LABELS = tuple(k.value for k in FeedingKind) + tuple(_LEGACY_KIND_LABELS)


def parse_feeding_kind(label: str) -> FeedingKind | None:
    """Map a stored event label to a FeedingKind, or None for non-feeding events."""
    if label in _LEGACY_KIND_LABELS:
        return _LEGACY_KIND_LABELS[label]
    try:
        return FeedingKind(label)
    except ValueError:
        return None


def as_utc(value: datetime) -> datetime:
    """Return an aware UTC datetime. Naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class FeedingEvent(BaseModel):
    """One feeding occurrence, as handed to the prediction engine."""
    kind: FeedingKind
    timestamp: datetime
    note: str = ""

    model_config = {"frozen": True}

    @field_validator("timestamp")
    @classmethod
    def _normalize_timestamp(cls, value: datetime) -> datetime:
        return as_utc(value)

    @field_validator("note", mode="before")
    @classmethod
    def _normalize_note(cls, value: Optional[str]) -> str:
        return value or ""


class BabyEventCreate(BaseModel):
    """Payload to record any baby event (formula, nursing, diaper, sleep...)."""
    event: str = Field(..., min_length=1, max_length=50)
    timestamp: datetime
    note: Optional[str] = Field(None, max_length=500)

    @field_validator("timestamp")
    @classmethod
    def _normalize_timestamp(cls, value: datetime) -> datetime:
        return as_utc(value)


class BabyEvent(BaseModel):
    """Full event record returned from the database."""
    id: int
    event: str
    timestamp: datetime
    note: str = ""
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
