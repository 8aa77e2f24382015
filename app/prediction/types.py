"""Transient values passed between the prediction stages."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Optional

from app.models.prediction import DataQuality

# observer(stage, payload) receives intermediate values for tracing
Observer = Callable[[str, dict[str, Any]], None]


@dataclass(frozen=True)
class FeedingInterval:
    """Gap between two consecutive feedings."""
    hours: float
    is_outlier: bool       # sleep-through or duplicate timestamp, excluded from averages


@dataclass(frozen=True)
class QuantityObservation:
    amount_ml: int
    is_estimated: bool     # not read from the note (nursing default)


@dataclass(frozen=True)
class QuantityEstimate:
    average: int
    has_range: bool
    range_min: Optional[int] = None
    range_max: Optional[int] = None


@dataclass(frozen=True)
class ConfidenceResult:
    confidence: float
    data_quality: DataQuality


def notify(observer: Optional[Observer], stage: str, **payload: Any) -> None:
    """Forward a trace payload to the observer, if one was given."""
    if observer is not None:
        observer(stage, payload)
