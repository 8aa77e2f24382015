"""Confidence score of a prediction."""

import statistics
from collections.abc import Sequence
from typing import Optional

from app.models.prediction import DataQuality
from app.prediction.aggregates import valid_hours
from app.prediction.config import DEFAULT_FULL_VOLUME_EVENTS
from app.prediction.types import ConfidenceResult, FeedingInterval, Observer, notify

VOLUME_WEIGHT = 0.7
CONSISTENCY_WEIGHT = 0.3
HIGH_THRESHOLD = 0.7
MEDIUM_THRESHOLD = 0.4

_NO_CONFIDENCE = ConfidenceResult(confidence=0.0, data_quality=DataQuality.LOW)


def quality_for(confidence: float) -> DataQuality:
    if confidence >= HIGH_THRESHOLD:
        return DataQuality.HIGH
    if confidence >= MEDIUM_THRESHOLD:
        return DataQuality.MEDIUM
    return DataQuality.LOW


def compute_confidence(
    event_count: int,
    intervals: Sequence[FeedingInterval],
    *,
    full_volume_events: int = DEFAULT_FULL_VOLUME_EVENTS,
    observer: Optional[Observer] = None,
) -> ConfidenceResult:
    """
    Combine sample volume and interval regularity into a score in [0, 1].

    volume      = min(event_count / full_volume_events, 1) * 0.7
    consistency = max(0, min(1 - stddev / mean, 1)) * 0.3   (valid intervals only)
    """
    if event_count == 0 or not intervals:
        return _NO_CONFIDENCE

    hours = valid_hours(intervals)
    if not hours:
        return _NO_CONFIDENCE

    mean = statistics.fmean(hours)
    stddev = statistics.pstdev(hours, mu=mean)

    volume = min(event_count / full_volume_events, 1.0) * VOLUME_WEIGHT
    consistency = 0.0
    if mean > 0:
        consistency = max(0.0, min(1 - stddev / mean, 1.0)) * CONSISTENCY_WEIGHT

    confidence = max(0.0, min(1.0, volume + consistency))
    notify(
        observer, "confidence",
        volume=volume, consistency=consistency, confidence=confidence,
    )
    return ConfidenceResult(confidence=confidence, data_quality=quality_for(confidence))
