"""Reductions of intervals and quantities to summary values."""

import math
import statistics
from collections.abc import Iterable, Sequence
from typing import Optional

from app.prediction.config import DEFAULT_RANGE_CV_THRESHOLD
from app.prediction.types import (
    FeedingInterval, Observer, QuantityEstimate, QuantityObservation, notify,
)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (58.5 -> 59)."""
    return math.floor(value + 0.5)


def valid_hours(intervals: Iterable[FeedingInterval]) -> list[float]:
    return [i.hours for i in intervals if not i.is_outlier]


def average_interval(intervals: Iterable[FeedingInterval]) -> float:
    """Mean of the non-outlier intervals in hours, 0.0 when there are none."""
    hours = valid_hours(intervals)
    if not hours:
        return 0.0
    return statistics.fmean(hours)


def average_quantity(
    quantities: Sequence[QuantityObservation] | Sequence[int],
    *,
    range_cv_threshold: float = DEFAULT_RANGE_CV_THRESHOLD,
    observer: Optional[Observer] = None,
) -> QuantityEstimate:
    """
    Mean quantity, with a ±1 standard deviation range when intakes vary.

    Estimated and measured amounts are pooled. The deviation is the population
    one (divide by N). A range is reported when stddev / mean exceeds
    `range_cv_threshold`; displayed values are rounded half-up.
    """
    amounts = [q.amount_ml if isinstance(q, QuantityObservation) else q for q in quantities]
    if not amounts:
        return QuantityEstimate(average=0, has_range=False)

    mean = statistics.fmean(amounts)
    stddev = statistics.pstdev(amounts, mu=mean)
    has_range = mean > 0 and stddev / mean > range_cv_threshold
    notify(observer, "quantity_stats", mean=mean, stddev=stddev, has_range=has_range)

    if has_range:
        return QuantityEstimate(
            average=round_half_up(mean),
            has_range=True,
            range_min=max(0, round_half_up(mean - stddev)),
            range_max=round_half_up(mean + stddev),
        )
    return QuantityEstimate(average=round_half_up(mean), has_range=False)
