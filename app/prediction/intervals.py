"""Time gaps between consecutive feedings."""

from collections.abc import Sequence
from typing import Optional

from app.models.feeding import FeedingEvent
from app.prediction.config import DEFAULT_OUTLIER_HOURS
from app.prediction.types import FeedingInterval, Observer, notify


def compute_intervals(
    events: Sequence[FeedingEvent],
    *,
    outlier_hours: float = DEFAULT_OUTLIER_HOURS,
    observer: Optional[Observer] = None,
) -> list[FeedingInterval]:
    """
    Return one interval per adjacent pair of events.

    `events` must already be sorted by timestamp. Gaps of `outlier_hours` or
    more (sleep) and gaps <= 0 (duplicates) are flagged as outliers but kept
    in the output so callers can audit them.
    """
    intervals: list[FeedingInterval] = []
    for current, following in zip(events, events[1:]):
        hours = (following.timestamp - current.timestamp).total_seconds() / 3600
        intervals.append(
            FeedingInterval(hours=hours, is_outlier=hours <= 0 or hours >= outlier_hours)
        )

    notify(
        observer, "intervals",
        count=len(intervals),
        outliers=sum(1 for i in intervals if i.is_outlier),
    )
    return intervals
