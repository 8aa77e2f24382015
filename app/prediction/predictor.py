"""Next-feeding prediction: composes intervals, quantities and confidence."""

import math
from collections.abc import Awaitable, Callable, Sequence
from datetime import timedelta
from typing import Optional

from app.models.feeding import FeedingEvent
from app.models.prediction import (
    AverageInterval, DataRange, PredictedQuantity, PredictionResult, QuantityRange,
)
from app.prediction.aggregates import average_interval, average_quantity
from app.prediction.config import PredictionSettings
from app.prediction.confidence import compute_confidence
from app.prediction.errors import (
    InsufficientData, InternalComputeError, InternalFetchError, NoValidCadence,
    PredictionError, Unauthenticated,
)
from app.prediction.intervals import compute_intervals
from app.prediction.quantities import extract_quantities
from app.prediction.types import Observer, notify

# fetch(window_days) -> formula / nursing events of the last window_days days
EventSource = Callable[[int], Awaitable[Sequence[FeedingEvent]]]

MIN_EVENTS = 2


def split_hours(hours: float) -> AverageInterval:
    """Decompose fractional hours into whole hours and minutes (both floored)."""
    whole = math.floor(hours)
    return AverageInterval(hours=whole, minutes=math.floor((hours - whole) * 60))


def build_prediction(
    events: Sequence[FeedingEvent],
    settings: Optional[PredictionSettings] = None,
    observer: Optional[Observer] = None,
) -> PredictionResult:
    """
    Compute the prediction from feedings sorted oldest first.

    Raises InsufficientData with fewer than 2 events and NoValidCadence when
    no interval falls inside the usable range.
    """
    settings = settings or PredictionSettings()
    if len(events) < MIN_EVENTS:
        raise InsufficientData()

    intervals = compute_intervals(
        events, outlier_hours=settings.outlier_hours, observer=observer
    )
    mean_hours = average_interval(intervals)
    if mean_hours == 0:
        raise NoValidCadence()

    quantities = extract_quantities(
        events, nursing_default_ml=settings.nursing_default_ml, observer=observer
    )
    estimate = average_quantity(
        quantities, range_cv_threshold=settings.range_cv_threshold, observer=observer
    )
    confidence = compute_confidence(
        len(events), intervals,
        full_volume_events=settings.full_volume_events, observer=observer,
    )

    first, last = events[0], events[-1]
    quantity_range = (
        QuantityRange(min=estimate.range_min, max=estimate.range_max)
        if estimate.has_range
        else None
    )
    return PredictionResult(
        next_feeding_time=last.timestamp + timedelta(hours=mean_hours),
        predicted_quantity=PredictedQuantity(amount=estimate.average, range=quantity_range),
        confidence=confidence.confidence,
        data_quality=confidence.data_quality,
        data_range=DataRange(from_=first.timestamp, to=last.timestamp, event_count=len(events)),
        average_interval=split_hours(mean_hours),
    )


async def predict_next_feeding(
    caller_is_authenticated: bool,
    event_source: EventSource,
    *,
    caller_id: Optional[str] = None,
    settings: Optional[PredictionSettings] = None,
    observer: Optional[Observer] = None,
) -> PredictionResult:
    """
    Authenticate, fetch the recent feedings and predict the next one.

    Every failure is raised as a PredictionError subclass. A failing event
    source becomes InternalFetchError with the original exception chained as
    __cause__ for server-side logging; anything else that breaks after the
    fetch (unsortable rows, a raising observer) becomes InternalComputeError.
    `caller_id` is only traced.
    """
    settings = settings or PredictionSettings()
    if not caller_is_authenticated:
        raise Unauthenticated()

    try:
        fetched = await event_source(settings.window_days)
    except Exception as exc:
        raise InternalFetchError() from exc

    try:
        events = sorted(fetched, key=lambda e: e.timestamp)
        notify(observer, "fetched", caller_id=caller_id, count=len(events))
        if len(events) < MIN_EVENTS:
            raise InsufficientData()
        return build_prediction(events, settings, observer)
    except PredictionError:
        raise
    except Exception as exc:
        raise InternalComputeError() from exc
