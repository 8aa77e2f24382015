"""Event builders shared by the test modules."""

from datetime import datetime, timedelta, timezone

from app.models.feeding import FeedingEvent, FeedingKind

NOW = datetime(2025, 7, 15, 21, 0, 0, tzinfo=timezone.utc)


def make_event(kind: str, note: str, hours_ago: float, now: datetime = NOW) -> FeedingEvent:
    """A feeding `hours_ago` hours before `now`."""
    return FeedingEvent(
        kind=FeedingKind(kind),
        timestamp=now - timedelta(hours=hours_ago),
        note=note,
    )
