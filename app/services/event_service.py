"""Async storage queries for baby events, and the feeding event source."""

import logging
from datetime import datetime, timedelta, timezone

import aiosqlite

from app.models.feeding import (
    FEEDING_EVENT_LABELS, BabyEvent, BabyEventCreate, FeedingEvent,
    as_utc, parse_feeding_kind,
)

logger = logging.getLogger(__name__)

_FEEDING_PLACEHOLDERS = ", ".join("?" for _ in FEEDING_EVENT_LABELS)


def _to_db(value: datetime) -> str:
    """Fixed-width UTC ISO string, comparable lexically."""
    return as_utc(value).strftime("%Y-%m-%dT%H:%M:%S.%f+00:00")


def _row_to_event(row: aiosqlite.Row) -> BabyEvent:
    return BabyEvent(
        id=row["id"],
        event=row["event"],
        timestamp=datetime.fromisoformat(row["occurred_at"]),
        note=row["note"] or "",
        created_at=datetime.fromisoformat(row["created_at"]),
        updated_at=datetime.fromisoformat(row["updated_at"]),
    )


def _rows_to_feedings(rows: list[aiosqlite.Row]) -> list[FeedingEvent]:
    """Convert rows to FeedingEvents, dropping labels that are not feedings."""
    feedings = []
    for row in rows:
        kind = parse_feeding_kind(row["event"])
        if kind is None:
            logger.warning("Ignoring event %s with unknown kind %r", row["id"], row["event"])
            continue
        feedings.append(
            FeedingEvent(
                kind=kind,
                timestamp=datetime.fromisoformat(row["occurred_at"]),
                note=row["note"] or "",
            )
        )
    return feedings


async def add_event(db: aiosqlite.Connection, event: BabyEventCreate) -> BabyEvent:
    """Record a baby event and return the full record."""
    cursor = await db.execute(
        "INSERT INTO baby_events (event, occurred_at, note) VALUES (?, ?, ?)",
        (event.event, _to_db(event.timestamp), event.note or ""),
    )
    await db.commit()
    rows = await db.execute_fetchall(
        "SELECT * FROM baby_events WHERE id = ?", (cursor.lastrowid,)
    )
    return _row_to_event(rows[0])


async def get_event(db: aiosqlite.Connection, event_id: int) -> BabyEvent | None:
    """Return an event by id, or None."""
    async with db.execute("SELECT * FROM baby_events WHERE id = ?", (event_id,)) as cur:
        row = await cur.fetchone()
    return _row_to_event(row) if row else None


async def get_latest_events(
    db: aiosqlite.Connection, event: str, limit: int = 10
) -> list[BabyEvent]:
    """Return the `limit` most recent events with the given name, newest first."""
    rows = await db.execute_fetchall(
        """SELECT * FROM baby_events
           WHERE event = ?
           ORDER BY occurred_at DESC, id DESC
           LIMIT ?""",
        (event, limit),
    )
    return [_row_to_event(r) for r in rows]


def window_start(window_days: int, now: datetime | None = None) -> datetime:
    """Midnight UTC, `window_days` days before `now`."""
    now = as_utc(now or datetime.now(timezone.utc))
    start = now - timedelta(days=window_days)
    return start.replace(hour=0, minute=0, second=0, microsecond=0)


async def fetch_recent_feeding_events(
    db: aiosqlite.Connection, window_days: int = 7, now: datetime | None = None
) -> list[FeedingEvent]:
    """Return formula / nursing events since the start of the window, newest first."""
    since = window_start(window_days, now)
    rows = await db.execute_fetchall(
        f"""SELECT * FROM baby_events
            WHERE event IN ({_FEEDING_PLACEHOLDERS})
              AND occurred_at >= ?
            ORDER BY occurred_at DESC, id DESC""",
        (*FEEDING_EVENT_LABELS, _to_db(since)),
    )
    logger.info("Retrieved %d feeding events since %s", len(rows), since.isoformat())
    return _rows_to_feedings(rows)


async def fetch_feeding_events_by_range(
    db: aiosqlite.Connection, start: datetime, end: datetime
) -> list[FeedingEvent]:
    """Return formula / nursing events between start and end (inclusive), newest first."""
    rows = await db.execute_fetchall(
        f"""SELECT * FROM baby_events
            WHERE event IN ({_FEEDING_PLACEHOLDERS})
              AND occurred_at >= ?
              AND occurred_at <= ?
            ORDER BY occurred_at DESC, id DESC""",
        (*FEEDING_EVENT_LABELS, _to_db(start), _to_db(end)),
    )
    return _rows_to_feedings(rows)


async def fetch_latest_feeding_events(
    db: aiosqlite.Connection, limit: int = 1
) -> list[FeedingEvent]:
    """Return the `limit` most recent formula / nursing events, newest first."""
    rows = await db.execute_fetchall(
        f"""SELECT * FROM baby_events
            WHERE event IN ({_FEEDING_PLACEHOLDERS})
            ORDER BY occurred_at DESC, id DESC
            LIMIT ?""",
        (*FEEDING_EVENT_LABELS, limit),
    )
    return _rows_to_feedings(rows)
