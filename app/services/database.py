"""SQLite initialization and async connection management via aiosqlite."""

import os
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import aiosqlite

DATABASE_URL = os.getenv("DATABASE_URL", "data/babytrack.db")

__all__ = ["DATABASE_URL", "create_tables", "get_db", "_CREATE_BABY_EVENTS", "_CREATE_BABY_EVENTS_INDEX"]

# occurred_at is a fixed-width UTC ISO string so lexical order is time order
_CREATE_BABY_EVENTS = """
CREATE TABLE IF NOT EXISTS baby_events (
    id           INTEGER PRIMARY KEY AUTOINCREMENT,
    event        TEXT    NOT NULL,
    occurred_at  TEXT    NOT NULL,
    note         TEXT,
    created_at   TEXT    NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S.000000+00:00', 'now')),
    updated_at   TEXT    NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S.000000+00:00', 'now'))
)
"""

_CREATE_BABY_EVENTS_INDEX = """
CREATE INDEX IF NOT EXISTS idx_baby_events_event_time
    ON baby_events (event, occurred_at)
"""


async def create_tables(db_url: str = DATABASE_URL) -> None:
    """Create all application tables if they don't exist."""
    os.makedirs(os.path.dirname(db_url) if os.path.dirname(db_url) else ".", exist_ok=True)
    async with aiosqlite.connect(db_url) as db:
        await db.execute(_CREATE_BABY_EVENTS)
        await db.execute(_CREATE_BABY_EVENTS_INDEX)
        await db.commit()


@asynccontextmanager
async def get_db(db_url: str = DATABASE_URL) -> AsyncGenerator[aiosqlite.Connection, None]:
    """Context manager that provides a SQLite connection with dict-like rows."""
    async with aiosqlite.connect(db_url) as db:
        db.row_factory = aiosqlite.Row
        yield db
