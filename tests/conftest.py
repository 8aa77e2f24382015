"""Shared fixtures across tests — in-memory SQLite via aiosqlite."""

import aiosqlite
import pytest_asyncio

from app.services.database import _CREATE_BABY_EVENTS, _CREATE_BABY_EVENTS_INDEX


@pytest_asyncio.fixture
async def db():
    """Fresh in-memory SQLite connection with tables, discarded after each test."""
    async with aiosqlite.connect(":memory:") as conn:
        conn.row_factory = aiosqlite.Row
        await conn.execute(_CREATE_BABY_EVENTS)
        await conn.execute(_CREATE_BABY_EVENTS_INDEX)
        await conn.commit()
        yield conn
