"""Endpoints to record and list baby events."""

from fastapi import APIRouter, HTTPException, Query, status

from app.api.dependencies import Caller, CallerDep, DbDep
from app.models.feeding import BabyEvent, BabyEventCreate
from app.services import event_service

router = APIRouter(prefix="/events", tags=["events"])


def _require_auth(caller: Caller) -> None:
    if not caller.is_authenticated:
        raise HTTPException(status_code=401, detail="Authentication required")


@router.post("", response_model=BabyEvent, status_code=status.HTTP_201_CREATED)
async def add_event(payload: BabyEventCreate, db: DbDep, caller: CallerDep) -> BabyEvent:
    """Record a baby event (formula, nursing, diaper, ...)."""
    _require_auth(caller)
    return await event_service.add_event(db, payload)


@router.get("", response_model=list[BabyEvent])
async def get_latest_events(
    db: DbDep,
    caller: CallerDep,
    event: str = Query(..., min_length=1, description="Event name, e.g. 'formula'"),
    limit: int = Query(10, ge=1, le=100, description="Maximum number of records"),
) -> list[BabyEvent]:
    """Return the most recent events with the given name, newest first."""
    _require_auth(caller)
    return await event_service.get_latest_events(db, event, limit=limit)
