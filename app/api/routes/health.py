"""Healthcheck endpoint."""

from fastapi import APIRouter
from pydantic import BaseModel

from app.api.dependencies import SettingsDep

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    status: str
    window_days: int


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: SettingsDep) -> HealthResponse:
    """Return service status and the active prediction window."""
    return HealthResponse(status="ok", window_days=settings.window_days)
