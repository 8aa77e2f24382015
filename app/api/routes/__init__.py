"""Routes package — exports all FastAPI routers."""

from .events import router as events_router
from .health import router as health_router
from .predictions import router as predictions_router

__all__ = ["health_router", "events_router", "predictions_router"]
