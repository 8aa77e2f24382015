"""BabyTrack Predict API application entry point."""

import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv

load_dotenv()  # load .env before anything reads os.getenv()

from fastapi import FastAPI

from app.api.dependencies import warn_if_unprotected
from app.api.routes import events_router, health_router, predictions_router
from app.services.database import DATABASE_URL, create_tables

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the event tables at startup."""
    warn_if_unprotected()
    await create_tables()
    logger.info("SQLite tables ready at %s", DATABASE_URL)

    yield

    logger.info("BabyTrack Predict API stopped")


app = FastAPI(
    title="BabyTrack Predict API",
    description=(
        "Baby event log with a next-feeding predictor: time, quantity and "
        "confidence computed from the last days of formula and nursing records."
    ),
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(health_router)
app.include_router(events_router)
app.include_router(predictions_router)
