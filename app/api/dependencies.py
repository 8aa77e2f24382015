"""Reusable FastAPI dependencies (DB, caller identity, prediction settings)."""

import logging
import os
import secrets
from collections.abc import AsyncGenerator
from dataclasses import dataclass
from typing import Annotated, Optional

import aiosqlite
from fastapi import Depends, Header

from app.prediction.config import PredictionSettings
from app.services.database import get_db as _get_db

logger = logging.getLogger(__name__)

# Comma-separated bearer tokens issued by the identity provider.
# Empty = local development: any request carrying a caller id is trusted.
API_TOKENS = frozenset(t.strip() for t in os.getenv("API_TOKENS", "").split(",") if t.strip())


async def db_dependency() -> AsyncGenerator[aiosqlite.Connection, None]:
    """Provide a SQLite connection for the duration of the request."""
    async with _get_db() as conn:
        yield conn


DbDep = Annotated[aiosqlite.Connection, Depends(db_dependency)]


@dataclass(frozen=True)
class Caller:
    """Identity context handed to the prediction engine."""
    id: Optional[str]
    is_authenticated: bool


def _token_is_valid(authorization: Optional[str]) -> bool:
    if not authorization or not authorization.startswith("Bearer "):
        return False
    token = authorization.removeprefix("Bearer ").strip()
    return any(secrets.compare_digest(token, known) for known in API_TOKENS)


def get_caller(
    x_caller_id: Annotated[Optional[str], Header()] = None,
    authorization: Annotated[Optional[str], Header()] = None,
) -> Caller:
    """Resolve the caller from the X-Caller-Id and Authorization headers."""
    if API_TOKENS:
        authenticated = bool(x_caller_id) and _token_is_valid(authorization)
    else:
        authenticated = bool(x_caller_id)
    if not authenticated:
        logger.debug("Unauthenticated caller (id=%s)", x_caller_id)
    return Caller(id=x_caller_id, is_authenticated=authenticated)


def warn_if_unprotected() -> bool:
    """Log a warning when no bearer tokens are configured. Returns True if so."""
    if API_TOKENS:
        return False
    logger.warning(
        "API_TOKENS is empty: any request with an X-Caller-Id header is authenticated"
    )
    return True


CallerDep = Annotated[Caller, Depends(get_caller)]


# Read once at import so a malformed PREDICTION_* value stops the app at startup
PREDICTION_SETTINGS = PredictionSettings.from_env()


def get_prediction_settings() -> PredictionSettings:
    return PREDICTION_SETTINGS


SettingsDep = Annotated[PredictionSettings, Depends(get_prediction_settings)]
