"""Next-feeding prediction endpoint."""

import logging
from functools import partial
from typing import Any

from fastapi import APIRouter, HTTPException

from app.api.dependencies import CallerDep, DbDep, SettingsDep
from app.models.prediction import PredictionResult
from app.prediction import PredictionError, PredictionFailure, predict_next_feeding
from app.services import event_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/predictions", tags=["predictions"])

_STATUS_BY_FAILURE = {
    PredictionFailure.UNAUTHENTICATED: 401,
    PredictionFailure.INSUFFICIENT_DATA: 422,
    PredictionFailure.NO_VALID_CADENCE: 422,
    PredictionFailure.INTERNAL_FETCH_ERROR: 500,
    PredictionFailure.INTERNAL_COMPUTE_ERROR: 500,
}


def _trace(stage: str, payload: dict[str, Any]) -> None:
    logger.debug("prediction %s: %s", stage, payload)


@router.get("/next-feeding", response_model=PredictionResult)
async def predict_next_feeding_endpoint(
    db: DbDep, caller: CallerDep, settings: SettingsDep
) -> PredictionResult:
    """
    Predict the next feeding time and quantity from the last days of feedings.

    Failures come back as `{"code": ..., "message": ...}` details:
    401 unauthenticated, 422 when the data can't support a prediction,
    500 on internal errors.
    """
    logger.info("Prediction requested by %s", caller.id)
    try:
        result = await predict_next_feeding(
            caller.is_authenticated,
            partial(event_service.fetch_recent_feeding_events, db),
            caller_id=caller.id,
            settings=settings,
            observer=_trace,
        )
    except PredictionError as exc:
        status_code = _STATUS_BY_FAILURE[exc.failure]
        if status_code >= 500:
            logger.error(
                "Prediction failed for %s (%s)", caller.id, exc.failure.value,
                exc_info=exc.__cause__ or exc,
            )
        else:
            logger.info("Prediction refused for %s: %s", caller.id, exc.failure.value)
        raise HTTPException(
            status_code=status_code,
            detail={"code": exc.failure.value, "message": exc.message},
        ) from exc

    logger.info(
        "Prediction for %s: next=%s amount=%dml confidence=%.2f (%s) from %d events",
        caller.id,
        result.next_feeding_time.isoformat(),
        result.predicted_quantity.amount,
        result.confidence,
        result.data_quality.value,
        result.data_range.event_count,
    )
    return result
