from .aggregates import average_interval, average_quantity
from .config import PredictionSettings
from .confidence import compute_confidence
from .errors import (
    InsufficientData, InternalComputeError, InternalFetchError, NoValidCadence,
    PredictionError, PredictionFailure, Unauthenticated,
)
from .intervals import compute_intervals
from .predictor import build_prediction, predict_next_feeding
from .quantities import extract_quantities

__all__ = [
    "average_interval", "average_quantity", "build_prediction", "compute_confidence",
    "compute_intervals", "extract_quantities", "predict_next_feeding",
    "PredictionSettings",
    "PredictionError", "PredictionFailure", "Unauthenticated", "InsufficientData",
    "NoValidCadence", "InternalFetchError", "InternalComputeError",
]
