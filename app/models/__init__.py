from .feeding import BabyEvent, BabyEventCreate, FeedingEvent, FeedingKind
from .prediction import (
    AverageInterval, DataQuality, DataRange, PredictedQuantity,
    PredictionResult, QuantityRange,
)

__all__ = [
    "BabyEvent", "BabyEventCreate", "FeedingEvent", "FeedingKind",
    "AverageInterval", "DataQuality", "DataRange", "PredictedQuantity",
    "PredictionResult", "QuantityRange",
]
