"""Next-feeding prediction result model."""

from datetime import datetime
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, Field


class DataQuality(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class QuantityRange(BaseModel):
    min: int = Field(..., ge=0)
    max: int = Field(..., ge=0)

    model_config = {"frozen": True}


class PredictedQuantity(BaseModel):
    """Expected amount for the next feeding, with a range when intakes vary a lot."""
    amount: int = Field(..., ge=0)
    unit: Literal["ml"] = "ml"
    range: Optional[QuantityRange] = None

    model_config = {"frozen": True}


class DataRange(BaseModel):
    """Span of the events the prediction was computed from."""
    from_: datetime = Field(..., alias="from")
    to: datetime
    event_count: int = Field(..., ge=0)

    model_config = {"frozen": True, "populate_by_name": True}


class AverageInterval(BaseModel):
    hours: int = Field(..., ge=0)
    minutes: int = Field(..., ge=0, lt=60)

    model_config = {"frozen": True}


class PredictionResult(BaseModel):
    """Prediction returned to the caller, immutable once built."""
    next_feeding_time: datetime
    predicted_quantity: PredictedQuantity
    confidence: float = Field(..., ge=0, le=1)
    data_quality: DataQuality
    data_range: DataRange
    average_interval: AverageInterval
    is_prediction: Literal[True] = True

    model_config = {"frozen": True}
