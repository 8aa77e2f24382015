"""Policy constants of the prediction engine, overridable from the environment."""

import os
from dataclasses import dataclass

DEFAULT_WINDOW_DAYS = 7
DEFAULT_OUTLIER_HOURS = 8.0          # gaps this long are sleep, not feeding cadence
DEFAULT_RANGE_CV_THRESHOLD = 0.2     # above this coefficient of variation, report a range
DEFAULT_FULL_VOLUME_EVENTS = 14      # event count at which the volume term saturates
DEFAULT_NURSING_ML = 50


@dataclass(frozen=True)
class PredictionSettings:
    window_days: int = DEFAULT_WINDOW_DAYS
    outlier_hours: float = DEFAULT_OUTLIER_HOURS
    range_cv_threshold: float = DEFAULT_RANGE_CV_THRESHOLD
    full_volume_events: int = DEFAULT_FULL_VOLUME_EVENTS
    nursing_default_ml: int = DEFAULT_NURSING_ML

    def __post_init__(self) -> None:
        if self.window_days <= 0:
            raise ValueError("window_days must be positive")
        if self.outlier_hours <= 0:
            raise ValueError("outlier_hours must be positive")
        if self.range_cv_threshold < 0:
            raise ValueError("range_cv_threshold must be >= 0")
        if self.full_volume_events <= 0:
            raise ValueError("full_volume_events must be positive")
        if self.nursing_default_ml < 0:
            raise ValueError("nursing_default_ml must be >= 0")

    @classmethod
    def from_env(cls) -> "PredictionSettings":
        """Build settings from PREDICTION_* environment variables."""
        return cls(
            window_days=int(os.getenv("PREDICTION_WINDOW_DAYS", str(DEFAULT_WINDOW_DAYS))),
            outlier_hours=float(os.getenv("PREDICTION_OUTLIER_HOURS", str(DEFAULT_OUTLIER_HOURS))),
            range_cv_threshold=float(
                os.getenv("PREDICTION_RANGE_CV", str(DEFAULT_RANGE_CV_THRESHOLD))
            ),
            full_volume_events=int(
                os.getenv("PREDICTION_FULL_VOLUME_EVENTS", str(DEFAULT_FULL_VOLUME_EVENTS))
            ),
            nursing_default_ml=int(
                os.getenv("PREDICTION_NURSING_DEFAULT_ML", str(DEFAULT_NURSING_ML))
            ),
        )
