"""Failure taxonomy of a prediction request."""

from enum import Enum


class PredictionFailure(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    INSUFFICIENT_DATA = "insufficient_data"
    NO_VALID_CADENCE = "no_valid_cadence"
    INTERNAL_FETCH_ERROR = "internal_fetch_error"
    INTERNAL_COMPUTE_ERROR = "internal_compute_error"


class PredictionError(Exception):
    """Base class: every prediction failure carries its tag and a user-facing message."""
    failure: PredictionFailure
    default_message: str = "Prediction failed."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthenticated(PredictionError):
    failure = PredictionFailure.UNAUTHENTICATED
    default_message = "Authentication is required."


class InsufficientData(PredictionError):
    failure = PredictionFailure.INSUFFICIENT_DATA
    default_message = "Not enough data to predict. Log at least 2 feedings."


class NoValidCadence(PredictionError):
    failure = PredictionFailure.NO_VALID_CADENCE
    default_message = (
        "No usable feeding interval found: every gap looks like a sleep period. "
        "Log feedings closer together to get a prediction."
    )


class InternalFetchError(PredictionError):
    failure = PredictionFailure.INTERNAL_FETCH_ERROR
    default_message = "Failed to retrieve feeding data."


class InternalComputeError(PredictionError):
    failure = PredictionFailure.INTERNAL_COMPUTE_ERROR
    default_message = "An error occurred while computing the prediction."
