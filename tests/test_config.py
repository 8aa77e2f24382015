"""Tests for PredictionSettings."""

import pytest

from app.prediction.config import PredictionSettings


def test_defaults():
    settings = PredictionSettings()
    assert settings.window_days == 7
    assert settings.outlier_hours == 8
    assert settings.range_cv_threshold == 0.2
    assert settings.full_volume_events == 14
    assert settings.nursing_default_ml == 50


def test_from_env(monkeypatch):
    monkeypatch.setenv("PREDICTION_WINDOW_DAYS", "3")
    monkeypatch.setenv("PREDICTION_OUTLIER_HOURS", "6.5")
    monkeypatch.setenv("PREDICTION_NURSING_DEFAULT_ML", "40")
    settings = PredictionSettings.from_env()
    assert settings.window_days == 3
    assert settings.outlier_hours == 6.5
    assert settings.nursing_default_ml == 40
    assert settings.full_volume_events == 14


@pytest.mark.parametrize(
    "field, value",
    [("window_days", 0), ("outlier_hours", 0), ("full_volume_events", -1), ("nursing_default_ml", -5)],
)
def test_invalid_values_are_rejected(field, value):
    with pytest.raises(ValueError):
        PredictionSettings(**{field: value})


def test_from_env_rejects_malformed_value(monkeypatch):
    monkeypatch.setenv("PREDICTION_WINDOW_DAYS", "a week")
    with pytest.raises(ValueError):
        PredictionSettings.from_env()
