"""Tests for environment-driven configuration helpers."""

from __future__ import annotations

from route_reconciler import config
from route_reconciler.models import ReconcileSettings


def test_env_float(monkeypatch) -> None:
    monkeypatch.setenv("SNAP_TOLERANCE_KM", "0.35")
    assert config._env_float("SNAP_TOLERANCE_KM", 0.2) == 0.35
    monkeypatch.setenv("SNAP_TOLERANCE_KM", "wide")
    assert config._env_float("SNAP_TOLERANCE_KM", 0.2) == 0.2
    monkeypatch.delenv("SNAP_TOLERANCE_KM")
    assert config._env_float("SNAP_TOLERANCE_KM", 0.2) == 0.2


def test_env_int_and_bool(monkeypatch) -> None:
    monkeypatch.setenv("HTTP_MAX_RETRIES", "5")
    assert config._env_int("HTTP_MAX_RETRIES", 3) == 5
    monkeypatch.setenv("HTTP_RETRY_ENABLED", "off")
    assert config._env_bool("HTTP_RETRY_ENABLED", True) is False
    monkeypatch.setenv("HTTP_RETRY_ENABLED", "maybe")
    assert config._env_bool("HTTP_RETRY_ENABLED", True) is True


def test_settings_default_to_config_values() -> None:
    settings = ReconcileSettings()
    assert settings.orientation_threshold_km == config.ORIENTATION_THRESHOLD_KM
    assert settings.snap_tolerance_km == config.SNAP_TOLERANCE_KM
    assert settings.auto_select_score_threshold_km == config.AUTO_SELECT_SCORE_THRESHOLD_KM
    assert settings.auto_select_margin_km == config.AUTO_SELECT_MARGIN_KM
