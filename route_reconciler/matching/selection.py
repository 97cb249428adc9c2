"""Decide whether the active trip selection should follow a new match."""

from __future__ import annotations

from typing import Optional

from ..config import AUTO_SELECT_MARGIN_KM, AUTO_SELECT_SCORE_THRESHOLD_KM
from ..models import TripId


def should_auto_select(
    best_trip_id: Optional[TripId],
    best_score: float,
    second_best_score: float,
    selected_trip_id: Optional[TripId],
    score_threshold_km: float = AUTO_SELECT_SCORE_THRESHOLD_KM,
    margin_threshold_km: float = AUTO_SELECT_MARGIN_KM,
) -> bool:
    """Return True when ``best_trip_id`` should become the active selection.

    With nothing selected any match is accepted. Otherwise the match must be
    both close in absolute terms and clearly ahead of the runner-up, so two
    nearly equidistant trips never flip the selection back and forth.
    """

    if best_trip_id is None:
        return False
    if selected_trip_id is None:
        return True
    return (
        best_score < score_threshold_km
        and (second_best_score - best_score) > margin_threshold_km
    )


__all__ = ["should_auto_select"]
