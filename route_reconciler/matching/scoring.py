"""Score trips by how well their endpoints line up with a path."""

from __future__ import annotations

import logging
import math
from typing import Iterable, Optional, Sequence

from ..geometry.distance import optional_distance_km
from ..geometry.models import LatLon
from ..models import Trip, TripMatch

LOGGER = logging.getLogger(__name__)


def match_score(path: Sequence[LatLon], trip: Trip) -> float:
    """Return start-to-pickup plus end-to-destination distance in kilometres.

    A missing trip endpoint makes its half of the sum infinite, as does a path
    with fewer than two points.
    """

    if len(path) < 2:
        return math.inf
    return optional_distance_km(path[0], trip.pickup, math.inf) + optional_distance_km(
        path[-1], trip.destination, math.inf
    )


def best_matches(path: Sequence[LatLon], trips: Iterable[Trip]) -> TripMatch:
    """Return the closest trip and the two lowest scores in one pass.

    Ties for best keep the trip that appears first. A trip scoring infinity is
    never selected.
    """

    best: Optional[Trip] = None
    best_score = math.inf
    second_best_score = math.inf
    for trip in trips:
        score = match_score(path, trip)
        if score < best_score:
            second_best_score = best_score
            best_score = score
            best = trip
        elif score < second_best_score:
            second_best_score = score
    if best is not None:
        LOGGER.debug(
            "Best trip %s score=%.3f km (runner-up %.3f km)",
            best.trip_id,
            best_score,
            second_best_score,
        )
    return TripMatch(
        best=best, best_score=best_score, second_best_score=second_best_score
    )


__all__ = ["match_score", "best_matches"]
