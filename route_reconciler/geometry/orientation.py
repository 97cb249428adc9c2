"""Resolve whether a path is stored as (lat, lon) or (lon, lat)."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from ..config import ORIENTATION_THRESHOLD_KM
from .distance import optional_distance_km, swap_axes
from .models import LatLon

LOGGER = logging.getLogger(__name__)


def endpoint_proximity_km(
    path: Sequence[LatLon],
    reference_pickup: Optional[LatLon],
    reference_destination: Optional[LatLon],
) -> float:
    """Sum the distances of the path endpoints to the known references.

    Missing references and paths shorter than two points contribute zero so
    that a single known endpoint does not bias the comparison.
    """

    if len(path) < 2:
        return 0.0
    return optional_distance_km(path[0], reference_pickup, 0.0) + optional_distance_km(
        path[-1], reference_destination, 0.0
    )


def resolve_orientation(
    path: Sequence[LatLon],
    reference_pickup: Optional[LatLon],
    reference_destination: Optional[LatLon],
    threshold_km: float = ORIENTATION_THRESHOLD_KM,
) -> List[LatLon]:
    """Return ``path`` in whichever axis order better fits the references.

    The swapped orientation is chosen only when it is closer by more than
    ``threshold_km``; ties and near-ties keep the original order.
    """

    if reference_pickup is None and reference_destination is None:
        return list(path)

    inverted = swap_axes(path)
    original_score = endpoint_proximity_km(
        path, reference_pickup, reference_destination
    )
    inverted_score = endpoint_proximity_km(
        inverted, reference_pickup, reference_destination
    )
    if inverted_score + threshold_km < original_score:
        LOGGER.debug(
            "Swapping path axes: inverted=%.3f km original=%.3f km",
            inverted_score,
            original_score,
        )
        return inverted
    return list(path)


__all__ = ["endpoint_proximity_km", "resolve_orientation"]
