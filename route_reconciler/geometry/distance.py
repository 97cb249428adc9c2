"""Great-circle distance helpers."""

from __future__ import annotations

from typing import Iterable, List, Optional

import numpy as np

from ..config import EARTH_RADIUS_KM
from .models import LatLon


def haversine_km(a: LatLon, b: LatLon, radius_km: float = EARTH_RADIUS_KM) -> float:
    """Return the great-circle distance in kilometres between two points.

    Points are read as (lat, lon) in degrees. Values outside the geographic
    range (e.g. a path whose axes are still swapped) still produce a finite,
    comparable number rather than an error.
    """

    lat1, lon1 = np.radians(np.asarray(a, dtype=float))
    lat2, lon2 = np.radians(np.asarray(b, dtype=float))
    dlat = lat2 - lat1
    dlon = lon2 - lon1
    h = np.sin(dlat / 2.0) ** 2 + np.cos(lat1) * np.cos(lat2) * np.sin(dlon / 2.0) ** 2
    h = float(np.clip(h, 0.0, 1.0))
    return float(2.0 * radius_km * np.arcsin(np.sqrt(h)))


def optional_distance_km(
    point: Optional[LatLon], reference: Optional[LatLon], missing: float
) -> float:
    """Return the distance between two points or ``missing`` if either is absent."""

    if point is None or reference is None:
        return missing
    return haversine_km(point, reference)


def swap_axes(points: Iterable[LatLon]) -> List[LatLon]:
    """Return a new path with each point's two components exchanged."""

    return [(second, first) for first, second in points]
