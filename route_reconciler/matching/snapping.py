"""Replace path endpoints with authoritative trip coordinates."""

from __future__ import annotations

from typing import List, Optional, Sequence

from ..config import SNAP_TOLERANCE_KM
from ..geometry.distance import haversine_km
from ..geometry.models import LatLon
from ..models import Trip


def _within(point: LatLon, reference: Optional[LatLon], tolerance_km: float) -> bool:
    return reference is not None and haversine_km(point, reference) <= tolerance_km


def snap_endpoints(
    path: Sequence[LatLon],
    trip: Optional[Trip],
    tolerance_km: float = SNAP_TOLERANCE_KM,
) -> List[LatLon]:
    """Return a copy of ``path`` with endpoints snapped to the trip.

    The first point becomes the trip pickup, and the last point the trip
    destination, when each lies within ``tolerance_km``. Interior points are
    never modified and the input is not mutated.
    """

    snapped = list(path)
    if trip is None or not snapped:
        return snapped
    if _within(snapped[0], trip.pickup, tolerance_km):
        snapped[0] = trip.pickup
    if _within(snapped[-1], trip.destination, tolerance_km):
        snapped[-1] = trip.destination
    return snapped


__all__ = ["snap_endpoints"]
