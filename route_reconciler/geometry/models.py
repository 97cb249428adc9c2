"""Dataclasses describing raw and normalized path geometry."""

from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Optional, Tuple


LatLon = Tuple[float, float]


@dataclass(frozen=True, slots=True)
class PointExtraction:
    """Tagged outcome of interpreting one raw path vertex.

    Exactly one of ``point`` and ``reason`` is set. ``strategy`` names the
    extraction strategy that produced ``point``.
    """

    point: Optional[LatLon] = None
    strategy: Optional[str] = None
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.point is not None

    @classmethod
    def success(cls, point: LatLon, strategy: str) -> "PointExtraction":
        return cls(point=point, strategy=strategy)

    @classmethod
    def invalid(cls, reason: str) -> "PointExtraction":
        return cls(reason=reason)


def is_valid_geopoint(point: Optional[LatLon]) -> bool:
    """Return True when ``point`` is a finite, in-range (lat, lon) pair."""

    if point is None:
        return False
    lat, lon = point
    if not (math.isfinite(lat) and math.isfinite(lon)):
        return False
    return -90.0 <= lat <= 90.0 and -180.0 <= lon <= 180.0
