"""Dataclasses shared by the matching engine and its I/O edges."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
import math
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from .config import (
    AUTO_SELECT_MARGIN_KM,
    AUTO_SELECT_SCORE_THRESHOLD_KM,
    ORIENTATION_THRESHOLD_KM,
    SNAP_TOLERANCE_KM,
)
from .geometry.extraction import extract_point
from .geometry.models import LatLon, is_valid_geopoint

TripId = Union[str, int]

PICKUP_KEYS: Tuple[str, ...] = ("pickup", "origin", "start")
DESTINATION_KEYS: Tuple[str, ...] = ("destination", "dropoff", "end")


@dataclass(frozen=True)
class Trip:
    """A trip as supplied by the external trip source. Read-only."""

    trip_id: TripId
    pickup: Optional[LatLon] = None
    destination: Optional[LatLon] = None
    metadata: Dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_payload(cls, payload: Mapping, index: int = 0) -> "Trip":
        """Build a trip from a trip-source record.

        The id falls back to the record's ``index`` field and then to its
        position in the source list.
        """

        if not isinstance(payload, Mapping):
            raise TypeError(
                f"Trip payload must be a mapping, got {type(payload).__name__}"
            )
        trip_id = payload.get("id")
        if trip_id is None:
            trip_id = payload.get("index")
        if trip_id is None:
            trip_id = index
        metadata = {
            key: value
            for key, value in payload.items()
            if key not in {"id", "index", *PICKUP_KEYS, *DESTINATION_KEYS}
        }
        return cls(
            trip_id=trip_id,
            pickup=_endpoint(payload, PICKUP_KEYS),
            destination=_endpoint(payload, DESTINATION_KEYS),
            metadata=metadata,
        )


def _endpoint(payload: Mapping, keys: Sequence[str]) -> Optional[LatLon]:
    for key in keys:
        value = payload.get(key)
        if value is None:
            continue
        point = extract_point(value).point
        if is_valid_geopoint(point):
            return point
    return None


@dataclass(frozen=True, slots=True)
class TripMatch:
    """Best and runner-up trip scores for a path."""

    best: Optional[Trip] = None
    best_score: float = math.inf
    second_best_score: float = math.inf

    @property
    def best_id(self) -> Optional[TripId]:
        return self.best.trip_id if self.best is not None else None

    @property
    def margin(self) -> float:
        return self.second_best_score - self.best_score


@dataclass(frozen=True, slots=True)
class ReconcileSettings:
    """Tunable thresholds (kilometres) for one reconciliation call."""

    orientation_threshold_km: float = ORIENTATION_THRESHOLD_KM
    snap_tolerance_km: float = SNAP_TOLERANCE_KM
    auto_select_score_threshold_km: float = AUTO_SELECT_SCORE_THRESHOLD_KM
    auto_select_margin_km: float = AUTO_SELECT_MARGIN_KM

    def __post_init__(self) -> None:
        for name in (
            "orientation_threshold_km",
            "snap_tolerance_km",
            "auto_select_score_threshold_km",
            "auto_select_margin_km",
        ):
            value = getattr(self, name)
            if not math.isfinite(value) or value < 0:
                raise ValueError(f"{name} must be a non-negative number")


@dataclass(slots=True)
class ReconciliationResult:
    """Outcome of reconciling one routing path against the known trips."""

    final_path: Optional[List[LatLon]] = None
    auto_selected_trip_id: Optional[TripId] = None
    matched_trip_id: Optional[TripId] = None
    inverted: bool = False
    best_score: float = math.inf
    second_best_score: float = math.inf
    snapped_start: bool = False
    snapped_end: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Return the host-facing payload."""

        return {
            "finalPath": (
                [list(point) for point in self.final_path]
                if self.final_path is not None
                else None
            ),
            "autoSelectedTripId": self.auto_selected_trip_id,
        }


__all__ = [
    "TripId",
    "Trip",
    "TripMatch",
    "ReconcileSettings",
    "ReconciliationResult",
]
