"""Reconcile a raw routing path against the known trips.

This is the single entry point a host calls whenever a new path arrives. It
runs normalization, orientation, trip matching, endpoint snapping and the
selection policy, and never raises for malformed input: degraded input shows
up as a ``None`` final path.
"""

from __future__ import annotations

from collections.abc import Mapping
import logging
from typing import Any, Iterable, List, Optional

from .geometry.distance import swap_axes
from .geometry.models import LatLon, is_valid_geopoint
from .geometry.normalization import RawPath, normalize_path
from .geometry.orientation import resolve_orientation
from .matching.scoring import best_matches
from .matching.selection import should_auto_select
from .matching.snapping import snap_endpoints
from .models import ReconcileSettings, ReconciliationResult, Trip, TripId

LOGGER = logging.getLogger(__name__)


def coerce_trips(trips: Optional[Iterable[Any]]) -> List[Trip]:
    """Return ``trips`` as :class:`Trip` objects, converting raw payloads."""

    if trips is None:
        return []
    coerced: List[Trip] = []
    for index, item in enumerate(trips):
        if isinstance(item, Trip):
            coerced.append(item)
        elif isinstance(item, Mapping):
            coerced.append(Trip.from_payload(item, index))
        else:
            LOGGER.debug("Ignoring trip entry of type %s", type(item).__name__)
    return coerced


def find_trip(trips: Iterable[Trip], trip_id: Optional[TripId]) -> Optional[Trip]:
    """Return the trip with ``trip_id`` or None when absent."""

    if trip_id is None:
        return None
    for trip in trips:
        if trip.trip_id == trip_id:
            return trip
    return None


def fallback_path(trip: Optional[Trip]) -> Optional[List[LatLon]]:
    """Return the straight pickup-to-destination line drawn without a route."""

    if trip is None or trip.pickup is None or trip.destination is None:
        return None
    return [trip.pickup, trip.destination]


def geographic_points(path: List[LatLon]) -> List[LatLon]:
    """Return the in-range points of ``path``.

    A path that is only in range once its axes are swapped is swapped; this
    covers paths that could not be oriented against a reference trip.
    """

    if all(is_valid_geopoint(point) for point in path):
        return path
    swapped = swap_axes(path)
    if all(is_valid_geopoint(point) for point in swapped):
        return swapped
    return [point for point in path if is_valid_geopoint(point)]


def reconcile(
    raw_path: Optional[RawPath],
    trips: Optional[Iterable[Any]],
    selected_trip_id: Optional[TripId] = None,
    settings: Optional[ReconcileSettings] = None,
) -> ReconciliationResult:
    """Turn a raw routing path into a trusted path and a selection decision.

    Args:
        raw_path: Vertices in any supported point encoding, or an encoded
            polyline string.
        trips: Known trips (``Trip`` objects or trip-source records).
        selected_trip_id: Id of the trip currently selected by the host.
        settings: Threshold overrides; defaults come from configuration.

    Returns:
        A :class:`ReconciliationResult`. ``final_path`` only holds points
        with latitude in [-90, 90] and longitude in [-180, 180]; it is None
        when fewer than two such points remain.
    """

    settings = settings or ReconcileSettings()
    path = normalize_path(raw_path)
    if len(path) < 2:
        LOGGER.debug("No usable path (%d interpretable points)", len(path))
        return ReconciliationResult()

    known_trips = coerce_trips(trips)
    reference = find_trip(known_trips, selected_trip_id)
    if reference is None or (
        reference.pickup is None and reference.destination is None
    ):
        # No selection to orient against: take the best match of the raw order.
        reference = best_matches(path, known_trips).best

    oriented = path
    if reference is not None:
        oriented = resolve_orientation(
            path,
            reference.pickup,
            reference.destination,
            threshold_km=settings.orientation_threshold_km,
        )
    inverted = oriented != path
    in_range = geographic_points(oriented)
    if len(in_range) < 2:
        LOGGER.debug("No usable path (%d in-range points)", len(in_range))
        return ReconciliationResult()
    if len(in_range) == len(oriented) and in_range != oriented:
        inverted = not inverted
    oriented = in_range

    match = best_matches(oriented, known_trips)
    final_path = snap_endpoints(
        oriented, match.best, tolerance_km=settings.snap_tolerance_km
    )
    auto_select = should_auto_select(
        match.best_id,
        match.best_score,
        match.second_best_score,
        selected_trip_id,
        score_threshold_km=settings.auto_select_score_threshold_km,
        margin_threshold_km=settings.auto_select_margin_km,
    )
    result = ReconciliationResult(
        final_path=final_path,
        auto_selected_trip_id=match.best_id if auto_select else None,
        matched_trip_id=match.best_id,
        inverted=inverted,
        best_score=match.best_score,
        second_best_score=match.second_best_score,
        snapped_start=final_path[0] != oriented[0],
        snapped_end=final_path[-1] != oriented[-1],
    )
    LOGGER.debug(
        "Reconciled %d points: matched=%s inverted=%s auto_select=%s",
        len(final_path),
        result.matched_trip_id,
        inverted,
        result.auto_selected_trip_id,
    )
    return result


__all__ = [
    "coerce_trips",
    "find_trip",
    "fallback_path",
    "geographic_points",
    "reconcile",
]
