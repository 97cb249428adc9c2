"""Interpret heterogeneous raw path vertices as coordinate pairs.

Routing responses do not agree on a point encoding. A vertex may be a plain
``[a, b]`` pair (optionally followed by an elevation), an object carrying
latitude/longitude under one of several field names, a GeoJSON geometry or
feature, or a mapping with positional keys.
:func:`extract_point` tries an explicit, ordered list of strategies and
returns a tagged :class:`PointExtraction` instead of raising.

Pairs and geometry envelopes are read positionally; axis order is resolved
later by :mod:`route_reconciler.geometry.orientation`.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any, Callable, Optional, Sequence, Tuple

import numpy as np
from shapely.errors import ShapelyError
from shapely.geometry import shape

from ..config import MAX_EXTRACTION_DEPTH
from .models import LatLon, PointExtraction

# Fixed priority order: the first alias present on the object wins.
LATITUDE_ALIASES: Tuple[str, ...] = ("lat", "latitude", "y")
LONGITUDE_ALIASES: Tuple[str, ...] = ("lon", "lng", "longitude", "x")

# Fields that wrap a nested coordinate value (GeoJSON and common API shapes).
NESTED_KEYS: Tuple[str, ...] = (
    "coordinates",
    "coords",
    "geometry",
    "point",
    "location",
    "position",
)

_MISSING = object()

Strategy = Callable[[Any, int], Optional[LatLon]]


def extract_point(raw: Any) -> PointExtraction:
    """Return the coordinate pair carried by ``raw`` or an invalid result."""

    return _extract(raw, 0)


def coerce_coordinate(value: Any) -> Optional[float]:
    """Convert ``value`` to a finite float, returning None when impossible."""

    if value is None or isinstance(value, (bool, np.bool_)):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


def _extract(raw: Any, depth: int) -> PointExtraction:
    if raw is None:
        return PointExtraction.invalid("missing value")
    if isinstance(raw, (str, bytes)):
        return PointExtraction.invalid("text is not a point")
    for name, strategy in _STRATEGIES:
        point = strategy(raw, depth)
        if point is not None:
            return PointExtraction.success(point, name)
    return PointExtraction.invalid(
        f"no extraction strategy matched {type(raw).__name__}"
    )


def _candidate(first: Any, second: Any) -> Optional[LatLon]:
    a = coerce_coordinate(first)
    b = coerce_coordinate(second)
    if a is None or b is None:
        return None
    return (a, b)


def _is_sequence_like(raw: Any) -> bool:
    if isinstance(raw, (list, tuple)):
        return True
    return isinstance(raw, np.ndarray) and raw.ndim == 1


def _field(raw: Any, name: str) -> Any:
    """Read ``name`` from a mapping key or object attribute."""

    if isinstance(raw, Mapping):
        return raw.get(name, _MISSING)
    if _is_sequence_like(raw):
        return _MISSING
    try:
        return getattr(raw, name, _MISSING)
    except Exception:  # noqa: BLE001
        return _MISSING


def _first_field(raw: Any, names: Sequence[str]) -> Any:
    for name in names:
        value = _field(raw, name)
        if value is not _MISSING and value is not None:
            return value
    return _MISSING


def _from_pair(raw: Any, depth: int) -> Optional[LatLon]:
    # A third component is a GeoJSON elevation and is ignored.
    if not _is_sequence_like(raw) or len(raw) not in (2, 3):
        return None
    if len(raw) == 3 and coerce_coordinate(raw[2]) is None:
        return None
    return _candidate(raw[0], raw[1])


def _from_nested(raw: Any, depth: int) -> Optional[LatLon]:
    if depth >= MAX_EXTRACTION_DEPTH or _is_sequence_like(raw):
        return None
    for key in NESTED_KEYS:
        value = _field(raw, key)
        if value is _MISSING or value is None:
            continue
        if _is_geojson_geometry(value):
            point = _from_geojson(value)
        elif _is_sequence_like(value) and len(value) >= 2:
            # GeoJSON positions may carry a third (altitude) component.
            point = _candidate(value[0], value[1])
        else:
            point = _extract(value, depth + 1).point
        if point is not None:
            return point
    return None


def _from_aliases(raw: Any, depth: int) -> Optional[LatLon]:
    if _is_sequence_like(raw):
        return None
    lat = _first_field(raw, LATITUDE_ALIASES)
    lon = _first_field(raw, LONGITUDE_ALIASES)
    if lat is _MISSING or lon is _MISSING:
        return None
    return _candidate(lat, lon)


def _from_positional_keys(raw: Any, depth: int) -> Optional[LatLon]:
    if not isinstance(raw, Mapping):
        return None
    first = raw.get(0, raw.get("0", _MISSING))
    second = raw.get(1, raw.get("1", _MISSING))
    if first is _MISSING or second is _MISSING:
        return None
    # Positional objects conventionally store (lon, lat); read them swapped.
    return _candidate(second, first)


def _is_geojson_geometry(value: Any) -> bool:
    return (
        isinstance(value, Mapping) and "type" in value and "coordinates" in value
    )


def _from_geojson(geometry: Mapping) -> Optional[LatLon]:
    try:
        geom = shape(geometry)
    except (ShapelyError, ValueError, TypeError, KeyError, IndexError):
        return None
    if geom.is_empty or geom.geom_type != "Point":
        return None
    return _candidate(geom.x, geom.y)


_STRATEGIES: Tuple[Tuple[str, Strategy], ...] = (
    ("pair", _from_pair),
    ("nested", _from_nested),
    ("aliases", _from_aliases),
    ("positional", _from_positional_keys),
)


__all__ = [
    "LATITUDE_ALIASES",
    "LONGITUDE_ALIASES",
    "NESTED_KEYS",
    "coerce_coordinate",
    "extract_point",
]
