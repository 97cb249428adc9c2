"""Normalize raw routing paths into lists of coordinate pairs."""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Optional, Union

from polyline import decode as polyline_decode

from .extraction import extract_point
from .models import LatLon

LOGGER = logging.getLogger(__name__)

RawPath = Union[str, Iterable[Any]]


def decode_polyline(encoded: str) -> List[LatLon]:
    """Decode an encoded polyline string into a list of (lat, lon) tuples."""

    if not encoded:
        return []
    try:
        decoded = polyline_decode(encoded)
    except (ValueError, TypeError, IndexError) as exc:
        raise ValueError("Unable to decode polyline") from exc
    return [(float(lat), float(lon)) for lat, lon in decoded]


def normalize_path(raw_path: Optional[RawPath]) -> List[LatLon]:
    """Return the interpretable vertices of ``raw_path`` in their original order.

    Uninterpretable vertices are dropped. An empty list (never None) means
    there is no usable path; it is not an error. A string is treated as an
    encoded polyline.
    """

    if raw_path is None:
        return []
    if isinstance(raw_path, str):
        try:
            return decode_polyline(raw_path)
        except ValueError:
            LOGGER.debug("Discarding undecodable polyline of length %d", len(raw_path))
            return []

    normalized: List[LatLon] = []
    dropped = 0
    try:
        iterator = iter(raw_path)
    except TypeError:
        LOGGER.debug("Raw path of type %s is not iterable", type(raw_path).__name__)
        return []
    for raw in iterator:
        result = extract_point(raw)
        if result.point is None:
            dropped += 1
            continue
        lat, lon = result.point
        normalized.append((float(lat), float(lon)))
    if dropped:
        LOGGER.debug(
            "Dropped %d of %d raw path points", dropped, dropped + len(normalized)
        )
    return normalized


__all__ = ["RawPath", "decode_polyline", "normalize_path"]
