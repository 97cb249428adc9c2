"""Geometry helpers: point extraction, path normalization and orientation.

This module turns loosely shaped routing output into ordered coordinate
pairs and decides which axis order the pairs are stored in.
"""

from .distance import haversine_km, swap_axes
from .extraction import extract_point
from .models import LatLon, PointExtraction, is_valid_geopoint
from .normalization import decode_polyline, normalize_path
from .orientation import endpoint_proximity_km, resolve_orientation

__all__ = [
    "LatLon",
    "PointExtraction",
    "is_valid_geopoint",
    "haversine_km",
    "swap_axes",
    "extract_point",
    "decode_polyline",
    "normalize_path",
    "endpoint_proximity_km",
    "resolve_orientation",
]
