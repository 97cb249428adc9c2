"""Central error types used across the application.

The reconciliation engine itself never raises for malformed data; these
errors are reserved for the I/O edges (trip source client and CLI).
"""

from __future__ import annotations


class RouteReconcilerError(RuntimeError):
    """Base error for route reconciliation failures."""


class TripSourceError(RouteReconcilerError):
    """Raised when the trip source cannot be reached or returns bad data."""


class PayloadFormatError(RouteReconcilerError):
    """Raised when an input payload is not valid JSON or has an unusable shape."""


__all__ = [
    "RouteReconcilerError",
    "TripSourceError",
    "PayloadFormatError",
]
