"""Route-path reconciliation for trip dashboards."""

from .engine import fallback_path, reconcile
from .errors import PayloadFormatError, RouteReconcilerError, TripSourceError
from .models import ReconcileSettings, ReconciliationResult, Trip, TripMatch

__all__ = [
    "reconcile",
    "fallback_path",
    "Trip",
    "TripMatch",
    "ReconcileSettings",
    "ReconciliationResult",
    "RouteReconcilerError",
    "TripSourceError",
    "PayloadFormatError",
]
