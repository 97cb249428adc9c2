"""Global pytest fixtures & helpers.

Adds project root to path and provides reusable trip and path fixtures so
the engine tests share one geographic scenario.
"""
from __future__ import annotations

import os
import sys

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from route_reconciler.models import Trip


# --- Factory helpers -------------------------------------------------
def make_trip_payloads():
    return [
        {
            "id": "A",
            "pickup": {"lat": 20.701, "lon": -103.401},
            "destination": {"lat": 20.649, "lon": -103.409},
        },
        {
            "id": "B",
            "pickup": {"lat": 20.60, "lon": -103.50},
            "destination": {"lat": 20.40, "lon": -103.60},
        },
    ]


# --- Fixtures --------------------------------------------------------
@pytest.fixture
def trip_payloads():
    return make_trip_payloads()


@pytest.fixture
def trips():
    return [Trip.from_payload(payload, i) for i, payload in enumerate(make_trip_payloads())]


@pytest.fixture
def trip_a(trips):
    return trips[0]


@pytest.fixture
def path_latlon():
    """Two-point route in (lat, lon) order running from A's pickup to its destination."""
    return [(20.700, -103.400), (20.650, -103.410)]


@pytest.fixture
def path_lonlat(path_latlon):
    """The same route with its axes swapped."""
    return [(lon, lat) for lat, lon in path_latlon]
