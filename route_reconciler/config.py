"""Central configuration for the route reconciliation engine.

All values are constants imported by the rest of the package. Adjust as needed
for your environment. Every value can be overridden through environment
variables (optionally via a local `.env`).
"""

from __future__ import annotations

import importlib
import os


def _env_float(key: str, default: float) -> float:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _env_int(key: str, default: int) -> int:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _env_bool(key: str, default: bool) -> bool:
    value = os.getenv(key)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    return default


# Load .env variables when python-dotenv is available.
_load_dotenv = None
try:
    _dotenv_mod = importlib.import_module("dotenv")
    _load_dotenv = getattr(_dotenv_mod, "load_dotenv", None)
except ImportError:
    _load_dotenv = None

if callable(_load_dotenv):
    # Load .env from the current directory or any parent folder.
    _load_dotenv()


# ---------------------------------------------------------------------------
# Reconciliation thresholds
# ---------------------------------------------------------------------------
# These have no documented derivation and may need tuning against real routing
# service output.

# The axis-swapped path must beat the original by this margin (km) before the
# orientation resolver flips it. Ties favour the original order.
ORIENTATION_THRESHOLD_KM = _env_float("ORIENTATION_THRESHOLD_KM", 0.05)

# Path endpoints within this distance (km) of the matched trip's pickup or
# destination are replaced by the trip coordinate.
SNAP_TOLERANCE_KM = _env_float("SNAP_TOLERANCE_KM", 0.2)

# When a trip is already selected, the best match must score below this (km)
# before the selection is switched automatically.
AUTO_SELECT_SCORE_THRESHOLD_KM = _env_float("AUTO_SELECT_SCORE_THRESHOLD_KM", 0.5)

# ...and must beat the runner-up by more than this margin (km).
AUTO_SELECT_MARGIN_KM = _env_float("AUTO_SELECT_MARGIN_KM", 0.2)


# ---------------------------------------------------------------------------
# Geometry
# ---------------------------------------------------------------------------
# Mean Earth radius (IUGG) used by the haversine distance.
EARTH_RADIUS_KM = _env_float("EARTH_RADIUS_KM", 6371.0088)

# Maximum nesting depth followed when unwrapping geometry envelopes such as
# GeoJSON features. Guards against self-referencing payloads.
MAX_EXTRACTION_DEPTH = _env_int("MAX_EXTRACTION_DEPTH", 4)


# ---------------------------------------------------------------------------
# Trip source (routing backend)
# ---------------------------------------------------------------------------
TRIP_SOURCE_BASE_URL = os.getenv("TRIP_SOURCE_BASE_URL", "http://127.0.0.1:8000")
TRIP_SOURCE_TRIPS_PATH = os.getenv("TRIP_SOURCE_TRIPS_PATH", "/api/demo/trips")

# Request timeout in seconds.
REQUEST_TIMEOUT = _env_float("REQUEST_TIMEOUT", 10.0)

# HTTP session pool sizes.
HTTP_POOL_CONNECTIONS = _env_int("HTTP_POOL_CONNECTIONS", 4)
HTTP_POOL_MAXSIZE = _env_int("HTTP_POOL_MAXSIZE", 4)

# Retry idempotent requests on transient 5xx responses.
HTTP_RETRY_ENABLED = _env_bool("HTTP_RETRY_ENABLED", True)
HTTP_MAX_RETRIES = _env_int("HTTP_MAX_RETRIES", 3)
