"""HTTP access to the trip source and helpers for routing payload shapes."""

from __future__ import annotations

from collections.abc import Mapping
import logging
from typing import Any, List, Optional, Sequence

import requests
from requests import Session
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .config import (
    HTTP_MAX_RETRIES,
    HTTP_POOL_CONNECTIONS,
    HTTP_POOL_MAXSIZE,
    HTTP_RETRY_ENABLED,
    REQUEST_TIMEOUT,
    TRIP_SOURCE_BASE_URL,
    TRIP_SOURCE_TRIPS_PATH,
)
from .errors import TripSourceError
from .geometry.normalization import RawPath
from .models import Trip

LOGGER = logging.getLogger(__name__)

# Envelope keys the trip source has used for its trip list.
TRIP_LIST_KEYS = ("trips", "points", "results")

# Keys under which routing responses carry their vertex list.
ROUTE_PATH_KEYS = ("path_coords", "path", "coordinates", "points", "route")


def _build_retry() -> Retry:
    return Retry(
        total=HTTP_MAX_RETRIES,
        backoff_factor=0.5,
        status_forcelist=[500, 502, 503, 504],
        allowed_methods=["GET"],
    )


def create_session() -> Session:
    session = requests.Session()
    adapter = HTTPAdapter(
        pool_connections=HTTP_POOL_CONNECTIONS,
        pool_maxsize=HTTP_POOL_MAXSIZE,
        max_retries=_build_retry() if HTTP_RETRY_ENABLED else 0,
    )
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    session.headers.update(
        {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
    )
    return session


def normalize_trip_payload(data: Any) -> List[Any]:
    """Return the list of trip records inside ``data``.

    Accepts a bare list or a mapping wrapping the list under one of
    :data:`TRIP_LIST_KEYS`. Anything else yields an empty list.
    """

    if not data:
        return []
    if isinstance(data, list):
        return data
    if isinstance(data, Mapping):
        for key in TRIP_LIST_KEYS:
            value = data.get(key)
            if isinstance(value, list):
                return value
    return []


def trips_from_payload(data: Any) -> List[Trip]:
    """Convert a trip-source response body into :class:`Trip` objects.

    Records that are not mappings are skipped with a warning.
    """

    trips: List[Trip] = []
    for index, record in enumerate(normalize_trip_payload(data)):
        try:
            trips.append(Trip.from_payload(record, index))
        except TypeError as exc:
            LOGGER.warning("Skipping trip record %d: %s", index, exc)
    return trips


def extract_route_path(payload: Any) -> RawPath:
    """Return the raw vertex sequence carried by a routing response.

    Understands ``{path_coords: [...], meta: {...}}`` style envelopes, GeoJSON
    ``LineString``/``Feature``/``FeatureCollection`` objects, OSRM-style
    ``routes`` lists and encoded polyline strings. Unknown shapes yield an
    empty list, which reconciles to "no path".
    """

    return _extract_route_path(payload, 0)


def _extract_route_path(payload: Any, depth: int) -> RawPath:
    if payload is None or depth > 4:
        return []
    if isinstance(payload, str):
        return payload
    if isinstance(payload, (list, tuple)):
        return payload
    if not isinstance(payload, Mapping):
        return []

    kind = payload.get("type")
    if kind == "FeatureCollection":
        return _features_path(payload.get("features") or [], depth)
    if kind == "Feature":
        return _extract_route_path(payload.get("geometry"), depth + 1)
    if kind in {"LineString", "MultiPoint"}:
        return payload.get("coordinates") or []
    if kind is not None and "coordinates" in payload:
        # Other geometry types (Point, Polygon, ...) do not describe a route.
        return []

    routes = payload.get("routes")
    if isinstance(routes, list) and routes:
        return _extract_route_path(routes[0], depth + 1)
    for key in ROUTE_PATH_KEYS:
        if key in payload and payload[key] is not None:
            return _extract_route_path(payload[key], depth + 1)
    for key in ("polyline", "geometry"):
        value = payload.get(key)
        if isinstance(value, (str, Mapping)):
            return _extract_route_path(value, depth + 1)
    return []


def _features_path(features: Sequence[Any], depth: int) -> RawPath:
    if len(features) == 1 and isinstance(features[0], Mapping):
        geometry = features[0].get("geometry")
        if isinstance(geometry, Mapping) and geometry.get("type") != "Point":
            return _extract_route_path(geometry, depth + 1)
    # One point feature per vertex; the point extractor unwraps each one.
    return list(features)


class TripSourceClient:
    """Fetch trips from the routing backend's trip endpoint."""

    def __init__(
        self,
        base_url: str = TRIP_SOURCE_BASE_URL,
        *,
        trips_path: str = TRIP_SOURCE_TRIPS_PATH,
        timeout: float = REQUEST_TIMEOUT,
        session: Optional[Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.trips_path = "/" + trips_path.lstrip("/")
        self.timeout = timeout
        self._session = session or create_session()

    @property
    def trips_url(self) -> str:
        return f"{self.base_url}{self.trips_path}"

    def fetch_trips(self) -> List[Trip]:
        """Return the current trip list.

        Raises:
            TripSourceError: On transport failures, non-2xx responses or a
                body that is not JSON.
        """

        url = self.trips_url
        LOGGER.debug("GET %s", url)
        try:
            response = self._session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.HTTPError as exc:
            status = getattr(exc.response, "status_code", None)
            raise TripSourceError(
                f"Trip source returned HTTP {status} for {url}"
            ) from exc
        except requests.exceptions.RequestException as exc:
            raise TripSourceError(f"Trip source request failed: {exc}") from exc
        try:
            data = response.json()
        except ValueError as exc:
            raise TripSourceError("Trip source response is not valid JSON") from exc
        trips = trips_from_payload(data)
        LOGGER.info("Fetched %d trips from %s", len(trips), url)
        return trips

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> "TripSourceClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


__all__ = [
    "TripSourceClient",
    "create_session",
    "extract_route_path",
    "normalize_trip_payload",
    "trips_from_payload",
]
