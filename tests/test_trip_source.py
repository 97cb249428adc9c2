"""Tests for the trip source client and routing payload helpers."""

from __future__ import annotations

import json

import pytest
import requests

from route_reconciler.errors import TripSourceError
from route_reconciler.trip_source import (
    TripSourceClient,
    create_session,
    extract_route_path,
    normalize_trip_payload,
    trips_from_payload,
)


class FakeResp:
    """Minimal fake response matching needed parts of requests.Response."""

    def __init__(self, status_code=200, data=None, raw_text=None):
        self.status_code = status_code
        self._data = data if data is not None else []
        self._raw_text = raw_text

    def json(self):
        if self._raw_text is not None:
            return json.loads(self._raw_text)
        return self._data

    def raise_for_status(self):
        if 400 <= self.status_code:
            raise requests.exceptions.HTTPError(response=self)


class FakeSession:
    def __init__(self, response=None, exc=None):
        self.response = response
        self.exc = exc
        self.calls = []
        self.closed = False

    def get(self, url, timeout=None):
        self.calls.append((url, timeout))
        if self.exc is not None:
            raise self.exc
        return self.response

    def close(self):
        self.closed = True


# --- Payload normalization ------------------------------------------
@pytest.mark.parametrize(
    "data, expected_len",
    [
        ([{"id": 1}], 1),
        ({"trips": [{"id": 1}, {"id": 2}]}, 2),
        ({"points": [{"id": 1}]}, 1),
        ({"results": [{"id": 1}]}, 1),
        ({"items": [{"id": 1}]}, 0),
        ({"trips": "nope"}, 0),
        (None, 0),
        ("text", 0),
    ],
)
def test_normalize_trip_payload(data, expected_len) -> None:
    assert len(normalize_trip_payload(data)) == expected_len


def test_trips_from_payload_skips_bad_records(caplog) -> None:
    trips = trips_from_payload({"trips": [{"id": "A"}, "junk", {"index": 4}]})
    assert [t.trip_id for t in trips] == ["A", 4]
    assert any("Skipping trip record 1" in rec.getMessage() for rec in caplog.records)


# --- Route payloads -------------------------------------------------
def test_extract_route_path_envelopes() -> None:
    coords = [{"lat": 20.7, "lon": -103.4}, {"lat": 20.65, "lon": -103.41}]
    assert extract_route_path({"path_coords": coords, "meta": {"algorithm": "astar"}}) == coords
    assert extract_route_path({"path": coords}) == coords
    assert extract_route_path(coords) == coords
    assert extract_route_path("_p~iF~ps|U") == "_p~iF~ps|U"


def test_extract_route_path_geojson() -> None:
    line = {"type": "LineString", "coordinates": [[-103.4, 20.7], [-103.41, 20.65]]}
    assert extract_route_path(line) == line["coordinates"]
    feature = {"type": "Feature", "geometry": line, "properties": {}}
    assert extract_route_path(feature) == line["coordinates"]
    assert extract_route_path({"type": "FeatureCollection", "features": [feature]}) == line["coordinates"]
    points = [
        {"type": "Feature", "geometry": {"type": "Point", "coordinates": [-103.4, 20.7]}},
        {"type": "Feature", "geometry": {"type": "Point", "coordinates": [-103.41, 20.65]}},
    ]
    assert extract_route_path({"type": "FeatureCollection", "features": points}) == points


def test_extract_route_path_osrm_style() -> None:
    payload = {"code": "Ok", "routes": [{"geometry": "_p~iF~ps|U_ulLnnqC"}]}
    assert extract_route_path(payload) == "_p~iF~ps|U_ulLnnqC"


@pytest.mark.parametrize("payload", [None, 3, {"meta": {}}, {"type": "Point", "coordinates": [1, 2]}])
def test_extract_route_path_unknown_shapes(payload) -> None:
    assert extract_route_path(payload) == []


# --- HTTP client ----------------------------------------------------
def test_fetch_trips_success() -> None:
    session = FakeSession(
        FakeResp(data={"trips": [{"id": "A", "pickup": [20.7, -103.4], "destination": [20.6, -103.3]}]})
    )
    client = TripSourceClient("http://backend:8000/", session=session, timeout=3)
    trips = client.fetch_trips()
    assert session.calls == [("http://backend:8000/api/demo/trips", 3)]
    assert trips[0].trip_id == "A"
    assert trips[0].pickup == (20.7, -103.4)


def test_fetch_trips_http_error() -> None:
    client = TripSourceClient(session=FakeSession(FakeResp(status_code=503)))
    with pytest.raises(TripSourceError, match="HTTP 503"):
        client.fetch_trips()


def test_fetch_trips_transport_error() -> None:
    session = FakeSession(exc=requests.exceptions.ConnectionError("refused"))
    with pytest.raises(TripSourceError, match="request failed"):
        TripSourceClient(session=session).fetch_trips()


def test_fetch_trips_invalid_json() -> None:
    client = TripSourceClient(session=FakeSession(FakeResp(raw_text="<html>")))
    with pytest.raises(TripSourceError, match="not valid JSON"):
        client.fetch_trips()


def test_client_context_manager_closes_session() -> None:
    session = FakeSession(FakeResp(data=[]))
    with TripSourceClient(session=session, trips_path="trips") as client:
        assert client.trips_url.endswith("/trips")
        assert client.fetch_trips() == []
    assert session.closed


def test_create_session_mounts_retrying_adapter() -> None:
    session = create_session()
    adapter = session.get_adapter("http://127.0.0.1:8000")
    assert adapter.max_retries.total >= 0
    assert session.headers["Accept"] == "application/json"
    session.close()
